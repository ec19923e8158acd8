"""Small helpers over BeautifulSoup tags."""

from typing import Iterable, Iterator

from bs4 import BeautifulSoup, Comment, NavigableString, Tag


def get_classes(tag: Tag) -> list[str]:
    """Return the class tokens of ``tag`` whatever way they were stored."""
    value = tag.get("class")
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    return list(value)


def has_class(tag: Tag, name: str) -> bool:
    return name in get_classes(tag)


def add_class(tag: Tag, *names: str) -> None:
    classes = get_classes(tag)
    for name in names:
        if name not in classes:
            classes.append(name)
    tag["class"] = classes


def remove_classes(tag: Tag, names: Iterable[str]) -> None:
    """Drop ``names`` from the tag, removing the attribute once empty."""
    names = set(names)
    classes = [c for c in get_classes(tag) if c not in names]
    if classes:
        tag["class"] = classes
    elif tag.has_attr("class"):
        del tag["class"]


def iter_tags(root: BeautifulSoup | Tag) -> Iterator[Tag]:
    """Yield ``root`` (when it is an element) and every element under it."""
    if isinstance(root, Tag) and not isinstance(root, BeautifulSoup):
        yield root
    yield from root.find_all(True)


def set_style_properties(tag: Tag, **properties: str) -> None:
    """Set or clear (with an empty value) inline style properties.

    Keyword names use underscores, e.g. ``min_width`` for ``min-width``.
    """
    declarations: dict[str, str] = {}
    for chunk in (tag.get("style") or "").split(";"):
        if ":" not in chunk:
            continue
        name, value = chunk.split(":", 1)
        declarations[name.strip().lower()] = value.strip()
    for name, value in properties.items():
        css_name = name.replace("_", "-")
        if value:
            declarations[css_name] = value
        else:
            declarations.pop(css_name, None)
    if declarations:
        tag["style"] = "; ".join(f"{k}: {v}" for k, v in declarations.items()) + ";"
    elif tag.has_attr("style"):
        del tag["style"]


def text_content(tag: Tag) -> str:
    """Concatenated text under ``tag``, comments excluded.

    Unlike ``get_text`` this does not filter on the string subclass, which
    differs between parsed and assigned <script>/<style> content.
    """
    return "".join(
        str(node)
        for node in tag.descendants
        if isinstance(node, NavigableString) and not isinstance(node, Comment)
    )
