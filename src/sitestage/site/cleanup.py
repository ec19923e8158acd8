"""Removal of editor-only artifacts from a document tree."""

from bs4 import BeautifulSoup, Tag

from sitestage.site.body import SELECTED_CLASS
from sitestage.site.page import PAGE_LINK_ACTIVE_CLASS, PAGED_VISIBLE_CLASS
from sitestage.utils.dom import iter_tags, remove_classes, set_style_properties

INTERNAL_CLASSES = (
    SELECTED_CLASS,
    PAGED_VISIBLE_CLASS,
    PAGE_LINK_ACTIVE_CLASS,
    "silex-hover",
    "silex-dragging",
)


def remove_internal_classes(root: BeautifulSoup | Tag) -> None:
    for tag in iter_tags(root):
        remove_classes(tag, INTERNAL_CLASSES)


def cleanup_inlines(root: BeautifulSoup | Tag) -> None:
    """Drop the placeholder line breaks and attributes left by text editing."""
    for br in root.find_all("br", attrs={"type": "_moz"}):
        br.decompose()
    for tag in iter_tags(root):
        for attr in [a for a in tag.attrs if a.startswith("_moz")]:
            del tag[attr]


def clear_stage_sizing(body: Tag | None) -> None:
    """Remove the min sizes the stage puts on the body."""
    if body is not None:
        set_style_properties(body, min_width="", min_height="")
