"""Per-element style storage kept in the document head."""

import json
import logging
from typing import Optional

from bs4 import BeautifulSoup, Tag

from sitestage.utils.dom import text_content

logger = logging.getLogger(__name__)

INLINE_STYLE_TAG_CLASS = "silex-inline-styles"
JSON_STYLE_TAG_CLASS = "silex-json-styles"


class PropertyStore:
    """Element styles, keyed by element id.

    Styles are persisted twice in the head: as JSON for reloading and as
    CSS rules for rendering.
    """

    def __init__(self) -> None:
        self._styles: dict[str, dict[str, str]] = {}

    def get_style(self, element_id: str) -> dict[str, str]:
        return dict(self._styles.get(element_id, {}))

    def set_style(self, element_id: str, style: Optional[dict[str, str]]) -> None:
        if style:
            self._styles[element_id] = dict(style)
        else:
            self._styles.pop(element_id, None)

    def _head_tag(self, document: BeautifulSoup, name: str, class_name: str, **attrs: str) -> Optional[Tag]:
        tag = document.find(name, class_=class_name)
        if tag is None and document.head is not None:
            tag = document.new_tag(name, attrs={**attrs, "class": class_name})
            document.head.append(tag)
        return tag

    def init_styles(self, document: BeautifulSoup) -> None:
        """Make sure the CSS carrier exists in the document."""
        self._head_tag(document, "style", INLINE_STYLE_TAG_CLASS, type="text/css")

    def load_properties(self, document: BeautifulSoup) -> None:
        tag = document.find("script", class_=JSON_STYLE_TAG_CLASS)
        self._styles = {}
        if tag is None:
            return
        try:
            data = json.loads(text_content(tag) or "{}")
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable element styles: {e}")
            return
        if isinstance(data, dict):
            self._styles = {
                str(key): {str(k): str(v) for k, v in value.items()}
                for key, value in data.items()
                if isinstance(value, dict)
            }

    def dumps(self) -> str:
        """Serialized JSON form, safe to embed in a script tag."""
        return json.dumps(self._styles, sort_keys=True).replace("</", "<\\/")

    def save_properties(self, document: BeautifulSoup, data: Optional[str] = None) -> None:
        tag = self._head_tag(document, "script", JSON_STYLE_TAG_CLASS, type="application/json")
        if tag is not None:
            tag.string = self.dumps() if data is None else data

    def get_all_styles(self) -> str:
        rules = []
        for element_id in sorted(self._styles):
            declarations = " ".join(
                f"{name}: {value};" for name, value in sorted(self._styles[element_id].items())
            )
            rules.append(f".{element_id} {{ {declarations} }}")
        return "\n".join(rules)

    def update_styles_in_dom(self, document: BeautifulSoup, css: Optional[str] = None) -> None:
        """Write the CSS rules into the document carrier."""
        tag = self._head_tag(document, "style", INLINE_STYLE_TAG_CLASS, type="text/css")
        if tag is not None:
            tag.string = self.get_all_styles() if css is None else css
