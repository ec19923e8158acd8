"""Head tag management: user head content, custom style/script, temp tags."""

import logging
import re
from typing import Any, Callable, Optional

from bs4 import BeautifulSoup, Tag

from sitestage.config import TEMP_TAG_CLASS
from sitestage.utils.dom import add_class, has_class, text_content

logger = logging.getLogger(__name__)

USER_HEAD_START = "<!-- HEAD_TAG_START -->"
USER_HEAD_STOP = "<!-- HEAD_TAG_STOP -->"
# Stands in for the user head content while the document is re-parsed
USER_HEAD_PLACEHOLDER = "<!-- HEAD_TAG_CONTENT -->"

HEAD_STYLE_CLASS = "silex-style"
HEAD_SCRIPT_CLASS = "silex-script"
CURRENT_PAGE_STYLE_CLASS = "silex-current-page-style"
PUBLICATION_PATH_META = "publicationPath"

# Neutral type given to user scripts while they sit in the editor
NOT_JAVASCRIPT = "text/notjavascript"

_USER_HEAD_RE = re.compile(
    re.escape(USER_HEAD_START) + r"(.*?)" + re.escape(USER_HEAD_STOP), re.DOTALL
)
_HEAD_CLOSE_RE = re.compile(r"</head\s*>", re.IGNORECASE)
_HTML_OPEN_RE = re.compile(r"<html\b[^>]*>", re.IGNORECASE)


class HeadModel:
    """Reads and writes what lives in the document head."""

    def __init__(self) -> None:
        self.user_head = ""
        self.settings: dict[str, Any] = {}

    # User head tag

    @staticmethod
    def split_user_head(markup: str) -> tuple[str, str]:
        """Return ``markup`` without the user head block, and the block content."""
        match = _USER_HEAD_RE.search(markup)
        if match is None:
            return markup, ""
        return _USER_HEAD_RE.sub("", markup), match.group(1).strip()

    def extract_user_head(self, markup: str) -> str:
        markup, self.user_head = self.split_user_head(markup)
        return markup

    def insert_user_head(self, markup: str) -> str:
        """Put the stored user head content back at the end of the head."""
        if not self.user_head:
            return markup
        block = f"{USER_HEAD_START}{self.user_head}{USER_HEAD_STOP}"
        if _HEAD_CLOSE_RE.search(markup):
            return _HEAD_CLOSE_RE.sub(lambda m: block + m.group(0), markup, count=1)
        if _HTML_OPEN_RE.search(markup):
            return _HTML_OPEN_RE.sub(
                lambda m: f"{m.group(0)}<head>{block}</head>", markup, count=1
            )
        logger.warning("No head or html tag found, dropping user head content")
        return markup

    def protect_user_head(self, markup: str) -> str:
        """Swap the user head content for a placeholder comment."""
        block = USER_HEAD_START + USER_HEAD_PLACEHOLDER + USER_HEAD_STOP
        return _USER_HEAD_RE.sub(lambda m: block, markup, count=1)

    def restore_user_head(self, markup: str) -> str:
        """Put the stored user head content back, verbatim, in place of the placeholder."""
        return markup.replace(USER_HEAD_PLACEHOLDER, self.user_head, 1)

    # Custom style and script

    def get_head_style(self, document: BeautifulSoup) -> str:
        tag = document.find("style", class_=HEAD_STYLE_CLASS)
        return text_content(tag) if tag else ""

    def set_head_style(self, document: BeautifulSoup, css: str) -> None:
        self._set_head_text(document, "style", HEAD_STYLE_CLASS, css, {"type": "text/css"})

    def get_head_script(self, document: BeautifulSoup) -> str:
        tag = document.find("script", class_=HEAD_SCRIPT_CLASS)
        return text_content(tag) if tag else ""

    def set_head_script(self, document: BeautifulSoup, script: str) -> None:
        self._set_head_text(document, "script", HEAD_SCRIPT_CLASS, script, {"type": NOT_JAVASCRIPT})

    def _set_head_text(
        self,
        document: BeautifulSoup,
        name: str,
        class_name: str,
        text: str,
        attrs: dict[str, str],
    ) -> None:
        tag = document.find(name, class_=class_name)
        if tag is None:
            if not text:
                return
            head = self.ensure_head(document)
            if head is None:
                return
            tag = document.new_tag(name, attrs={**attrs, "class": class_name})
            head.append(tag)
        tag.string = text

    # Temporary tags

    def ensure_head(self, document: BeautifulSoup) -> Optional[Tag]:
        """Return the head element, creating it under <html> if needed."""
        if document.head is not None:
            return document.head
        if document.html is None:
            return None
        head = document.new_tag("head")
        document.html.insert(0, head)
        return head

    def add_temp_tags(
        self,
        document: BeautifulSoup,
        tags: list[Tag],
        on_success: Optional[Callable[[], None]] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
    ) -> None:
        """Append ``tags`` to the head unless an equivalent tag is there."""
        head = self.ensure_head(document)
        if head is None:
            if on_error:
                on_error(ValueError("the document has no html element"))
            return
        for tag in tags:
            add_class(tag, TEMP_TAG_CLASS)
            if not self._has_equivalent(head, tag):
                head.append(tag)
        if on_success:
            on_success()

    @staticmethod
    def _has_equivalent(head: Tag, tag: Tag) -> bool:
        for key in ("href", "src"):
            if tag.get(key):
                return head.find(tag.name, attrs={key: tag[key]}) is not None
        return False

    def remove_temp_tags(self, head: Optional[Tag]) -> None:
        if head is None:
            return
        for tag in head.find_all(class_=TEMP_TAG_CLASS):
            tag.decompose()

    def remove_current_page_style_tag(self, head: Optional[Tag]) -> None:
        if head is None:
            return
        for tag in head.find_all("style", class_=CURRENT_PAGE_STYLE_CLASS):
            tag.decompose()

    # Settings

    def get_publication_path(self, document: BeautifulSoup) -> Optional[str]:
        meta = document.find("meta", attrs={"name": PUBLICATION_PATH_META})
        return meta.get("content") if meta else None

    def set_publication_path(self, document: BeautifulSoup, path: Optional[str]) -> None:
        meta = document.find("meta", attrs={"name": PUBLICATION_PATH_META})
        if path is None:
            if meta is not None:
                meta.decompose()
        elif meta is not None:
            meta["content"] = path
        else:
            head = self.ensure_head(document)
            if head is not None:
                head.append(document.new_tag("meta", attrs={"name": PUBLICATION_PATH_META, "content": path}))
        self.settings["publication_path"] = path

    def update_from_dom(self, document: BeautifulSoup) -> dict[str, Any]:
        """Refresh the site settings from the document head."""
        description = document.find("meta", attrs={"name": "description"})
        self.settings = {
            "title": document.title.get_text() if document.title else None,
            "description": description.get("content") if description else None,
            "publication_path": self.get_publication_path(document),
            "temp_tags": sum(1 for t in document.find_all(True) if has_class(t, TEMP_TAG_CLASS)),
        }
        return self.settings
