"""Pages of a site and the page currently shown in the stage."""

from typing import Optional

from bs4 import BeautifulSoup

from sitestage.site.head import CURRENT_PAGE_STYLE_CLASS, HeadModel
from sitestage.utils.dom import add_class, has_class, remove_classes

PAGE_TYPE_ATTR = "data-silex-type"
PAGE_TYPE = "page"
PAGED_ELEMENT_CLASS = "paged-element"
PAGED_VISIBLE_CLASS = "paged-element-visible"
PAGE_LINK_ACTIVE_CLASS = "page-link-active"


class PageModel:
    def __init__(self, head: HeadModel):
        self.head = head
        self.current: Optional[str] = None

    def get_pages(self, document: BeautifulSoup) -> list[str]:
        anchors = document.find_all("a", attrs={PAGE_TYPE_ATTR: PAGE_TYPE})
        return [a["id"] for a in anchors if a.get("id")]

    def get_current_page(self, document: BeautifulSoup) -> Optional[str]:
        pages = self.get_pages(document)
        if self.current in pages:
            return self.current
        return pages[0] if pages else None

    def set_current_page(self, document: BeautifulSoup, name: Optional[str]) -> None:
        """Show ``name`` in the stage; the style tag it adds is editor-only."""
        self.current = name
        self.head.remove_current_page_style_tag(document.head)
        if name is None:
            return
        head = self.head.ensure_head(document)
        if head is not None:
            style = document.new_tag("style", attrs={"class": CURRENT_PAGE_STYLE_CLASS})
            style.string = f".{PAGED_ELEMENT_CLASS}:not(.{name}) {{ display: none; }}"
            head.append(style)
        for tag in document.find_all(class_=PAGED_ELEMENT_CLASS):
            if has_class(tag, name):
                add_class(tag, PAGED_VISIBLE_CLASS)
            else:
                remove_classes(tag, (PAGED_VISIBLE_CLASS,))
        for link in document.find_all("a", href=True):
            if link["href"] == f"#!{name}":
                add_class(link, PAGE_LINK_ACTIVE_CLASS)
            else:
                remove_classes(link, (PAGE_LINK_ACTIVE_CLASS,))
