"""The live editable rendering surface."""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from bs4 import BeautifulSoup, Doctype, Tag

from sitestage.config import REQUIRED_CAPABILITY
from sitestage.protocols import Renderer

logger = logging.getLogger(__name__)

PARSER = "html.parser"


@dataclass
class SurfaceContext:
    """Execution context attached to the surface document."""

    globals: dict[str, Any] = field(default_factory=dict)
    initialized: bool = True

    def provides(self, name: str) -> bool:
        return self.globals.get(name) is not None


class DefaultRenderer:
    """Boots a ready context exposing the ``$`` selector over the document."""

    def boot(self, document: BeautifulSoup) -> SurfaceContext:
        return SurfaceContext(globals={REQUIRED_CAPABILITY: document.select})


class ContentSurface:
    """Owns the single live document of an editing session.

    Content goes through an explicit open/write/close cycle. The surface may
    keep state across sessions, so ``reset`` always writes an empty document
    even when there seems to be nothing to clear.
    """

    def __init__(self, renderer: Optional[Renderer] = None):
        self.renderer = renderer or DefaultRenderer()
        self._buffer: Optional[list[str]] = None
        self._document = BeautifulSoup("", PARSER)
        self._context: Optional[SurfaceContext] = None

    @property
    def document(self) -> BeautifulSoup:
        return self._document

    @property
    def context(self) -> Optional[SurfaceContext]:
        return self._context

    @property
    def body(self) -> Optional[Tag]:
        return self._document.body

    def open(self) -> None:
        """Start writing a new document, detaching the context."""
        self._buffer = []
        self._context = None

    def write(self, markup: str) -> None:
        if self._buffer is None:
            self.open()
        self._buffer.append(markup)

    def close(self) -> None:
        """Parse what was written and boot a context for it."""
        markup = "".join(self._buffer or [])
        self._buffer = None
        self._document = BeautifulSoup(markup, PARSER)
        if markup.strip():
            complete_document(self._document)
        self._context = self.renderer.boot(self._document)

    def reset(self) -> None:
        """Clear any residual content."""
        logger.debug("Resetting surface")
        self.open()
        self.write("")
        self.close()

    def install(self, markup: str) -> None:
        """Replace the content of the surface."""
        self.open()
        self.write(markup)
        self.close()

    def has_content(self) -> bool:
        """True if a website is being edited."""
        body = self.body
        return body is not None and len(body.contents) > 0

    def is_ready(self, capability: str = REQUIRED_CAPABILITY) -> bool:
        """Body parsed, context initialized and ``capability`` available."""
        context = self._context
        return (
            self.body is not None
            and context is not None
            and context.initialized
            and context.provides(capability)
        )


def complete_document(document: BeautifulSoup) -> None:
    """Add the <html> and <head> elements a browser would have implied."""
    html = document.html
    if html is None:
        html = document.new_tag("html")
        for node in [n for n in document.contents if not isinstance(n, Doctype)]:
            html.append(node.extract())
        document.append(html)
    if html.head is None:
        html.insert(0, document.new_tag("head"))
