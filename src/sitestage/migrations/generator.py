"""Generator-version migration."""

import logging
import re
from typing import Callable, Optional

from bs4 import BeautifulSoup

from sitestage.config import GENERATOR_NAME, GENERATOR_VERSION
from sitestage.site import SiteModel
from sitestage.site.properties import JSON_STYLE_TAG_CLASS

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"(\d+)\.(\d+)\.(\d+)")


def parse_version(content: Optional[str]) -> tuple[int, int, int]:
    """Read ``x.y.z`` out of a generator meta content, (0, 0, 0) if absent."""
    match = _VERSION_RE.search(content or "")
    if match is None:
        return (0, 0, 0)
    return tuple(int(part) for part in match.groups())  # type: ignore[return-value]


def format_version(version: tuple[int, int, int]) -> str:
    return ".".join(str(part) for part in version)


class GeneratorMigrator:
    """Brings documents written by older generators up to date.

    Older documents lack the JSON style carrier; it is created from scratch
    and the generator meta is stamped with the current version. Any upgrade
    asks for one reload so the rest of the model is rebuilt from the new
    markup; an up-to-date document never does, so the reload converges.
    """

    def __init__(self, version: tuple[int, int, int] = GENERATOR_VERSION):
        self.version = version

    def process(
        self,
        document: BeautifulSoup,
        model: SiteModel,
        on_done: Callable[[bool], None],
    ) -> None:
        meta = document.find("meta", attrs={"name": "generator"})
        current = parse_version(meta.get("content") if meta else None)
        if current >= self.version:
            on_done(False)
            return

        if meta is None:
            head = model.head.ensure_head(document)
            if head is None:
                logger.warning("Document has no head, can not stamp the generator version")
                on_done(False)
                return
            meta = document.new_tag("meta", attrs={"name": "generator"})
            head.append(meta)

        logger.info(f"Upgrading document from {format_version(current)} to {format_version(self.version)}")
        if document.find("script", class_=JSON_STYLE_TAG_CLASS) is None:
            model.properties.save_properties(document, "{}")
        meta["content"] = f"{GENERATOR_NAME} v{format_version(self.version)}"
        on_done(True)


class NoopMigrator:
    """Leaves every document untouched."""

    def process(
        self,
        document: BeautifulSoup,
        model: SiteModel,
        on_done: Callable[[bool], None],
    ) -> None:
        on_done(False)
