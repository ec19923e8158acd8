"""String-level transforms applied to raw markup before it is parsed."""

import re
from html import escape

from sitestage.config import (
    MORE_INFO_LINK,
    NOT_EDITABLE_MESSAGE,
    PUBLISHED_CLASS,
    PUBLISHED_MESSAGE,
    RUNTIME_CLASS,
    TEMP_TAG_CLASS,
)
from sitestage.errors import NotEditableError, PublishedDocumentError

_HEAD_OPEN_RE = re.compile(r"<head\b[^>]*>", re.IGNORECASE)
_HTML_OPEN_RE = re.compile(r"<html\b[^>]*>", re.IGNORECASE)
_BODY_OPEN_RE = re.compile(r"<body\b[^>]*>", re.IGNORECASE)
_DOCTYPE_RE = re.compile(r"<!DOCTYPE\b[^>]*>", re.IGNORECASE)
_CLASS_ATTR_RE = re.compile(r"""(\bclass\s*=\s*)(["'])(.*?)\2""", re.IGNORECASE | re.DOTALL)
_ABSOLUTE_ATTR_RE = re.compile(
    r"""(\b(?:src|href|action|poster|data-src)\s*=\s*["']?)https?://""", re.IGNORECASE
)
_ABSOLUTE_CSS_URL_RE = re.compile(r"""(url\(\s*["']?)https?://""", re.IGNORECASE)


def inject_base_tag(markup: str, url: str) -> str:
    """Add a temporary <base> so relative resources resolve from ``url``."""
    tag = f'<base class="{TEMP_TAG_CLASS}" href="{escape(url)}" target="_blank">'
    if _HEAD_OPEN_RE.search(markup):
        return _HEAD_OPEN_RE.sub(lambda m: m.group(0) + tag, markup, count=1)
    if _HTML_OPEN_RE.search(markup):
        return _HTML_OPEN_RE.sub(lambda m: f"{m.group(0)}<head>{tag}</head>", markup, count=1)
    if _DOCTYPE_RE.search(markup):
        return _DOCTYPE_RE.sub(lambda m: f"{m.group(0)}<head>{tag}</head>", markup, count=1)
    return f"<head>{tag}</head>{markup}"


def make_protocol_relative(markup: str) -> str:
    """Turn absolute http(s) references into protocol-relative ones."""
    markup = _ABSOLUTE_ATTR_RE.sub(r"\1//", markup)
    return _ABSOLUTE_CSS_URL_RE.sub(r"\1//", markup)


def check_signatures(markup: str) -> None:
    """Raise if the markup is not an editable project file."""
    if RUNTIME_CLASS not in markup:
        raise NotEditableError(NOT_EDITABLE_MESSAGE, MORE_INFO_LINK)
    if PUBLISHED_CLASS in markup:
        raise PublishedDocumentError(PUBLISHED_MESSAGE, MORE_INFO_LINK)


def strip_runtime_class(markup: str) -> str:
    """Remove the runtime marker class from the body tag while editing."""

    def strip_class(match: re.Match) -> str:
        tokens = [t for t in match.group(3).split() if t != RUNTIME_CLASS]
        return f"{match.group(1)}{match.group(2)}{' '.join(tokens)}{match.group(2)}"

    def strip_body(match: re.Match) -> str:
        return _CLASS_ATTR_RE.sub(strip_class, match.group(0), count=1)

    return _BODY_OPEN_RE.sub(strip_body, markup, count=1)
