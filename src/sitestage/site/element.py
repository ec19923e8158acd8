"""Markup preparation for edition."""

import re

from sitestage.site.head import HEAD_SCRIPT_CLASS, NOT_JAVASCRIPT

_SCRIPT_OPEN_RE = re.compile(r"<script\b([^>]*)>", re.IGNORECASE)
_TYPE_ATTR_RE = re.compile(r"""\s*\btype\s*=\s*(["'])[^"']*\1""", re.IGNORECASE)
_USER_SCRIPT_RE = re.compile(
    r"""\bclass\s*=\s*(["'])[^"']*\b""" + re.escape(HEAD_SCRIPT_CLASS) + r"""\b[^"']*\1""",
    re.IGNORECASE,
)
_PREPARED_TYPE = f'type="{NOT_JAVASCRIPT}"'


class ElementModel:
    """Keeps user scripts inert while the document is being edited."""

    def prepare_html_for_edit(self, markup: str) -> str:
        def neutralize(match: re.Match) -> str:
            attrs = match.group(1)
            if not _USER_SCRIPT_RE.search(attrs):
                return match.group(0)
            return f"<script {_PREPARED_TYPE}{_TYPE_ATTR_RE.sub('', attrs)}>"

        return _SCRIPT_OPEN_RE.sub(neutralize, markup)

    def unprepare_html_for_edit(self, markup: str) -> str:
        return markup.replace(_PREPARED_TYPE, 'type="text/javascript"')
