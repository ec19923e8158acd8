"""Value describing where a site document lives."""

import mimetypes
import posixpath
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname


@dataclass(frozen=True)
class FileInfo:
    """Location, type and kind of a stored document.

    Replaced wholesale, never patched. ``name`` defaults to the last
    segment of the url.
    """

    url: str
    mime: str = "text/html"
    is_dir: bool = False
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.name is None:
            path = urlparse(self.url).path.rstrip("/")
            object.__setattr__(self, "name", unquote(posixpath.basename(path)) or self.url)

    @classmethod
    def from_path(cls, path: Path | str) -> "FileInfo":
        """Build a FileInfo for a local file."""
        path = Path(path).expanduser().resolve()
        mime, _ = mimetypes.guess_type(path.name)
        return cls(
            url=path.as_uri(),
            mime=mime or "text/html",
            is_dir=path.is_dir(),
            name=path.name,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FileInfo":
        return cls(
            url=data["url"],
            mime=data.get("mime", "text/html"),
            is_dir=bool(data.get("isDir", data.get("is_dir", False))),
            name=data.get("name"),
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["isDir"] = data.pop("is_dir")
        return data

    @property
    def path(self) -> Path:
        """Local filesystem path for ``file://`` urls and bare paths."""
        parsed = urlparse(self.url)
        if parsed.scheme == "file":
            return Path(url2pathname(parsed.path))
        return Path(self.url)
