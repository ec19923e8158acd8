"""Document storage on the local filesystem."""

import logging
from pathlib import Path
from typing import Callable, Optional

from sitestage.models import FileInfo
from sitestage.protocols import ErrorCallback
from sitestage.scheduler import Scheduler
from sitestage.utils.binary import is_binary_content

logger = logging.getLogger(__name__)


class FileSystemStorage:
    """Reads and writes site documents as local files.

    Continuations are always deferred through the scheduler so callers see
    the same ordering as with a remote backend.
    """

    def __init__(self, scheduler: Scheduler, templates_dir: Optional[Path | str] = None):
        self.scheduler = scheduler
        self.templates_dir = Path(templates_dir) if templates_dir else None

    def _deliver(self, callback: Optional[Callable], *args) -> None:
        if callback is not None:
            self.scheduler.call_later(0, lambda: callback(*args))

    def _read_text(self, path: Path) -> str:
        raw_content = path.read_bytes()
        if is_binary_content(raw_content):
            raise ValueError(f"Not a text document: {path}")
        return raw_content.decode("utf-8")

    def read(
        self,
        file_info: FileInfo,
        on_success: Callable[[str], None],
        on_error: ErrorCallback | None = None,
    ) -> None:
        try:
            markup = self._read_text(file_info.path)
        except (OSError, ValueError) as e:
            logger.debug(f"Read failed for {file_info.url}: {e}")
            self._deliver(on_error, e)
            return
        self._deliver(on_success, markup)

    def write(
        self,
        file_info: FileInfo,
        markup: str,
        on_success: Callable[[], None] | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        try:
            path = file_info.path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(markup, encoding="utf-8")
        except OSError as e:
            logger.debug(f"Write failed for {file_info.url}: {e}")
            self._deliver(on_error, e)
            return
        self._deliver(on_success)

    def load_local(
        self,
        url: str,
        on_success: Callable[[str], None],
        on_error: ErrorCallback | None = None,
    ) -> None:
        """Load a template, relative urls being resolved in the templates dir."""
        path = FileInfo(url=url).path
        if not path.is_absolute() and self.templates_dir is not None:
            path = self.templates_dir / path
        try:
            markup = self._read_text(path)
        except (OSError, ValueError) as e:
            self._deliver(on_error, e)
            return
        self._deliver(on_success, markup)
