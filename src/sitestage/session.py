"""Open/save orchestration for the current document."""

import logging
from typing import Callable, Optional

from sitestage.errors import ProgrammingError
from sitestage.models import FileInfo
from sitestage.protocols import ErrorCallback, StorageProvider
from sitestage.registry import RecentFiles

logger = logging.getLogger(__name__)


class Session:
    """Tracks which document is adopted as save target.

    ``file_info`` is None until a document is opened or saved as. A session
    opened from a transient source is a template: it has no save target and
    must be saved with ``save_as`` first.
    """

    def __init__(self, storage: StorageProvider, recent_files: RecentFiles):
        self.storage = storage
        self.recent_files = recent_files
        self.file_info: Optional[FileInfo] = None
        self.is_template = False
        self.source_url: Optional[str] = None

    @property
    def base_url(self) -> Optional[str]:
        """Where relative resources of the current document resolve from."""
        if self.file_info is not None:
            return self.file_info.url
        return self.source_url

    def open_from(
        self,
        file_info: FileInfo,
        on_success: Callable[[str], None],
        on_error: ErrorCallback | None = None,
    ) -> None:
        """Read ``file_info`` and adopt it; installing the markup is up to the caller."""
        self.is_template = False

        def on_read(markup: str) -> None:
            self.close()
            self.file_info = file_info
            self.recent_files.remember(file_info)
            logger.info(f"Opened {file_info.url}")
            on_success(markup)

        self.storage.read(file_info, on_read, on_error)

    def open_from_transient_source(
        self,
        url: str,
        on_success: Callable[[str], None],
        on_error: ErrorCallback | None = None,
    ) -> None:
        """Load ``url`` for display only, as a template."""
        self.is_template = True

        def on_load(markup: str) -> None:
            self.close()
            self.source_url = url
            logger.info(f"Opened template {url}")
            on_success(markup)

        self.storage.load_local(url, on_load, on_error)

    def save_as(
        self,
        file_info: FileInfo,
        markup: str,
        on_success: Callable[[], None] | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self.file_info = file_info
        self.recent_files.remember(file_info)
        self.save(markup, on_success, on_error)

    def save(
        self,
        markup: str,
        on_success: Callable[[], None] | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        if self.file_info is None:
            raise ProgrammingError("Can not save, no file has been opened or saved as")

        file_info = self.file_info

        def on_written() -> None:
            self.is_template = False
            logger.info(f"Saved {file_info.url}")
            if on_success:
                on_success()

        self.storage.write(file_info, markup, on_written, on_error)

    def close(self) -> None:
        """Forget the save target; the surface is reset by the next load."""
        self.file_info = None
        self.source_url = None

    def restore(
        self,
        file_info: Optional[FileInfo],
        is_template: bool,
        source_url: Optional[str] = None,
    ) -> None:
        """Put back a previous session state, e.g. after a rejected load."""
        self.file_info = file_info
        self.is_template = is_template
        self.source_url = source_url
