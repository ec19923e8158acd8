"""Protocol for document storage backends."""

from typing import Callable, Protocol, runtime_checkable

from sitestage.models import FileInfo

ErrorCallback = Callable[[BaseException], None]


@runtime_checkable
class StorageProvider(Protocol):
    """Protocol for reading and writing site documents.

    All operations report through success/error continuations; errors are
    passed through untouched so callers see the backend's own exception.
    """

    def read(
        self,
        file_info: FileInfo,
        on_success: Callable[[str], None],
        on_error: ErrorCallback | None = None,
    ) -> None:
        """Read the markup stored at ``file_info``."""
        ...

    def write(
        self,
        file_info: FileInfo,
        markup: str,
        on_success: Callable[[], None] | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        """Write ``markup`` to ``file_info``."""
        ...

    def load_local(
        self,
        url: str,
        on_success: Callable[[str], None],
        on_error: ErrorCallback | None = None,
    ) -> None:
        """Load markup from a transient source such as a bundled template."""
        ...
