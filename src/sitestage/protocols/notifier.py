"""Protocol for user-facing notifications."""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class Notifier(Protocol):
    """Non-blocking alert shown to the user."""

    def alert(self, message: str, link: Optional[str] = None) -> None:
        ...
