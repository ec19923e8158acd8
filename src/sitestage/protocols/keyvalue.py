"""Protocol for small persistent key/value stores."""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """String key/value persistence, per installation."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...

    def remove_item(self, key: str) -> None:
        ...
