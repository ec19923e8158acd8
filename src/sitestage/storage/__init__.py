"""Storage backends and persistent state."""

from sitestage.storage.filesystem import FileSystemStorage
from sitestage.storage.store import MemoryKeyValueStore, StateStore

__all__ = ["FileSystemStorage", "MemoryKeyValueStore", "StateStore"]
