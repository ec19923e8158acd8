"""Protocol definitions for pluggable collaborators."""

from sitestage.protocols.keyvalue import KeyValueStore
from sitestage.protocols.migrator import Migrator
from sitestage.protocols.notifier import Notifier
from sitestage.protocols.renderer import Renderer
from sitestage.protocols.storage import ErrorCallback, StorageProvider

__all__ = [
    "ErrorCallback",
    "KeyValueStore",
    "Migrator",
    "Notifier",
    "Renderer",
    "StorageProvider",
]
