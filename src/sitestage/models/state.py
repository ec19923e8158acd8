"""Load pipeline states."""

from enum import Enum


class LoadState(str, Enum):
    """Where the load pipeline currently is."""

    CLOSED = "closed"
    RESETTING = "resetting"
    VALIDATING = "validating"
    TRANSFORMING = "transforming"
    INSTALLED = "installed"
    AWAITING_READY = "awaiting_ready"
    MIGRATING = "migrating"
    READY = "ready"
