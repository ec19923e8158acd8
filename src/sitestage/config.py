"""Constants and tunables for the load/save pipeline."""

from dataclasses import dataclass
from pathlib import Path

# Document signatures
RUNTIME_CLASS = "silex-runtime"
PUBLISHED_CLASS = "silex-published"

# Tags injected while editing, removed before saving
TEMP_TAG_CLASS = "silex-temp-tag"

# Stage loading indicators
LOADING_CLASS = "loading-website"
LOADING_LIGHT_CLASS = "loading-website-light"

# Resources only needed while editing
EDITION_STYLESHEETS = ("css/editable.css",)
DEFAULT_EDITOR_BASE_URL = "http://localhost:6805/"

# Capability the surface context must expose before the document is usable
REQUIRED_CAPABILITY = "$"

GENERATOR_NAME = "Silex"
GENERATOR_VERSION = (2, 2, 7)

MAX_RECENT_FILES = 5
RECENT_FILES_KEY = "sitestage:recent-files"

DEFAULT_HOME = Path.home() / ".sitestage"
DEFAULT_STATE_DB = DEFAULT_HOME / "state.db"

NOT_EDITABLE_MESSAGE = (
    "I can not open this website. I can only open website made with Silex."
)
PUBLISHED_MESSAGE = (
    "I can not open this website. It is a published version of a Silex website."
)
MORE_INFO_LINK = "https://github.com/silexlabs/Silex/issues/282"


@dataclass(frozen=True)
class LoadSettings:
    """Timing and bounds for loading and serializing documents."""

    poll_interval: float = 0.01
    poll_backoff: float = 2.0
    max_poll_delay: float = 0.5
    max_poll_attempts: int = 20
    max_reloads: int = 3
    yield_delay: float = 0.1
    editor_base_url: str = DEFAULT_EDITOR_BASE_URL

    def poll_delay(self, attempt: int) -> float:
        """Delay before readiness check number ``attempt`` (0-based)."""
        return min(self.poll_interval * (self.poll_backoff**attempt), self.max_poll_delay)
