"""Data models for sitestage."""

from sitestage.models.file_info import FileInfo
from sitestage.models.state import LoadState

__all__ = ["FileInfo", "LoadState"]
