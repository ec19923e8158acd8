"""Exceptions raised by the load/save pipeline."""


class SiteStageError(Exception):
    """Base class for sitestage errors."""


class ValidationError(SiteStageError):
    """The document can not be opened for edition."""

    def __init__(self, message: str, link: str | None = None):
        super().__init__(message)
        self.link = link


class NotEditableError(ValidationError):
    """The document lacks the authoring signature."""


class PublishedDocumentError(ValidationError):
    """The document is an exported site, not a project file."""


class ProgrammingError(SiteStageError):
    """The API was misused; not recoverable in place."""


class EditionTagsError(ProgrammingError):
    """Edition-only resources could not be injected into the surface."""


class SurfaceNotReadyError(SiteStageError):
    """The surface never became ready within the polling budget."""


class MigrationConvergenceError(SiteStageError):
    """The migrator kept asking for a reload past the allowed ceiling."""
