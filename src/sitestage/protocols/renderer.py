"""Protocol for surface renderers."""

from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

from bs4 import BeautifulSoup

if TYPE_CHECKING:
    from sitestage.stage.surface import SurfaceContext


@runtime_checkable
class Renderer(Protocol):
    """Boots an execution context for a freshly written document.

    The context may become ready some time after ``boot`` returns; the
    load pipeline polls for it.
    """

    def boot(self, document: BeautifulSoup) -> Optional["SurfaceContext"]:
        ...
