"""Protocol for document migrations."""

from typing import TYPE_CHECKING, Callable, Protocol, runtime_checkable

from bs4 import BeautifulSoup

if TYPE_CHECKING:
    from sitestage.site import SiteModel


@runtime_checkable
class Migrator(Protocol):
    """Upgrades a freshly installed document from an older schema.

    Called once per load attempt. ``on_done`` receives True when the
    document must be serialized and loaded again.
    """

    def process(
        self,
        document: BeautifulSoup,
        model: "SiteModel",
        on_done: Callable[[bool], None],
    ) -> None:
        ...
