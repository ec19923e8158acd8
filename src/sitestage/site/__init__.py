"""Site model collaborators used by the load and save pipelines."""

from dataclasses import dataclass, field

from sitestage.site.body import BodyModel
from sitestage.site.element import ElementModel
from sitestage.site.head import HeadModel
from sitestage.site.page import PageModel
from sitestage.site.properties import PropertyStore


@dataclass
class SiteModel:
    """Holds the models of the site being edited."""

    head: HeadModel = field(default_factory=HeadModel)
    properties: PropertyStore = field(default_factory=PropertyStore)
    body: BodyModel = field(default_factory=BodyModel)
    element: ElementModel = field(default_factory=ElementModel)
    page: PageModel = field(init=False)

    def __post_init__(self) -> None:
        self.page = PageModel(self.head)


__all__ = [
    "BodyModel",
    "ElementModel",
    "HeadModel",
    "PageModel",
    "PropertyStore",
    "SiteModel",
]
