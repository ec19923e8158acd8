"""Stage view state: loading indicators and event bindings."""

from typing import Callable, Optional

from bs4 import Tag

from sitestage.config import LOADING_CLASS, LOADING_LIGHT_CLASS
from sitestage.stage.surface import SurfaceContext


class StageView:
    """Classes applied to the stage element plus its event binding state."""

    def __init__(self) -> None:
        self.classes: set[str] = set()
        self.events_bound = False
        self._listeners: list[Callable[["StageView"], None]] = []

    def subscribe(self, listener: Callable[["StageView"], None]) -> None:
        self._listeners.append(listener)

    def _changed(self) -> None:
        for listener in self._listeners:
            listener(self)

    def add_class(self, name: str) -> None:
        self.classes.add(name)
        self._changed()

    def remove_class(self, name: str) -> None:
        self.classes.discard(name)
        self._changed()

    def has_class(self, name: str) -> bool:
        return name in self.classes

    def show_loader(self, blocking: bool = True) -> None:
        """Show one loading indicator; the blocking and light ones exclude each other."""
        self.classes.discard(LOADING_LIGHT_CLASS if blocking else LOADING_CLASS)
        self.add_class(LOADING_CLASS if blocking else LOADING_LIGHT_CLASS)

    def hide_loader(self) -> None:
        self.classes.discard(LOADING_CLASS)
        self.classes.discard(LOADING_LIGHT_CLASS)
        self._changed()

    @property
    def is_loading(self) -> bool:
        return LOADING_CLASS in self.classes or LOADING_LIGHT_CLASS in self.classes

    def remove_events(self, body: Optional[Tag]) -> None:
        self.events_bound = False

    def init_events(self, context: Optional[SurfaceContext]) -> None:
        self.events_bound = context is not None
