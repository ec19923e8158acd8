"""Editability and selection of body elements."""

from typing import Iterable, Optional

from bs4 import BeautifulSoup, Tag

from sitestage.utils.dom import add_class, has_class, iter_tags, remove_classes

EDITABLE_ELEMENT_CLASS = "editable-style"
CONTAINER_CLASS = "container-element"
SELECTED_CLASS = "silex-selected"

DRAGGABLE_CLASS = "ui-draggable"
DROPPABLE_CLASS = "ui-droppable"
RESIZABLE_CLASS = "ui-resizable"
EDITABLE_CLASS = "silex-editable"

EDITABLE_CLASSES = (DRAGGABLE_CLASS, DROPPABLE_CLASS, RESIZABLE_CLASS, EDITABLE_CLASS)


class BodyModel:
    """Marks elements as editable and tracks the selection."""

    def __init__(self) -> None:
        self._selection: list[Tag] = []

    def set_editable(self, root: Optional[Tag], editable: bool) -> None:
        if root is None:
            return
        if not editable:
            self.remove_editable_classes(root)
            return
        add_class(root, DROPPABLE_CLASS)
        for tag in iter_tags(root):
            if has_class(tag, EDITABLE_ELEMENT_CLASS):
                add_class(tag, DRAGGABLE_CLASS, RESIZABLE_CLASS, EDITABLE_CLASS)
                if has_class(tag, CONTAINER_CLASS):
                    add_class(tag, DROPPABLE_CLASS)

    def remove_editable_classes(self, root: BeautifulSoup | Tag) -> None:
        for tag in iter_tags(root):
            remove_classes(tag, EDITABLE_CLASSES)

    def get_selection(self) -> list[Tag]:
        return list(self._selection)

    def set_selection(self, elements: Iterable[Optional[Tag]]) -> None:
        for tag in self._selection:
            remove_classes(tag, (SELECTED_CLASS,))
        self._selection = [tag for tag in elements if tag is not None]
        for tag in self._selection:
            add_class(tag, SELECTED_CLASS)
