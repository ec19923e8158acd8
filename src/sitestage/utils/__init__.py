"""Utility functions for sitestage."""

from sitestage.utils.binary import is_binary_content
from sitestage.utils.dom import (
    add_class,
    get_classes,
    has_class,
    iter_tags,
    remove_classes,
    set_style_properties,
    text_content,
)

__all__ = [
    "add_class",
    "get_classes",
    "has_class",
    "is_binary_content",
    "iter_tags",
    "remove_classes",
    "set_style_properties",
    "text_content",
]
