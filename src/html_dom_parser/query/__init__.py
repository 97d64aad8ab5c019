"""Read-only lookups and serialization over built document trees."""

from .serialization import inner_html, opening_tag, outer_html
from .traversal import (
    get_element_by_id,
    get_elements_by_class,
    get_elements_by_tag,
    iter_elements,
    iter_preorder,
)

__all__ = [
    "get_element_by_id",
    "get_elements_by_class",
    "get_elements_by_tag",
    "inner_html",
    "iter_elements",
    "iter_preorder",
    "opening_tag",
    "outer_html",
]
