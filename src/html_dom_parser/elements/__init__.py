"""HTML element catalog.

Maps tag names to element kinds and answers the static category questions
(void, obsolete, sectioning, heading, form, table) the parser relies on.
"""

from .catalog import (
    FORM_ELEMENTS,
    HEADING_ELEMENTS,
    OBSOLETE_ELEMENTS,
    SECTIONING_ELEMENTS,
    TABLE_ELEMENTS,
    VOID_ELEMENTS,
    AnyElementKind,
    ElementKind,
    UnknownElement,
    from_tag_name,
    is_form_element,
    is_heading,
    is_obsolete,
    is_sectioning,
    is_table_element,
    is_void,
    tag_name,
)

__all__ = [
    "FORM_ELEMENTS",
    "HEADING_ELEMENTS",
    "OBSOLETE_ELEMENTS",
    "SECTIONING_ELEMENTS",
    "TABLE_ELEMENTS",
    "VOID_ELEMENTS",
    "AnyElementKind",
    "ElementKind",
    "UnknownElement",
    "from_tag_name",
    "is_form_element",
    "is_heading",
    "is_obsolete",
    "is_sectioning",
    "is_table_element",
    "is_void",
    "tag_name",
]
