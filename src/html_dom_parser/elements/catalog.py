"""Catalog of recognized HTML element names and their categories.

Tag names resolve case-insensitively to an ElementKind member. Anything not in
the catalog resolves to an UnknownElement that keeps the name exactly as it was
written, so custom elements survive a parse/serialize round trip.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Union


class ElementKind(Enum):
    """Standard HTML elements, valued by their lowercase tag name."""

    # Document structure
    HTML = "html"
    HEAD = "head"
    BODY = "body"
    TITLE = "title"
    META = "meta"
    LINK = "link"
    STYLE = "style"
    SCRIPT = "script"
    BASE = "base"

    # Sectioning elements
    ARTICLE = "article"
    SECTION = "section"
    NAV = "nav"
    ASIDE = "aside"
    HEADER = "header"
    FOOTER = "footer"
    MAIN = "main"
    HGROUP = "hgroup"

    # Headings
    H1 = "h1"
    H2 = "h2"
    H3 = "h3"
    H4 = "h4"
    H5 = "h5"
    H6 = "h6"

    # Text content
    P = "p"
    HR = "hr"
    PRE = "pre"
    BLOCKQUOTE = "blockquote"
    OL = "ol"
    UL = "ul"
    LI = "li"
    DL = "dl"
    DT = "dt"
    DD = "dd"
    FIGURE = "figure"
    FIGCAPTION = "figcaption"
    DIV = "div"

    # Inline text semantics
    A = "a"
    EM = "em"
    STRONG = "strong"
    SMALL = "small"
    S = "s"
    CITE = "cite"
    Q = "q"
    DFN = "dfn"
    ABBR = "abbr"
    RUBY = "ruby"
    RT = "rt"
    RP = "rp"
    DATA = "data"
    TIME = "time"
    CODE = "code"
    VAR = "var"
    SAMP = "samp"
    KBD = "kbd"
    SUB = "sub"
    SUP = "sup"
    I = "i"  # noqa: E741
    B = "b"
    U = "u"
    MARK = "mark"
    BDI = "bdi"
    BDO = "bdo"
    SPAN = "span"
    BR = "br"
    WBR = "wbr"

    # Image and multimedia
    PICTURE = "picture"
    SOURCE = "source"
    IMG = "img"
    SVG = "svg"
    MATH = "math"
    AUDIO = "audio"
    VIDEO = "video"
    TRACK = "track"
    MAP = "map"
    AREA = "area"

    # Embedded content
    IFRAME = "iframe"
    EMBED = "embed"
    OBJECT = "object"
    PARAM = "param"

    # Scripting
    CANVAS = "canvas"
    NOSCRIPT = "noscript"

    # Demarcating edits
    DEL = "del"
    INS = "ins"

    # Table content
    TABLE = "table"
    CAPTION = "caption"
    COLGROUP = "colgroup"
    COL = "col"
    TBODY = "tbody"
    THEAD = "thead"
    TFOOT = "tfoot"
    TR = "tr"
    TD = "td"
    TH = "th"

    # Forms
    FORM = "form"
    LABEL = "label"
    INPUT = "input"
    BUTTON = "button"
    SELECT = "select"
    DATALIST = "datalist"
    OPTGROUP = "optgroup"
    OPTION = "option"
    TEXTAREA = "textarea"
    OUTPUT = "output"
    PROGRESS = "progress"
    METER = "meter"
    FIELDSET = "fieldset"
    LEGEND = "legend"

    # Interactive elements
    DETAILS = "details"
    SUMMARY = "summary"
    DIALOG = "dialog"

    # Web components
    TEMPLATE = "template"
    SLOT = "slot"

    # Obsolete elements that still show up in the wild
    ACRONYM = "acronym"
    APPLET = "applet"
    BASEFONT = "basefont"
    BIG = "big"
    CENTER = "center"
    DIR = "dir"
    FONT = "font"
    FRAME = "frame"
    FRAMESET = "frameset"
    NOFRAMES = "noframes"
    STRIKE = "strike"
    TT = "tt"

    @property
    def tag_name(self) -> str:
        """Canonical lowercase tag name."""
        return self.value

    @property
    def is_void(self) -> bool:
        """Void elements never have children or a closing tag."""
        return self in VOID_ELEMENTS

    @property
    def is_obsolete(self) -> bool:
        return self in OBSOLETE_ELEMENTS

    @property
    def is_sectioning(self) -> bool:
        return self in SECTIONING_ELEMENTS

    @property
    def is_heading(self) -> bool:
        return self in HEADING_ELEMENTS

    @property
    def is_form_element(self) -> bool:
        return self in FORM_ELEMENTS

    @property
    def is_table_element(self) -> bool:
        return self in TABLE_ELEMENTS


@dataclass(frozen=True)
class UnknownElement:
    """An element name the catalog does not recognize.

    The name is kept in its original case and compared exactly, so
    ``UnknownElement("x-Card") != UnknownElement("x-card")``.
    """

    name: str

    @property
    def tag_name(self) -> str:
        return self.name

    # Unknown elements belong to no category.
    is_void = False
    is_obsolete = False
    is_sectioning = False
    is_heading = False
    is_form_element = False
    is_table_element = False


AnyElementKind = Union[ElementKind, UnknownElement]

VOID_ELEMENTS: FrozenSet[ElementKind] = frozenset({
    ElementKind.AREA,
    ElementKind.BASE,
    ElementKind.BR,
    ElementKind.COL,
    ElementKind.EMBED,
    ElementKind.HR,
    ElementKind.IMG,
    ElementKind.INPUT,
    ElementKind.LINK,
    ElementKind.META,
    ElementKind.PARAM,
    ElementKind.SOURCE,
    ElementKind.TRACK,
    ElementKind.WBR,
})

OBSOLETE_ELEMENTS: FrozenSet[ElementKind] = frozenset({
    ElementKind.ACRONYM,
    ElementKind.APPLET,
    ElementKind.BASEFONT,
    ElementKind.BIG,
    ElementKind.CENTER,
    ElementKind.DIR,
    ElementKind.FONT,
    ElementKind.FRAME,
    ElementKind.FRAMESET,
    ElementKind.NOFRAMES,
    ElementKind.STRIKE,
    ElementKind.TT,
})

SECTIONING_ELEMENTS: FrozenSet[ElementKind] = frozenset({
    ElementKind.ARTICLE,
    ElementKind.SECTION,
    ElementKind.NAV,
    ElementKind.ASIDE,
})

HEADING_ELEMENTS: FrozenSet[ElementKind] = frozenset({
    ElementKind.H1,
    ElementKind.H2,
    ElementKind.H3,
    ElementKind.H4,
    ElementKind.H5,
    ElementKind.H6,
})

FORM_ELEMENTS: FrozenSet[ElementKind] = frozenset({
    ElementKind.FORM,
    ElementKind.INPUT,
    ElementKind.BUTTON,
    ElementKind.SELECT,
    ElementKind.TEXTAREA,
    ElementKind.LABEL,
    ElementKind.FIELDSET,
    ElementKind.LEGEND,
    ElementKind.OPTGROUP,
    ElementKind.OPTION,
    ElementKind.DATALIST,
    ElementKind.OUTPUT,
    ElementKind.PROGRESS,
    ElementKind.METER,
})

TABLE_ELEMENTS: FrozenSet[ElementKind] = frozenset({
    ElementKind.TABLE,
    ElementKind.CAPTION,
    ElementKind.COLGROUP,
    ElementKind.COL,
    ElementKind.TBODY,
    ElementKind.THEAD,
    ElementKind.TFOOT,
    ElementKind.TR,
    ElementKind.TD,
    ElementKind.TH,
})

_BY_TAG_NAME: Dict[str, ElementKind] = {kind.value: kind for kind in ElementKind}


def from_tag_name(name: str) -> AnyElementKind:
    """Resolve a tag name to its element kind.

    Matching is case-insensitive and never fails: unrecognized names come back
    as ``UnknownElement`` with the name as written.
    """
    return _BY_TAG_NAME.get(name.lower(), UnknownElement(name))


def tag_name(kind: AnyElementKind) -> str:
    return kind.tag_name


def is_void(kind: AnyElementKind) -> bool:
    return kind.is_void


def is_obsolete(kind: AnyElementKind) -> bool:
    return kind.is_obsolete


def is_sectioning(kind: AnyElementKind) -> bool:
    return kind.is_sectioning


def is_heading(kind: AnyElementKind) -> bool:
    return kind.is_heading


def is_form_element(kind: AnyElementKind) -> bool:
    return kind.is_form_element


def is_table_element(kind: AnyElementKind) -> bool:
    return kind.is_table_element
