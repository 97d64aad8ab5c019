"""Tests for the element catalog."""

import pytest

from html_dom_parser.elements import (
    VOID_ELEMENTS,
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


class TestFromTagName:
    """Test tag name resolution."""

    @pytest.mark.parametrize("name", ["div", "DIV", "Div", "dIv"])
    def test_case_insensitive(self, name: str) -> None:
        """Test known names resolve regardless of case."""
        assert from_tag_name(name) is ElementKind.DIV

    def test_unknown_keeps_original_case(self) -> None:
        """Test unknown names keep their spelling."""
        kind = from_tag_name("x-Card")
        assert kind == UnknownElement("x-Card")
        assert kind != UnknownElement("x-card")
        assert tag_name(kind) == "x-Card"

    def test_near_miss_is_unknown(self) -> None:
        """Test names that only resemble known tags are unknown."""
        assert from_tag_name("div-like") == UnknownElement("div-like")
        assert from_tag_name("!DOCTYPE") == UnknownElement("!DOCTYPE")

    def test_every_kind_round_trips(self) -> None:
        """Test each kind resolves from its own tag name."""
        for kind in ElementKind:
            assert from_tag_name(kind.tag_name) is kind
            assert from_tag_name(kind.tag_name.upper()) is kind


class TestCategories:
    """Test category predicates."""

    def test_void_set(self) -> None:
        """Test the exact void element set."""
        names = {kind.tag_name for kind in VOID_ELEMENTS}
        assert names == {
            "area", "base", "br", "col", "embed", "hr", "img", "input",
            "link", "meta", "param", "source", "track", "wbr",
        }

    def test_non_void(self) -> None:
        """Test ordinary containers are not void."""
        assert not is_void(ElementKind.DIV)
        assert not is_void(ElementKind.SCRIPT)
        assert ElementKind.BR.is_void

    def test_obsolete(self) -> None:
        """Test obsolete elements."""
        assert is_obsolete(ElementKind.CENTER)
        assert is_obsolete(ElementKind.FONT)
        assert not is_obsolete(ElementKind.SPAN)

    def test_sectioning(self) -> None:
        """Test sectioning elements."""
        assert is_sectioning(ElementKind.ARTICLE)
        assert is_sectioning(ElementKind.NAV)
        assert not is_sectioning(ElementKind.HEADER)

    def test_heading(self) -> None:
        """Test heading elements h1 to h6."""
        headings = [kind for kind in ElementKind if is_heading(kind)]
        assert [kind.tag_name for kind in headings] == ["h1", "h2", "h3", "h4", "h5", "h6"]

    def test_form_and_table_overlap(self) -> None:
        """Test input is both void and a form element, col is void and tabular."""
        assert is_form_element(ElementKind.INPUT) and is_void(ElementKind.INPUT)
        assert is_table_element(ElementKind.COL) and is_void(ElementKind.COL)
        assert not is_form_element(ElementKind.TABLE)

    def test_unknown_in_no_category(self) -> None:
        """Test unknown elements answer False to every predicate."""
        kind = UnknownElement("custom")
        for predicate in (
            is_void,
            is_obsolete,
            is_sectioning,
            is_heading,
            is_form_element,
            is_table_element,
        ):
            assert predicate(kind) is False
