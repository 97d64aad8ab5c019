"""Tests for the markup scanner."""

import pytest

from html_dom_parser.elements import ElementKind, UnknownElement
from html_dom_parser.shared import DiagnosticSeverity, ScannerConfig
from html_dom_parser.tokenization import (
    HTMLTokenizer,
    ScannerState,
    Token,
    TokenizationResult,
    TokenType,
    scan,
)

BASIC_HTML_DOCUMENT = """<!DOCTYPE HTML>
    <html>
    <head>
    <title>A</title>
    <script type="text/javascript">
        console.log("Hello World!");
    </script>
    <style type="text/css">
        body {
            background-color: #f0f0f0;
        }
    </style>
    </head>
    <body>
    <img src="random.jpg" height="400" width="300" />
    <input type="text" name="random-input" required />
    <nav class="top-nav">
    <div class="nav-item"><a class="nav-link" href="https://random.com/home">Home</a></div>
    <div class="nav-item"><a class="nav-link" href="https://random.com/about">About</a></div>
    <div class="nav-item"><a class="nav-link" href="https://random.com/contact">Contact</a></div>
    </nav>
    <h1>This is a test title</h1>
    <p class="pt-10">This is a random text document to be used for testing an HTML parser and tokeniser. There is a random <img alt="A cool photo" src="/cool_photo.png"> inserted into the middle of a paragraph.</p>
    </body>
    </html>"""


def _types(markup: str):
    return [token.type for token in scan(markup)]


class TestBasicDocument:
    """Test scanning a small but complete document."""

    def test_first_token_is_comment(self) -> None:
        """Test the DOCTYPE is scanned as a comment."""
        tokens = scan(BASIC_HTML_DOCUMENT)
        assert tokens[0].value == "<!DOCTYPE HTML>"
        assert tokens[0].type is TokenType.COMMENT
        assert tokens[0].position == 0

    def test_second_token(self) -> None:
        """Test the html opening tag."""
        tokens = scan(BASIC_HTML_DOCUMENT)
        assert tokens[1].value == "<html>"
        assert tokens[1].type is TokenType.OPENING_TAG
        assert tokens[1].element is ElementKind.HTML

    def test_fourth_token(self) -> None:
        """Test the title opening tag."""
        tokens = scan(BASIC_HTML_DOCUMENT)
        assert tokens[3].value == "<title>"
        assert tokens[3].type is TokenType.OPENING_TAG

    def test_single_char_text(self) -> None:
        """Test a one-character text token."""
        tokens = scan(BASIC_HTML_DOCUMENT)
        assert tokens[4].value == "A"
        assert tokens[4].type is TokenType.TEXT

    def test_void_tag_with_attributes(self) -> None:
        """Test a self-closed img is a void tag with its attributes."""
        tokens = scan(BASIC_HTML_DOCUMENT)
        img = tokens[8]
        assert img.element is ElementKind.IMG
        assert img.type is TokenType.VOID_TAG
        assert img.attributes["src"] == "random.jpg"
        assert img.attributes["height"] == "400"
        assert img.attributes["width"] == "300"

    def test_boolean_attribute(self) -> None:
        """Test a bare attribute is present with an empty value."""
        tokens = scan(BASIC_HTML_DOCUMENT)
        assert tokens[9].attributes["required"] == ""
        assert "required" in tokens[9].boolean_attributes
        assert "name" not in tokens[9].boolean_attributes

    def test_script_and_style_bodies_skipped(self) -> None:
        """Test no token comes from script or style elements."""
        tokens = scan(BASIC_HTML_DOCUMENT)
        assert not any("console.log" in token.value for token in tokens)
        assert not any("background-color" in token.value for token in tokens)
        assert all(
            token.element not in (ElementKind.SCRIPT, ElementKind.STYLE)
            for token in tokens
        )

    def test_no_whitespace_text_tokens(self) -> None:
        """Test whitespace between tags is discarded."""
        tokens = scan(BASIC_HTML_DOCUMENT)
        texts = [token for token in tokens if token.type is TokenType.TEXT]
        assert all(token.value.strip() for token in texts)


class TestTokenClassification:
    """Test classification of individual constructs."""

    def test_simple_element(self) -> None:
        """Test opening tag, text and closing tag."""
        assert _types("<p>Hi</p>") == [
            TokenType.OPENING_TAG,
            TokenType.TEXT,
            TokenType.CLOSING_TAG,
        ]

    def test_closing_tag_element(self) -> None:
        """Test closing tags resolve their element."""
        tokens = scan("</DIV>")
        assert tokens[0].type is TokenType.CLOSING_TAG
        assert tokens[0].element is ElementKind.DIV

    def test_void_without_slash(self) -> None:
        """Test void elements are reclassified without a self-closing slash."""
        tokens = scan("<br><hr class='thicc'>")
        assert [token.type for token in tokens] == [TokenType.VOID_TAG, TokenType.VOID_TAG]
        assert tokens[1].attributes == {"class": "thicc"}

    def test_self_closing_non_void_stays_opening(self) -> None:
        """Test a slash does not make a non-void element void."""
        tokens = scan("<div/>")
        assert tokens[0].type is TokenType.OPENING_TAG
        assert tokens[0].element is ElementKind.DIV

    def test_comment(self) -> None:
        """Test comments keep their raw text."""
        tokens = scan("<!-- note -->")
        assert tokens[0].type is TokenType.COMMENT
        assert tokens[0].value == "<!-- note -->"
        assert tokens[0].element == UnknownElement("!--")

    def test_unknown_element(self) -> None:
        """Test unrecognized names resolve to UnknownElement."""
        tokens = scan("<my-widget data-x='1'>")
        assert tokens[0].element == UnknownElement("my-widget")
        assert tokens[0].attributes == {"data-x": "1"}

    def test_text_positions(self) -> None:
        """Test tokens record the offset of their first character."""
        tokens = scan("ab<i>cd</i>")
        assert [token.position for token in tokens] == [0, 2, 5, 7]

    def test_leading_text_then_tag(self) -> None:
        """Test text directly followed by a closing tag."""
        tokens = scan("hello</b>")
        assert tokens[0].value == "hello"
        assert tokens[1].type is TokenType.CLOSING_TAG

    def test_empty_input(self) -> None:
        """Test empty input yields no tokens."""
        assert scan("") == []


class TestRawText:
    """Test script and style handling."""

    def test_script_body_dropped(self) -> None:
        """Test markup inside a script is not tokenized."""
        tokens = scan("<p>a</p><script>if (a < b) { x = '<div>'; }</script><p>b</p>")
        assert [token.value for token in tokens if token.type is TokenType.TEXT] == ["a", "b"]
        assert not any(token.element is ElementKind.DIV for token in tokens)

    def test_case_insensitive_close(self) -> None:
        """Test raw text ends at a closer in any case."""
        tokens = scan("<STYLE>p { color: red }</Style><b>x</b>")
        assert tokens[0].element is ElementKind.B

    def test_closer_with_trailing_space(self) -> None:
        """Test whitespace before the closing bracket is tolerated."""
        tokens = scan("<script>x()</script ><i>y</i>")
        assert tokens[0].element is ElementKind.I

    def test_configured_raw_text_elements(self) -> None:
        """Test the set of raw text elements is configurable."""
        config = ScannerConfig(raw_text_elements=("textarea",))
        tokens = scan("<textarea><b>x</b></textarea><script>y</script>", config)
        assert [token.element for token in tokens] == [
            ElementKind.SCRIPT,
            None,
            ElementKind.SCRIPT,
        ]


class TestHTMLTokenizer:
    """Test the configurable tokenizer and its result."""

    def test_result_metadata(self) -> None:
        """Test character count, distribution and correlation id."""
        result = HTMLTokenizer(correlation_id="req-1").tokenize("<p>Hi</p><br>")
        assert isinstance(result, TokenizationResult)
        assert result.character_count == 13
        assert result.token_count == 4
        assert result.token_type_distribution == {
            "OPENING_TAG": 1,
            "TEXT": 1,
            "CLOSING_TAG": 1,
            "VOID_TAG": 1,
        }
        assert result.correlation_id == "req-1"
        assert result.has_warnings is False

    def test_keep_whitespace_text(self) -> None:
        """Test whitespace-only text can be kept."""
        config = ScannerConfig(discard_whitespace_text=False)
        tokens = HTMLTokenizer(config).tokenize("<p> </p>").tokens
        assert tokens[1].type is TokenType.TEXT
        assert tokens[1].value == " "

    def test_unterminated_tag(self) -> None:
        """Test an unterminated tag becomes an UNKNOWN token with a warning."""
        result = HTMLTokenizer().tokenize("<p>text<a href='x'")
        assert result.tokens[-1].type is TokenType.UNKNOWN
        assert result.tokens[-1].value == "<a href='x'"
        assert result.has_warnings
        assert result.diagnostics[0].severity is DiagnosticSeverity.WARNING

    def test_unterminated_raw_text(self) -> None:
        """Test an unterminated script body is dropped with a warning."""
        result = HTMLTokenizer().tokenize("<b>x</b><script>never closed")
        assert len(result.tokens) == 3
        assert any(
            "Unterminated raw text" in diag.message for diag in result.diagnostics
        )

    def test_trailing_text_emitted(self) -> None:
        """Test text at end of input is emitted."""
        tokens = HTMLTokenizer().tokenize("<p>tail").tokens
        assert tokens[-1].value == "tail"

    def test_reusable(self) -> None:
        """Test state is reset between runs."""
        tokenizer = HTMLTokenizer()
        tokenizer.tokenize("<p>unclosed")
        result = tokenizer.tokenize("<i>x</i>")
        assert result.token_count == 3
        assert tokenizer.state is ScannerState.DETERMINING_TOKEN_TYPE

    def test_rejects_non_string(self) -> None:
        """Test non-string input raises TypeError."""
        with pytest.raises(TypeError):
            HTMLTokenizer().tokenize(b"<p>")  # type: ignore[arg-type]


class TestToken:
    """Test Token immutability and validation."""

    def test_frozen(self) -> None:
        """Test tokens cannot be reassigned."""
        token = scan("<a href='x'>")[0]
        with pytest.raises(AttributeError):
            token.value = "<b>"  # type: ignore[misc]
        with pytest.raises(TypeError):
            token.attributes["href"] = "y"  # type: ignore[index]

    def test_negative_position_rejected(self) -> None:
        """Test a negative position raises ValueError."""
        with pytest.raises(ValueError, match="Position"):
            Token(TokenType.TEXT, "x", position=-1)

    def test_boolean_keys_must_be_attributes(self) -> None:
        """Test boolean keys missing from attributes are rejected."""
        with pytest.raises(ValueError):
            Token(TokenType.OPENING_TAG, "<input>", boolean_attributes=frozenset({"x"}))

    def test_tag_helpers(self) -> None:
        """Test is_tag and tag_name."""
        opening, text = scan("<em>x")
        assert opening.is_tag and opening.tag_name == "em"
        assert not text.is_tag and text.tag_name is None

    def test_hashable(self) -> None:
        """Test tokens hash consistently with equality and work in sets."""
        first = scan('<input b="2" a="1" required>')[0]
        again = scan('<input b="2" a="1" required>')[0]
        reordered = Token(
            first.type,
            first.value,
            first.element,
            {"required": "", "a": "1", "b": "2"},
            first.boolean_attributes,
            first.position,
        )
        assert first == again
        assert hash(first) == hash(again) == hash(reordered)
        assert len({first, again, reordered, scan("<p>")[0]}) == 2
