"""
Unit tests for the linecalc lexer.
"""

from decimal import Decimal

import pytest
from linecalc import tokenize, Lexer, TokenType, LexerError, DecimalModel


class TestLexerBasics:
    """Test basic lexer functionality."""

    def test_empty_source(self):
        """Empty line produces no tokens."""
        assert tokenize("") == []

    def test_whitespace_only(self):
        """Whitespace-only line produces no tokens."""
        assert tokenize("   \t  ") == []

    def test_simple_assignment(self):
        """Basic assignment tokenization."""
        tokens = tokenize("x = 42")
        types = [t.type for t in tokens]
        assert types == [
            TokenType.IDENTIFIER,
            TokenType.ASSIGN,
            TokenType.NUMBER,
        ]

    def test_expression_token_types(self):
        """Operators, parentheses and line references."""
        tokens = tokenize("(a + #2) * 3 / b - 1")
        types = [t.type for t in tokens]
        assert types == [
            TokenType.LPAREN,
            TokenType.IDENTIFIER,
            TokenType.OPERATOR,
            TokenType.LINE_REF,
            TokenType.RPAREN,
            TokenType.OPERATOR,
            TokenType.NUMBER,
            TokenType.OPERATOR,
            TokenType.IDENTIFIER,
            TokenType.OPERATOR,
            TokenType.NUMBER,
        ]

    def test_operator_values(self):
        """Operator tokens carry their symbol."""
        tokens = tokenize("1+2-3*4/5")
        ops = [t.value for t in tokens if t.type == TokenType.OPERATOR]
        assert ops == ["+", "-", "*", "/"]

    def test_column_tracking(self):
        """Token columns are 1-based positions in the line."""
        tokens = tokenize("x = 5")
        assert [t.column for t in tokens] == [1, 3, 5]

    def test_no_whitespace_needed(self):
        """Tokens need no separating whitespace."""
        tokens = tokenize("y=x*2")
        assert [t.lexeme for t in tokens] == ["y", "=", "x", "*", "2"]

    def test_streaming_iteration(self):
        """Lexer can be iterated directly."""
        lexemes = [t.lexeme for t in Lexer("a + b")]
        assert lexemes == ["a", "+", "b"]


class TestNumbers:
    """Test number literal handling."""

    def test_integer(self):
        """Integer literal."""
        tokens = tokenize("42")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].value == 42.0

    def test_decimal_fraction(self):
        """Literal with a fraction."""
        tokens = tokenize("3.14")
        assert tokens[0].value == 3.14

    def test_leading_dot(self):
        """A number may start with '.'."""
        tokens = tokenize(".5")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].value == 0.5

    def test_multiple_dots_scanned_as_one_token(self):
        """The scanner accepts several dots; the value is left empty."""
        tokens = tokenize("1.2.3")
        assert len(tokens) == 1
        assert tokens[0].lexeme == "1.2.3"
        assert tokens[0].value is None

    def test_lone_dot(self):
        """A lone '.' is a malformed number."""
        tokens = tokenize(".")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].value is None

    def test_decimal_model_values(self):
        """Number values come from the numeric model."""
        tokens = tokenize("0.1", numeric=DecimalModel())
        assert tokens[0].value == Decimal("0.1")


class TestIdentifiers:
    """Test identifier handling."""

    def test_identifier_value(self):
        """Identifiers may contain digits after the first letter."""
        tokens = tokenize("total2")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].value == "total2"

    def test_case_preserved(self):
        """Identifier names keep their exact case."""
        tokens = tokenize("MyVar")
        assert tokens[0].value == "MyVar"

    def test_identifier_cannot_start_with_digit(self):
        """'2x' is a number followed by an identifier."""
        tokens = tokenize("2x")
        assert [t.type for t in tokens] == [TokenType.NUMBER, TokenType.IDENTIFIER]

    def test_underscore_splits_identifiers(self):
        """Underscores are not identifier characters."""
        tokens = tokenize("my_var")
        assert [t.value for t in tokens] == ["my", "var"]

    def test_non_ascii_letters_dropped(self):
        """Only ASCII letters start identifiers."""
        tokens = tokenize("é")
        assert tokens == []


class TestLineReferences:
    """Test #N line references."""

    def test_line_ref(self):
        """#N carries its line number."""
        tokens = tokenize("#12")
        assert tokens[0].type == TokenType.LINE_REF
        assert tokens[0].value == 12
        assert tokens[0].lexeme == "#12"

    def test_bare_hash(self):
        """'#' without digits refers to line 0."""
        tokens = tokenize("#")
        assert tokens[0].type == TokenType.LINE_REF
        assert tokens[0].value == 0

    def test_line_ref_then_number(self):
        """Whitespace ends the line number."""
        tokens = tokenize("#1 2")
        assert [t.type for t in tokens] == [TokenType.LINE_REF, TokenType.NUMBER]


class TestDroppedCharacters:
    """Unrecognized characters vanish in the default mode."""

    def test_unknown_characters_skipped(self):
        """Unknown characters are dropped."""
        tokens = tokenize("3 $ 4 , ; ?")
        assert [t.lexeme for t in tokens] == ["3", "4"]

    def test_only_junk(self):
        """A line of junk produces no tokens and no error."""
        assert tokenize("$%^&") == []

    def test_exponent_marker_dropped(self):
        """'1e5' is a number and an identifier, not scientific notation."""
        tokens = tokenize("1e5")
        assert [t.type for t in tokens] == [TokenType.NUMBER, TokenType.IDENTIFIER]

    def test_strict_mode_raises(self):
        """Strict mode reports the first unknown character."""
        with pytest.raises(LexerError) as exc_info:
            tokenize("3 $ 4", strict=True)
        assert exc_info.value.code == "E001"
        assert exc_info.value.diagnostic.column == 3

    def test_strict_mode_accepts_valid_line(self):
        """Strict mode accepts every valid character."""
        tokens = tokenize("x = (1 + #1) / 2", strict=True)
        assert len(tokens) == 9
