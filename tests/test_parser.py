"""
Unit tests for the linecalc parser.
"""

import pytest
from linecalc.parser import MAX_NESTING_DEPTH
from linecalc import (
    tokenize, parse, Parser, format_ast, ParserError,
    NumberLiteral, VariableRef, LineRef, BinaryOp, Assignment,
)


def parse_line(source: str):
    """Helper to tokenize and parse one line."""
    return parse(tokenize(source))


class TestPrimaryExpressions:
    """Test factors."""

    def test_number(self):
        """A number literal."""
        node = parse_line("42")
        assert isinstance(node, NumberLiteral)
        assert node.value == 42.0

    def test_variable(self):
        """A bare name is a variable reference."""
        node = parse_line("total")
        assert isinstance(node, VariableRef)
        assert node.name == "total"

    def test_line_ref(self):
        """#N parses to a line reference."""
        node = parse_line("#3")
        assert isinstance(node, LineRef)
        assert node.line == 3

    def test_parenthesized(self):
        """Parentheses leave no node of their own."""
        node = parse_line("(7)")
        assert isinstance(node, NumberLiteral)
        assert node.value == 7.0

    def test_empty_token_list(self):
        """An empty line has no statement."""
        assert parse([]) is None


class TestPrecedence:
    """Test operator precedence and associativity."""

    def test_multiplication_binds_tighter(self):
        """* binds tighter than +."""
        node = parse_line("2 + 3 * 4")
        assert isinstance(node, BinaryOp)
        assert node.operator == "+"
        assert isinstance(node.right, BinaryOp)
        assert node.right.operator == "*"

    def test_parentheses_override(self):
        """Parentheses group first."""
        node = parse_line("(2 + 3) * 4")
        assert node.operator == "*"
        assert node.left.operator == "+"

    def test_subtraction_left_associative(self):
        """10 - 4 - 3 is (10 - 4) - 3."""
        assert format_ast(parse_line("10 - 4 - 3")) == "((10.0 - 4.0) - 3.0)"

    def test_division_left_associative(self):
        """a / b / c is (a / b) / c."""
        assert format_ast(parse_line("a / b / c")) == "((a / b) / c)"

    def test_mixed(self):
        """Mixed operators follow precedence left to right."""
        assert format_ast(parse_line("a + b * c - d / e")) == "((a + (b * c)) - (d / e))"


class TestAssignments:
    """Test assignment statements."""

    def test_simple_assignment(self):
        """name = expression."""
        node = parse_line("x = 5")
        assert isinstance(node, Assignment)
        assert node.name == "x"
        assert isinstance(node.expression, NumberLiteral)

    def test_assignment_with_expression(self):
        """The whole right-hand side is the assigned expression."""
        node = parse_line("total = a + #2 * 3")
        assert format_ast(node) == "(total = (a + (#2 * 3.0)))"

    def test_assignment_needs_identifier_first(self):
        """'5 = x' is not an assignment."""
        with pytest.raises(ParserError) as exc_info:
            parse_line("5 = x")
        assert exc_info.value.code == "E104"

    def test_assignment_chain_rejected(self):
        """Assignments do not nest."""
        with pytest.raises(ParserError) as exc_info:
            parse_line("x = y = 3")
        assert exc_info.value.code == "E104"

    def test_assignment_without_expression(self):
        """An assignment needs a right-hand side."""
        with pytest.raises(ParserError) as exc_info:
            parse_line("x =")
        assert exc_info.value.code == "E102"


class TestSyntaxErrors:
    """Test malformed lines."""

    def test_dangling_operator(self):
        """An operator at end of line."""
        with pytest.raises(ParserError) as exc_info:
            parse_line("3 +")
        assert exc_info.value.code == "E102"
        assert exc_info.value.kind == "UnexpectedEndOfInput"

    def test_unary_minus_not_supported(self):
        """A leading minus is an unexpected token."""
        with pytest.raises(ParserError) as exc_info:
            parse_line("-5")
        assert exc_info.value.code == "E101"
        assert exc_info.value.diagnostic.column == 1

    def test_missing_closing_paren(self):
        """Unbalanced opening parenthesis."""
        with pytest.raises(ParserError) as exc_info:
            parse_line("(1 + 2")
        assert exc_info.value.code == "E103"

    def test_stray_closing_paren(self):
        """Unbalanced closing parenthesis."""
        with pytest.raises(ParserError) as exc_info:
            parse_line("1 + 2)")
        assert exc_info.value.code == "E104"
        assert exc_info.value.diagnostic.column == 6

    def test_adjacent_numbers(self):
        """'3 4' leaves a trailing token."""
        with pytest.raises(ParserError) as exc_info:
            parse_line("3 4")
        assert exc_info.value.code == "E104"

    def test_multiple_dots(self):
        """A number with two decimal points is rejected."""
        with pytest.raises(ParserError) as exc_info:
            parse_line("1.2.3 + 1")
        assert exc_info.value.code == "E105"

    def test_parser_stops_after_statement(self):
        """Parser.parse leaves trailing tokens for the caller."""
        parser = Parser(tokenize("3 4"))
        node = parser.parse()
        assert isinstance(node, NumberLiteral)
        assert parser.has_remaining_tokens()


class TestNesting:
    """Test parenthesis depth and long chains."""

    def test_nesting_at_limit(self):
        """Exactly MAX_NESTING_DEPTH levels parse."""
        depth = MAX_NESTING_DEPTH
        node = parse_line("(" * depth + "1" + ")" * depth)
        assert isinstance(node, NumberLiteral)

    def test_nesting_over_limit(self):
        """One level more is reported at the offending parenthesis."""
        depth = MAX_NESTING_DEPTH + 1
        with pytest.raises(ParserError) as exc_info:
            parse_line("(" * depth + "1" + ")" * depth)
        assert exc_info.value.code == "E106"
        assert exc_info.value.kind == "ExpressionTooDeep"
        assert exc_info.value.diagnostic.column == depth

    def test_sibling_groups_do_not_accumulate(self):
        """Depth is nesting, not the number of groups."""
        source = " + ".join(["(1)"] * (MAX_NESTING_DEPTH * 2))
        assert isinstance(parse_line(source), BinaryOp)

    def test_long_sum_is_left_leaning(self):
        """A long flat sum parses into a left-leaning chain."""
        node = parse_line("+".join(["1"] * 1000))
        length = 0
        while isinstance(node, BinaryOp):
            assert isinstance(node.right, NumberLiteral)
            node = node.left
            length += 1
        assert length == 999


class TestFormatAst:
    """Test the parenthesised AST rendering."""

    def test_line_ref_rendering(self):
        """Line references render as #N."""
        assert format_ast(LineRef(line=2)) == "#2"

    def test_rejects_non_nodes(self):
        """Only AST nodes can be formatted."""
        with pytest.raises(TypeError):
            format_ast("x")
