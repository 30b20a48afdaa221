"""
Recursive descent parser for linecalc lines.

Converts the token list of one line into a single AST node.

Grammar (left-associative, no unary operators):

    statement  := assignment | expression
    assignment := IDENTIFIER '=' expression
    expression := term (('+' | '-') term)*
    term       := factor (('*' | '/') factor)*
    factor     := NUMBER | IDENTIFIER | LINE_REF | '(' expression ')'
"""

from typing import List, Optional

from .tokens import Token, TokenType, ADDITIVE_OPERATORS, MULTIPLICATIVE_OPERATORS
from .ast import AstNode, Expression, NumberLiteral, VariableRef, LineRef, BinaryOp, Assignment
from .errors import (
    error_unexpected_token,
    error_unexpected_eof,
    error_missing_closing_paren,
    error_trailing_tokens,
    error_invalid_number_literal,
    error_expression_too_deep,
)

# Maximum parenthesis nesting on one line
MAX_NESTING_DEPTH = 100


class Parser:
    """
    Recursive descent parser for a single line.

    Usage:
        parser = Parser(tokens)
        node = parser.parse()
        if parser.has_remaining_tokens():
            ...  # syntax error: the statement ended early

    ``parse`` stops after one statement. Leftover tokens are not an error
    for the parser itself; the caller decides (see ``parse()`` below and
    the line orchestrator).
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0
        self.depth = 0          # Current parenthesis nesting

    # =========================================================================
    # Token Navigation
    # =========================================================================

    def _current(self) -> Optional[Token]:
        if self.pos >= len(self.tokens):
            return None
        return self.tokens[self.pos]

    def _peek(self, offset: int = 0) -> Optional[Token]:
        idx = self.pos + offset
        if idx >= len(self.tokens):
            return None
        return self.tokens[idx]

    def _check(self, token_type: TokenType, offset: int = 0) -> bool:
        token = self._peek(offset)
        return token is not None and token.type == token_type

    def _check_operator(self, symbols) -> bool:
        token = self._current()
        return token is not None and token.is_operator(*symbols)

    def _advance(self) -> Token:
        """Consume and return current token, failing at end of input."""
        token = self._current()
        if token is None:
            raise error_unexpected_eof(self._end_column())
        self.pos += 1
        return token

    def _end_column(self) -> int:
        """Column just past the last token, for end-of-input errors."""
        if not self.tokens:
            return 1
        last = self.tokens[-1]
        return last.column + len(last.lexeme)

    def has_remaining_tokens(self) -> bool:
        """True if tokens are left after the parsed statement."""
        return self.pos < len(self.tokens)

    # =========================================================================
    # Statements
    # =========================================================================

    def parse(self) -> Optional[AstNode]:
        """Parse one statement; an empty token list yields None."""
        if not self.tokens:
            return None
        if self._check(TokenType.IDENTIFIER) and self._check(TokenType.ASSIGN, 1):
            return self._parse_assignment()
        return self._parse_expression()

    def _parse_assignment(self) -> Assignment:
        name = self._advance()
        self._advance()  # consume '='
        expression = self._parse_expression()
        return Assignment(name=name.value, expression=expression, column=name.column)

    # =========================================================================
    # Expressions
    # =========================================================================

    def _parse_expression(self) -> Expression:
        left = self._parse_term()
        while self._check_operator(ADDITIVE_OPERATORS):
            op = self._advance()
            right = self._parse_term()
            left = BinaryOp(operator=op.value, left=left, right=right, column=left.column)
        return left

    def _parse_term(self) -> Expression:
        left = self._parse_factor()
        while self._check_operator(MULTIPLICATIVE_OPERATORS):
            op = self._advance()
            right = self._parse_factor()
            left = BinaryOp(operator=op.value, left=left, right=right, column=left.column)
        return left

    def _parse_factor(self) -> Expression:
        token = self._advance()

        if token.type == TokenType.NUMBER:
            if token.value is None:
                raise error_invalid_number_literal(token.lexeme, token.column)
            return NumberLiteral(value=token.value, column=token.column)

        if token.type == TokenType.IDENTIFIER:
            return VariableRef(name=token.value, column=token.column)

        if token.type == TokenType.LINE_REF:
            return LineRef(line=token.value, column=token.column)

        if token.type == TokenType.LPAREN:
            if self.depth >= MAX_NESTING_DEPTH:
                raise error_expression_too_deep(token.column, MAX_NESTING_DEPTH)
            self.depth += 1
            expr = self._parse_expression()
            self.depth -= 1
            if not self._check(TokenType.RPAREN):
                closing = self._current()
                column = closing.column if closing is not None else self._end_column()
                raise error_missing_closing_paren(column)
            self._advance()  # consume ')'
            return expr

        raise error_unexpected_token(token.lexeme, token.column, token.length)


def parse(tokens: List[Token]) -> Optional[AstNode]:
    """
    Convenience function to parse a full line.

    Unlike ``Parser.parse``, leftover tokens are reported here.

    Args:
        tokens: List of tokens from the lexer

    Returns:
        The statement node, or None for an empty token list

    Raises:
        ParserError: If parsing fails or tokens remain after the statement
    """
    parser = Parser(tokens)
    node = parser.parse()
    if parser.has_remaining_tokens():
        extra = parser.tokens[parser.pos]
        raise error_trailing_tokens(extra.lexeme, extra.column, extra.length)
    return node
