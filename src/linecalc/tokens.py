"""
Token types for the linecalc lexer.

Each editor line is tokenized on its own, so a token only records its
column within that line. There is no EOF token: the parser works on the
plain list and treats running off its end as end of input.

Error code ranges:
- E0xx: Lexer errors
- E1xx: Parser errors
- E3xx: Evaluation errors
- E9xx: Internal consistency errors
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any


class TokenType(Enum):
    """All token types recognized by the lexer."""

    NUMBER = auto()         # 42, 3.14, .5
    IDENTIFIER = auto()     # variable names
    OPERATOR = auto()       # + - * /
    ASSIGN = auto()         # =
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    LINE_REF = auto()       # #3


OPERATORS = ("+", "-", "*", "/")
ADDITIVE_OPERATORS = ("+", "-")
MULTIPLICATIVE_OPERATORS = ("*", "/")


@dataclass(frozen=True)
class Token:
    """A single token from the lexer."""
    type: TokenType
    value: Any              # number, name, operator symbol or line number
    lexeme: str             # The original source text
    column: int = 1         # 1-indexed column of the first character

    @property
    def length(self) -> int:
        return max(1, len(self.lexeme))

    def is_operator(self, *symbols: str) -> bool:
        """Check if this is an operator token with one of the given symbols."""
        return self.type == TokenType.OPERATOR and self.value in symbols

    def __str__(self) -> str:
        if self.type in (TokenType.NUMBER, TokenType.IDENTIFIER,
                         TokenType.OPERATOR, TokenType.LINE_REF):
            return f"{self.type.name}({self.value!r})"
        return self.type.name
