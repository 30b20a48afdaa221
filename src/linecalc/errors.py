"""
linecalc exceptions and diagnostics.

Error code ranges:
- E0xx: Lexer errors (strict mode only)
- E1xx: Parser errors
- E3xx: Evaluation errors
- E9xx: Internal consistency errors (unreachable for grammar-built trees)

Every error carries a ``Diagnostic`` whose ``kind`` names the error in the
interpreter's taxonomy (``UndefinedVariable``, ``MissingClosingParen``, ...)
so callers can match on it without parsing message text.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Diagnostic:
    """A single error report for one line."""
    code: str                       # E001, E101, etc.
    kind: str                       # taxonomy name
    message: str                    # Human-readable message
    column: int = 1                 # 1-indexed column within the line
    length: int = 1                 # number of characters to underline
    line: Optional[int] = None      # 1-indexed line, filled in by the orchestrator
    source_line: Optional[str] = None
    hints: List[str] = field(default_factory=list)

    def format(self, show_source: bool = True) -> str:
        """Format the diagnostic for display."""
        parts = []

        loc = f"{self.line}:{self.column}" if self.line is not None else f"{self.column}"
        parts.append(f"{loc}: error[{self.code}]: {self.message}")

        if show_source and self.source_line is not None:
            parts.append("    |")
            line_num = str(self.line) if self.line is not None else ""
            parts.append(f"{line_num:>3} | {self.source_line}")
            parts.append(f"    | {' ' * (self.column - 1)}{'^' * max(1, self.length)}")

        for hint in self.hints:
            parts.append(f"    = hint: {hint}")

        return "\n".join(parts)

    def to_json(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict for tooling integration."""
        return {
            "code": self.code,
            "kind": self.kind,
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "length": self.length,
            "hints": self.hints,
        }


class CalcError(Exception):
    """Base exception for interpreter errors."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    @property
    def code(self) -> str:
        return self.diagnostic.code

    @property
    def kind(self) -> str:
        return self.diagnostic.kind

    def __str__(self) -> str:
        return self.diagnostic.message


class LexerError(CalcError):
    """Error during lexical analysis (E0xx)."""
    pass


class ParserError(CalcError):
    """Error during parsing (E1xx)."""
    pass


class EvaluationError(CalcError):
    """Error while evaluating a parsed line (E3xx)."""
    pass


class InternalError(CalcError):
    """Internal consistency failure (E9xx); indicates a bug, not bad input."""
    pass


# --- Lexer error codes ---

def error_unexpected_character(char: str, column: int) -> LexerError:
    """E001: Unexpected character (strict mode)."""
    diag = Diagnostic(
        code="E001",
        kind="UnexpectedCharacter",
        message=f"unexpected character '{char}'",
        column=column,
        hints=["only numbers, names, #N line references, + - * / = and parentheses are allowed"],
    )
    return LexerError(diag)


# --- Parser error codes ---

def error_unexpected_token(found: str, column: int, length: int = 1) -> ParserError:
    """E101: Unexpected token."""
    diag = Diagnostic(
        code="E101",
        kind="UnexpectedToken",
        message=f"unexpected token '{found}'",
        column=column,
        length=length,
    )
    return ParserError(diag)


def error_unexpected_eof(column: int) -> ParserError:
    """E102: Unexpected end of input."""
    diag = Diagnostic(
        code="E102",
        kind="UnexpectedEndOfInput",
        message="unexpected end of input",
        column=column,
    )
    return ParserError(diag)


def error_missing_closing_paren(column: int) -> ParserError:
    """E103: '(' without a matching ')'."""
    diag = Diagnostic(
        code="E103",
        kind="MissingClosingParen",
        message="expected closing parenthesis",
        column=column,
    )
    return ParserError(diag)


def error_trailing_tokens(found: str, column: int, length: int = 1) -> ParserError:
    """E104: Tokens left over after a complete statement."""
    diag = Diagnostic(
        code="E104",
        kind="TrailingTokensAfterExpression",
        message=f"extra tokens after expression, starting at '{found}'",
        column=column,
        length=length,
        hints=["each line holds exactly one expression or assignment"],
    )
    return ParserError(diag)


def error_invalid_number_literal(text: str, column: int) -> ParserError:
    """E105: Malformed number literal."""
    diag = Diagnostic(
        code="E105",
        kind="InvalidNumberLiteral",
        message=f"invalid number literal '{text}'",
        column=column,
        length=len(text),
        hints=["a number may contain at most one decimal point"],
    )
    return ParserError(diag)


def error_expression_too_deep(column: int, limit: Optional[int] = None) -> ParserError:
    """E106: Expression nested too deeply."""
    diag = Diagnostic(
        code="E106",
        kind="ExpressionTooDeep",
        message="expression is nested too deeply",
        column=column,
    )
    if limit is not None:
        diag.hints.append(f"at most {limit} levels of parentheses are allowed")
    return ParserError(diag)


# --- Evaluation error codes ---

def error_undefined_variable(name: str, column: int = 1) -> EvaluationError:
    """E301: Undefined variable."""
    diag = Diagnostic(
        code="E301",
        kind="UndefinedVariable",
        message=f"undefined variable: {name}",
        column=column,
        length=len(name),
    )
    return EvaluationError(diag)


def error_invalid_line_reference(line: int, column: int = 1) -> EvaluationError:
    """E302: Line reference that is out of range, forward or to itself."""
    diag = Diagnostic(
        code="E302",
        kind="InvalidLineReference",
        message=f"invalid line reference: #{line}",
        column=column,
        length=len(f"#{line}"),
        hints=["a line may only reference lines above it"],
    )
    return EvaluationError(diag)


def error_referenced_line_is_error(line: int, column: int = 1) -> EvaluationError:
    """E303: Line reference to a line that failed."""
    diag = Diagnostic(
        code="E303",
        kind="ReferencedLineIsError",
        message=f"cannot reference an error: #{line}",
        column=column,
        length=len(f"#{line}"),
    )
    return EvaluationError(diag)


# --- Internal error codes ---

def error_unknown_operator(operator: str, column: int = 1) -> InternalError:
    """E901: Operator outside + - * /."""
    diag = Diagnostic(
        code="E901",
        kind="UnknownOperator",
        message=f"unknown operator: {operator}",
        column=column,
    )
    return InternalError(diag)


def error_unknown_node_type(type_name: str) -> InternalError:
    """E902: AST node the evaluator does not know."""
    diag = Diagnostic(
        code="E902",
        kind="UnknownNodeType",
        message=f"unknown AST node type: {type_name}",
    )
    return InternalError(diag)
