"""
Line orchestrator: runs one evaluation pass over a document.

Each line goes through tokenize -> parse -> evaluate with a scope that is
rebuilt from empty on every pass, so deleting an assignment line makes the
variable disappear on the next pass. Errors are caught at the line
boundary: a failing line becomes an error outcome and the pass continues.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from ..config import CalcConfig
from ..errors import (
    CalcError,
    InternalError,
    error_trailing_tokens,
    error_expression_too_deep,
)
from ..lexer import tokenize
from ..parser import Parser
from .context import PassContext, create_context
from .evaluator import Evaluator
from .outcomes import LineOutcome, PassResult, value_outcome, error_outcome, empty_outcome

logger = logging.getLogger(__name__)


class LineOrchestrator:
    """
    Evaluates documents line by line.

    Usage:
        orchestrator = LineOrchestrator()
        result = orchestrator.run(["x = 10", "y = x * 2", "y - 5"])
        result.displays   # ['10', '20', '15']
        result.scope      # {'x': 10.0, 'y': 20.0}

    One orchestrator can run any number of passes; it keeps no state
    between them.
    """

    def __init__(self, config: Optional[CalcConfig] = None):
        self.config = config or CalcConfig()
        self.numeric = self.config.numeric_model()
        self.evaluator = Evaluator(self.numeric)

    def run(self, lines: Sequence[str],
            previous_scope: Optional[Dict[str, Any]] = None) -> PassResult:
        """
        Evaluate every line in order.

        Args:
            lines: The document, one string per line
            previous_scope: Scope returned by the previous pass. It is not
                merged into the new pass; it is only used to report which
                variables were dropped.

        Returns:
            PassResult with one outcome per line and the new scope
        """
        ctx = create_context()

        for line in lines:
            ctx.record(self._process_line(line, ctx))

        if previous_scope:
            dropped = sorted(name for name in previous_scope if name not in ctx.scope)
            if dropped:
                logger.debug("variables no longer assigned: %s", ", ".join(dropped))

        result = PassResult(outcomes=ctx.history, scope=ctx.scope)
        logger.debug("pass complete: %d line(s), %d error(s)", len(result), len(result.errors))
        return result

    def run_text(self, text: str,
                 previous_scope: Optional[Dict[str, Any]] = None) -> PassResult:
        """Split a document on newlines and run a pass over it."""
        return self.run(split_lines(text), previous_scope)

    def _process_line(self, line: str, ctx: PassContext) -> LineOutcome:
        """Classify one line; never raises."""
        line_number = ctx.line_index + 1

        if not line.strip():
            return empty_outcome(line_number, self.config.empty_marker)

        try:
            tokens = tokenize(line, self.numeric, self.config.strict_characters)
            if not tokens:
                zero = self.numeric.zero
                return value_outcome(line_number, zero, self._display(zero))

            parser = Parser(tokens)
            node = parser.parse()
            if parser.has_remaining_tokens():
                extra = tokens[parser.pos]
                raise error_trailing_tokens(extra.lexeme, extra.column, extra.length)

            value = self.evaluator.evaluate(node, ctx.scope, ctx.history, ctx.line_index)
        except CalcError as exc:
            return self._error(line, line_number, exc)
        except RecursionError:
            return self._error(line, line_number, error_expression_too_deep(1))

        if self.numeric.is_nan(value):
            return value_outcome(line_number, value, self._display(self.numeric.zero))
        return value_outcome(line_number, value, self._display(value))

    def _display(self, value: Any) -> str:
        return self.config.format_value(value, self.numeric)

    def _error(self, line: str, line_number: int, exc: CalcError) -> LineOutcome:
        diagnostic = exc.diagnostic
        diagnostic.line = line_number
        diagnostic.source_line = line
        if isinstance(exc, InternalError):
            logger.error("internal error on line %d: [%s] %s", line_number, exc.code, exc)
        else:
            logger.debug("line %d: [%s] %s", line_number, exc.code, exc)
        return error_outcome(line_number, str(exc), self.config.error_marker, diagnostic)


def split_lines(text: str) -> List[str]:
    """Split document text into editor lines (a trailing newline starts a new, empty line)."""
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def run(lines: Sequence[str], scope: Optional[Dict[str, Any]] = None,
        config: Optional[CalcConfig] = None) -> PassResult:
    """
    Run one pass over a list of lines.

    This is a convenience wrapper around LineOrchestrator.run().
    """
    return LineOrchestrator(config).run(lines, scope)


def run_text(text: str, scope: Optional[Dict[str, Any]] = None,
             config: Optional[CalcConfig] = None) -> PassResult:
    """Run one pass over a newline-separated document."""
    return LineOrchestrator(config).run_text(text, scope)
