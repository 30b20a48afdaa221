"""
Tree-walking evaluator for linecalc.

Evaluates one line's AST against the pass scope and the results of the
lines above it.
"""

import logging
from typing import Any, Dict, List, Optional

from ..ast import AstNode, NumberLiteral, VariableRef, LineRef, BinaryOp, Assignment
from ..errors import (
    error_undefined_variable,
    error_invalid_line_reference,
    error_referenced_line_is_error,
    error_unknown_operator,
    error_unknown_node_type,
)
from ..numeric import NumericModel, FloatModel
from .outcomes import LineOutcome

logger = logging.getLogger(__name__)


class Evaluator:
    """
    Evaluates AST nodes by dispatching on node type.

    Assignments write into the scope passed to ``evaluate``; nothing else
    is mutated. Errors are raised as ``CalcError`` subclasses.
    """

    def __init__(self, numeric: Optional[NumericModel] = None):
        self.numeric = numeric or FloatModel()
        self._operators = {
            "+": self.numeric.add,
            "-": self.numeric.subtract,
            "*": self.numeric.multiply,
            "/": self.numeric.divide,
        }

    def evaluate(
        self,
        node: AstNode,
        scope: Dict[str, Any],
        history: List[LineOutcome],
        current_line_index: int,
    ) -> Any:
        """
        Evaluate a node to a number.

        Args:
            node: The statement or expression to evaluate
            scope: Variable scope of the current pass (written by assignments)
            history: Outcomes of the lines evaluated so far in this pass
            current_line_index: 0-based index of the line being evaluated

        Returns:
            The numeric value (possibly not-a-number after division by zero)

        Raises:
            EvaluationError: Undefined variable or bad line reference
            InternalError: Node or operator outside the grammar
        """
        if isinstance(node, NumberLiteral):
            return node.value
        elif isinstance(node, VariableRef):
            return self._eval_variable(node, scope)
        elif isinstance(node, LineRef):
            return self._eval_line_ref(node, history, current_line_index)
        elif isinstance(node, BinaryOp):
            return self._eval_binary_op(node, scope, history, current_line_index)
        elif isinstance(node, Assignment):
            return self._eval_assignment(node, scope, history, current_line_index)
        else:
            raise error_unknown_node_type(type(node).__name__)

    def _eval_variable(self, ref: VariableRef, scope: Dict[str, Any]) -> Any:
        if ref.name not in scope:
            raise error_undefined_variable(ref.name, ref.column)
        return scope[ref.name]

    def _eval_line_ref(self, ref: LineRef, history: List[LineOutcome],
                       current_line_index: int) -> Any:
        """Resolve #N against the results of strictly earlier lines."""
        idx = ref.line - 1
        if idx < 0 or idx >= current_line_index or idx >= len(history):
            raise error_invalid_line_reference(ref.line, ref.column)

        target = history[idx]
        if target.is_error:
            raise error_referenced_line_is_error(ref.line, ref.column)
        if target.is_empty:
            return self.numeric.nan
        if target.is_nan:
            # A division by zero displays as zero and is referenced as such
            return self.numeric.zero
        return target.raw

    def _eval_binary_op(self, op: BinaryOp, scope: Dict[str, Any],
                        history: List[LineOutcome], current_line_index: int) -> Any:
        # Chains like a + b + c lean left; walk the left spine iteratively
        chain = []
        node = op
        while isinstance(node, BinaryOp):
            chain.append(node)
            node = node.left

        result = self.evaluate(node, scope, history, current_line_index)
        for link in reversed(chain):
            right = self.evaluate(link.right, scope, history, current_line_index)
            apply = self._operators.get(link.operator)
            if apply is None:
                raise error_unknown_operator(link.operator, link.column)
            result = apply(result, right)
        return result

    def _eval_assignment(self, assign: Assignment, scope: Dict[str, Any],
                         history: List[LineOutcome], current_line_index: int) -> Any:
        value = self.evaluate(assign.expression, scope, history, current_line_index)
        scope[assign.name] = value
        logger.debug("line %d: %s = %r", current_line_index + 1, assign.name, value)
        return value


def evaluate(
    node: AstNode,
    scope: Dict[str, Any],
    history: List[LineOutcome],
    current_line_index: int,
    numeric: Optional[NumericModel] = None,
) -> Any:
    """
    Evaluate a node with a one-off Evaluator.

    This is a convenience wrapper around Evaluator.evaluate().
    """
    return Evaluator(numeric).evaluate(node, scope, history, current_line_index)
