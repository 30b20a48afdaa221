"""
Runtime - evaluation passes over whole documents.

This module provides:
- LineOrchestrator: Runs tokenizer, parser and evaluator over every line
- Evaluator: Tree-walking evaluation of a single line's AST
- PassContext: Scope and results history for one pass
- LineOutcome / PassResult: Classified per-line results
"""

from .outcomes import (
    OutcomeKind,
    LineOutcome,
    PassResult,
    value_outcome,
    error_outcome,
    empty_outcome,
)

from .context import (
    Scope,
    PassContext,
    create_context,
)

from .evaluator import (
    Evaluator,
    evaluate,
)

from .orchestrator import (
    LineOrchestrator,
    run,
    run_text,
    split_lines,
)

__all__ = [
    # Outcomes
    'OutcomeKind',
    'LineOutcome',
    'PassResult',
    'value_outcome',
    'error_outcome',
    'empty_outcome',

    # Context
    'Scope',
    'PassContext',
    'create_context',

    # Evaluator
    'Evaluator',
    'evaluate',

    # Orchestrator
    'LineOrchestrator',
    'run',
    'run_text',
    'split_lines',
]
