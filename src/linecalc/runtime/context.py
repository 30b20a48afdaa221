"""
Execution context for one evaluation pass.

Holds the working scope (variable name -> value) and the results history
the orchestrator builds up line by line. A context lives for exactly one
pass; the next pass starts from a fresh one.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .outcomes import LineOutcome

Scope = Dict[str, Any]


@dataclass
class PassContext:
    """
    The mutable state threaded through one pass.

    Tracks:
    - Variable scope (exact-case names, last assignment wins)
    - Results history (one outcome per processed line)
    - Index of the line currently being evaluated
    """
    scope: Scope = field(default_factory=dict)
    history: List[LineOutcome] = field(default_factory=list)
    line_index: int = 0

    def record(self, outcome: LineOutcome) -> None:
        """Append the current line's outcome and move to the next line."""
        self.history.append(outcome)
        self.line_index = len(self.history)


def create_context() -> PassContext:
    """Create an empty context for a new pass."""
    return PassContext()
