"""
Per-line outcomes and pass results.

An outcome is created once per line per pass and never mutated. The
orchestrator appends one outcome per input line, so the results history
always has exactly as many entries as the document has lines.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..errors import Diagnostic


class OutcomeKind(Enum):
    """Classification of one line's result."""
    VALUE = "value"
    ERROR = "error"
    EMPTY = "empty"


@dataclass(frozen=True)
class LineOutcome:
    """The classified result of one line."""
    kind: OutcomeKind
    display: str
    line_number: int                    # 1-indexed
    raw: Any = None                     # numeric value, may be NaN
    error_message: Optional[str] = None
    diagnostic: Optional[Diagnostic] = None

    @property
    def is_value(self) -> bool:
        return self.kind == OutcomeKind.VALUE

    @property
    def is_error(self) -> bool:
        return self.kind == OutcomeKind.ERROR

    @property
    def is_empty(self) -> bool:
        return self.kind == OutcomeKind.EMPTY

    @property
    def is_nan(self) -> bool:
        """True for value outcomes whose raw result is not-a-number."""
        return self.is_value and self.raw != self.raw

    @property
    def error_kind(self) -> Optional[str]:
        if self.diagnostic is None:
            return None
        return self.diagnostic.kind

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "kind": self.kind.value,
            "display": self.display,
            "line": self.line_number,
        }
        if self.is_value:
            data["raw"] = None if self.is_nan else str(self.raw)
        if self.is_error:
            data["error"] = self.error_message
            if self.diagnostic is not None:
                data["diagnostic"] = self.diagnostic.to_json()
        return data


def value_outcome(line_number: int, raw: Any, display: str) -> LineOutcome:
    return LineOutcome(OutcomeKind.VALUE, display, line_number, raw=raw)


def error_outcome(line_number: int, message: str, display: str = "!",
                  diagnostic: Optional[Diagnostic] = None) -> LineOutcome:
    return LineOutcome(OutcomeKind.ERROR, display, line_number,
                       error_message=message, diagnostic=diagnostic)


def empty_outcome(line_number: int, display: str = "") -> LineOutcome:
    return LineOutcome(OutcomeKind.EMPTY, display, line_number)


@dataclass
class PassResult:
    """Result of one full pass over a document."""
    outcomes: List[LineOutcome] = field(default_factory=list)
    scope: Dict[str, Any] = field(default_factory=dict)

    @property
    def values(self) -> List[Any]:
        """Raw values per line; None for error and empty lines."""
        return [o.raw if o.is_value else None for o in self.outcomes]

    @property
    def displays(self) -> List[str]:
        return [o.display for o in self.outcomes]

    @property
    def errors(self) -> List[LineOutcome]:
        return [o for o in self.outcomes if o.is_error]

    @property
    def has_errors(self) -> bool:
        return any(o.is_error for o in self.outcomes)

    def __len__(self) -> int:
        return len(self.outcomes)

    def to_json(self) -> Dict[str, Any]:
        return {
            "outcomes": [o.to_json() for o in self.outcomes],
            "scope": {name: str(value) for name, value in self.scope.items()},
            "error_count": len(self.errors),
        }
