"""
Numeric models for the interpreter.

The interpreter never touches numbers directly: literal conversion,
arithmetic and display formatting all go through a ``NumericModel``. Two
models are provided:

- ``FloatModel``: IEEE-754 binary floats (the default).
- ``DecimalModel``: ``decimal.Decimal`` with a private context, for
  documents where ``0.1 + 0.2`` should display as ``0.3``.

Both make division total: ``x / 0`` yields not-a-number instead of raising.
"""

import decimal
import math
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Optional


class NumericModel(ABC):
    """Arithmetic and formatting for one number representation."""

    name: str = "abstract"

    @property
    @abstractmethod
    def zero(self) -> Any:
        ...

    @property
    @abstractmethod
    def nan(self) -> Any:
        ...

    @abstractmethod
    def parse(self, lexeme: str) -> Optional[Any]:
        """Convert a scanned number lexeme, or return None if malformed."""

    @abstractmethod
    def is_nan(self, value: Any) -> bool:
        ...

    @abstractmethod
    def add(self, a: Any, b: Any) -> Any:
        ...

    @abstractmethod
    def subtract(self, a: Any, b: Any) -> Any:
        ...

    @abstractmethod
    def multiply(self, a: Any, b: Any) -> Any:
        ...

    @abstractmethod
    def divide(self, a: Any, b: Any) -> Any:
        ...

    @abstractmethod
    def format(self, value: Any, group_thousands: bool = False,
               max_fraction_digits: Optional[int] = None) -> str:
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


def _group_integer_part(text: str) -> str:
    """Insert thousands separators into the integer part of a plain number."""
    int_part, dot, frac = text.partition(".")
    sign = ""
    if int_part.startswith("-"):
        sign, int_part = "-", int_part[1:]
    return f"{sign}{int(int_part):,}{dot}{frac}"


class FloatModel(NumericModel):
    """Binary floating point (the default)."""

    name = "float"

    @property
    def zero(self) -> float:
        return 0.0

    @property
    def nan(self) -> float:
        return math.nan

    def parse(self, lexeme: str) -> Optional[float]:
        try:
            return float(lexeme)
        except ValueError:
            return None

    def is_nan(self, value: Any) -> bool:
        return isinstance(value, float) and math.isnan(value)

    def add(self, a: float, b: float) -> float:
        return a + b

    def subtract(self, a: float, b: float) -> float:
        return a - b

    def multiply(self, a: float, b: float) -> float:
        return a * b

    def divide(self, a: float, b: float) -> float:
        if b == 0:
            return math.nan
        return a / b

    def format(self, value: float, group_thousands: bool = False,
               max_fraction_digits: Optional[int] = None) -> str:
        if math.isnan(value):
            return "nan"
        if math.isinf(value):
            return "inf" if value > 0 else "-inf"
        if max_fraction_digits is not None:
            value = round(value, max_fraction_digits)

        # Integral values print without a trailing '.0' while int() is exact
        if value.is_integer() and abs(value) < 1e16:
            number = int(value)
            return f"{number:,}" if group_thousands else str(number)

        text = repr(value)
        if group_thousands and "e" not in text:
            text = _group_integer_part(text)
        return text


class DecimalModel(NumericModel):
    """Decimal arithmetic with configurable precision.

    The model owns its ``decimal.Context`` with every trap disabled, so
    overflow and invalid operations produce Infinity/NaN like floats do
    instead of raising out of an evaluation.
    """

    name = "decimal"

    def __init__(self, precision: int = 28):
        if precision < 1:
            raise ValueError(f"decimal precision must be positive, got {precision}")
        self.precision = precision
        self.context = decimal.Context(prec=precision, traps=[])

    @property
    def zero(self) -> Decimal:
        return Decimal(0)

    @property
    def nan(self) -> Decimal:
        return Decimal("NaN")

    def parse(self, lexeme: str) -> Optional[Decimal]:
        value = self.context.create_decimal(lexeme)
        if value.is_nan():
            return None
        return value

    def is_nan(self, value: Any) -> bool:
        return isinstance(value, Decimal) and value.is_nan()

    def add(self, a: Decimal, b: Decimal) -> Decimal:
        return self.context.add(a, b)

    def subtract(self, a: Decimal, b: Decimal) -> Decimal:
        return self.context.subtract(a, b)

    def multiply(self, a: Decimal, b: Decimal) -> Decimal:
        return self.context.multiply(a, b)

    def divide(self, a: Decimal, b: Decimal) -> Decimal:
        if b == 0:
            return self.nan
        return self.context.divide(a, b)

    def format(self, value: Decimal, group_thousands: bool = False,
               max_fraction_digits: Optional[int] = None) -> str:
        if value.is_nan():
            return "nan"
        if value.is_infinite():
            return "inf" if value > 0 else "-inf"
        if max_fraction_digits is not None and value.as_tuple().exponent < -max_fraction_digits:
            rounded = value.quantize(Decimal(1).scaleb(-max_fraction_digits), context=self.context)
            if not rounded.is_nan():
                value = rounded

        value = value.normalize(self.context)
        if value.is_zero():
            return "0"
        return format(value, ",f" if group_thousands else "f")

    def __repr__(self) -> str:
        return f"DecimalModel(precision={self.precision})"


NUMERIC_MODELS = ("float", "decimal")


def get_numeric_model(name: str = "float", precision: int = 28) -> NumericModel:
    """Resolve a numeric model by name."""
    key = name.lower()
    if key == "float":
        return FloatModel()
    if key == "decimal":
        return DecimalModel(precision)
    raise ValueError(f"unknown numeric model '{name}' (expected one of: {', '.join(NUMERIC_MODELS)})")
