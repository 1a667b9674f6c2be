"""
Runtime values for the Lox expression language.

Values are immutable scalars: nil, strings, numbers (IEEE doubles) and
booleans.  Equality between values of different variants is always false.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field


class NilValue(BaseModel):
    """The ``nil`` value."""

    model_config = ConfigDict(frozen=True)

    @property
    def type_name(self) -> str:
        return "nil"

    def describe(self) -> str:
        return str(self)

    def __str__(self) -> str:
        return "nil"


class StringValue(BaseModel):
    """A string value."""

    value: str = Field(description="String content")

    model_config = ConfigDict(frozen=True)

    @property
    def type_name(self) -> str:
        return "string"

    def describe(self) -> str:
        """Quoted form used when echoing a result."""
        return f'"{self.value}"'

    def __str__(self) -> str:
        return self.value


class NumberValue(BaseModel):
    """A double-precision number."""

    value: float = Field(description="Numeric value")

    model_config = ConfigDict(frozen=True)

    @property
    def type_name(self) -> str:
        return "number"

    def describe(self) -> str:
        return str(self)

    def __str__(self) -> str:
        return format_number(self.value)


class BooleanValue(BaseModel):
    """A boolean value."""

    value: bool = Field(description="Truth value")

    model_config = ConfigDict(frozen=True)

    @property
    def type_name(self) -> str:
        return "boolean"

    def describe(self) -> str:
        return str(self)

    def __str__(self) -> str:
        return "true" if self.value else "false"


Value = NilValue | StringValue | NumberValue | BooleanValue

NIL = NilValue()
TRUE = BooleanValue(value=True)
FALSE = BooleanValue(value=False)


def boolean(b: bool) -> BooleanValue:
    return TRUE if b else FALSE


def number(n: float) -> NumberValue:
    return NumberValue(value=float(n))


def string(s: str) -> StringValue:
    return StringValue(value=s)


def format_number(n: float) -> str:
    """
    Display form of a number.

    Whole finite values render without a fractional part (``7``, ``-0``);
    everything else uses Python's shortest repr (``2.5``, ``inf``, ``nan``).
    """
    if math.isfinite(n) and n.is_integer():
        text = str(int(n))
        if n == 0 and math.copysign(1.0, n) < 0:
            return "-0"
        return text
    return repr(n)
