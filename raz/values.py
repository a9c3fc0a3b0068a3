"""Value model for raz."""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable
import math
from decimal import Decimal

from .errors import TypeMismatchError

if TYPE_CHECKING:
    from .environment import Environment


class RazType(Enum):
    NUMBER = "Number"
    STRING = "String"
    TRUE = "True"
    FALSE = "False"
    NONE = "Non"
    CALLABLE = "Callable"


# Body of a callable: (calling environment, arguments) -> result
CallableBody = Callable[["Environment", list["RazValue"]], "RazValue"]


@dataclass
class RazCallable:
    """A native or user-defined function. Identity is (name, arity)."""
    name: str
    arity: int
    func: CallableBody = field(repr=False, compare=False)

    def __call__(self, environment: Environment, args: list[RazValue]) -> RazValue:
        return self.func(environment, args)


class RazValue:
    """Wraps a Python value with its raz type."""

    __slots__ = ("value", "type")

    def __init__(self, value: Any, raz_type: RazType):
        self.value = value
        self.type = raz_type

    def __repr__(self):
        return f"RazValue({self.type.value}: {self.value!r})"

    def __str__(self):
        return to_display_string(self)

    def __eq__(self, other):
        if not isinstance(other, RazValue):
            return NotImplemented
        return values_equal(self, other)

    def __hash__(self):
        if self.type == RazType.CALLABLE:
            return hash((self.type, self.value.name, self.value.arity))
        return hash((self.type, self.value))


# ============================================================
# Constructors
# ============================================================

def raz_number(value: float | int) -> RazValue:
    return RazValue(float(value), RazType.NUMBER)

def raz_string(value: str) -> RazValue:
    return RazValue(value, RazType.STRING)

def raz_true() -> RazValue:
    return RazValue(True, RazType.TRUE)

def raz_false() -> RazValue:
    return RazValue(False, RazType.FALSE)

def raz_bool(flag: bool) -> RazValue:
    return raz_true() if flag else raz_false()

def raz_none() -> RazValue:
    return RazValue(None, RazType.NONE)

def raz_callable(name: str, arity: int, func: CallableBody) -> RazValue:
    return RazValue(RazCallable(name, arity, func), RazType.CALLABLE)


# ============================================================
# Stringification
# ============================================================

def format_number(x: float) -> str:
    """Natural textual form: integral values print without a fraction."""
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    if x == 0 and math.copysign(1.0, x) < 0:
        return "-0"
    if x.is_integer():
        return str(int(x))
    # Shortest round-trip digits, written out without an exponent
    return format(Decimal(repr(x)), "f")


def to_display_string(value: RazValue) -> str:
    if value.type == RazType.NUMBER:
        return format_number(value.value)
    if value.type == RazType.STRING:
        return value.value
    if value.type == RazType.TRUE:
        return "true"
    if value.type == RazType.FALSE:
        return "false"
    if value.type == RazType.NONE:
        return "non"
    return f"{value.value.name}_{value.value.arity}"


def quoted_display(value: RazValue) -> str:
    """Display form with strings wrapped in double quotes."""
    if value.type == RazType.STRING:
        return f'"{value.value}"'
    return to_display_string(value)


def type_name(value: RazValue) -> str:
    if value.type in (RazType.TRUE, RazType.FALSE):
        return "Boolean"
    return value.type.value


# ============================================================
# Truthiness
# ============================================================

def is_truthy(value: RazValue) -> bool:
    """Zero, the empty string, false and non are falsy. Callables have no truthiness."""
    if value.type == RazType.NUMBER:
        return value.value != 0
    if value.type == RazType.STRING:
        return value.value != ""
    if value.type == RazType.TRUE:
        return True
    if value.type in (RazType.FALSE, RazType.NONE):
        return False
    raise TypeMismatchError(f"Cannot use {to_display_string(value)} as a truth value")


def is_falsy(value: RazValue) -> bool:
    return not is_truthy(value)


# ============================================================
# Equality
# ============================================================

def values_equal(left: RazValue, right: RazValue) -> bool:
    """Same variant and same payload. Callables compare by (name, arity)."""
    if left.type != right.type:
        return False
    if left.type == RazType.CALLABLE:
        return left.value.name == right.value.name and left.value.arity == right.value.arity
    return left.value == right.value
