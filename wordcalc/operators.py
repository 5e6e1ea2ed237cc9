import math
import types
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

BinaryFunc = Callable[[float, float], float]

# Divisors at or below this magnitude make `div` undefined.
NEAR_ZERO_THRESHOLD = 1e-10

INVALID_RESULT = float("nan")


@dataclass(frozen=True)
class Operator:
    name: str
    precedence: int
    fn: Optional[BinaryFunc]

    def __str__(self) -> str:
        return self.name


UNKNOWN_OPERATOR = Operator(name="unknown", precedence=0, fn=None)

_OPERATORS: dict[str, Operator] = dict()


def register_operator(name: str, precedence: int):
    if precedence <= 0:
        raise ValueError(f"Operator {name!r} must have a positive precedence, got {precedence}")

    def decorator(fn: BinaryFunc) -> BinaryFunc:
        if name in _OPERATORS:
            raise ValueError(f"Operator {name!r} is already registered")
        _OPERATORS[name] = Operator(name=name, precedence=precedence, fn=fn)
        return fn

    return decorator


@register_operator("add", precedence=1)
def add_(a: float, b: float) -> float:
    return a + b


@register_operator("sub", precedence=1)
def sub_(a: float, b: float) -> float:
    return a - b


@register_operator("mul", precedence=2)
def mul_(a: float, b: float) -> float:
    return a * b


@register_operator("div", precedence=2)
def div_(a: float, b: float) -> float:
    if abs(b) <= NEAR_ZERO_THRESHOLD:
        return INVALID_RESULT
    return a / b


@register_operator("mod", precedence=2)
def mod_(a: float, b: float) -> float:
    # math.fmod raises where C fmod returns NaN
    if b == 0 or math.isinf(a):
        return INVALID_RESULT
    return math.fmod(a, b)


OPERATORS: Mapping[str, Operator] = types.MappingProxyType(_OPERATORS)


def lookup(name: str) -> Operator:
    """Case-sensitive lookup; unknown names give `UNKNOWN_OPERATOR` rather than an error."""
    return OPERATORS.get(name, UNKNOWN_OPERATOR)


def operator_names() -> list[str]:
    return list(OPERATORS)
