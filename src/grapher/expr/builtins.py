"""
Built-in functions and constants for the expression language.

All built-in functions are pure and deterministic, take and return floats,
and follow IEEE-754 semantics the way JavaScript's Math object does: a
domain error yields nan, a pole yields +/-inf, and nothing raises. This is
what lets the curve detector see holes and asymptotes as undefined samples.

Note that ``log`` is the decimal logarithm, like ``log10``; ``ln`` is the
natural one.
"""

import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Sequence

from .errors import ArityError, UnknownFunctionError

# Runtime value type for the expression language.
ExprValue = float

# Signature of a built-in function implementation.
BuiltinFunction = Callable[..., float]


@dataclass(frozen=True)
class FunctionSpec:
    """A registered function: its name, arity and implementation."""

    name: str
    arity: int
    impl: BuiltinFunction


# Function registry for built-in and injected functions.
FunctionRegistry = Mapping[str, FunctionSpec]


# ============================================================
# IEEE-754 Arithmetic
# ============================================================


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and value == math.floor(value) and int(value) % 2 == 1


def ieee_divide(left: float, right: float) -> float:
    """Divides with IEEE semantics: x/0 is +/-inf and 0/0 is nan."""
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


def ieee_power(base: float, exponent: float) -> float:
    """Raises base to exponent with the semantics of JavaScript's Math.pow."""
    if math.isnan(exponent):
        return math.nan
    if math.isinf(exponent) and abs(base) == 1:
        return math.nan

    try:
        return math.pow(base, exponent)
    except (ValueError, ZeroDivisionError):
        if base == 0:
            # Zero raised to a negative power
            if _is_odd_integer(exponent):
                return math.copysign(math.inf, base)
            return math.inf
        # Negative base with a fractional exponent
        return math.nan
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -math.inf
        return math.inf


# ============================================================
# Math Helpers
# ============================================================


def _domain_safe(fn: Callable[[float], float]) -> Callable[[float], float]:
    """Maps math domain errors (e.g. sin(inf)) to nan."""

    def wrapper(value: float) -> float:
        try:
            return fn(value)
        except ValueError:
            return math.nan

    wrapper.__name__ = fn.__name__
    return wrapper


def _ln(value: float) -> float:
    if value == 0:
        return -math.inf
    if value < 0:
        return math.nan
    return math.log(value)


def _log10(value: float) -> float:
    if value == 0:
        return -math.inf
    if value < 0:
        return math.nan
    return math.log10(value)


def _sqrt(value: float) -> float:
    if value < 0:
        return math.nan
    return math.sqrt(value)


def _asin(value: float) -> float:
    if abs(value) > 1:
        return math.nan
    return math.asin(value)


def _acos(value: float) -> float:
    if abs(value) > 1:
        return math.nan
    return math.acos(value)


def _exp(value: float) -> float:
    try:
        return math.exp(value)
    except OverflowError:
        return math.inf


def _sinh(value: float) -> float:
    try:
        return math.sinh(value)
    except OverflowError:
        return math.copysign(math.inf, value)


def _cosh(value: float) -> float:
    try:
        return math.cosh(value)
    except OverflowError:
        return math.inf


def _floor(value: float) -> float:
    if not math.isfinite(value):
        return value
    return float(math.floor(value))


def _ceil(value: float) -> float:
    if not math.isfinite(value):
        return value
    return float(math.ceil(value))


def _round(value: float) -> float:
    """Rounds half toward +inf, so round(-2.5) is -2."""
    if not math.isfinite(value):
        return value
    lower = math.floor(value)
    return float(lower + 1 if value - lower >= 0.5 else lower)


_sin = _domain_safe(math.sin)
_cos = _domain_safe(math.cos)
_tan = _domain_safe(math.tan)


def _sec(value: float) -> float:
    return ieee_divide(1.0, _cos(value))


def _csc(value: float) -> float:
    return ieee_divide(1.0, _sin(value))


def _cot(value: float) -> float:
    return ieee_divide(1.0, _tan(value))


def _logb(base: float, value: float) -> float:
    """logb(base, value) = ln(value) / ln(base)"""
    return ieee_divide(_ln(value), _ln(base))


# ============================================================
# Registry
# ============================================================


def _unary(name: str, impl: Callable[[float], float]) -> FunctionSpec:
    return FunctionSpec(name=name, arity=1, impl=impl)


BUILTIN_FUNCTIONS: FunctionRegistry = MappingProxyType(
    {
        spec.name: spec
        for spec in (
            # Trigonometry
            _unary("sin", _sin),
            _unary("cos", _cos),
            _unary("tan", _tan),
            _unary("asin", _asin),
            _unary("acos", _acos),
            _unary("atan", math.atan),
            _unary("sec", _sec),
            _unary("csc", _csc),
            _unary("cot", _cot),
            # Hyperbolic
            _unary("sinh", _sinh),
            _unary("cosh", _cosh),
            _unary("tanh", math.tanh),
            # Powers and logarithms
            _unary("sqrt", _sqrt),
            _unary("exp", _exp),
            _unary("ln", _ln),
            _unary("log", _log10),
            _unary("log10", _log10),
            FunctionSpec(name="logb", arity=2, impl=_logb),
            # Rounding
            _unary("abs", math.fabs),
            _unary("floor", _floor),
            _unary("ceil", _ceil),
            _unary("round", _round),
        )
    }
)

BUILTIN_CONSTANTS: Mapping[str, float] = MappingProxyType(
    {
        "pi": math.pi,
        "e": math.e,
    }
)


def get_function(
    name: str, functions: Optional[FunctionRegistry] = None
) -> Optional[FunctionSpec]:
    """Looks up a function by its exact (case-sensitive) name."""
    functions = functions if functions is not None else BUILTIN_FUNCTIONS
    return functions.get(name)


def is_builtin_function(
    name: str, functions: Optional[FunctionRegistry] = None
) -> bool:
    """Checks if a name is a built-in function."""
    return get_function(name, functions) is not None


def is_constant(name: str) -> bool:
    """Checks if a name is a built-in constant."""
    return name in BUILTIN_CONSTANTS


def check_arity(
    spec: FunctionSpec,
    arg_count: int,
    position: Optional[int] = None,
    source: Optional[str] = None,
) -> None:
    """Raises ArityError unless arg_count matches the function's arity."""
    if arg_count != spec.arity:
        raise ArityError(spec.name, spec.arity, arg_count, position, source)


def call_builtin(
    name: str,
    args: Sequence[float],
    functions: Optional[FunctionRegistry] = None,
) -> float:
    """
    Calls a built-in function by name.

    Args:
        name: The function name
        args: The function arguments
        functions: Optional function registry (defaults to BUILTIN_FUNCTIONS)

    Returns:
        The function result

    Raises:
        UnknownFunctionError: If the function doesn't exist
        ArityError: If the argument count is wrong
    """
    spec = get_function(name, functions)
    if spec is None:
        raise UnknownFunctionError(name)
    check_arity(spec, len(args))
    return spec.impl(*args)
