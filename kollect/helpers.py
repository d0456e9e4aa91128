from __future__ import annotations
import inspect
import math
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from .types import *
from .data import data_get


def use_as_callable(value: Any) -> bool:
    """strings name key paths, so only non-string callables count as callbacks"""
    return not isinstance(value, str) and callable(value)


def _positional_capacity(callback: Callable) -> Optional[int]:
    """number of positional arguments the callback takes; None when unknown"""
    try:
        signature = inspect.signature(callback)
    except (TypeError, ValueError):
        return None
    count = 0
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            return math.inf
        if parameter.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            count += 1
    return count


def accepting(callback: Callable[..., U], arity: int, minimum: int = 1) -> Callable[..., U]:
    """
    adapt a callback so it can always be called with `arity` positional arguments.
    callbacks declaring fewer parameters only receive the leading ones, so both
    `lambda value: ...` and `lambda value, key: ...` work as element callbacks.
    builtins without an introspectable signature receive `minimum` arguments.
    """
    capacity = _positional_capacity(callback)
    if capacity is None:
        capacity = minimum
    if capacity >= arity:
        return callback
    return lambda *args: callback(*args[:capacity])


def value_retriever(value: Retriever) -> Callable[[Any, Any], Any]:
    """turn a key path or callback into a (value, key) -> resolved function"""
    if use_as_callable(value):
        return accepting(value, 2)
    return lambda item, key=None: data_get(item, value)


def equality(value: Any) -> Callable[..., bool]:
    """strict equality check against a fixed value"""
    from .operators import strict_equals
    return lambda item, key=None: strict_equals(item, value)


def negate(callback: Callable[..., bool]) -> Callable[..., bool]:
    return lambda *params: not callback(*params)


def enum_value(value: Any) -> Any:
    """enum members compare by their backing value"""
    return value.value if isinstance(value, Enum) else value


def class_basename(target: Any) -> str:
    klass = target if isinstance(target, type) else type(target)
    return klass.__name__


def debug_type(value: Any) -> str:
    """readable runtime type name ('None' for None)"""
    return 'None' if value is None else type(value).__name__


def to_number(value: Any) -> Union[int, float, Any]:
    """coerce booleans and numeric strings the way arithmetic on loose data expects"""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            raise TypeError(f"unsupported operand: non-numeric string {value!r}") from None
    return value


def round_half_up(number: float, precision: int = 0) -> float:
    """round half away from zero (python's round() rounds half to even)"""
    quantum = Decimal(1).scaleb(-precision)
    rounded = Decimal(repr(number)).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)
