"""
comparison rules and the operator predicate used by every where-style filter.

loose comparison (`loose_compare` / `loose_equals`) follows these coercions,
checked in order:

  * None against a str compares as '' against that str.
  * None or a bool on either side: both sides compare by truthiness
    (0, 0.0, '', '0', empty lists/dicts and None are falsy).
  * two numbers compare numerically.
  * two strs compare numerically when both are numeric strings, otherwise
    lexically.
  * a number against a numeric str compares numerically; against any other
    str the number is rendered as text and compared lexically.
  * lists/tuples compare by length first, then element by element; dicts by
    size, then by the values of the left side's keys (a missing key makes
    them unequal).
  * a list/tuple/dict orders above any other value.
  * anything else uses python equality and ordering, falling back to the
    string forms when the values cannot be ordered.

strict comparison (`strict_equals`) needs the same type and value for
scalars, the same type and strictly equal members for lists, tuples and dicts
(dict key order included), and the same instance for any other object.
"""
from __future__ import annotations
import re
import numbers
from dataclasses import dataclass
from .types import *
from .data import data_get
from .helpers import accepting, enum_value, use_as_callable

_NUMERIC_STRING = re.compile(r'^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$')

NOT_EQUAL_OPERATORS = ('!=', '<>', '!==')


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def is_numeric_string(value: Any) -> bool:
    return isinstance(value, str) and _NUMERIC_STRING.match(value) is not None


def _to_number(text: str) -> Union[int, float]:
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        return float(text)


def _number_text(number: Any) -> str:
    if isinstance(number, float) and number.is_integer():
        return str(int(number))
    return str(number)


def truthy(value: Any) -> bool:
    """truthiness with '0' counted as false"""
    if isinstance(value, str):
        return value not in ('', '0')
    return bool(value)


def _spaceship(left: Any, right: Any) -> int:
    if left == right:
        return 0
    if left < right:
        return -1
    # unordered values (nan) count as greater so they are never equal
    return 1


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple, dict))


def is_object(value: Any) -> bool:
    """anything beyond None, numbers, strings and plain lists/tuples/dicts"""
    return not (value is None or isinstance(value, (numbers.Number, str, bytes, bytearray, list, tuple, dict)))


def is_string_like(value: Any) -> bool:
    """a str, or an object whose class renders itself as text"""
    if isinstance(value, str):
        return True
    return is_object(value) and type(value).__str__ is not object.__str__


def loose_compare(left: Any, right: Any) -> int:
    """three-way comparison (-1, 0, 1) under the loose coercion rules"""
    if left is None and isinstance(right, str):
        return _spaceship('', right)
    if right is None and isinstance(left, str):
        return _spaceship(left, '')

    if left is None or right is None or isinstance(left, bool) or isinstance(right, bool):
        return _spaceship(truthy(left), truthy(right))

    if _is_number(left) and _is_number(right):
        return _spaceship(left, right)

    if isinstance(left, str) and isinstance(right, str):
        if is_numeric_string(left) and is_numeric_string(right):
            return _spaceship(_to_number(left), _to_number(right))
        return _spaceship(left, right)

    if _is_number(left) and isinstance(right, str):
        if is_numeric_string(right):
            return _spaceship(left, _to_number(right))
        return _spaceship(_number_text(left), right)

    if isinstance(left, str) and _is_number(right):
        if is_numeric_string(left):
            return _spaceship(_to_number(left), right)
        return _spaceship(left, _number_text(right))

    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        if len(left) != len(right):
            return _spaceship(len(left), len(right))
        for a, b in zip(left, right):
            outcome = loose_compare(a, b)
            if outcome:
                return outcome
        return 0

    if isinstance(left, dict) and isinstance(right, dict):
        if len(left) != len(right):
            return _spaceship(len(left), len(right))
        for key, a in left.items():
            if key not in right:
                return 1
            outcome = loose_compare(a, right[key])
            if outcome:
                return outcome
        return 0

    if _is_array(left) and not _is_array(right):
        return 1
    if _is_array(right) and not _is_array(left):
        return -1

    try:
        if left == right:
            return 0
        if left < right:
            return -1
        if left > right:
            return 1
        return 1
    except TypeError:
        return _spaceship(str(left), str(right))


def loose_equals(left: Any, right: Any) -> bool:
    return loose_compare(left, right) == 0


def strict_equals(left: Any, right: Any) -> bool:
    """same type and value for data, same instance for objects"""
    if left is right:
        return True
    if type(left) is not type(right):
        return False
    if isinstance(left, (list, tuple)):
        return len(left) == len(right) and all(strict_equals(a, b) for a, b in zip(left, right))
    if isinstance(left, dict):
        return (list(left.keys()) == list(right.keys())
                and all(strict_equals(left[key], right[key]) for key in left))
    if isinstance(left, (numbers.Number, str, bytes)):
        return left == right
    return False


def loose_in(needle: Any, haystack: Iterable[Any], strict: bool = False) -> bool:
    """linear membership test under loose or strict equality"""
    check = strict_equals if strict else loose_equals
    return any(check(needle, candidate) for candidate in haystack)


_OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    '=': loose_equals,
    '==': loose_equals,
    '!=': lambda a, b: not loose_equals(a, b),
    '<>': lambda a, b: not loose_equals(a, b),
    '<': lambda a, b: loose_compare(a, b) < 0,
    '>': lambda a, b: loose_compare(a, b) > 0,
    '<=': lambda a, b: loose_compare(a, b) <= 0,
    '>=': lambda a, b: loose_compare(a, b) >= 0,
    '===': strict_equals,
    '!==': lambda a, b: not strict_equals(a, b),
    '<=>': loose_compare,
}


def compare(left: Any, operator: str, right: Any) -> Any:
    """apply an operator token; unknown tokens mean loose equality"""
    return _OPERATORS.get(operator, loose_equals)(left, right)


@dataclass(frozen=True)
class OperatorPredicate:
    """
    a boolean test compiled from (key path, operator, value).

    the left side is the item's value at `key` (see data_get); enum members on
    either side compare by their value. an object compared against a
    non-object, when at most one side is string-like, is never equal: only the
    not-equal operators pass.
    """
    key: Any
    operator: str = '='
    value: Any = True

    def __call__(self, item: Any, key: Any = None) -> Any:
        retrieved = enum_value(data_get(item, self.key))
        value = enum_value(self.value)

        strings = sum(1 for side in (retrieved, value) if is_string_like(side))
        objects = sum(1 for side in (retrieved, value) if is_object(side))
        if strings < 2 and objects == 1:
            return self.operator in NOT_EQUAL_OPERATORS

        return compare(retrieved, self.operator, value)

    @classmethod
    def from_arguments(cls, key: Any, operator: Any = MISSING, value: Any = MISSING) -> Callable[..., Any]:
        """
        normalize the three call shapes of where():
        where(callback), where(key) -> key == True, where(key, value) -> key == value,
        where(key, operator, value).
        """
        if use_as_callable(key):
            return key
        if operator is MISSING and value is MISSING:
            return cls(key, '=', True)
        if value is MISSING:
            return cls(key, '=', operator)
        return cls(key, operator, value)


def operator_for_where(key: Any, operator: Any = MISSING, value: Any = MISSING) -> Callable[[Any, Any], Any]:
    """build a (value, key) test from where()-style arguments"""
    return accepting(OperatorPredicate.from_arguments(key, operator, value), 2)
