from __future__ import annotations

import json
import builtins
from .types import *
from .config import get_settings
from .contracts import Enumerable
from .data import arrayable_items, wrap as wrap_value
from .errors import UndeclaredProxyPropertyError
from .helpers import class_basename
from .macros import Macroable, ProxyRegistry
from .proxy import HigherOrderCollectionProxy, HigherOrderAccessor

# --- operation mixins ---
from .extensions.core import _CoreOperations
from .extensions.where import _WhereOperations
from .extensions.stats import _AggregateOperations
from .extensions.grouping import _GroupingOperations
from .extensions.set import _SetOperations
from .extensions.terminal import _TerminalOperations
from .extensions.conditional import _ConditionalOperations

# operations reachable through collection.higher.<name>
DEFAULT_PROXIES = (
    'average', 'avg', 'contains', 'doesnt_contain', 'each', 'every', 'filter',
    'first', 'flat_map', 'group_by', 'key_by', 'last', 'map', 'max', 'min',
    'partition', 'percentage', 'reject', 'skip_until', 'skip_while', 'some',
    'sort_by', 'sort_by_desc', 'sum', 'take_until', 'take_while', 'unique',
    'unless', 'until', 'when',
)


def _nesting(value: Any) -> int:
    """how many list/dict levels a decoded json value has"""
    deepest = 0
    stack = [(value, 0)]
    while stack:
        current, depth = stack.pop()
        if isinstance(current, dict):
            children = current.values()
        elif isinstance(current, list):
            children = current
        else:
            deepest = max(deepest, depth)
            continue
        deepest = max(deepest, depth + 1)
        stack.extend((child, depth + 1) for child in children)
    return deepest


# --- base enumerable implementation ---

class _BaseEnumerable(Enumerable[T]):
    def __init__(self, items: Any = None):
        """normalize anything collection-like into ordered key -> value storage"""
        self._items: Dict[ArrayKey, T] = arrayable_items(items)
        self._escape_when_casting_to_string = get_settings().escape_when_casting_to_string

    def _get_data(self) -> Dict[ArrayKey, T]:
        return self._items

    def _new(self, items: Any = None) -> 'Collection[Any]':
        """a collection of the same type holding `items`"""
        return type(self)(items)

    def all(self) -> Dict[ArrayKey, T]:
        """a copy of the underlying key -> value dict"""
        return dict(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, key: ArrayKey) -> T:
        return self._items[key]

    def __contains__(self, value: object) -> bool:
        return value in self._items.values()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _BaseEnumerable):
            return NotImplemented
        return list(self._items.items()) == list(other._get_data().items())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"


# --- main collection class ---

class Collection(
    _BaseEnumerable[T],
    _CoreOperations[T],
    _WhereOperations[T],
    _AggregateOperations[T],
    _GroupingOperations[T],
    _SetOperations[T],
    _TerminalOperations[T],
    _ConditionalOperations[T],
    Macroable
):
    """an ordered key -> value collection with a functional pipeline api."""

    _proxies: ProxyRegistry = ProxyRegistry('Collection', names=DEFAULT_PROXIES)

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._proxies = ProxyRegistry(cls.__name__, parent=cls._proxies)

    # --- construction ---

    @classmethod
    def make(cls, items: Any = None) -> 'Collection[Any]':
        return cls(items)

    @classmethod
    def empty(cls) -> 'Collection[Any]':
        return cls()

    @classmethod
    def wrap(cls, value: Any) -> 'Collection[Any]':
        """a collection of the value's items, or of the value itself"""
        if isinstance(value, Enumerable):
            return cls(value)
        return cls(wrap_value(value))

    @staticmethod
    def unwrap(value: Any) -> Any:
        """the plain items of a collection; anything else unchanged"""
        return value.all() if isinstance(value, Enumerable) else value

    @classmethod
    def range(cls, start: int, end: int, step: int = 1) -> 'Collection[int]':
        """integers from start to end, both included (counting down when end < start)"""
        if step == 0:
            raise ValueError("range step cannot be zero")
        step = abs(step)
        if start <= end:
            return cls(builtins.range(start, end + 1, step))
        return cls(builtins.range(start, end - 1, -step))

    @classmethod
    def times(cls, number: int, callback: Optional[Callable[..., Any]] = None) -> 'Collection[Any]':
        """1..number, optionally mapped through the callback"""
        if number < 1:
            return cls()
        return cls.range(1, number).unless(callback is None).map(callback)

    @classmethod
    def from_json(cls, text: Union[str, bytes], depth: Optional[int] = None, **options: Any) -> 'Collection[Any]':
        """decode a json document into a collection"""
        if depth is None:
            depth = get_settings().json_depth
        decoded = json.loads(text, **options)
        if _nesting(decoded) > depth:
            raise ValueError(f"json document is nested deeper than the allowed depth of {depth}")
        return cls(decoded)

    # --- higher-order proxies ---

    @classmethod
    def proxy(cls, method: str) -> None:
        """allow `method` to be used through collection.higher"""
        cls._proxies.register(method)

    @classmethod
    def has_proxy(cls, method: str) -> bool:
        return cls._proxies.has(method)

    @classmethod
    def flush_proxies(cls) -> None:
        cls._proxies.clear()

    @classmethod
    def proxies(cls) -> List[str]:
        return cls._proxies.names()

    def higher_order(self, method: str) -> HigherOrderCollectionProxy[T]:
        """a proxy running `method` with a callback built from a member access"""
        if not type(self)._proxies.has(method):
            raise UndeclaredProxyPropertyError(method, class_basename(self))
        return HigherOrderCollectionProxy(self, method)

    @property
    def higher(self) -> HigherOrderAccessor[T]:
        return HigherOrderAccessor(self)
