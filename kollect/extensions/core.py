from __future__ import annotations
import typing
from functools import cmp_to_key
from collections.abc import Mapping
from ..types import *
from ..data import resolve_value, arrayable_values
from ..contracts import Enumerable
from ..errors import ReduceShapeError, TypeMismatchError
from ..helpers import (
    accepting, use_as_callable, value_retriever, equality, negate,
    class_basename, debug_type
)
from ..operators import loose_compare, truthy, strict_equals

if typing.TYPE_CHECKING:
    from ..enumerable import Collection

# type names used by ensure() that do not match a python class name
_TYPE_ALIASES: Dict[str, Tuple[str, ...]] = {
    'null': ('None',),
    'string': ('str',),
    'integer': ('int',),
    'boolean': ('bool',),
    'double': ('float',),
    'array': ('list', 'tuple', 'dict'),
}


def _spread_call(callback: Callable[..., Any], chunk: Any, key: Any) -> Any:
    """call with the chunk's values as positional arguments, followed by its key"""
    args = arrayable_values(chunk) + [key]
    return accepting(callback, len(args))(*args)


def _type_matches(item: Any, observed: str, allowed: Any) -> bool:
    if isinstance(allowed, str):
        names = _TYPE_ALIASES.get(allowed, (allowed,))
        if observed in names:
            return True
        return any(
            base.__name__ in names or f"{base.__module__}.{base.__qualname__}" in names
            for base in type(item).__mro__
            if not (base is int and isinstance(item, bool))
        )
    if allowed is None:
        return item is None
    return isinstance(item, allowed)


class _CoreOperations(Generic[T]):
    def count(self: 'Collection[T]') -> int:
        return len(self._get_data())

    def is_empty(self: 'Collection[T]') -> bool:
        return not self._get_data()

    def is_not_empty(self: 'Collection[T]') -> bool:
        return not self.is_empty()

    def keys(self: 'Collection[T]') -> 'Collection[ArrayKey]':
        return self._new(list(self._get_data().keys()))

    def values(self: 'Collection[T]') -> 'Collection[T]':
        """the same values, re-keyed from 0"""
        return self._new(list(self._get_data().values()))

    def items(self: 'Collection[T]') -> Iterator[Tuple[ArrayKey, T]]:
        return iter(list(self._get_data().items()))

    def get(self: 'Collection[T]', key: ArrayKey, default: Any = None) -> Any:
        data = self._get_data()
        if key in data:
            return data[key]
        return resolve_value(default)

    def has(self: 'Collection[T]', *keys: ArrayKey) -> bool:
        data = self._get_data()
        return all(key in data for key in keys)

    def first(self: 'Collection[T]', callback: Optional[Predicate] = None, default: Any = None) -> Any:
        """first value passing the callback (or the first value at all)"""
        data = self._get_data()
        if callback is None:
            if not data:
                return resolve_value(default)
            return next(iter(data.values()))
        test = accepting(callback, 2)
        for key, value in data.items():
            if test(value, key):
                return value
        return resolve_value(default)

    def last(self: 'Collection[T]', callback: Optional[Predicate] = None, default: Any = None) -> Any:
        data = self._get_data()
        if callback is None:
            if not data:
                return resolve_value(default)
            return next(reversed(data.values()))
        test = accepting(callback, 2)
        for key, value in reversed(data.items()):
            if test(value, key):
                return value
        return resolve_value(default)

    def map(self: 'Collection[T]', callback: Selector[U]) -> 'Collection[U]':
        """apply the callback to every value, keeping the keys"""
        project = accepting(callback, 2)
        return self._new({key: project(value, key) for key, value in self._get_data().items()})

    def filter(self: 'Collection[T]', callback: Optional[Predicate] = None) -> 'Collection[T]':
        """keep the entries passing the callback (truthy values when there is none)"""
        data = self._get_data()
        if callback is None:
            return self._new({key: value for key, value in data.items() if truthy(value)})
        test = accepting(callback, 2)
        return self._new({key: value for key, value in data.items() if test(value, key)})

    def reject(self: 'Collection[T]', callback: Any = True) -> 'Collection[T]':
        """drop the entries passing the callback, or identical to a plain value"""
        if use_as_callable(callback):
            test = accepting(callback, 2)
            return self.filter(lambda value, key: not test(value, key))
        return self.filter(lambda value: not strict_equals(value, callback))

    def reduce(self: 'Collection[T]', callback: Accumulator[U], initial: Any = None) -> U:
        """left fold; the callback gets (carry, value, key)"""
        fold = accepting(callback, 3, minimum=2)
        result = initial
        for key, value in self._get_data().items():
            result = fold(result, value, key)
        return result

    def reduce_with_keys(self: 'Collection[T]', callback: Accumulator[U], initial: Any = None) -> U:
        return self.reduce(callback, initial)

    def reduce_spread(self: 'Collection[T]', callback: Callable[..., Sequence[Any]], *initial: Any) -> List[Any]:
        """fold several accumulators at once; the callback returns them all as a list or tuple"""
        fold = accepting(callback, len(initial) + 2, minimum=len(initial) + 1)
        result = list(initial)
        for key, value in self._get_data().items():
            result = fold(*result, value, key)
            if not isinstance(result, (list, tuple)):
                raise ReduceShapeError(debug_type(result), class_basename(self), len(initial))
            if len(result) != len(initial):
                raise ReduceShapeError(f"{debug_type(result)} of {len(result)}", class_basename(self), len(initial))
            result = list(result)
        return result

    def each(self: 'Collection[T]', callback: Callable[..., Any]) -> 'Collection[T]':
        """run the callback on every entry until it returns False"""
        visit = accepting(callback, 2)
        for key, value in list(self._get_data().items()):
            if visit(value, key) is False:
                break
        return self

    def each_spread(self: 'Collection[T]', callback: Callable[..., Any]) -> 'Collection[T]':
        return self.each(lambda chunk, key: _spread_call(callback, chunk, key))

    def map_spread(self: 'Collection[T]', callback: Callable[..., U]) -> 'Collection[U]':
        return self.map(lambda chunk, key: _spread_call(callback, chunk, key))

    def map_into(self: 'Collection[T]', klass: Type[U]) -> 'Collection[U]':
        """build a `klass` instance from every value"""
        from enum import Enum
        if isinstance(klass, type) and issubclass(klass, Enum):
            return self.map(lambda value: klass(value))
        return self.map(accepting(klass, 2))

    def collapse(self: 'Collection[T]') -> 'Collection[Any]':
        """merge nested lists, dicts and collections into one level"""
        merged: Dict[ArrayKey, Any] = {}
        position = 0
        for item in self._get_data().values():
            if isinstance(item, Enumerable):
                item = item.all()
            if isinstance(item, Mapping):
                pairs = item.items()
            elif isinstance(item, (list, tuple)):
                pairs = enumerate(item)
            else:
                continue
            for key, value in pairs:
                if isinstance(key, int):
                    merged[position] = value
                    position += 1
                else:
                    merged[key] = value
        return self._new(merged)

    def flat_map(self: 'Collection[T]', callback: Selector[Iterable[U]]) -> 'Collection[U]':
        return self.map(callback).collapse()

    def pipe(self: 'Collection[T]', callback: Callable[['Collection[T]'], U]) -> U:
        return callback(self)

    def pipe_into(self: 'Collection[T]', klass: Callable[['Collection[T]'], U]) -> U:
        return klass(self)

    def pipe_through(self: 'Collection[T]', callbacks: Iterable[Callable[[Any], Any]]) -> Any:
        """pass the collection through each callback in turn"""
        return type(self).make(callbacks).reduce(lambda carry, callback: callback(carry), self)

    def tap(self: 'Collection[T]', callback: Callable[['Collection[T]'], Any]) -> 'Collection[T]':
        callback(self)
        return self

    def collect(self: 'Collection[T]') -> 'Collection[T]':
        """a plain Collection holding the same items"""
        from ..enumerable import Collection
        return Collection(self.all())

    def ensure(self: 'Collection[T]', types: Any) -> 'Collection[T]':
        """
        check that every value is one of `types` (classes, type names, or None).
        the first offending value raises TypeMismatchError with its key.
        """
        allowed = list(types) if isinstance(types, (list, tuple)) else [types]

        def check(item, index):
            observed = debug_type(item)
            if not any(_type_matches(item, observed, candidate) for candidate in allowed):
                raise TypeMismatchError(allowed, observed, index)

        return self.each(check)

    # slicing

    def slice(self: 'Collection[T]', offset: int, length: Optional[int] = None) -> 'Collection[T]':
        """a window of entries, keys preserved; negative offset/length count from the end"""
        pairs = list(self._get_data().items())
        start = offset if offset >= 0 else max(len(pairs) + offset, 0)
        if length is None:
            stop = len(pairs)
        elif length >= 0:
            stop = start + length
        else:
            stop = len(pairs) + length
        return self._new(dict(pairs[start:stop]))

    def take(self: 'Collection[T]', limit: int) -> 'Collection[T]':
        if limit < 0:
            return self.slice(limit, abs(limit))
        return self.slice(0, limit)

    def for_page(self: 'Collection[T]', page: int, per_page: int) -> 'Collection[T]':
        offset = max(0, (page - 1) * per_page)
        return self.slice(offset, per_page)

    def sort_by(self: 'Collection[T]', callback: Retriever, descending: bool = False) -> 'Collection[T]':
        """order by the resolved value of each entry, keys preserved"""
        retrieve = value_retriever(callback)
        data = self._get_data()
        resolved = [(key, retrieve(value, key)) for key, value in data.items()]
        ordered = sorted(resolved, key=cmp_to_key(lambda a, b: loose_compare(a[1], b[1])), reverse=descending)
        return self._new({key: data[key] for key, _ in ordered})

    def sort_by_desc(self: 'Collection[T]', callback: Retriever) -> 'Collection[T]':
        return self.sort_by(callback, descending=True)

    def skip_while(self: 'Collection[T]', value: Any) -> 'Collection[T]':
        """drop entries from the front while they pass, keep the rest"""
        test = accepting(value, 2) if use_as_callable(value) else equality(value)
        result: Dict[ArrayKey, T] = {}
        skipping = True
        for key, item in self._get_data().items():
            if skipping and test(item, key):
                continue
            skipping = False
            result[key] = item
        return self._new(result)

    def skip_until(self: 'Collection[T]', value: Any) -> 'Collection[T]':
        test = accepting(value, 2) if use_as_callable(value) else equality(value)
        return self.skip_while(negate(test))

    def take_until(self: 'Collection[T]', value: Any) -> 'Collection[T]':
        """keep entries from the front until one passes"""
        test = accepting(value, 2) if use_as_callable(value) else equality(value)
        result: Dict[ArrayKey, T] = {}
        for key, item in self._get_data().items():
            if test(item, key):
                break
            result[key] = item
        return self._new(result)

    def take_while(self: 'Collection[T]', value: Any) -> 'Collection[T]':
        test = accepting(value, 2) if use_as_callable(value) else equality(value)
        return self.take_until(negate(test))

    def until(self: 'Collection[T]', value: Any) -> 'Collection[T]':
        return self.take_until(value)
