from __future__ import annotations
import typing
from ..types import *
from ..data import data_get, data_has, arrayable_values
from ..helpers import value_retriever
from ..operators import (
    OperatorPredicate, operator_for_where, loose_compare, loose_in, truthy
)

if typing.TYPE_CHECKING:
    from ..enumerable import Collection


class _WhereOperations(Generic[T]):
    """declarative filters built on OperatorPredicate"""

    def where(self: 'Collection[T]', key: Any, operator: Any = MISSING, value: Any = MISSING) -> 'Collection[T]':
        """
        where('active')              -> active == True
        where('age', 30)             -> age == 30
        where('age', '>=', 30)       -> age >= 30
        where(lambda v, k: ...)      -> plain filter
        """
        return self.filter(operator_for_where(key, operator, value))

    def where_strict(self: 'Collection[T]', key: Any, value: Any) -> 'Collection[T]':
        return self.where(key, '===', value)

    def where_null(self: 'Collection[T]', key: Any = None) -> 'Collection[T]':
        return self.where_strict(key, None)

    def where_not_null(self: 'Collection[T]', key: Any = None) -> 'Collection[T]':
        return self.where(key, '!==', None)

    def where_in(self: 'Collection[T]', key: Any, values: Any, strict: bool = False) -> 'Collection[T]':
        """keep items whose value at `key` is one of `values`"""
        candidates = arrayable_values(values)
        return self.filter(lambda item: loose_in(data_get(item, key), candidates, strict))

    def where_in_strict(self: 'Collection[T]', key: Any, values: Any) -> 'Collection[T]':
        return self.where_in(key, values, True)

    def where_not_in(self: 'Collection[T]', key: Any, values: Any, strict: bool = False) -> 'Collection[T]':
        candidates = arrayable_values(values)
        return self.reject(lambda item: loose_in(data_get(item, key), candidates, strict))

    def where_not_in_strict(self: 'Collection[T]', key: Any, values: Any) -> 'Collection[T]':
        return self.where_not_in(key, values, True)

    def where_between(self: 'Collection[T]', key: Any, values: Any) -> 'Collection[T]':
        """inclusive range check; the bounds are the first and last candidate, in that order"""
        lower, upper = _bounds(values)
        return self.where(key, '>=', lower).where(key, '<=', upper)

    def where_not_between(self: 'Collection[T]', key: Any, values: Any) -> 'Collection[T]':
        lower, upper = _bounds(values)
        return self.filter(
            lambda item: loose_compare(data_get(item, key), lower) < 0 or loose_compare(data_get(item, key), upper) > 0
        )

    def where_instance_of(self: 'Collection[T]', types: Union[type, Sequence[type]]) -> 'Collection[T]':
        allowed = tuple(types) if isinstance(types, (list, tuple)) else types
        return self.filter(lambda value: isinstance(value, allowed))

    def first_where(self: 'Collection[T]', key: Any, operator: Any = MISSING, value: Any = MISSING) -> Any:
        return self.first(operator_for_where(key, operator, value))

    def value(self: 'Collection[T]', key: Any, default: Any = None) -> Any:
        """the value at `key` of the first item that has it"""
        found = self.first(lambda target: data_has(target, key))
        return data_get(found, key, default)

    def every(self: 'Collection[T]', key: Any, operator: Any = MISSING, value: Any = MISSING) -> bool:
        """true when every entry passes; always true for an empty collection"""
        if operator is MISSING and value is MISSING:
            test = value_retriever(key)
            return all(truthy(test(item, item_key)) for item_key, item in self.items())
        return self.every(OperatorPredicate.from_arguments(key, operator, value))


def _bounds(values: Any) -> Tuple[Any, Any]:
    candidates = arrayable_values(values)
    if not candidates:
        raise ValueError("a between filter needs at least one bound")
    return candidates[0], candidates[-1]
