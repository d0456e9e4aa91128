from __future__ import annotations
import typing
from ..types import *
from ..data import data_get
from ..helpers import use_as_callable, value_retriever
from ..operators import OperatorPredicate, loose_in, strict_equals

if typing.TYPE_CHECKING:
    from ..enumerable import Collection


class _SetOperations(Generic[T]):
    def unique(self: 'Collection[T]', key: Retriever = None, strict: bool = False) -> 'Collection[T]':
        """drop repeated values (by resolved id), keeping the first occurrence and its key"""
        retrieve = value_retriever(key)
        # a list scan instead of a set: ids may be unhashable or only loosely equal
        seen: List[Any] = []

        def duplicate(item, item_key):
            identifier = retrieve(item, item_key)
            if loose_in(identifier, seen, strict):
                return True
            seen.append(identifier)
            return False

        return self.reject(duplicate)

    def unique_strict(self: 'Collection[T]', key: Retriever = None) -> 'Collection[T]':
        return self.unique(key, True)

    def contains(self: 'Collection[T]', key: Any, operator: Any = MISSING, value: Any = MISSING) -> bool:
        """loose membership, a callback test, or a where()-style comparison"""
        if operator is MISSING and value is MISSING:
            if use_as_callable(key):
                placeholder = _Absent()
                return self.first(key, placeholder) is not placeholder
            return loose_in(key, self._get_data().values())
        return self.contains(OperatorPredicate.from_arguments(key, operator, value))

    def some(self: 'Collection[T]', key: Any, operator: Any = MISSING, value: Any = MISSING) -> bool:
        return self.contains(key, operator, value)

    def contains_strict(self: 'Collection[T]', key: Any, value: Any = MISSING) -> bool:
        if value is not MISSING:
            return self.contains(lambda item: strict_equals(data_get(item, key), value))
        if use_as_callable(key):
            return self.first(key) is not None
        return loose_in(key, self._get_data().values(), strict=True)

    def doesnt_contain(self: 'Collection[T]', key: Any, operator: Any = MISSING, value: Any = MISSING) -> bool:
        return not self.contains(key, operator, value)


class _Absent:
    """default for first() that no stored value can be"""
