from __future__ import annotations
import typing
from ..types import *
from ..config import get_settings
from ..helpers import value_retriever, to_number, round_half_up
from ..operators import loose_compare

if typing.TYPE_CHECKING:
    from ..enumerable import Collection


class _AggregateOperations(Generic[T]):
    def avg(self: 'Collection[T]', callback: Retriever = None) -> Optional[float]:
        """mean of the non-null resolved values, None when there are none"""
        retrieve = value_retriever(callback)

        def accumulate(reduced, value, key):
            resolved = retrieve(value, key)
            if resolved is not None:
                reduced[0] += to_number(resolved)
                reduced[1] += 1
            return reduced

        total, count = self.reduce(accumulate, [0, 0])
        return total / count if count else None

    def average(self: 'Collection[T]', callback: Retriever = None) -> Optional[float]:
        return self.avg(callback)

    def sum(self: 'Collection[T]', callback: Retriever = None) -> Union[int, float]:
        """sum of the non-null resolved values; numeric strings and bools count as numbers"""
        retrieve = value_retriever(callback)

        def add(result, value, key):
            resolved = retrieve(value, key)
            return result if resolved is None else result + to_number(resolved)

        return self.reduce(add, 0)

    def min(self: 'Collection[T]', callback: Retriever = None) -> Any:
        return self._extreme(callback, lambda candidate, best: loose_compare(candidate, best) < 0)

    def max(self: 'Collection[T]', callback: Retriever = None) -> Any:
        return self._extreme(callback, lambda candidate, best: loose_compare(candidate, best) > 0)

    def _extreme(self: 'Collection[T]', callback: Retriever, better: Callable[[Any, Any], bool]) -> Any:
        # null values never take part, so an all-null collection has no extreme
        return (self.map(value_retriever(callback))
                    .reject(lambda value: value is None)
                    .reduce(lambda result, value: value if result is None or better(value, result) else result))

    def percentage(self: 'Collection[T]', callback: Predicate, precision: Optional[int] = None) -> Optional[float]:
        """share of entries passing the callback, in percent"""
        if self.is_empty():
            return None
        if precision is None:
            precision = get_settings().percentage_precision
        return round_half_up(self.filter(callback).count() / self.count() * 100, precision)
