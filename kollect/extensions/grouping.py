from __future__ import annotations
import typing
from collections.abc import Mapping
from ..types import *
from ..contracts import Enumerable
from ..helpers import accepting, value_retriever, enum_value
from ..operators import operator_for_where, truthy

if typing.TYPE_CHECKING:
    from ..enumerable import Collection


def _group_key(key: Any) -> ArrayKey:
    """normalize a resolved group key into something usable as a collection key"""
    key = enum_value(key)
    if key is None:
        return ''
    if isinstance(key, bool):
        return int(key)
    if isinstance(key, float) and key.is_integer():
        return int(key)
    return key


class _GroupingOperations(Generic[T]):
    def partition(self: 'Collection[T]', key: Any, operator: Any = MISSING, value: Any = MISSING) -> 'Collection[Collection[T]]':
        """split into [passed, failed] in a single pass; both halves keep their keys"""
        if operator is MISSING and value is MISSING:
            test = value_retriever(key)
        else:
            test = operator_for_where(key, operator, value)

        passed: Dict[ArrayKey, T] = {}
        failed: Dict[ArrayKey, T] = {}
        for item_key, item in self._get_data().items():
            if truthy(test(item, item_key)):
                passed[item_key] = item
            else:
                failed[item_key] = item
        return self._new([self._new(passed), self._new(failed)])

    def group_by(self: 'Collection[T]', group_by: Any, preserve_keys: bool = False) -> 'Collection[Collection[T]]':
        """
        group values by a key path or callback. a list of group keys nests the
        groups one level per entry; a callback returning a list puts the value
        in several groups.
        """
        if isinstance(group_by, (list, tuple)) and group_by:
            current, rest = group_by[0], list(group_by[1:])
        else:
            current, rest = group_by, []

        retrieve = value_retriever(current)
        groups: Dict[ArrayKey, Dict[ArrayKey, T]] = {}
        for key, value in self._get_data().items():
            group_keys = retrieve(value, key)
            if not isinstance(group_keys, (list, tuple)):
                group_keys = [group_keys]
            for group_key in group_keys:
                bucket = groups.setdefault(_group_key(group_key), {})
                bucket[key if preserve_keys else len(bucket)] = value

        result = self._new({group_key: self._new(bucket) for group_key, bucket in groups.items()})
        if rest:
            return result.map(lambda group: group.group_by(rest, preserve_keys))
        return result

    def key_by(self: 'Collection[T]', key_by: Retriever) -> 'Collection[T]':
        """re-key the values by a key path or callback; later values win"""
        retrieve = value_retriever(key_by)
        result: Dict[ArrayKey, T] = {}
        for key, value in self._get_data().items():
            result[_group_key(retrieve(value, key))] = value
        return self._new(result)

    def chunk(self: 'Collection[T]', size: int) -> 'Collection[Collection[T]]':
        """split into collections of `size` entries, keys preserved"""
        if size <= 0:
            return self._new()
        pairs = list(self._get_data().items())
        return self._new([self._new(dict(pairs[start:start + size])) for start in range(0, len(pairs), size)])

    def map_to_dictionary(self: 'Collection[T]', callback: Callable[..., Mapping]) -> 'Collection[List[Any]]':
        """
        the callback returns a single {group: value} pair per entry; values
        sharing a group are collected into a list in source order.
        """
        project = accepting(callback, 2)
        dictionary: Dict[ArrayKey, List[Any]] = {}
        for key, value in self._get_data().items():
            pair = project(value, key)
            if isinstance(pair, Enumerable):
                pair = pair.all()
            if not isinstance(pair, Mapping) or len(pair) != 1:
                raise ValueError(
                    f"map_to_dictionary callback must return a mapping with exactly one pair, got {pair!r}"
                )
            (group, grouped), = pair.items()
            dictionary.setdefault(group, []).append(grouped)
        return self._new(dictionary)

    def map_to_groups(self: 'Collection[T]', callback: Callable[..., Mapping]) -> 'Collection[Collection[Any]]':
        return self.map_to_dictionary(callback).map(type(self).make)
