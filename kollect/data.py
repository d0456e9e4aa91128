"""
nested value access over mappings, sequences, collections and plain objects.

paths are dotted strings ('user.address.0.city') or lists of segments.
'*' fans out over every child, '{first}' and '{last}' pick the first or last
child of the current level.
"""
from __future__ import annotations
import json
from enum import Enum
import numpy as np
import pandas as pd
from .types import *
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence, Iterable
from .contracts import Arrayable, Enumerable, Jsonable, JsonSerializable

_SCALARS = (str, bytes, bytearray, int, float, complex, bool)


def resolve_value(value: Any, *args: Any) -> Any:
    """return the value, calling it first when it is a plain callable"""
    if callable(value) and not isinstance(value, type):
        return value(*args)
    return value


def _segments(key: Any) -> List[Any]:
    if isinstance(key, (list, tuple)):
        return list(key)
    if isinstance(key, str):
        return key.split('.')
    return [key]


def accessible(target: Any) -> bool:
    """can this target be indexed by key?"""
    return isinstance(target, (Mapping, Enumerable)) or _is_sequence(target)


def _is_sequence(target: Any) -> bool:
    return isinstance(target, Sequence) and not isinstance(target, (str, bytes, bytearray))


def _as_mapping(target: Any) -> Optional[Mapping]:
    if isinstance(target, Mapping):
        return target
    if isinstance(target, (pd.Series, pd.DataFrame)):
        return target.to_dict()
    if isinstance(target, Enumerable):
        items = target.all()
        return items if isinstance(items, Mapping) else dict(enumerate(items))
    return None


def _mapping_key(mapping: Mapping, segment: Any) -> Any:
    """find the stored key for a segment, treating '3' and 3 as the same key"""
    if segment in mapping:
        return segment
    if isinstance(segment, str) and segment.lstrip('-').isdigit() and int(segment) in mapping:
        return int(segment)
    if isinstance(segment, int) and not isinstance(segment, bool) and str(segment) in mapping:
        return str(segment)
    return MISSING


def _sequence_index(sequence: Sequence, segment: Any) -> Any:
    if isinstance(segment, bool):
        return MISSING
    if isinstance(segment, str):
        if not segment.isdigit():
            return MISSING
        segment = int(segment)
    if isinstance(segment, int) and 0 <= segment < len(sequence):
        return segment
    return MISSING


def _step(target: Any, segment: Any) -> Tuple[bool, Any]:
    """descend one level; returns (found, child)"""
    mapping = _as_mapping(target)
    if mapping is not None:
        found = _mapping_key(mapping, segment)
        return (False, None) if found is MISSING else (True, mapping[found])
    if _is_sequence(target):
        index = _sequence_index(target, segment)
        return (False, None) if index is MISSING else (True, target[index])
    if target is not None and not isinstance(target, _SCALARS) and isinstance(segment, str) and segment:
        if hasattr(target, segment):
            return True, getattr(target, segment)
    return False, None


def _edge_key(target: Any, segment: Any) -> Any:
    """translate the {first}/{last} placeholders into a concrete key"""
    if segment not in ('{first}', '{last}'):
        if segment == '\\*':
            return '*'
        if segment == '\\{first}':
            return '{first}'
        if segment == '\\{last}':
            return '{last}'
        return segment
    mapping = _as_mapping(target)
    if mapping is not None:
        keys = list(mapping.keys())
    elif _is_sequence(target):
        keys = list(range(len(target)))
    else:
        return segment
    if not keys:
        return None
    return keys[0] if segment == '{first}' else keys[-1]


def _children(target: Any) -> List[Any]:
    mapping = _as_mapping(target)
    if mapping is not None:
        return list(mapping.values())
    return list(target)


def data_get(target: Any, key: Retriever, default: Any = None) -> Any:
    """get an item from nested data using dot notation"""
    if key is None:
        return target

    segments = _segments(key)
    for position, segment in enumerate(segments):
        if segment is None:
            return target

        if segment == '*':
            if not accessible(target):
                return resolve_value(default)
            rest = segments[position + 1:]
            result = [data_get(item, rest) for item in _children(target)]
            return collapse(result) if '*' in rest else result

        segment = _edge_key(target, segment)
        found, target = _step(target, segment)
        if not found:
            return resolve_value(default)

    return target


def data_has(target: Any, key: Retriever) -> bool:
    """check whether the nested path exists, even when it holds None"""
    if key is None or (isinstance(key, (list, tuple)) and not key):
        return False

    for segment in _segments(key):
        found, target = _step(target, _edge_key(target, segment))
        if not found:
            return False
    return True


def data_set(target: Any, key: Retriever, value: Any, overwrite: bool = True) -> Any:
    """
    set an item on nested data using dot notation, creating dicts as needed.
    mutable containers are updated in place; the (possibly new) target is returned.
    """
    if isinstance(target, Enumerable):
        raise TypeError("collections are immutable; build a new one with map() instead")

    segments = _segments(key)
    segment, rest = segments[0], segments[1:]

    if segment == '*':
        if not accessible(target):
            target = []
        if isinstance(target, MutableMapping):
            for inner_key in list(target.keys()):
                if rest:
                    target[inner_key] = data_set(target[inner_key], rest, value, overwrite)
                elif overwrite:
                    target[inner_key] = value
        elif isinstance(target, MutableSequence):
            for index in range(len(target)):
                if rest:
                    target[index] = data_set(target[index], rest, value, overwrite)
                elif overwrite:
                    target[index] = value
        return target

    if isinstance(target, MutableMapping):
        existing = _mapping_key(target, segment)
        slot = segment if existing is MISSING else existing
        if rest:
            target[slot] = data_set(target[slot] if existing is not MISSING else {}, rest, value, overwrite)
        elif overwrite or existing is MISSING:
            target[slot] = value
        return target

    if isinstance(target, MutableSequence):
        index = _sequence_index(target, segment)
        if index is MISSING:
            if str(segment) != str(len(target)):
                raise IndexError(f"cannot set index {segment!r} on a sequence of length {len(target)}")
            target.append({})
            index = len(target) - 1
            if not rest:
                target[index] = value
                return target
        if rest:
            target[index] = data_set(target[index], rest, value, overwrite)
        elif overwrite:
            target[index] = value
        return target

    if target is not None and not isinstance(target, _SCALARS + (tuple,)) and isinstance(segment, str):
        current = getattr(target, segment, None)
        if rest:
            setattr(target, segment, data_set(current if current is not None else {}, rest, value, overwrite))
        elif overwrite or current is None:
            setattr(target, segment, value)
        return target

    fresh: Dict[Any, Any] = {}
    if rest:
        fresh[segment] = data_set({}, rest, value, overwrite)
    elif overwrite:
        fresh[segment] = value
    return fresh


def wrap(value: Any) -> Union[List[Any], Dict[Any, Any]]:
    """make sure the value is a list (or dict); None becomes an empty list"""
    if value is None:
        return []
    if isinstance(value, dict):
        return value
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def collapse(items: Iterable[Any]) -> List[Any]:
    """merge a list of lists/collections into a single flat list, one level deep"""
    result: List[Any] = []
    for item in items:
        if isinstance(item, Enumerable):
            item = item.all()
        if isinstance(item, Mapping):
            result.extend(item.values())
        elif isinstance(item, (list, tuple)):
            result.extend(item)
    return result


def arrayable_items(items: Any) -> Dict[ArrayKey, Any]:
    """normalize anything collection-like into an ordered key -> value dict"""
    if items is None:
        return {}
    # pandas and numpy objects look like collections and json documents structurally
    if isinstance(items, pd.DataFrame):
        return dict(zip(items.index.tolist(), items.to_dict('records')))
    if isinstance(items, pd.Series):
        return dict(zip(items.index.tolist(), items.tolist()))
    if isinstance(items, np.ndarray):
        return dict(enumerate(items.tolist()))
    if isinstance(items, Enumerable):
        return arrayable_items(items.all())
    if isinstance(items, Mapping):
        return dict(items)
    if isinstance(items, _SCALARS) or isinstance(items, Enum):
        return {0: items}
    if isinstance(items, Arrayable):
        return arrayable_items(items.to_array())
    if isinstance(items, Jsonable):
        return arrayable_items(json.loads(items.to_json()))
    if isinstance(items, JsonSerializable):
        return arrayable_items(items.json_serialize())
    if isinstance(items, Iterable):
        return dict(enumerate(items))
    return {0: items}


def arrayable_values(items: Any) -> List[Any]:
    """the values of a candidate set (where_in, where_between ...) as a list"""
    return list(arrayable_items(items).values())
