from __future__ import annotations
import json
import html
import typing
import numpy as np
import pandas as pd
from ..types import *
from ..config import get_settings
from ..contracts import Arrayable, Jsonable, JsonSerializable
from ..helpers import enum_value

if typing.TYPE_CHECKING:
    from ..enumerable import Collection


def _shaped(data: Dict[ArrayKey, Any]) -> Union[List[Any], Dict[ArrayKey, Any]]:
    """a list when the keys run 0..n-1 in order, the dict otherwise"""
    if all(key == index and type(key) is int for index, key in enumerate(data)):
        return list(data.values())
    return data


def _serializable(value: Any) -> Any:
    if isinstance(value, JsonSerializable):
        return value.json_serialize()
    if isinstance(value, Jsonable):
        return json.loads(value.to_json())
    if isinstance(value, Arrayable):
        return value.to_array()
    return enum_value(value)


class _TerminalOperations(Generic[T]):
    """conversions that leave the collection world"""

    def to_list(self: 'Collection[T]') -> List[T]:
        return list(self._get_data().values())

    def to_array(self: 'Collection[T]') -> Union[List[Any], Dict[ArrayKey, Any]]:
        """plain lists/dicts all the way down"""
        data = self._get_data()
        return _shaped({key: value.to_array() if isinstance(value, Arrayable) else value
                        for key, value in data.items()})

    def json_serialize(self: 'Collection[T]') -> Union[List[Any], Dict[ArrayKey, Any]]:
        return _shaped({key: _serializable(value) for key, value in self._get_data().items()})

    def to_json(self: 'Collection[T]', **options: Any) -> str:
        options.setdefault('separators', get_settings().json_separators)
        return json.dumps(self.json_serialize(), **options)

    def to_pretty_json(self: 'Collection[T]', **options: Any) -> str:
        options.setdefault('indent', get_settings().pretty_indent)
        options.setdefault('separators', (',', ': '))
        return self.to_json(**options)

    def escape_when_casting_to_string(self: 'Collection[T]', escape: bool = True) -> 'Collection[T]':
        """html-escape the json form produced by str()"""
        self._escape_when_casting_to_string = escape
        return self

    def __str__(self) -> str:
        text = self.to_json()
        return html.escape(text) if self._escape_when_casting_to_string else text

    # numpy / pandas

    def to_numpy(self: 'Collection[T]', dtype: Any = None) -> np.ndarray:
        return np.array(self.to_list(), dtype=dtype)

    def to_series(self: 'Collection[T]', name: Optional[str] = None) -> pd.Series:
        """values indexed by the collection keys"""
        data = self._get_data()
        return pd.Series(list(data.values()), index=list(data.keys()), name=name, dtype=object if not data else None)

    def to_frame(self: 'Collection[T]') -> pd.DataFrame:
        """one row per record (dicts or objects exposing to_array)"""
        data = self._get_data()
        rows = [value.to_array() if isinstance(value, Arrayable) else value for value in data.values()]
        return pd.DataFrame(rows, index=list(data.keys()))
