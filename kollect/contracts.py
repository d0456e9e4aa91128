from __future__ import annotations
from abc import ABC, abstractmethod
from .types import *


def _exposes(klass: type, *names: str) -> bool:
    """true when every name resolves to a non-None attribute somewhere in the mro"""
    for name in names:
        for base in klass.__mro__:
            if name in base.__dict__:
                if base.__dict__[name] is None:
                    return False
                break
        else:
            return False
    return True


class Arrayable(ABC):
    """anything that can turn itself into plain lists and dicts"""

    @abstractmethod
    def to_array(self) -> Union[List[Any], Dict[Any, Any]]:
        pass

    @classmethod
    def __subclasshook__(cls, klass):
        if cls is Arrayable:
            return _exposes(klass, 'to_array')
        return NotImplemented


class Jsonable(ABC):
    """anything that can render itself as a json document"""

    @abstractmethod
    def to_json(self, **options: Any) -> str:
        pass

    @classmethod
    def __subclasshook__(cls, klass):
        if cls is Jsonable:
            return _exposes(klass, 'to_json')
        return NotImplemented


class JsonSerializable(ABC):
    """anything that can produce a json-ready structure"""

    @abstractmethod
    def json_serialize(self) -> Any:
        pass

    @classmethod
    def __subclasshook__(cls, klass):
        if cls is JsonSerializable:
            return _exposes(klass, 'json_serialize')
        return NotImplemented


class Enumerable(ABC, Generic[T]):
    """anything iterable that can hand over all of its items at once"""

    @abstractmethod
    def all(self) -> Any:
        """get every item, keyed"""
        pass

    @abstractmethod
    def __iter__(self) -> Iterator[T]:
        pass

    @classmethod
    def __subclasshook__(cls, klass):
        if cls is Enumerable:
            return _exposes(klass, 'all', '__iter__')
        return NotImplemented
