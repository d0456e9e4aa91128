from __future__ import annotations
import typing
import pydoc
from collections.abc import Mapping
from .types import *
from .operators import truthy

if typing.TYPE_CHECKING:
    from .enumerable import Collection


def _member(value: Any, name: Any) -> Any:
    """read a member off an element: subscript for dicts/lists, attribute otherwise"""
    if isinstance(value, (Mapping, list, tuple)):
        return value[name]
    return getattr(value, name)


def _call_member(value: Any, method: str, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Any:
    """
    call a method on an element. a str element names a class or module to call
    statically; the string's own method is used only when that name does not
    resolve to something with the method.
    """
    if isinstance(value, str):
        target = pydoc.locate(value) if value else None
        if target is not None and hasattr(target, method):
            return getattr(target, method)(*args, **kwargs)
        if not hasattr(value, method):
            raise LookupError(f"cannot resolve '{value}' to a class for a static call to {method}()")
    return getattr(value, method)(*args, **kwargs)


class HigherOrderCollectionProxy(Generic[T]):
    """
    runs one collection operation with a callback built from a member access.
    `collection.higher.map.name` is `collection.map(lambda v: v.name)` and
    `collection.higher.each.call('save')` is `collection.each(lambda v: v.save())`.
    """

    __slots__ = ('_collection', '_method')

    def __init__(self, collection: 'Collection[T]', method: str):
        self._collection = collection
        self._method = method

    @property
    def method(self) -> str:
        return self._method

    def get(self, key: Any) -> Any:
        """proxy a property (or dict key / list index) read on every element"""
        return getattr(self._collection, self._method)(lambda value: _member(value, key))

    def call(self, method: str, *args: Any, **kwargs: Any) -> Any:
        """proxy a method call on every element"""
        return getattr(self._collection, self._method)(lambda value: _call_member(value, method, args, kwargs))

    def __getattr__(self, key: str) -> Any:
        if key.startswith('__') and key.endswith('__'):
            raise AttributeError(key)
        return self.get(key)

    def __getitem__(self, key: Any) -> Any:
        return self.get(key)

    def __repr__(self) -> str:
        return f"HigherOrderCollectionProxy(method={self._method})"


class HigherOrderAccessor(Generic[T]):
    """attribute sugar over Collection.higher_order(): `collection.higher.map`"""

    __slots__ = ('_collection',)

    def __init__(self, collection: 'Collection[T]'):
        self._collection = collection

    def __getattr__(self, name: str) -> HigherOrderCollectionProxy[T]:
        if name.startswith('__') and name.endswith('__'):
            raise AttributeError(name)
        return self._collection.higher_order(name)

    def __getitem__(self, name: str) -> HigherOrderCollectionProxy[T]:
        return self._collection.higher_order(name)

    def __dir__(self) -> List[str]:
        return self._collection.proxies()


class HigherOrderWhenProxy(Generic[T]):
    """
    deferred condition for when()/unless() called without callbacks.

    the first member used on the proxy before a condition is known supplies the
    condition; after that, members forward to the target when the condition
    holds and otherwise hand back the target untouched.
    """

    def __init__(self, target: Any):
        self._target = target
        self._condition: Any = None
        self._has_condition = False
        self._negate_on_capture = False

    @property
    def target(self) -> Any:
        return self._target

    @property
    def has_condition(self) -> bool:
        return self._has_condition

    def condition(self, value: Any) -> 'HigherOrderWhenProxy[T]':
        self._condition, self._has_condition = value, True
        return self

    def negate_condition_on_capture(self) -> 'HigherOrderWhenProxy[T]':
        self._negate_on_capture = True
        return self

    def _capture(self, value: Any) -> 'HigherOrderWhenProxy[T]':
        return self.condition(not truthy(value) if self._negate_on_capture else value)

    def __getattr__(self, name: str) -> Any:
        if name.startswith('_'):
            raise AttributeError(name)

        member = getattr(self._target, name)

        if not self._has_condition:
            if callable(member):
                return lambda *args, **kwargs: self._capture(member(*args, **kwargs))
            return self._capture(member)

        if truthy(self._condition):
            return member
        if callable(member):
            return lambda *args, **kwargs: self._target
        return self._target

    def __repr__(self) -> str:
        state = repr(self._condition) if self._has_condition else 'pending'
        return f"HigherOrderWhenProxy(condition={state})"
