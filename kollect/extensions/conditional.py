from __future__ import annotations
import typing
from ..types import *
from ..helpers import accepting, use_as_callable
from ..operators import truthy
from ..proxy import HigherOrderWhenProxy

if typing.TYPE_CHECKING:
    from ..enumerable import Collection


def _resolve(value: Any, target: Any) -> Any:
    """a callable condition is called with the collection, if it takes an argument"""
    if use_as_callable(value) and not isinstance(value, type):
        return accepting(value, 1, minimum=0)(target)
    return value


def _apply(target: Any, callback: Callable[..., Any], value: Any) -> Any:
    result = accepting(callback, 2)(target, value)
    return target if result is None else result


class _ConditionalOperations(Generic[T]):
    def when(self: 'Collection[T]', value: Any = MISSING, callback: Optional[Callable[..., Any]] = None,
             default: Optional[Callable[..., Any]] = None) -> Any:
        """
        run `callback(collection, value)` when the value is truthy, `default`
        otherwise. without callbacks a HigherOrderWhenProxy is returned:
        `c.when(flag).map(fn)` maps only when `flag` holds, and `c.when().is_empty()`
        captures the condition from the next call.
        """
        if value is MISSING:
            return HigherOrderWhenProxy(self)

        value = _resolve(value, self)

        if callback is None and default is None:
            return HigherOrderWhenProxy(self).condition(truthy(value))

        if truthy(value):
            return self if callback is None else _apply(self, callback, value)
        if default is not None:
            return _apply(self, default, value)
        return self

    def unless(self: 'Collection[T]', value: Any = MISSING, callback: Optional[Callable[..., Any]] = None,
               default: Optional[Callable[..., Any]] = None) -> Any:
        """the inverse of when()"""
        if value is MISSING:
            return HigherOrderWhenProxy(self).negate_condition_on_capture()

        value = _resolve(value, self)

        if callback is None and default is None:
            return HigherOrderWhenProxy(self).condition(not truthy(value))

        if not truthy(value):
            return self if callback is None else _apply(self, callback, value)
        if default is not None:
            return _apply(self, default, value)
        return self

    def when_empty(self: 'Collection[T]', callback: Callable[..., Any], default: Optional[Callable[..., Any]] = None) -> Any:
        return self.when(self.is_empty(), callback, default)

    def when_not_empty(self: 'Collection[T]', callback: Callable[..., Any], default: Optional[Callable[..., Any]] = None) -> Any:
        return self.when(self.is_not_empty(), callback, default)

    def unless_empty(self: 'Collection[T]', callback: Callable[..., Any], default: Optional[Callable[..., Any]] = None) -> Any:
        return self.when_not_empty(callback, default)

    def unless_not_empty(self: 'Collection[T]', callback: Callable[..., Any], default: Optional[Callable[..., Any]] = None) -> Any:
        return self.when_empty(callback, default)
