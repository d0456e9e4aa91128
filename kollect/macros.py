"""
runtime method registration ("macros") for classes.

a class mixing in Macroable owns a MacroRegistry; every subclass gets its own
registry chained to its parent's, so subclasses see inherited macros while
flush_macros() only ever clears the class it is called on.

registries are plain process-wide objects meant to be filled during start-up
and read afterwards. nothing here takes a lock: callers that register macros
from several threads at once must serialize those writes themselves.
"""
from __future__ import annotations
import types
import logging
from abc import ABCMeta
from dataclasses import dataclass
from .types import *
from .errors import UnknownOperationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Macro:
    """a registered operation; bindable ones receive the instance as first argument"""
    name: str
    target: Callable[..., Any]
    bindable: bool


class _ScopedRegistry:
    """name-keyed table with read-through to a parent table"""

    def __init__(self, owner: str, parent: Optional['_ScopedRegistry'] = None):
        self.owner = owner
        self.parent = parent
        self._entries: Dict[str, Any] = {}

    def _lookup(self, name: str) -> Any:
        registry = self
        while registry is not None:
            if name in registry._entries:
                return registry._entries[name]
            registry = registry.parent
        return None

    def has(self, name: str) -> bool:
        return self._lookup(name) is not None

    def clear(self) -> None:
        self._entries.clear()

    def names(self) -> List[str]:
        inherited = self.parent.names() if self.parent is not None else []
        return inherited + [name for name in self._entries if name not in inherited]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __len__(self) -> int:
        return len(self.names())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(owner={self.owner}, entries={len(self._entries)})"


class MacroRegistry(_ScopedRegistry):
    """method name -> Macro"""

    def register(self, name: str, macro: Callable[..., Any], bindable: Optional[bool] = None) -> Macro:
        if not callable(macro):
            raise TypeError(f"macro '{name}' must be callable, got {type(macro).__name__}")
        if bindable is None:
            # plain functions and lambdas are bound to the receiver, other callables run as-is
            bindable = isinstance(macro, types.FunctionType)
        entry = Macro(name, macro, bindable)
        self._entries[name] = entry
        logger.debug(f"macro '{name}' registered on {self.owner} (bindable={bindable})")
        return entry

    def get(self, name: str) -> Optional[Macro]:
        return self._lookup(name)


class ProxyRegistry(_ScopedRegistry):
    """allow-list of operation names usable through a higher-order proxy"""

    def __init__(self, owner: str, parent: Optional['ProxyRegistry'] = None, names: Iterable[str] = ()):
        super().__init__(owner, parent)
        for name in names:
            self._entries[name] = True

    def register(self, name: str) -> None:
        self._entries[name] = True
        logger.debug(f"proxy '{name}' registered on {self.owner}")


def _is_dunder(name: str) -> bool:
    return name.startswith('__') and name.endswith('__')


class MacroableMeta(ABCMeta):
    """resolves unknown class attributes (static calls) against the macro registry"""

    def __getattr__(cls, name: str) -> Any:
        if _is_dunder(name):
            raise AttributeError(name)
        macro = cls._macros.get(name)
        if macro is None:
            raise UnknownOperationError(cls.__name__, name)
        # static calls get no bound receiver
        return macro.target


class Macroable(metaclass=MacroableMeta):
    """lets a class gain methods after its definition"""

    _macros: MacroRegistry = MacroRegistry('Macroable')

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._macros = MacroRegistry(cls.__name__, parent=cls._macros)

    @classmethod
    def macro(cls, name: str, macro: Callable[..., Any]) -> None:
        """register a custom operation; the last registration of a name wins"""
        cls._macros.register(name, macro)

    @classmethod
    def mixin(cls, source: Any, replace: bool = True) -> None:
        """
        copy every public and protected method of `source` (a class or an
        instance) into the registry. plain methods are bound to the receiving
        object when called, static methods run unbound and class methods stay
        bound to the source class.
        """
        klass = source if isinstance(source, type) else type(source)
        seen: Set[str] = set()
        imported = 0
        for base in klass.__mro__:
            if base is object:
                continue
            private_prefix = f"_{base.__name__.lstrip('_')}__"
            for name, attribute in vars(base).items():
                if name in seen or _is_dunder(name) or name.startswith(private_prefix):
                    continue
                seen.add(name)
                if isinstance(attribute, staticmethod):
                    target, bindable = attribute.__func__, False
                elif isinstance(attribute, classmethod):
                    target, bindable = getattr(klass, name), False
                elif isinstance(attribute, types.FunctionType):
                    target, bindable = attribute, True
                else:
                    continue
                if replace or not cls.has_macro(name):
                    cls._macros.register(name, target, bindable)
                    imported += 1
        logger.debug(f"mixin {klass.__name__} imported {imported} macro(s) into {cls.__name__}")

    @classmethod
    def has_macro(cls, name: str) -> bool:
        return cls._macros.has(name)

    @classmethod
    def flush_macros(cls) -> None:
        """forget the macros registered on this class (inherited ones stay)"""
        cls._macros.clear()
        logger.debug(f"macros flushed on {cls.__name__}")

    @classmethod
    def macro_registry(cls) -> MacroRegistry:
        return cls._macros

    @classmethod
    def swap_macros(cls, registry: MacroRegistry) -> MacroRegistry:
        """install another registry (e.g. an isolated one in tests); returns the previous one"""
        previous = cls._macros
        cls._macros = registry
        logger.debug(f"macro registry swapped on {cls.__name__}")
        return previous

    def __getattr__(self, name: str) -> Any:
        if _is_dunder(name):
            raise AttributeError(name)
        macro = type(self)._macros.get(name)
        if macro is None:
            raise UnknownOperationError(type(self).__name__, name)
        if macro.bindable:
            return types.MethodType(macro.target, self)
        return macro.target
