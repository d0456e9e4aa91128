"""
structural errors raised by the collection engine.

every error is raised synchronously from the call that detected it and carries
its details as attributes, so callers never have to parse messages.
"""
from typing import Any, Optional, Sequence, Tuple


class CollectionError(Exception):
    """base class for every error raised by kollect."""


class UnknownOperationError(CollectionError, AttributeError):
    """an instance or class call matched neither a declared method nor a macro."""

    def __init__(self, type_name: str, method: str):
        self.type_name = type_name
        self.method = method
        super().__init__(f"Method {type_name}.{method} does not exist.")


class UndeclaredProxyPropertyError(CollectionError, AttributeError):
    """a higher-order access named an operation missing from the proxy allow-list."""

    def __init__(self, name: str, type_name: str = "Collection"):
        self.name = name
        self.type_name = type_name
        super().__init__(f"Property [{name}] does not exist on this {type_name} instance.")


class TypeMismatchError(CollectionError, TypeError):
    """raised by ensure() on the first element whose type is not allowed."""

    def __init__(self, allowed: Sequence[Any], observed: str, index: Any):
        self.allowed: Tuple[Any, ...] = tuple(allowed)
        self.observed = observed
        self.index = index
        names = ', '.join(a if isinstance(a, str) else getattr(a, '__name__', repr(a)) for a in self.allowed)
        super().__init__(
            f"Collection should only include [{names}] items, but '{observed}' found at position {index!r}."
        )


class ReduceShapeError(CollectionError, TypeError):
    """the reduce_spread reducer returned something other than one value per accumulator."""

    def __init__(self, observed: str, type_name: str = "Collection", expected: Optional[int] = None):
        self.observed = observed
        self.type_name = type_name
        self.expected = expected
        shape = "a list or tuple" if expected is None else f"a list or tuple of {expected} values"
        super().__init__(
            f"{type_name}.reduce_spread expects the reducer to return {shape}, but got '{observed}' instead."
        )
