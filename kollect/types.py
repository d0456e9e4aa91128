from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    Dict, List, Tuple, Set, Type, Mapping, Sequence
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')

# collection keys live in the "array key" domain
ArrayKey = Union[int, str]

Predicate = Callable[..., bool]
Selector = Callable[..., U]
KeySelector = Callable[..., K]
Comparer = Callable[[T, T], int]
Accumulator = Callable[..., U]

# a key path, a callable retriever, or nothing (the item itself)
Retriever = Union[str, int, Sequence[Union[str, int]], Callable[..., Any], None]


class _Missing:
    """marker for an argument the caller did not pass (distinct from None)"""

    _instance: Optional['_Missing'] = None

    def __new__(cls) -> '_Missing':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __reduce__(self):
        return (_Missing, ())


MISSING: Any = _Missing()
