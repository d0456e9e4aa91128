import typing
from .types import *

if typing.TYPE_CHECKING:
    from .enumerable import Collection

def make(items: Any = None) -> 'Collection[Any]':
    """create a collection from anything collection-like"""
    from .enumerable import Collection
    return Collection.make(items)

def wrap(value: Any) -> 'Collection[Any]':
    """create a collection from a value, wrapping it when it is not a list or dict"""
    from .enumerable import Collection
    return Collection.wrap(value)

def unwrap(value: Any) -> Any:
    """get the plain items back out of a collection"""
    from .enumerable import Collection
    return Collection.unwrap(value)

def empty() -> 'Collection[Any]':
    """create empty collection"""
    from .enumerable import Collection
    return Collection.empty()

def times(number: int, callback: Optional[Callable[..., T]] = None) -> 'Collection[T]':
    """create collection of 1..number, mapped through callback when given"""
    from .enumerable import Collection
    return Collection.times(number, callback)

def from_range(start: int, end: int, step: int = 1) -> 'Collection[int]':
    """create collection of the integers from start to end inclusive"""
    from .enumerable import Collection
    return Collection.range(start, end, step)

def from_json(text: Union[str, bytes], depth: Optional[int] = None, **options: Any) -> 'Collection[Any]':
    """create collection from a json document"""
    from .enumerable import Collection
    return Collection.from_json(text, depth, **options)

def repeat(item: T, count: int) -> 'Collection[T]':
    """create collection with repeated item"""
    from .enumerable import Collection
    return Collection([item] * count)

# the collect() helper is the usual entry point
collect = make
