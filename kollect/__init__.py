"""
'   __ ______  __    __    ______ ______ ______
'  / //_/ __ \/ /   / /   / ____// ____//_  __/
' / ,< / / / / /   / /   / __/  / /      / /
'/ /| / /_/ / /___/ /___/ /___ / /___   / /
'/_/ |_\____/_____/_____/_____/ \____/  /_/
"""
import logging

# expose the main classes
from .enumerable import Collection, DEFAULT_PROXIES

# expose the factory functions
from .factories import (
    make,
    collect,
    wrap,
    unwrap,
    empty,
    times,
    from_range,
    from_json,
    repeat
)

# expose the extension points
from .macros import Macroable, MacroRegistry, ProxyRegistry
from .operators import OperatorPredicate, loose_equals, loose_compare, strict_equals
from .proxy import HigherOrderCollectionProxy, HigherOrderWhenProxy
from .contracts import Arrayable, Enumerable, Jsonable, JsonSerializable
from .data import data_get, data_has, data_set
from .types import MISSING
from .config import Settings, configure, configure_logging

# expose the errors
from .errors import (
    CollectionError,
    UnknownOperationError,
    UndeclaredProxyPropertyError,
    TypeMismatchError,
    ReduceShapeError
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

# define what `import *` does
__all__ = [
    "Collection",
    "DEFAULT_PROXIES",
    "make",
    "collect",
    "wrap",
    "unwrap",
    "empty",
    "times",
    "from_range",
    "from_json",
    "repeat",
    "Macroable",
    "MacroRegistry",
    "ProxyRegistry",
    "OperatorPredicate",
    "loose_equals",
    "loose_compare",
    "strict_equals",
    "HigherOrderCollectionProxy",
    "HigherOrderWhenProxy",
    "Arrayable",
    "Enumerable",
    "Jsonable",
    "JsonSerializable",
    "data_get",
    "data_has",
    "data_set",
    "MISSING",
    "Settings",
    "configure",
    "configure_logging",
    "CollectionError",
    "UnknownOperationError",
    "UndeclaredProxyPropertyError",
    "TypeMismatchError",
    "ReduceShapeError"
]
