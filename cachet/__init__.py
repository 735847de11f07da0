from . import _directives as directives
from ._async import *  # noqa: F403
from ._config import DEFAULT
from ._exceptions import CacheError, ConfigurationError, SerializationError, StorageError
from ._models import CacheEvent, Freshness
from ._serializers import BaseSerializer, JSONSerializer, YAMLSerializer
from ._strategies import (
    CACHEABLE_METHODS,
    CACHEABLE_STATUS_CODES,
    AggressiveStrategy,
    BaseStrategy,
    RFC7234Strategy,
)
from ._sync import *  # noqa: F403
from ._utils import BaseClock, Clock, generate_key

__all__ = (
    # Transports and clients
    "AsyncCacheClient",
    "AsyncCacheTransport",
    "CacheClient",
    "CacheTransport",
    "MockAsyncTransport",
    "MockTransport",
    # Storages
    "AsyncBaseStorage",
    "AsyncInMemoryStorage",
    "BaseStorage",
    "InMemoryStorage",
    # Strategies
    "AggressiveStrategy",
    "BaseStrategy",
    "RFC7234Strategy",
    "CACHEABLE_METHODS",
    "CACHEABLE_STATUS_CODES",
    "Freshness",
    # Serializers
    "BaseSerializer",
    "JSONSerializer",
    "YAMLSerializer",
    # Misc
    "BaseClock",
    "CacheEvent",
    "Clock",
    "DEFAULT",
    "directives",
    "generate_key",
    # Exceptions
    "CacheError",
    "ConfigurationError",
    "SerializationError",
    "StorageError",
)

__version__ = "0.1.0"
