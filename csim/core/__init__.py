"""Cache model package shim.

Exposes the main classes at `csim.core` so callers can write
``from csim.core import Cache, CacheConfig``.
"""
from .cache import Cache, CacheLine, CacheSet, LOAD, STORE
from .config import CacheConfig
from .errors import (CacheSimError, ConfigurationError, MalformedRecord,
                     ResourceExhausted, SourceUnavailable)
from .simulator import CacheSimulator

__all__ = [
    "Cache", "CacheLine", "CacheSet", "LOAD", "STORE", "CacheConfig", "CacheSimulator",
    "CacheSimError", "ConfigurationError", "MalformedRecord", "ResourceExhausted",
    "SourceUnavailable",
]
