"""
Session cache module.

Local, synchronous storage of who is signed in on this device.

Public API:
- ISessionCache: Interface for the cache
- SessionCacheEntry: The cached record
- InMemorySessionCache, FileSessionCache: Implementations
"""

from .interfaces import ISessionCache
from .models import SessionCacheEntry
from .cache import BaseSessionCache, InMemorySessionCache, FileSessionCache

__all__ = [
    # Interface
    "ISessionCache",
    # Models
    "SessionCacheEntry",
    # Implementations
    "BaseSessionCache",
    "InMemorySessionCache",
    "FileSessionCache",
]
