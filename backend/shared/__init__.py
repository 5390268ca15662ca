"""
Shared infrastructure for the SkillSwap backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- logging: Root logger setup
- observable: Subscribe/notify value holder used by the reconcilers

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .exceptions import (
    SkillSwapError,
    NotFoundError,
    ExternalServiceError,
)
from .logging import setup_logging
from .observable import Observable, busy_scope

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "SkillSwapError",
    "NotFoundError",
    "ExternalServiceError",
    "setup_logging",
    "Observable",
    "busy_scope",
]
