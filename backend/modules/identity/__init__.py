"""
Identity module.

Contract and implementations for the external email + password
authentication service.

Public API:
- IIdentityProvider: Interface for identity operations
- Identity: The provider's user record
- IdentityProviderError / ProviderErrorKind: Classified failures
- InMemoryIdentityProvider, SupabaseIdentityProvider: Implementations
"""

from .interfaces import IIdentityProvider
from .models import Identity
from .exceptions import (
    IdentityProviderError,
    ProviderErrorKind,
    PROVIDER_ERROR_MESSAGES,
    user_message,
)
from .provider import InMemoryIdentityProvider, SupabaseIdentityProvider

__all__ = [
    # Interface
    "IIdentityProvider",
    # Models
    "Identity",
    # Exceptions
    "IdentityProviderError",
    "ProviderErrorKind",
    "PROVIDER_ERROR_MESSAGES",
    "user_message",
    # Implementations
    "InMemoryIdentityProvider",
    "SupabaseIdentityProvider",
]
