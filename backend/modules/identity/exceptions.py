"""
Identity provider exceptions.

Every failure of an identity provider call is raised as an
``IdentityProviderError`` whose ``kind`` selects the user-facing message.
"""

from enum import Enum
from typing import Optional

from shared.exceptions import ExternalServiceError


class ProviderErrorKind(str, Enum):
    """Classified identity provider failures."""

    NO_SUCH_USER = "no_such_user"
    BAD_CREDENTIALS = "bad_credentials"
    WEAK_PASSWORD = "weak_password"
    EMAIL_TAKEN = "email_taken"
    INVALID_EMAIL_FORMAT = "invalid_email_format"
    RATE_LIMITED = "rate_limited"
    NETWORK = "network"
    EMAIL_NOT_VERIFIED = "email_not_verified"
    NO_USER_SIGNED_IN = "no_user_signed_in"
    UNKNOWN = "unknown"


DEFAULT_ERROR_MESSAGE = "Something went wrong. Please try again."

PROVIDER_ERROR_MESSAGES: dict[ProviderErrorKind, str] = {
    ProviderErrorKind.NO_SUCH_USER: "No account found with this email.",
    ProviderErrorKind.BAD_CREDENTIALS: "Invalid email or password.",
    ProviderErrorKind.WEAK_PASSWORD: (
        "Password is too weak. Use at least 8 characters with uppercase and numbers."
    ),
    ProviderErrorKind.EMAIL_TAKEN: "This email is already registered. Try logging in instead.",
    ProviderErrorKind.INVALID_EMAIL_FORMAT: "Invalid email format. Please check your email.",
    ProviderErrorKind.RATE_LIMITED: "Too many attempts. Please try again later.",
    ProviderErrorKind.NETWORK: "Network error. Please check your internet connection.",
    ProviderErrorKind.EMAIL_NOT_VERIFIED: "Please verify your email before signing in.",
    ProviderErrorKind.NO_USER_SIGNED_IN: "No user is signed in.",
}


def user_message(kind: ProviderErrorKind, raw_message: Optional[str] = None) -> str:
    """
    Map a failure kind to the message shown to the user.

    ``UNKNOWN`` falls back to the provider's raw message, then to a generic one.
    """
    if kind in PROVIDER_ERROR_MESSAGES:
        return PROVIDER_ERROR_MESSAGES[kind]
    return raw_message or DEFAULT_ERROR_MESSAGE


class IdentityProviderError(ExternalServiceError):
    """Raised by identity provider implementations for any failed call."""

    def __init__(self, kind: ProviderErrorKind, raw_message: Optional[str] = None):
        super().__init__(
            user_message(kind, raw_message),
            service="identity",
            code=kind.value.upper(),
            details={"kind": kind.value, "raw_message": raw_message},
        )
        self.kind = kind
        self.raw_message = raw_message
