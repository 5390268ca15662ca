"""
Authentication module.

Reconciles the identity provider, the profile store and the local session
cache for the sign-in and sign-up flows.

Public API:
- ISessionReconciler: Interface for session operations
- SessionReconciler: The implementation
- AuthOutcome and its variants: Operation results
"""

from .interfaces import ISessionReconciler
from .models import (
    AuthFailed,
    AuthOutcome,
    AuthOutcomeType,
    Authenticated,
    EmailNotVerified,
    Idle,
    InvalidInput,
    PasswordResetSent,
    ProfileIncomplete,
    SignedUp,
    VerificationEmailSent,
)
from .service import SessionReconciler

__all__ = [
    # Interface
    "ISessionReconciler",
    # Outcomes
    "AuthOutcome",
    "AuthOutcomeType",
    "Idle",
    "Authenticated",
    "SignedUp",
    "ProfileIncomplete",
    "EmailNotVerified",
    "VerificationEmailSent",
    "PasswordResetSent",
    "AuthFailed",
    "InvalidInput",
    # Implementation
    "SessionReconciler",
]
