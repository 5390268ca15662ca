"""
Authentication module interface.

Callers (a UI layer, the dependency container) depend on
ISessionReconciler, not the concrete implementation.
"""

from typing import Protocol, Optional, runtime_checkable

from shared.observable import Observable

from .models import AuthOutcome


@runtime_checkable
class ISessionReconciler(Protocol):
    """
    Interface for sign-in, sign-up and session lifecycle operations.

    Every operation returns exactly one AuthOutcome. Except for
    InvalidInput, the outcome is also published on ``state``.
    """

    state: Observable[AuthOutcome]
    busy: Observable[bool]

    async def sign_in(self, email: str, password: str) -> AuthOutcome:
        """
        Sign in with email and password.

        Returns:
            Authenticated, ProfileIncomplete, EmailNotVerified, AuthFailed
            or InvalidInput
        """
        ...

    async def sign_up(
        self,
        name: str,
        email: str,
        password: str,
        confirm_password: str,
    ) -> AuthOutcome:
        """
        Create an account, its profile, and send a verification email.

        Returns:
            SignedUp, AuthFailed or InvalidInput
        """
        ...

    async def resend_verification_email(self) -> AuthOutcome:
        ...

    async def check_email_verification(self) -> AuthOutcome:
        ...

    async def send_password_reset(self, email: str) -> AuthOutcome:
        ...

    async def logout(self) -> AuthOutcome:
        ...

    def restore_session(self) -> AuthOutcome:
        ...

    def is_signed_in(self) -> bool:
        ...

    def current_user_id(self) -> Optional[str]:
        ...
