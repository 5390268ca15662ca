"""
Authentication module data models.

These models define the outcomes the session reconciler reports to its
callers. Each variant is a frozen model tagged by ``type``.
"""

from enum import Enum
from typing import Annotated, Literal, Union
from pydantic import BaseModel, Field

from modules.validation import FieldViolation


class AuthOutcomeType(str, Enum):
    """Kinds of outcome a session operation can end in."""

    IDLE = "idle"
    AUTHENTICATED = "authenticated"
    SIGNED_UP = "signed_up"
    PROFILE_INCOMPLETE = "profile_incomplete"
    EMAIL_NOT_VERIFIED = "email_not_verified"
    VERIFICATION_EMAIL_SENT = "verification_email_sent"
    PASSWORD_RESET_SENT = "password_reset_sent"
    FAILED = "failed"
    INVALID_INPUT = "invalid_input"


class Idle(BaseModel):
    """No operation has completed, or the user logged out."""

    type: Literal[AuthOutcomeType.IDLE] = AuthOutcomeType.IDLE

    model_config = {"frozen": True}


class Authenticated(BaseModel):
    """Signed in with a verified email."""

    type: Literal[AuthOutcomeType.AUTHENTICATED] = AuthOutcomeType.AUTHENTICATED
    user_id: str = Field(..., description="Identity ID")

    model_config = {"frozen": True}


class SignedUp(BaseModel):
    """Account created; the verification email may or may not have gone out."""

    type: Literal[AuthOutcomeType.SIGNED_UP] = AuthOutcomeType.SIGNED_UP
    user_id: str = Field(..., description="Identity ID")

    model_config = {"frozen": True}


class ProfileIncomplete(BaseModel):
    """Signed in, but no profile document exists yet."""

    type: Literal[AuthOutcomeType.PROFILE_INCOMPLETE] = AuthOutcomeType.PROFILE_INCOMPLETE
    user_id: str = Field(..., description="Identity ID")

    model_config = {"frozen": True}


class EmailNotVerified(BaseModel):
    type: Literal[AuthOutcomeType.EMAIL_NOT_VERIFIED] = AuthOutcomeType.EMAIL_NOT_VERIFIED

    model_config = {"frozen": True}


class VerificationEmailSent(BaseModel):
    type: Literal[AuthOutcomeType.VERIFICATION_EMAIL_SENT] = AuthOutcomeType.VERIFICATION_EMAIL_SENT

    model_config = {"frozen": True}


class PasswordResetSent(BaseModel):
    type: Literal[AuthOutcomeType.PASSWORD_RESET_SENT] = AuthOutcomeType.PASSWORD_RESET_SENT

    model_config = {"frozen": True}


class AuthFailed(BaseModel):
    """The operation failed; ``message`` is shown to the user."""

    type: Literal[AuthOutcomeType.FAILED] = AuthOutcomeType.FAILED
    message: str

    model_config = {"frozen": True}


class InvalidInput(BaseModel):
    """
    Input was rejected locally and no remote call was made.

    Returned to the caller but never published as the reconciler's state.
    """

    type: Literal[AuthOutcomeType.INVALID_INPUT] = AuthOutcomeType.INVALID_INPUT
    violations: list[FieldViolation]

    model_config = {"frozen": True}


AuthOutcome = Annotated[
    Union[
        Idle,
        Authenticated,
        SignedUp,
        ProfileIncomplete,
        EmailNotVerified,
        VerificationEmailSent,
        PasswordResetSent,
        AuthFailed,
        InvalidInput,
    ],
    Field(discriminator="type"),
]
