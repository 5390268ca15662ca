"""
Validation module data models.

Validation failures are values, not exceptions: a UI layer renders one
message per field without interrupting control flow.
"""

from enum import Enum
from pydantic import BaseModel, Field


class FormField(str, Enum):
    """Input fields the validators know about."""

    NAME = "name"
    EMAIL = "email"
    PASSWORD = "password"
    CONFIRM_PASSWORD = "confirm_password"
    BIO = "bio"
    CAMPUS = "campus"


class ValidationErrorKind(str, Enum):
    """Why a field value was rejected."""

    EMAIL_REQUIRED = "email_required"
    EMAIL_FORMAT_INVALID = "email_format_invalid"

    PASSWORD_REQUIRED = "password_required"
    PASSWORD_TOO_SHORT = "password_too_short"
    PASSWORD_MISSING_UPPERCASE = "password_missing_uppercase"
    PASSWORD_MISSING_DIGIT = "password_missing_digit"
    PASSWORDS_DO_NOT_MATCH = "passwords_do_not_match"

    NAME_REQUIRED = "name_required"
    NAME_TOO_LONG = "name_too_long"
    NAME_ALL_DIGITS = "name_all_digits"

    BIO_TOO_LONG = "bio_too_long"

    CAMPUS_REQUIRED = "campus_required"


class FieldViolation(BaseModel):
    """A single rejected field, with the message to show next to it."""

    field: FormField = Field(..., description="Field that failed validation")
    kind: ValidationErrorKind = Field(..., description="Reason the value was rejected")
    message: str = Field(..., description="Human-readable explanation")

    model_config = {"frozen": True}
