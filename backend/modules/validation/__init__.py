"""
Validation module.

Pure, side-effect-free checks over raw form input. Nothing here raises or
touches the network; failures come back as values.

Public API:
- validate_email / validate_password / validate_name / validate_bio / validate_campus
- passwords_match
- validate_sign_up / validate_sign_in / validate_password_reset / validate_profile_update
- FieldViolation, FormField, ValidationErrorKind
"""

from .models import FieldViolation, FormField, ValidationErrorKind
from .rules import (
    BIO_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    message_for,
    password_requirements,
    passwords_match,
    validate_bio,
    validate_campus,
    validate_email,
    validate_name,
    validate_password,
    validate_password_reset,
    validate_profile_update,
    validate_sign_in,
    validate_sign_up,
)

__all__ = [
    # Models
    "FieldViolation",
    "FormField",
    "ValidationErrorKind",
    # Limits
    "BIO_MAX_LENGTH",
    "NAME_MAX_LENGTH",
    "PASSWORD_MIN_LENGTH",
    # Single-field rules
    "validate_email",
    "validate_password",
    "validate_name",
    "validate_bio",
    "validate_campus",
    "passwords_match",
    "password_requirements",
    "message_for",
    # Form-level checks
    "validate_sign_up",
    "validate_sign_in",
    "validate_password_reset",
    "validate_profile_update",
]
