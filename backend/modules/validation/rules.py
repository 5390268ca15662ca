"""
Field validation rules.

Every ``validate_*`` function returns ``None`` for a valid value and a
``ValidationErrorKind`` otherwise. Where a field has several rules they are
checked in a fixed order and the first failure wins. The batch helpers
check fields in a fixed order and report every failing field.
"""

import re
from typing import Optional

from .models import FieldViolation, FormField, ValidationErrorKind


NAME_MAX_LENGTH = 100
BIO_MAX_LENGTH = 500
PASSWORD_MIN_LENGTH = 8

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@([A-Za-z0-9.-]+\.[A-Za-z]{2,})$")
ALL_DIGITS_PATTERN = re.compile(r"^[0-9]+$")

MESSAGES: dict[ValidationErrorKind, str] = {
    ValidationErrorKind.EMAIL_REQUIRED: "Email is required",
    ValidationErrorKind.EMAIL_FORMAT_INVALID: "Please enter a valid email",
    ValidationErrorKind.PASSWORD_REQUIRED: "Password is required",
    ValidationErrorKind.PASSWORD_TOO_SHORT: (
        f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
    ),
    ValidationErrorKind.PASSWORD_MISSING_UPPERCASE: (
        "Password must contain at least 1 uppercase letter"
    ),
    ValidationErrorKind.PASSWORD_MISSING_DIGIT: "Password must contain at least 1 number",
    ValidationErrorKind.PASSWORDS_DO_NOT_MATCH: "Passwords do not match",
    ValidationErrorKind.NAME_REQUIRED: "Name is required",
    ValidationErrorKind.NAME_TOO_LONG: f"Name must be {NAME_MAX_LENGTH} characters or less",
    ValidationErrorKind.NAME_ALL_DIGITS: "Name cannot be all numbers",
    ValidationErrorKind.BIO_TOO_LONG: f"Bio must be {BIO_MAX_LENGTH} characters or less",
    ValidationErrorKind.CAMPUS_REQUIRED: "Please select your campus",
}


def _is_blank(value: Optional[str]) -> bool:
    return value is None or value.strip() == ""


def validate_email(email: Optional[str]) -> Optional[ValidationErrorKind]:
    """Check that an email is present and shaped like local@domain.tld."""
    if _is_blank(email):
        return ValidationErrorKind.EMAIL_REQUIRED
    if not EMAIL_PATTERN.fullmatch(email):
        return ValidationErrorKind.EMAIL_FORMAT_INVALID
    return None


def validate_password(password: Optional[str]) -> Optional[ValidationErrorKind]:
    """
    Check password strength.

    Rules, in order: present, at least PASSWORD_MIN_LENGTH characters,
    at least one uppercase letter, at least one digit.
    """
    if _is_blank(password):
        return ValidationErrorKind.PASSWORD_REQUIRED
    if len(password) < PASSWORD_MIN_LENGTH:
        return ValidationErrorKind.PASSWORD_TOO_SHORT
    if not any(c.isupper() for c in password):
        return ValidationErrorKind.PASSWORD_MISSING_UPPERCASE
    if not any(c.isdigit() for c in password):
        return ValidationErrorKind.PASSWORD_MISSING_DIGIT
    return None


def validate_name(name: Optional[str]) -> Optional[ValidationErrorKind]:
    """Check a display name: present, not too long, not only digits."""
    if _is_blank(name):
        return ValidationErrorKind.NAME_REQUIRED
    if len(name) > NAME_MAX_LENGTH:
        return ValidationErrorKind.NAME_TOO_LONG
    if ALL_DIGITS_PATTERN.fullmatch(name):
        return ValidationErrorKind.NAME_ALL_DIGITS
    return None


def validate_bio(bio: Optional[str]) -> Optional[ValidationErrorKind]:
    """Bio is optional; only its length is limited."""
    if bio is not None and len(bio) > BIO_MAX_LENGTH:
        return ValidationErrorKind.BIO_TOO_LONG
    return None


def validate_campus(campus: Optional[str]) -> Optional[ValidationErrorKind]:
    if _is_blank(campus):
        return ValidationErrorKind.CAMPUS_REQUIRED
    return None


def passwords_match(password: Optional[str], confirm_password: Optional[str]) -> bool:
    return password == confirm_password


def password_requirements() -> str:
    """User-facing summary of the password rules."""
    return (
        f"Password must be at least {PASSWORD_MIN_LENGTH} characters "
        "with 1 uppercase letter and 1 number"
    )


def message_for(kind: ValidationErrorKind) -> str:
    return MESSAGES[kind]


def _violation(field: FormField, kind: Optional[ValidationErrorKind]) -> Optional[FieldViolation]:
    if kind is None:
        return None
    return FieldViolation(field=field, kind=kind, message=MESSAGES[kind])


def _collect(*violations: Optional[FieldViolation]) -> list[FieldViolation]:
    return [v for v in violations if v is not None]


def validate_sign_up(
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    confirm_password: Optional[str],
) -> list[FieldViolation]:
    """
    Validate the sign-up form.

    Fields are checked in the order name, email, password, confirmation,
    and every failing field is reported.
    """
    mismatch = (
        None
        if passwords_match(password, confirm_password)
        else ValidationErrorKind.PASSWORDS_DO_NOT_MATCH
    )
    return _collect(
        _violation(FormField.NAME, validate_name(name)),
        _violation(FormField.EMAIL, validate_email(email)),
        _violation(FormField.PASSWORD, validate_password(password)),
        _violation(FormField.CONFIRM_PASSWORD, mismatch),
    )


def validate_sign_in(email: Optional[str], password: Optional[str]) -> list[FieldViolation]:
    """
    Validate the sign-in form.

    The password only has to be present here: strength rules apply to new
    passwords, not to credentials of existing accounts.
    """
    password_kind = ValidationErrorKind.PASSWORD_REQUIRED if _is_blank(password) else None
    return _collect(
        _violation(FormField.EMAIL, validate_email(email)),
        _violation(FormField.PASSWORD, password_kind),
    )


def validate_password_reset(email: Optional[str]) -> list[FieldViolation]:
    return _collect(_violation(FormField.EMAIL, validate_email(email)))


def validate_profile_update(name: Optional[str], bio: Optional[str]) -> list[FieldViolation]:
    """Validate the editable profile fields (campus is not checked here)."""
    return _collect(
        _violation(FormField.NAME, validate_name(name)),
        _violation(FormField.BIO, validate_bio(bio)),
    )
