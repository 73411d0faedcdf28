"""User field validators: username, email, password and personal names."""

import re
from typing import Any

from projecthub.exceptions import InvalidInputError
from projecthub.validation.common import validate_str

USERNAME_MIN = 3
USERNAME_MAX = 20
PASSWORD_MIN = 8
PASSWORD_MAX = 64
EMAIL_MAX = 254
PERSON_NAME_MAX = 30
BIO_MAX = 500

_USERNAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.\-]*$")
_EMAIL_RE = re.compile(r"^[A-Za-z0-9._%+\-]+@[A-Za-z0-9\-]+(\.[A-Za-z0-9\-]+)*\.[A-Za-z]{2,}$")
_PERSON_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z '\-]*$")


def validate_username(value: Any, label: str = "username") -> str:
    """Usernames are case-insensitive and stored lowercase."""
    value = validate_str(value, label, min_length=USERNAME_MIN, max_length=USERNAME_MAX)
    if not _USERNAME_RE.match(value):
        raise InvalidInputError(
            label,
            "must start with a letter or digit and contain only letters, digits, '_', '.' or '-'",
        )
    return value.lower()


def validate_email(value: Any, label: str = "email") -> str:
    value = validate_str(value, label, max_length=EMAIL_MAX)
    if not _EMAIL_RE.match(value):
        raise InvalidInputError(label, "is not a valid email address")
    return value.lower()


def validate_password(value: Any, label: str = "password") -> str:
    """
    Passwords are checked but never normalized: surrounding whitespace is
    rejected instead of being stripped.
    """
    if value is None:
        raise InvalidInputError(label, "is required")
    if not isinstance(value, str):
        raise InvalidInputError(label, "must be a string")
    if any(ch.isspace() for ch in value):
        raise InvalidInputError(label, "cannot contain spaces")
    if not PASSWORD_MIN <= len(value) <= PASSWORD_MAX:
        raise InvalidInputError(
            label, f"must be {PASSWORD_MIN} to {PASSWORD_MAX} characters long"
        )
    if not any(ch.isalpha() for ch in value) or not any(ch.isdigit() for ch in value):
        raise InvalidInputError(label, "must contain at least one letter and one digit")
    return value


def validate_person_name(value: Any, label: str) -> str:
    value = validate_str(value, label, max_length=PERSON_NAME_MAX)
    if not _PERSON_NAME_RE.match(value):
        raise InvalidInputError(label, "may only contain letters, spaces, apostrophes and hyphens")
    return value
