"""
ProjectHub Backend — Generic Field Validators
==============================================

What:  Shape checks shared by every resource: identifiers and strings.
How:   Each function takes the raw value and a human-readable label, returns
       the normalized value, and raises InvalidInputError otherwise.
"""

from typing import Any, Optional
from urllib.parse import ParseResult, urlparse

from bson import ObjectId

from projecthub.exceptions import InvalidInputError


def validate_str(
    value: Any,
    label: str,
    min_length: int = 1,
    max_length: Optional[int] = None,
) -> str:
    """
    Validate a free-text field and return it stripped of surrounding whitespace.

    Raises:
        InvalidInputError: value missing, not a string, or outside the length bounds
    """
    if value is None:
        raise InvalidInputError(label, "is required")
    if not isinstance(value, str):
        raise InvalidInputError(label, "must be a string")
    value = value.strip()
    if len(value) == 0 and min_length > 0:
        raise InvalidInputError(label, "cannot be empty or only spaces")
    if len(value) < min_length:
        raise InvalidInputError(label, f"must be at least {min_length} characters long")
    if max_length is not None and len(value) > max_length:
        raise InvalidInputError(label, f"must be at most {max_length} characters long")
    return value


def validate_object_id(value: Any, label: str = "id") -> str:
    """
    Validate a MongoDB ObjectId given as a 24-character hex string.

    Returns the string form; callers convert with `ObjectId(...)` when querying.
    """
    value = validate_str(value, label)
    if len(value) != 24 or not ObjectId.is_valid(value):
        raise InvalidInputError(label, "is not a valid object id")
    return value


def parse_url(value: str, label: str) -> ParseResult:
    """Split a URL into its parts, raising InvalidInputError if it cannot be parsed."""
    try:
        return urlparse(value)
    except ValueError as e:
        # Unbalanced brackets in the host, e.g. "http://[::1"
        raise InvalidInputError(label, "is not a valid URL") from e


def validate_url(value: Any, label: str, max_length: int = 2048) -> str:
    """Validate an absolute http(s) URL with a host."""
    value = validate_str(value, label, max_length=max_length)
    if any(ch.isspace() for ch in value):
        raise InvalidInputError(label, "cannot contain spaces")
    parsed = parse_url(value, label)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidInputError(label, "must be an http(s) URL")
    return value


def optional(validator, value: Any, *args, **kwargs):
    """Run `validator` only when a non-blank value was supplied; otherwise return None."""
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return validator(value, *args, **kwargs)
