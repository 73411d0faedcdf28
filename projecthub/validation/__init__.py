"""
ProjectHub Backend — Validation Utilities
==========================================

What:  Pure functions that check the shape and format of raw input.
How:   Every validator takes a raw value (and a label used in error
       messages), returns the normalized value, and raises
       InvalidInputError when the value is absent, of the wrong type,
       out of length bounds, or fails a format check. No side effects.
"""

from projecthub.validation.common import (
    optional,
    validate_object_id,
    validate_str,
    validate_url,
)
from projecthub.validation.projects import (
    PROJECT_DESCRIPTION_MAX,
    validate_github,
    validate_project_name,
    validate_technologies,
    validate_technologies_query,
)
from projecthub.validation.technologies import TECHNOLOGY_TAGS
from projecthub.validation.users import (
    BIO_MAX,
    validate_email,
    validate_password,
    validate_person_name,
    validate_username,
)

__all__ = [
    "BIO_MAX",
    "PROJECT_DESCRIPTION_MAX",
    "TECHNOLOGY_TAGS",
    "optional",
    "validate_email",
    "validate_github",
    "validate_object_id",
    "validate_password",
    "validate_person_name",
    "validate_project_name",
    "validate_str",
    "validate_technologies",
    "validate_technologies_query",
    "validate_url",
    "validate_username",
]
