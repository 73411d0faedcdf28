"""
ProjectHub Backend — Project Field Validators
==============================================

What:  Format rules for project names, GitHub links and technology tags.
Who:   Used by the request pipeline (projecthub.dependencies) before any
       project document is written or queried.
"""

import re
from typing import Any, List

from projecthub.exceptions import InvalidInputError
from projecthub.validation.common import parse_url, validate_str, validate_url
from projecthub.validation.technologies import canonical_technology

PROJECT_NAME_MIN = 3
PROJECT_NAME_MAX = 50
PROJECT_DESCRIPTION_MAX = 1000

GITHUB_HOSTS = {"github.com", "www.github.com"}

_PROJECT_NAME_RE = re.compile(r"^[A-Za-z0-9 _.\-]+$")
_GITHUB_SEGMENT_RE = re.compile(r"^[A-Za-z0-9_.\-]+$")


def validate_project_name(value: Any, label: str = "project name") -> str:
    value = validate_str(value, label, min_length=PROJECT_NAME_MIN, max_length=PROJECT_NAME_MAX)
    if not _PROJECT_NAME_RE.match(value):
        raise InvalidInputError(
            label, "may only contain letters, digits, spaces, '_', '-' and '.'"
        )
    if not any(ch.isalnum() for ch in value):
        raise InvalidInputError(label, "must contain at least one letter or digit")
    return value


def validate_github(value: Any, label: str = "github link") -> str:
    """
    Validate a GitHub profile or repository URL.

    Accepts http(s) URLs on github.com with at least an owner segment,
    e.g. https://github.com/owner or https://github.com/owner/repo.
    The trailing slash is removed from the returned value.
    """
    value = validate_url(value, label)
    parsed = parse_url(value, label)
    if (parsed.hostname or "").lower() not in GITHUB_HOSTS:
        raise InvalidInputError(label, "must point to github.com")
    segments = [segment for segment in parsed.path.split("/") if segment]
    if not segments:
        raise InvalidInputError(label, "must include a GitHub user or repository")
    if not all(_GITHUB_SEGMENT_RE.match(segment) for segment in segments[:2]):
        raise InvalidInputError(label, "contains an invalid GitHub user or repository name")
    return value.rstrip("/")


def validate_technologies(value: Any, label: str = "technologies") -> List[str]:
    """
    Validate a list of technology tags.

    Rules:
        - must be a non-empty list
        - every entry must be a string in the fixed vocabulary (case-insensitive)
        - no duplicates (compared after canonicalization)

    Returns the tags in canonical spelling, in the order given.
    """
    if value is None:
        raise InvalidInputError(label, "is required")
    if not isinstance(value, list):
        raise InvalidInputError(label, "must be a list of technology tags")
    if len(value) == 0:
        raise InvalidInputError(label, "must contain at least one technology")

    technologies: List[str] = []
    for tag in value:
        if not isinstance(tag, str) or not tag.strip():
            raise InvalidInputError(label, "every technology must be a non-empty string")
        canonical = canonical_technology(tag)
        if canonical is None:
            raise InvalidInputError(label, f"'{tag.strip()}' is not a supported technology")
        if canonical in technologies:
            raise InvalidInputError(label, f"'{canonical}' is listed more than once")
        technologies.append(canonical)
    return technologies


def validate_technologies_query(value: Any, label: str = "technologies query param") -> List[str]:
    """Validate a comma-separated `technologies` query parameter, e.g. "Rust,Python"."""
    value = validate_str(value, label)
    return validate_technologies([tag.strip() for tag in value.split(",")], label)
