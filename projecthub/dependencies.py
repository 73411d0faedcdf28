"""
ProjectHub Backend — Request Pipeline Dependencies
===================================================

What:  Reusable FastAPI dependencies that validate path identifiers, query
       filters and request bodies before a handler runs.
How:   Each dependency calls the validation utilities and returns normalized
       values; any InvalidInputError propagates to the global handler (400).
       Route handlers declare these instead of re-validating by hand.

Pipeline for an authenticated project route:
    authenticate_token  →  project_id_param  →  project_fields  →  handler
    (middleware.auth)      (path id)            (body)              (service call)
"""

from typing import Any, Dict, Optional

from fastapi import Path, Query

from projecthub.exceptions import InvalidInputError
from projecthub.schemas.comment import CommentPayload
from projecthub.schemas.project import ProjectPayload
from projecthub.schemas.user import LoginPayload, SignupPayload, UserUpdatePayload
from projecthub.validation import (
    BIO_MAX,
    PROJECT_DESCRIPTION_MAX,
    optional,
    validate_email,
    validate_github,
    validate_object_id,
    validate_password,
    validate_person_name,
    validate_project_name,
    validate_str,
    validate_technologies,
    validate_technologies_query,
    validate_url,
    validate_username,
)

COMMENT_MAX = 1000


# ══════════════════════════════════════════════════════════════════════════
# Path Parameters
# ══════════════════════════════════════════════════════════════════════════

async def project_id_param(
    project_id: str = Path(description="Project identifier (24-character hex ObjectId)"),
) -> str:
    return validate_object_id(project_id, "project id")


async def comment_id_param(
    comment_id: str = Path(description="Comment identifier (24-character hex ObjectId)"),
) -> str:
    return validate_object_id(comment_id, "comment id")


async def username_param(username: str = Path(description="Username")) -> str:
    return validate_username(username)


# ══════════════════════════════════════════════════════════════════════════
# Query Parameters
# ══════════════════════════════════════════════════════════════════════════

async def project_filters(
    name: Optional[str] = Query(default=None, description="Case-insensitive project name substring"),
    technologies: Optional[str] = Query(
        default=None,
        description="Comma-separated technology tags; projects must have all of them",
    ),
) -> Dict[str, Any]:
    """Blank filters are ignored; present ones must be valid."""
    filters: Dict[str, Any] = {"name": None, "technologies": None}
    if name is not None and name.strip():
        filters["name"] = validate_str(name, "project name query param")
    if technologies is not None and technologies.strip():
        filters["technologies"] = validate_technologies_query(technologies)
    return filters


# ══════════════════════════════════════════════════════════════════════════
# Request Bodies
# ══════════════════════════════════════════════════════════════════════════

async def project_fields(payload: ProjectPayload) -> Dict[str, Any]:
    """
    Validate a create/update body.

    Optional fields left blank are stored as null.
    """
    return {
        "name": validate_project_name(payload.name),
        "description": optional(
            validate_str, payload.description, "project description", max_length=PROJECT_DESCRIPTION_MAX
        ),
        "github": optional(validate_github, payload.github),
        "technologies": validate_technologies(payload.technologies),
        "deploymentLink": optional(validate_url, payload.deployment_link, "project deployment link"),
    }


async def comment_text(payload: CommentPayload) -> str:
    return validate_str(payload.comment, "comment", max_length=COMMENT_MAX)


async def signup_fields(payload: SignupPayload) -> Dict[str, Any]:
    return {
        "username": validate_username(payload.username),
        "email": validate_email(payload.email),
        "password": validate_password(payload.password),
        "firstName": validate_person_name(payload.first_name, "first name"),
        "lastName": validate_person_name(payload.last_name, "last name"),
    }


async def login_credentials(payload: LoginPayload) -> Dict[str, str]:
    return {
        "username": validate_username(payload.username),
        "password": validate_password(payload.password),
    }


async def user_changes(payload: UserUpdatePayload) -> Dict[str, Any]:
    """Validate only the fields that were sent; at least one is required."""
    sent = payload.model_dump(exclude_unset=True)
    changes: Dict[str, Any] = {}
    if "email" in sent:
        changes["email"] = validate_email(payload.email)
    if "first_name" in sent:
        changes["firstName"] = validate_person_name(payload.first_name, "first name")
    if "last_name" in sent:
        changes["lastName"] = validate_person_name(payload.last_name, "last name")
    if "bio" in sent:
        changes["bio"] = optional(validate_str, payload.bio, "bio", max_length=BIO_MAX)
    if "password" in sent:
        changes["password"] = validate_password(payload.password)
    if not changes:
        raise InvalidInputError("user update", "at least one field must be provided")
    return changes
