"""
ProjectHub Backend — Shared Data-Access Helpers
================================================

What:  Driver-error translation and the array-membership update used by
       likes and bookmarks.
Who:   Imported by every service module.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from projecthub.exceptions import ConflictError, DatabaseError, NotFoundError
from projecthub.models import project

logger = logging.getLogger(__name__)


@contextmanager
def database_errors(
    action: str,
    conflict_message: Optional[str] = None,
    **context,
) -> Iterator[None]:
    """
    Translate driver failures raised inside the block into application errors.

    - DuplicateKeyError (unique index violated) → ConflictError
    - any other PyMongoError → DatabaseError

    Application errors (NotFoundError, ForbiddenError, ...) pass through
    untouched. The driver message is logged, never returned to the client.

    Example:
        with database_errors("fetch project", project_id=project_id):
            document = await db[project.COLLECTION].find_one(...)
    """
    try:
        yield
    except DuplicateKeyError as e:
        logger.warning("Duplicate key during %s | Context: %s", action, context)
        raise ConflictError(
            message=conflict_message or "A record with the same unique value already exists",
            context={"action": action, **context},
        ) from e
    except PyMongoError as e:
        logger.error("Database error during %s: %s | Context: %s", action, str(e), context)
        raise DatabaseError(
            message=f"Could not {action}. Please try again later.",
            context={"action": action, "error_type": type(e).__name__, **context},
        ) from e


async def update_membership(
    db: AsyncDatabase,
    project_id: str,
    field: str,
    operator: str,
    user_id: str,
) -> List[str]:
    """
    Add (`$addToSet`) or remove (`$pull`) a user id in one of a project's
    membership arrays and return the resulting array.

    Both operators are single-document atomic writes: adding a present id
    or removing an absent one leaves the array unchanged (no-op).

    Raises:
        NotFoundError: the project does not exist
    """
    if operator not in ("$addToSet", "$pull"):
        raise ValueError(f"Unsupported membership operator: {operator}")

    with database_errors(f"update project {field}", project_id=project_id):
        document = await db[project.COLLECTION].find_one_and_update(
            {"_id": ObjectId(project_id)},
            {operator: {field: user_id}},
            projection={field: True},
            return_document=ReturnDocument.AFTER,
        )

    if document is None:
        raise NotFoundError(resource="project", resource_id=project_id)
    return [str(member) for member in document.get(field, [])]
