"""
ProjectHub Backend — Bearer Token Authentication
=================================================

What:  FastAPI dependency that authenticates a request from its
       `Authorization: Bearer <token>` header.
How:   Extract token → verify signature/expiry → revalidate claims →
       resolve the user in the database → attach CurrentUser to
       `request.state.user`. Any failure rejects the request (fails closed).
Who:   Every route that mutates state declares `Depends(authenticate_token)`.

State transition:
    {no-identity} → {verifying} → {identity-attached | rejected}

Failure mapping:
    no header / not Bearer / empty token   → UnauthorizedError (401)
    bad signature / expired / bad claims   → ForbiddenError (403)
    subject no longer exists               → UnauthorizedError (401)
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pymongo.asynchronous.database import AsyncDatabase

from projecthub.database import get_database
from projecthub.exceptions import ForbiddenError, InvalidInputError, UnauthorizedError
from projecthub.schemas.user import CurrentUser
from projecthub.security import TokenVerificationError, decode_access_token
from projecthub.services.user_service import user_service
from projecthub.validation import validate_object_id, validate_username

logger = logging.getLogger(__name__)

# HTTP Bearer scheme; auto_error=False so failures go through our own errors
bearer_scheme = HTTPBearer(auto_error=False)


async def authenticate_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncDatabase = Depends(get_database),
) -> CurrentUser:
    """
    Resolve the authenticated user for this request.

    Example:
        @router.post("/projects")
        async def create(user: CurrentUser = Depends(authenticate_token)):
            ...
    """
    request.state.user = None

    if credentials is None:
        if request.headers.get("Authorization"):
            logger.warning("Malformed Authorization header on %s %s", request.method, request.url.path)
            raise UnauthorizedError(message="Authorization header must be 'Bearer <token>'")
        raise UnauthorizedError(message="Missing bearer token")

    try:
        payload = decode_access_token(credentials.credentials.strip())
    except TokenVerificationError as e:
        logger.warning("Token rejected on %s %s: %s", request.method, request.url.path, e)
        raise ForbiddenError(message=f"{e}. Please log in again.") from e

    try:
        user_id = validate_object_id(payload.get("sub"), "token subject")
        username = validate_username(payload.get("username"), "token username")
    except InvalidInputError as e:
        logger.warning("Token with invalid claims: %s", e.message)
        raise ForbiddenError(message="Token claims are invalid. Please log in again.") from e

    record = await user_service.find_user_by_id(db, user_id)
    if record is None or record.get("username") != username:
        logger.warning("Token subject %s (%s) no longer exists", user_id, username)
        raise UnauthorizedError(message="User no longer exists")

    current_user = CurrentUser(id=user_id, username=username)
    request.state.user = current_user
    logger.debug("Authenticated %s for %s %s", username, request.method, request.url.path)
    return current_user
