"""
ProjectHub Backend — User Route Handlers
=========================================

What:  Public profile lookup (with the user's projects) and self-service update.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends
from pymongo.asynchronous.database import AsyncDatabase

from projecthub.database import get_database
from projecthub.dependencies import user_changes, username_param
from projecthub.middleware.auth import authenticate_token
from projecthub.schemas.common import ErrorResponse
from projecthub.schemas.user import CurrentUser, UserProfileEnvelope, UserUpdateEnvelope
from projecthub.services.project_service import project_service
from projecthub.services.user_service import user_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "/{username}",
    response_model=UserProfileEnvelope,
    responses={
        400: {"description": "Invalid username", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    },
    summary="Get a user's profile and projects",
)
async def get_user(
    username: str = Depends(username_param),
    db: AsyncDatabase = Depends(get_database),
) -> UserProfileEnvelope:
    user = await user_service.get_user_by_username(db, username)
    projects = await project_service.get_projects_by_owner(db, user["id"])
    return UserProfileEnvelope(user=user, projects=projects)


@router.put(
    "/{username}",
    response_model=UserUpdateEnvelope,
    responses={
        400: {"description": "Invalid profile data", "model": ErrorResponse},
        401: {"description": "Missing or malformed bearer token", "model": ErrorResponse},
        403: {"description": "Token rejected or not the profile owner", "model": ErrorResponse},
        409: {"description": "Email already registered", "model": ErrorResponse},
    },
    summary="Update the caller's own profile",
)
async def update_user(
    username: str = Depends(username_param),
    changes: Dict[str, Any] = Depends(user_changes),
    user: CurrentUser = Depends(authenticate_token),
    db: AsyncDatabase = Depends(get_database),
) -> UserUpdateEnvelope:
    updated = await user_service.update_user(db, username, changes, user)
    return UserUpdateEnvelope(user=updated)
