"""
ProjectHub Backend — Auth Route Handlers
=========================================

What:  Account signup and login; both return the public user and a bearer token.
How:   Bodies are validated by the request pipeline dependencies, credentials
       are checked by the user service, tokens are minted by projecthub.security.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from pymongo.asynchronous.database import AsyncDatabase

from projecthub.database import get_database
from projecthub.dependencies import login_credentials, signup_fields
from projecthub.schemas.common import ErrorResponse
from projecthub.schemas.user import AuthEnvelope
from projecthub.security import create_access_token
from projecthub.services.user_service import user_service

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/signup",
    response_model=AuthEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid signup data", "model": ErrorResponse},
        409: {"description": "Username or email already registered", "model": ErrorResponse},
    },
    summary="Create an account",
)
async def signup(
    fields: Dict[str, Any] = Depends(signup_fields),
    db: AsyncDatabase = Depends(get_database),
) -> AuthEnvelope:
    user = await user_service.create_user(db, fields)
    token = create_access_token(user["id"], user["username"])
    return AuthEnvelope(user=user, token=token)


@router.post(
    "/login",
    response_model=AuthEnvelope,
    responses={
        400: {"description": "Malformed credentials", "model": ErrorResponse},
        401: {"description": "Either the username or password is invalid", "model": ErrorResponse},
    },
    summary="Exchange credentials for a bearer token",
)
async def login(
    credentials: Dict[str, str] = Depends(login_credentials),
    db: AsyncDatabase = Depends(get_database),
) -> AuthEnvelope:
    user = await user_service.check_user(db, credentials["username"], credentials["password"])
    token = create_access_token(user["id"], user["username"])
    return AuthEnvelope(user=user, token=token)
