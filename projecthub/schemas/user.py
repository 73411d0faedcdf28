"""Auth and user request bodies and response envelopes."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from projecthub.schemas.common import CamelModel
from projecthub.schemas.project import ProjectResponse


class CurrentUser(BaseModel):
    """Identity attached to a request by the auth middleware."""
    id: str
    username: str


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class SignupPayload(CamelModel):
    """Body of POST /auth/signup."""
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class LoginPayload(CamelModel):
    """Body of POST /auth/login."""
    username: Optional[str] = None
    password: Optional[str] = None


class UserUpdatePayload(CamelModel):
    """Body of PUT /users/{username}. Omitted fields are left unchanged."""
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    bio: Optional[str] = None
    password: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class UserResponse(CamelModel):
    """Public view of a user; never includes the password hash."""
    id: str
    username: str
    email: str
    first_name: str
    last_name: str
    bio: Optional[str] = None
    created_at: Optional[datetime] = None


class AuthEnvelope(CamelModel):
    user: UserResponse
    token: str


class UserProfileEnvelope(CamelModel):
    user: UserResponse
    projects: List[ProjectResponse]


class UserUpdateEnvelope(CamelModel):
    user: UserResponse
    message: str = "User updated successfully"
