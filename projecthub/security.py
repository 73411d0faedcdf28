"""
ProjectHub Backend — Password Hashing and Access Tokens
========================================================

What:  Thin wrappers around passlib (password hashing) and PyJWT (tokens).
How:   Passwords are hashed with PBKDF2-SHA256 through a passlib
       CryptContext. Access tokens are HMAC-signed JWTs carrying the user id
       (`sub`), the username and an expiry (`exp`).
Who:   Used by the user service (signup/login/password change) and the
       auth middleware (token verification).
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from projecthub.config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class TokenVerificationError(Exception):
    """Raised when a token's signature, expiry or claims cannot be verified."""


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time check of a password against a stored hash; False on malformed hashes."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        logger.warning("Stored password hash could not be parsed")
        return False


def create_access_token(
    user_id: str,
    username: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed access token for a user.

    Clients send it back as `Authorization: Bearer <token>`.
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    payload = {
        "sub": user_id,
        "username": username,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify a token's signature and expiry and return its claims.

    Raises:
        TokenVerificationError: bad signature, expired, malformed, or missing claims
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenVerificationError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenVerificationError("Token is invalid") from e
    return payload
