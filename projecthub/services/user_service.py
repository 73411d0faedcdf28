"""
ProjectHub Backend — User Service (Data Access)
================================================

What:  Signup, login, profile lookup and profile update on `users`.
How:   Passwords go through projecthub.security (passlib); the stored hash
       is stripped from every record returned (models.user.to_record).
Who:   Called by the auth and user route handlers, and by the auth
       middleware to resolve a token's subject.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from projecthub.exceptions import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError
from projecthub.models import user as user_model
from projecthub.schemas.user import CurrentUser
from projecthub.security import hash_password, verify_password
from projecthub.services.base import database_errors

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Either the username or password is invalid"


class UserService:
    """Data-access layer for user accounts."""

    async def create_user(self, db: AsyncDatabase, fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        Register a new account.

        Args:
            fields: validated username, email, password, firstName, lastName

        Raises:
            ConflictError: username or email already registered (→ 409)
        """
        await self._ensure_available(db, username=fields["username"], email=fields["email"])

        document = user_model.new_user_document(fields, hash_password(fields["password"]))
        # The unique indexes still decide races between concurrent signups
        with database_errors(
            "create user",
            conflict_message="Username or email is already registered",
            username=fields["username"],
        ):
            await db[user_model.COLLECTION].insert_one(document)

        logger.info("User %s signed up", fields["username"])
        return user_model.to_record(document)

    async def check_user(self, db: AsyncDatabase, username: str, password: str) -> Dict[str, Any]:
        """
        Verify login credentials.

        Raises:
            UnauthorizedError: unknown username or wrong password (same message for both)
        """
        with database_errors("log in"):
            document = await db[user_model.COLLECTION].find_one({"username": username})
        if document is None or not verify_password(password, document.get("hashedPassword", "")):
            logger.warning("Failed login attempt for %s", username)
            raise UnauthorizedError(message=INVALID_CREDENTIALS)
        return user_model.to_record(document)

    async def find_user_by_id(self, db: AsyncDatabase, user_id: str) -> Optional[Dict[str, Any]]:
        with database_errors("fetch user", user_id=user_id):
            document = await db[user_model.COLLECTION].find_one({"_id": ObjectId(user_id)})
        return user_model.to_record(document)

    async def get_user_by_username(self, db: AsyncDatabase, username: str) -> Dict[str, Any]:
        with database_errors("fetch user", username=username):
            document = await db[user_model.COLLECTION].find_one({"username": username})
        if document is None:
            raise NotFoundError(resource="user", resource_id=username)
        return user_model.to_record(document)

    async def update_user(
        self,
        db: AsyncDatabase,
        username: str,
        changes: Dict[str, Any],
        user: CurrentUser,
    ) -> Dict[str, Any]:
        """
        Update the caller's own profile.

        Args:
            changes: validated subset of email, firstName, lastName, bio, password

        Raises:
            ForbiddenError: `username` is not the caller
            NotFoundError: account no longer exists
            ConflictError: new email belongs to another account
        """
        if username != user.username:
            raise ForbiddenError(message="You can only update your own profile")

        changes = dict(changes)
        if "email" in changes:
            await self._ensure_available(db, email=changes["email"], exclude_id=user.id)
        if "password" in changes:
            changes["hashedPassword"] = hash_password(changes.pop("password"))
        changes["updatedAt"] = datetime.now(timezone.utc)

        with database_errors(
            "update user",
            conflict_message="Email is already registered",
            username=username,
        ):
            document = await db[user_model.COLLECTION].find_one_and_update(
                {"_id": ObjectId(user.id), "username": username},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )

        if document is None:
            raise NotFoundError(resource="user", resource_id=username)

        logger.info("User %s updated fields: %s", username, sorted(k for k in changes if k != "updatedAt"))
        return user_model.to_record(document)

    @staticmethod
    async def _ensure_available(
        db: AsyncDatabase,
        username: Optional[str] = None,
        email: Optional[str] = None,
        exclude_id: Optional[str] = None,
    ) -> None:
        clauses = []
        if username:
            clauses.append({"username": username})
        if email:
            clauses.append({"email": email})
        query: Dict[str, Any] = {"$or": clauses}
        if exclude_id:
            query["_id"] = {"$ne": ObjectId(exclude_id)}

        with database_errors("check user uniqueness"):
            existing = await db[user_model.COLLECTION].find_one(query)
        if existing is None:
            return
        if username and existing.get("username") == username:
            raise ConflictError(message="Username is already taken", context={"username": username})
        raise ConflictError(message="Email is already registered", context={"email": email})


user_service = UserService()
