"""
ProjectHub Backend — User Service Unit Tests
=============================================

What we test:
    ✅ Signup hashes the password and never returns the hash
    ✅ Duplicate username / email → ConflictError (pre-check and unique index)
    ✅ Login fails with one message for unknown user and wrong password
    ✅ Profile updates are self-only and re-hash passwords
"""

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from projecthub.exceptions import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError
from projecthub.security import verify_password
from projecthub.services.user_service import INVALID_CREDENTIALS, UserService


def signup_fields(**overrides):
    fields = {
        "username": "carol",
        "email": "carol@example.com",
        "password": "secret123",
        "firstName": "Carol",
        "lastName": "Jones",
    }
    fields.update(overrides)
    return fields


class TestUserServiceSignup:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_create_user_hashes_password(self, mock_db):
        mock_db["users"].find_one.return_value = None

        record = await self.service.create_user(mock_db, signup_fields())

        stored = mock_db["users"].insert_one.await_args.args[0]
        assert stored["hashedPassword"] != "secret123"
        assert verify_password("secret123", stored["hashedPassword"])
        assert "hashedPassword" not in record
        assert "password" not in record
        assert record["id"] == str(stored["_id"])
        assert record["username"] == "carol"

    @pytest.mark.asyncio
    async def test_username_taken(self, mock_db):
        mock_db["users"].find_one.return_value = {"_id": ObjectId(), "username": "carol", "email": "x@y.io"}

        with pytest.raises(ConflictError, match="Username"):
            await self.service.create_user(mock_db, signup_fields())
        mock_db["users"].insert_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_email_taken(self, mock_db):
        mock_db["users"].find_one.return_value = {"_id": ObjectId(), "username": "dave", "email": "carol@example.com"}

        with pytest.raises(ConflictError, match="Email"):
            await self.service.create_user(mock_db, signup_fields())

    @pytest.mark.asyncio
    async def test_concurrent_signup_hits_unique_index(self, mock_db):
        mock_db["users"].find_one.return_value = None
        mock_db["users"].insert_one.side_effect = DuplicateKeyError("E11000 duplicate key")

        with pytest.raises(ConflictError):
            await self.service.create_user(mock_db, signup_fields())


class TestUserServiceLogin:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_valid_credentials(self, mock_db, known_users, alice):
        record = await self.service.check_user(mock_db, "alice", "secret123")
        assert record["id"] == alice.id
        assert "hashedPassword" not in record

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_user_look_the_same(self, mock_db, known_users):
        with pytest.raises(UnauthorizedError) as wrong_password:
            await self.service.check_user(mock_db, "alice", "wrong1234")
        with pytest.raises(UnauthorizedError) as unknown_user:
            await self.service.check_user(mock_db, "nobody", "secret123")
        assert wrong_password.value.message == unknown_user.value.message == INVALID_CREDENTIALS


class TestUserServiceLookup:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_find_by_id_returns_none_when_missing(self, mock_db):
        mock_db["users"].find_one.return_value = None
        assert await self.service.find_user_by_id(mock_db, str(ObjectId())) is None

    @pytest.mark.asyncio
    async def test_get_by_username_not_found(self, mock_db):
        mock_db["users"].find_one.return_value = None
        with pytest.raises(NotFoundError):
            await self.service.get_user_by_username(mock_db, "ghost")


class TestUserServiceUpdate:

    def setup_method(self):
        self.service = UserService()

    @pytest.mark.asyncio
    async def test_update_own_profile(self, mock_db, alice, known_users):
        document = known_users[alice.id]
        mock_db["users"].find_one.side_effect = None
        mock_db["users"].find_one.return_value = None
        mock_db["users"].find_one_and_update.return_value = dict(document, bio="Hi", email="new@example.com")

        record = await self.service.update_user(
            mock_db, "alice", {"bio": "Hi", "email": "new@example.com", "password": "newpass99"}, alice
        )

        assert record["bio"] == "Hi"
        query, update = mock_db["users"].find_one_and_update.await_args.args
        assert query == {"_id": ObjectId(alice.id), "username": "alice"}
        changes = update["$set"]
        assert "password" not in changes
        assert verify_password("newpass99", changes["hashedPassword"])
        uniqueness_query = mock_db["users"].find_one.await_args.args[0]
        assert uniqueness_query["_id"] == {"$ne": ObjectId(alice.id)}

    @pytest.mark.asyncio
    async def test_cannot_update_someone_else(self, mock_db, alice):
        with pytest.raises(ForbiddenError):
            await self.service.update_user(mock_db, "bob", {"bio": "Hacked"}, alice)
        mock_db["users"].find_one_and_update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_new_email_already_registered(self, mock_db, alice):
        mock_db["users"].find_one.return_value = {"_id": ObjectId(), "username": "bob", "email": "bob@example.com"}

        with pytest.raises(ConflictError):
            await self.service.update_user(mock_db, "alice", {"email": "bob@example.com"}, alice)
