"""
ProjectHub Backend — Comment Service (Data Access)
===================================================

What:  Create, list and delete comments on projects.
How:   Comments live in their own collection; the parent project keeps the
       ordered list of its comment ids in `comments`.

Invariant:
    A comment never outlives its parent project. Creation checks the
    project first and undoes the insert if the project vanished before the
    id could be attached to it.
"""

import logging
from typing import Any, Dict, List

from bson import ObjectId
from pymongo import ASCENDING
from pymongo.asynchronous.database import AsyncDatabase

from projecthub.exceptions import ForbiddenError, NotFoundError
from projecthub.models import comment, project
from projecthub.schemas.user import CurrentUser
from projecthub.services.base import database_errors

logger = logging.getLogger(__name__)


class CommentService:
    """Data-access layer for comments."""

    async def create_comment(
        self,
        db: AsyncDatabase,
        project_id: str,
        text: str,
        user: CurrentUser,
    ) -> Dict[str, Any]:
        await self._ensure_project_exists(db, project_id)

        document = comment.new_comment_document(text, project_id, owner=user.model_dump())
        comment_id = str(document["_id"])

        with database_errors("create comment", project_id=project_id):
            await db[comment.COLLECTION].insert_one(document)
            result = await db[project.COLLECTION].update_one(
                {"_id": ObjectId(project_id)},
                {"$push": {"comments": comment_id}},
            )
            if result.matched_count == 0:
                await db[comment.COLLECTION].delete_one({"_id": document["_id"]})

        if result.matched_count == 0:
            raise NotFoundError(resource="project", resource_id=project_id)

        logger.info("Comment %s added to project %s by %s", comment_id, project_id, user.username)
        return comment.to_record(document)

    async def get_comment_by_id(self, db: AsyncDatabase, comment_id: str) -> Dict[str, Any]:
        with database_errors("fetch comment", comment_id=comment_id):
            document = await db[comment.COLLECTION].find_one({"_id": ObjectId(comment_id)})
        if document is None:
            raise NotFoundError(resource="comment", resource_id=comment_id)
        return comment.to_record(document)

    async def get_project_comments(self, db: AsyncDatabase, project_id: str) -> List[Dict[str, Any]]:
        """All comments of a project, oldest first."""
        await self._ensure_project_exists(db, project_id)
        with database_errors("list comments", project_id=project_id):
            cursor = db[comment.COLLECTION].find({"projectId": project_id}).sort("createdAt", ASCENDING)
            documents = await cursor.to_list(length=None)
        return [comment.to_record(document) for document in documents]

    async def remove_comment(
        self,
        db: AsyncDatabase,
        project_id: str,
        comment_id: str,
        user: CurrentUser,
    ) -> List[Dict[str, Any]]:
        """
        Delete one comment written by `user` and return the project's remaining comments.

        Raises:
            NotFoundError: project or comment missing, or the comment belongs
                           to another project
            ForbiddenError: the caller did not write the comment
        """
        await self._ensure_project_exists(db, project_id)
        record = await self.get_comment_by_id(db, comment_id)

        if record.get("projectId") != project_id:
            raise NotFoundError(
                resource="comment",
                resource_id=comment_id,
                context={"project_id": project_id},
            )
        if (record.get("owner") or {}).get("id") != user.id:
            logger.warning("User %s tried to delete comment %s", user.username, comment_id)
            raise ForbiddenError(
                message="Only the comment author can delete this comment",
                context={"comment_id": comment_id},
            )

        with database_errors("delete comment", comment_id=comment_id):
            await db[comment.COLLECTION].delete_one({"_id": ObjectId(comment_id)})
            await db[project.COLLECTION].update_one(
                {"_id": ObjectId(project_id)},
                {"$pull": {"comments": comment_id}},
            )

        logger.info("Comment %s removed from project %s by %s", comment_id, project_id, user.username)
        return await self.get_project_comments(db, project_id)

    @staticmethod
    async def _ensure_project_exists(db: AsyncDatabase, project_id: str) -> None:
        with database_errors("fetch project", project_id=project_id):
            document = await db[project.COLLECTION].find_one(
                {"_id": ObjectId(project_id)}, projection={"_id": True}
            )
        if document is None:
            raise NotFoundError(resource="project", resource_id=project_id)


comment_service = CommentService()
