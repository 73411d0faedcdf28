"""
ProjectHub Backend — Project Service (Data Access)
===================================================

What:  CRUD and like/unlike operations on the `projects` collection.
How:   Receives already-validated values from the request pipeline,
       translates them into MongoDB operations and returns plain records
       (see projecthub.models.project.to_record).
Who:   Called by the project route handlers and the user profile route.

Ownership:
    Update and delete compare the project's `owner.id` with the caller's id
    here, in the data-access layer, and raise ForbiddenError on mismatch.
    Deleting a project also deletes its comments.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.asynchronous.database import AsyncDatabase

from projecthub.exceptions import ForbiddenError, NotFoundError
from projecthub.models import comment, project
from projecthub.schemas.user import CurrentUser
from projecthub.services.base import database_errors, update_membership

logger = logging.getLogger(__name__)


class ProjectService:
    """
    Data-access layer for projects.

    Stateless: every method receives the database handle, so tests can pass
    a mock database and routes receive the real one through Depends().
    """

    async def create_project(
        self,
        db: AsyncDatabase,
        fields: Dict[str, Any],
        user: CurrentUser,
    ) -> Dict[str, Any]:
        """
        Insert a new project owned by `user`.

        Args:
            fields: validated name, description, github, technologies, deploymentLink
            user: the authenticated caller, recorded as owner

        Returns:
            The stored project record (with generated `id`)
        """
        document = project.new_project_document(fields, owner=user.model_dump())
        with database_errors("create project"):
            await db[project.COLLECTION].insert_one(document)
        logger.info("Project %s created by %s", document["_id"], user.username)
        return project.to_record(document)

    async def get_all_projects(
        self,
        db: AsyncDatabase,
        name: Optional[str] = None,
        technologies: Optional[List[str]] = None,
    ) -> List[Dict[str, Any]]:
        """
        List projects, newest first.

        Filters:
            name: case-insensitive substring of the project name
            technologies: every listed tag must be present on the project
        """
        query: Dict[str, Any] = {}
        if name:
            query["name"] = {"$regex": re.escape(name), "$options": "i"}
        if technologies:
            query["technologies"] = {"$all": technologies}

        with database_errors("list projects"):
            cursor = db[project.COLLECTION].find(query).sort("createdAt", DESCENDING)
            documents = await cursor.to_list(length=None)
        return [project.to_record(document) for document in documents]

    async def get_projects_by_owner(self, db: AsyncDatabase, user_id: str) -> List[Dict[str, Any]]:
        with database_errors("list user projects", user_id=user_id):
            cursor = db[project.COLLECTION].find({"owner.id": user_id}).sort("createdAt", DESCENDING)
            documents = await cursor.to_list(length=None)
        return [project.to_record(document) for document in documents]

    async def get_project_by_id(self, db: AsyncDatabase, project_id: str) -> Dict[str, Any]:
        """
        Raises:
            NotFoundError: no project has this id (→ 404)
        """
        with database_errors("fetch project", project_id=project_id):
            document = await db[project.COLLECTION].find_one({"_id": ObjectId(project_id)})
        if document is None:
            raise NotFoundError(resource="project", resource_id=project_id)
        return project.to_record(document)

    async def update_project(
        self,
        db: AsyncDatabase,
        project_id: str,
        fields: Dict[str, Any],
        user: CurrentUser,
    ) -> Dict[str, Any]:
        """
        Replace the editable fields of a project owned by `user`.

        Raises:
            NotFoundError: project does not exist
            ForbiddenError: caller is not the owner (record left unchanged)
        """
        existing = await self.get_project_by_id(db, project_id)
        self._ensure_owner(existing, user, "update")

        changes = {key: fields.get(key) for key in project.EDITABLE_FIELDS}
        changes["updatedAt"] = datetime.now(timezone.utc)

        with database_errors("update project", project_id=project_id):
            document = await db[project.COLLECTION].find_one_and_update(
                {"_id": ObjectId(project_id), "owner.id": user.id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        # Deleted between the ownership check and the write
        if document is None:
            raise NotFoundError(resource="project", resource_id=project_id)

        logger.info("Project %s updated by %s", project_id, user.username)
        return project.to_record(document)

    async def remove_project(
        self,
        db: AsyncDatabase,
        project_id: str,
        user: CurrentUser,
    ) -> Dict[str, Any]:
        """
        Delete a project owned by `user` together with its comments.

        Returns:
            {"id": ..., "deleted": True, "commentsDeleted": int}

        Raises:
            NotFoundError: project does not exist (comments left untouched)
            ForbiddenError: caller is not the owner
        """
        existing = await self.get_project_by_id(db, project_id)
        self._ensure_owner(existing, user, "delete")

        with database_errors("delete project", project_id=project_id):
            result = await db[project.COLLECTION].delete_one(
                {"_id": ObjectId(project_id), "owner.id": user.id}
            )
        # Deleted between the ownership check and the write
        if result.deleted_count == 0:
            raise NotFoundError(resource="project", resource_id=project_id)

        with database_errors("delete project comments", project_id=project_id):
            comments_result = await db[comment.COLLECTION].delete_many({"projectId": project_id})

        logger.info(
            "Project %s deleted by %s (%d comments removed)",
            project_id,
            user.username,
            comments_result.deleted_count,
        )
        return {
            "id": project_id,
            "deleted": True,
            "commentsDeleted": comments_result.deleted_count,
        }

    async def like_project(self, db: AsyncDatabase, project_id: str, user: CurrentUser) -> List[str]:
        """Add the caller to the project's likes; liking twice is a no-op."""
        likes = await update_membership(db, project_id, "likes", "$addToSet", user.id)
        logger.info("Project %s liked by %s", project_id, user.username)
        return likes

    async def unlike_project(self, db: AsyncDatabase, project_id: str, user: CurrentUser) -> List[str]:
        """Remove the caller from the project's likes; unliking when not liked is a no-op."""
        likes = await update_membership(db, project_id, "likes", "$pull", user.id)
        logger.info("Project %s unliked by %s", project_id, user.username)
        return likes

    @staticmethod
    def _ensure_owner(record: Dict[str, Any], user: CurrentUser, action: str) -> None:
        owner_id = (record.get("owner") or {}).get("id")
        if owner_id != user.id:
            logger.warning(
                "User %s tried to %s project %s owned by %s",
                user.username,
                action,
                record.get("id"),
                owner_id,
            )
            raise ForbiddenError(
                message=f"Only the project owner can {action} this project",
                context={"project_id": record.get("id")},
            )


# ── Singleton Instance ────────────────────────────────────────────────────
project_service = ProjectService()
