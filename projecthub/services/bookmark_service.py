"""
ProjectHub Backend — Bookmark Service (Data Access)
===================================================

What:  Add or remove the caller in a project's `savedBy` array.
How:   Same atomic `$addToSet` / `$pull` update as likes, so bookmarking
       twice or removing an absent bookmark is a no-op.
"""

import logging
from typing import List

from pymongo.asynchronous.database import AsyncDatabase

from projecthub.schemas.user import CurrentUser
from projecthub.services.base import update_membership

logger = logging.getLogger(__name__)


class BookmarkService:

    async def add_bookmark(self, db: AsyncDatabase, project_id: str, user: CurrentUser) -> List[str]:
        saved_by = await update_membership(db, project_id, "savedBy", "$addToSet", user.id)
        logger.info("Project %s bookmarked by %s", project_id, user.username)
        return saved_by

    async def remove_bookmark(self, db: AsyncDatabase, project_id: str, user: CurrentUser) -> List[str]:
        saved_by = await update_membership(db, project_id, "savedBy", "$pull", user.id)
        logger.info("Bookmark on project %s removed by %s", project_id, user.username)
        return saved_by


bookmark_service = BookmarkService()
