"""
ProjectHub Backend — Project Route Handlers
============================================

What:  /projects endpoints: CRUD, technology tags, comments, likes, bookmarks.
How:   Each handler is a straight line: the request pipeline dependencies
       authenticate and validate, the handler delegates to a service and
       wraps the result in its response envelope. Errors are raised, never
       caught here; the global exception handlers shape them.

Route Inventory:
    GET    /projects                               list (name / technologies filters)
    POST   /projects                               create (owner = caller)
    GET    /projects/technologies                  technology vocabulary
    GET    /projects/{project_id}                  fetch one
    PUT    /projects/{project_id}                  update (owner only)
    DELETE /projects/{project_id}                  delete (owner only)
    GET    /projects/{project_id}/comments         list comments
    POST   /projects/{project_id}/comments         add comment
    DELETE /projects/{project_id}/comments/{cid}   delete comment (author only)
    POST   /projects/{project_id}/likes            like
    DELETE /projects/{project_id}/likes            unlike
    POST   /projects/{project_id}/bookmark         bookmark
    DELETE /projects/{project_id}/bookmark         remove bookmark
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from pymongo.asynchronous.database import AsyncDatabase

from projecthub.database import get_database
from projecthub.dependencies import (
    comment_id_param,
    comment_text,
    project_fields,
    project_filters,
    project_id_param,
)
from projecthub.middleware.auth import authenticate_token
from projecthub.schemas.comment import CommentEnvelope, CommentListEnvelope
from projecthub.schemas.common import ErrorResponse
from projecthub.schemas.project import (
    DeleteEnvelope,
    LikesEnvelope,
    ProjectEnvelope,
    ProjectListEnvelope,
    ProjectUpdateEnvelope,
    SavedByEnvelope,
    TechnologiesEnvelope,
)
from projecthub.schemas.user import CurrentUser
from projecthub.services.bookmark_service import bookmark_service
from projecthub.services.comment_service import comment_service
from projecthub.services.project_service import project_service
from projecthub.validation import TECHNOLOGY_TAGS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["Projects"])

# Error responses shared by the authenticated routes, for the OpenAPI docs
AUTH_ERRORS = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    401: {"description": "Missing or malformed bearer token", "model": ErrorResponse},
    403: {"description": "Token rejected or not the owner", "model": ErrorResponse},
    404: {"description": "Project or comment not found", "model": ErrorResponse},
}


# ══════════════════════════════════════════════════════════════════════════
# Projects
# ══════════════════════════════════════════════════════════════════════════

@router.get(
    "",
    response_model=ProjectListEnvelope,
    responses={400: {"description": "Invalid filter", "model": ErrorResponse}},
    summary="List projects",
)
async def list_projects(
    filters: Dict[str, Any] = Depends(project_filters),
    db: AsyncDatabase = Depends(get_database),
) -> ProjectListEnvelope:
    """
    List projects, newest first.

    Example:
        GET /projects?technologies=Rust,Python&name=cli
        → projects tagged with both Rust and Python whose name contains "cli"
    """
    projects = await project_service.get_all_projects(
        db, name=filters["name"], technologies=filters["technologies"]
    )
    return ProjectListEnvelope(projects=projects)


@router.post(
    "",
    response_model=ProjectEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses=AUTH_ERRORS,
    summary="Create a project owned by the caller",
)
async def create_project(
    fields: Dict[str, Any] = Depends(project_fields),
    user: CurrentUser = Depends(authenticate_token),
    db: AsyncDatabase = Depends(get_database),
) -> ProjectEnvelope:
    project = await project_service.create_project(db, fields, user)
    return ProjectEnvelope(project=project)


# Declared before /{project_id} so "technologies" is not read as an id
@router.get(
    "/technologies",
    response_model=TechnologiesEnvelope,
    summary="List the supported technology tags",
)
async def list_technologies() -> TechnologiesEnvelope:
    return TechnologiesEnvelope(technologies=list(TECHNOLOGY_TAGS))


@router.get(
    "/{project_id}",
    response_model=ProjectEnvelope,
    responses={
        400: {"description": "Invalid project id", "model": ErrorResponse},
        404: {"description": "Project not found", "model": ErrorResponse},
    },
    summary="Get a single project",
)
async def get_project(
    project_id: str = Depends(project_id_param),
    db: AsyncDatabase = Depends(get_database),
) -> ProjectEnvelope:
    project = await project_service.get_project_by_id(db, project_id)
    return ProjectEnvelope(project=project)


@router.put(
    "/{project_id}",
    response_model=ProjectUpdateEnvelope,
    responses=AUTH_ERRORS,
    summary="Update a project (owner only)",
)
async def update_project(
    project_id: str = Depends(project_id_param),
    fields: Dict[str, Any] = Depends(project_fields),
    user: CurrentUser = Depends(authenticate_token),
    db: AsyncDatabase = Depends(get_database),
) -> ProjectUpdateEnvelope:
    project = await project_service.update_project(db, project_id, fields, user)
    return ProjectUpdateEnvelope(project=project, message="Project updated successfully")


@router.delete(
    "/{project_id}",
    response_model=DeleteEnvelope,
    status_code=status.HTTP_200_OK,
    responses=AUTH_ERRORS,
    summary="Delete a project and its comments (owner only)",
)
async def delete_project(
    project_id: str = Depends(project_id_param),
    user: CurrentUser = Depends(authenticate_token),
    db: AsyncDatabase = Depends(get_database),
) -> DeleteEnvelope:
    delete_status = await project_service.remove_project(db, project_id, user)
    return DeleteEnvelope(status=delete_status)


# ══════════════════════════════════════════════════════════════════════════
# Comments
# ══════════════════════════════════════════════════════════════════════════

@router.get(
    "/{project_id}/comments",
    response_model=CommentListEnvelope,
    responses={
        400: {"description": "Invalid project id", "model": ErrorResponse},
        404: {"description": "Project not found", "model": ErrorResponse},
    },
    summary="List a project's comments",
)
async def list_comments(
    project_id: str = Depends(project_id_param),
    db: AsyncDatabase = Depends(get_database),
) -> CommentListEnvelope:
    comments = await comment_service.get_project_comments(db, project_id)
    return CommentListEnvelope(comments=comments)


@router.post(
    "/{project_id}/comments",
    response_model=CommentEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses=AUTH_ERRORS,
    summary="Comment on a project",
)
async def create_comment(
    project_id: str = Depends(project_id_param),
    text: str = Depends(comment_text),
    user: CurrentUser = Depends(authenticate_token),
    db: AsyncDatabase = Depends(get_database),
) -> CommentEnvelope:
    comment = await comment_service.create_comment(db, project_id, text, user)
    return CommentEnvelope(comment=comment)


@router.delete(
    "/{project_id}/comments/{comment_id}",
    response_model=CommentListEnvelope,
    responses=AUTH_ERRORS,
    summary="Delete a comment (author only)",
)
async def delete_comment(
    project_id: str = Depends(project_id_param),
    comment_id: str = Depends(comment_id_param),
    user: CurrentUser = Depends(authenticate_token),
    db: AsyncDatabase = Depends(get_database),
) -> CommentListEnvelope:
    comments = await comment_service.remove_comment(db, project_id, comment_id, user)
    return CommentListEnvelope(comments=comments)


# ══════════════════════════════════════════════════════════════════════════
# Likes & Bookmarks
# ══════════════════════════════════════════════════════════════════════════

@router.post(
    "/{project_id}/likes",
    response_model=LikesEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses=AUTH_ERRORS,
    summary="Like a project (idempotent)",
)
async def like_project(
    project_id: str = Depends(project_id_param),
    user: CurrentUser = Depends(authenticate_token),
    db: AsyncDatabase = Depends(get_database),
) -> LikesEnvelope:
    likes = await project_service.like_project(db, project_id, user)
    return LikesEnvelope(likes=likes)


@router.delete(
    "/{project_id}/likes",
    response_model=LikesEnvelope,
    responses=AUTH_ERRORS,
    summary="Remove the caller's like (idempotent)",
)
async def unlike_project(
    project_id: str = Depends(project_id_param),
    user: CurrentUser = Depends(authenticate_token),
    db: AsyncDatabase = Depends(get_database),
) -> LikesEnvelope:
    likes = await project_service.unlike_project(db, project_id, user)
    return LikesEnvelope(likes=likes)


@router.post(
    "/{project_id}/bookmark",
    response_model=SavedByEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses=AUTH_ERRORS,
    summary="Bookmark a project (idempotent)",
)
async def bookmark_project(
    project_id: str = Depends(project_id_param),
    user: CurrentUser = Depends(authenticate_token),
    db: AsyncDatabase = Depends(get_database),
) -> SavedByEnvelope:
    saved_by = await bookmark_service.add_bookmark(db, project_id, user)
    return SavedByEnvelope(saved_by=saved_by)


@router.delete(
    "/{project_id}/bookmark",
    response_model=SavedByEnvelope,
    responses=AUTH_ERRORS,
    summary="Remove the caller's bookmark (idempotent)",
)
async def unbookmark_project(
    project_id: str = Depends(project_id_param),
    user: CurrentUser = Depends(authenticate_token),
    db: AsyncDatabase = Depends(get_database),
) -> SavedByEnvelope:
    saved_by = await bookmark_service.remove_bookmark(db, project_id, user)
    return SavedByEnvelope(saved_by=saved_by)
