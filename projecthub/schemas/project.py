"""Project request bodies and response envelopes."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from projecthub.schemas.common import CamelModel


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ProjectPayload(CamelModel):
    """
    Body of POST /projects and PUT /projects/{id}.

    Every field is optional at the type level; `name` and `technologies`
    are enforced by the request pipeline so a missing field is reported as
    `invalid_input` like any other format error.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    github: Optional[str] = None
    technologies: Optional[List[str]] = None
    deployment_link: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class OwnerResponse(CamelModel):
    id: str
    username: str


class ProjectResponse(CamelModel):
    """Full representation of a project."""
    id: str = Field(description="Project identifier (ObjectId hex string)")
    name: str
    description: Optional[str] = None
    github: Optional[str] = None
    technologies: List[str]
    deployment_link: Optional[str] = None
    owner: OwnerResponse
    likes: List[str] = Field(default_factory=list, description="Ids of users who liked the project")
    saved_by: List[str] = Field(default_factory=list, description="Ids of users who bookmarked the project")
    comments: List[str] = Field(default_factory=list, description="Ids of the project's comments")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProjectEnvelope(CamelModel):
    project: ProjectResponse


class ProjectUpdateEnvelope(CamelModel):
    project: ProjectResponse
    message: str = "Project updated successfully"


class ProjectListEnvelope(CamelModel):
    projects: List[ProjectResponse]


class TechnologiesEnvelope(CamelModel):
    technologies: List[str]


class DeleteStatus(CamelModel):
    id: str
    deleted: bool
    comments_deleted: int = 0


class DeleteEnvelope(CamelModel):
    status: DeleteStatus


class LikesEnvelope(CamelModel):
    likes: List[str]


class SavedByEnvelope(CamelModel):
    saved_by: List[str]
