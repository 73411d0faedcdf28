"""Comment request body and response envelopes."""

from datetime import datetime
from typing import List, Optional

from projecthub.schemas.common import CamelModel
from projecthub.schemas.project import OwnerResponse


class CommentPayload(CamelModel):
    """Body of POST /projects/{id}/comments."""
    comment: Optional[str] = None


class CommentResponse(CamelModel):
    id: str
    comment: str
    project_id: str
    owner: OwnerResponse
    created_at: Optional[datetime] = None


class CommentEnvelope(CamelModel):
    comment: CommentResponse


class CommentListEnvelope(CamelModel):
    comments: List[CommentResponse]
