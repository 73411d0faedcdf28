"""Project documents."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId

COLLECTION = "projects"

# Fields a client may set on create/update; everything else is server-managed
EDITABLE_FIELDS = ("name", "description", "github", "technologies", "deploymentLink")


def new_project_document(fields: Dict[str, Any], owner: Dict[str, str]) -> Dict[str, Any]:
    """Build a project document from validated fields and the owning user."""
    now = datetime.now(timezone.utc)
    document = {key: fields.get(key) for key in EDITABLE_FIELDS}
    document.update(
        {
            "_id": ObjectId(),
            "owner": {"id": owner["id"], "username": owner["username"]},
            "likes": [],
            "savedBy": [],
            "comments": [],
            "createdAt": now,
            "updatedAt": now,
        }
    )
    return document


def to_record(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Convert a stored project document to a plain record with string ids."""
    if document is None:
        return None
    record = {key: value for key, value in document.items() if key != "_id"}
    record["id"] = str(document["_id"])
    record["likes"] = [str(user_id) for user_id in document.get("likes", [])]
    record["savedBy"] = [str(user_id) for user_id in document.get("savedBy", [])]
    record["comments"] = [str(comment_id) for comment_id in document.get("comments", [])]
    return record
