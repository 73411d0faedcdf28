"""Comment documents."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId

COLLECTION = "comments"


def new_comment_document(text: str, project_id: str, owner: Dict[str, str]) -> Dict[str, Any]:
    return {
        "_id": ObjectId(),
        "comment": text,
        "projectId": project_id,
        "owner": {"id": owner["id"], "username": owner["username"]},
        "createdAt": datetime.now(timezone.utc),
    }


def to_record(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if document is None:
        return None
    record = {key: value for key, value in document.items() if key != "_id"}
    record["id"] = str(document["_id"])
    return record
