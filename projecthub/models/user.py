"""User documents."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId

COLLECTION = "users"

PRIVATE_FIELDS = ("_id", "hashedPassword")


def new_user_document(fields: Dict[str, Any], hashed_password: str) -> Dict[str, Any]:
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(),
        "username": fields["username"],
        "email": fields["email"],
        "firstName": fields["firstName"],
        "lastName": fields["lastName"],
        "bio": fields.get("bio"),
        "hashedPassword": hashed_password,
        "createdAt": now,
        "updatedAt": now,
    }


def to_record(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Public view of a user: the password hash never leaves this module."""
    if document is None:
        return None
    record = {key: value for key, value in document.items() if key not in PRIVATE_FIELDS}
    record["id"] = str(document["_id"])
    return record
