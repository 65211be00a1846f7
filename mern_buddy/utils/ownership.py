"""Owner scoping for topic and goal queries.

Every query built here carries the caller's ``user_id``. A record that
belongs to someone else cannot be told apart from one that does not exist.
"""
from bson import ObjectId
from bson.errors import InvalidId

from mern_buddy.exceptions import NotFoundError


def owner_query(user_id: str, **filters) -> dict:
    """
    Build a query restricted to records owned by ``user_id``.

    Examples:
        >>> owner_query("user123", category="react")
        {'user_id': 'user123', 'category': 'react'}
    """
    return {"user_id": user_id, **filters}


def owned_record_query(user_id: str, record_id: str, label: str = "Record") -> dict:
    """
    Build a query matching a single record by id and owner.

    Args:
        user_id: Caller's user ID
        record_id: String form of the record's ObjectId
        label: Name used in the not-found message

    Raises:
        NotFoundError: If ``record_id`` is not a valid ObjectId
    """
    try:
        object_id = ObjectId(record_id)
    except (InvalidId, TypeError):
        raise NotFoundError(f"{label} not found")

    return owner_query(user_id, _id=object_id)
