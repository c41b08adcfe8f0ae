"""Activity type and activity repositories for MongoDB storage.

Thin record operations feeding the menu derivation.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from pymongo import DESCENDING
from pymongo.collection import Collection

from tracklog.activities.models import Activity, ActivityType, merge_activity_type_update

from .client import retry_on_connection_failure

logger = logging.getLogger(__name__)


def _object_id(document_id: str) -> Any:
    """Convert a string ID to ObjectId, returning None if malformed."""
    from bson import ObjectId
    from bson.errors import InvalidId

    try:
        return ObjectId(document_id)
    except (InvalidId, TypeError):
        return None


class ActivityTypeRepository:
    """Repository for activity type storage operations."""

    def __init__(self, collection: Collection[dict[str, Any]]) -> None:
        """Initialize repository with MongoDB collection.

        Args:
            collection: MongoDB collection for activity types.
        """
        self._collection = collection
        self._ensure_indexes()

    def _ensure_indexes(self) -> None:
        """Create indexes for efficient queries."""
        self._collection.create_index("name")
        self._collection.create_index("category_id")

    @retry_on_connection_failure()
    def create(self, activity_type: ActivityType) -> str:
        """Save an activity type and return its ID."""
        doc = activity_type.to_dict()
        doc["created_at"] = datetime.now(UTC)
        result = self._collection.insert_one(doc)
        return str(result.inserted_id)

    def create_many(self, activity_types: list[ActivityType]) -> list[str]:
        """Save several activity types, returning their IDs in order."""
        return [self.create(activity_type) for activity_type in activity_types]

    @retry_on_connection_failure()
    def find_all(self) -> list[ActivityType]:
        """Get all activity types in insertion order."""
        return [ActivityType.from_dict(doc) for doc in self._collection.find()]

    @retry_on_connection_failure()
    def get_by_id(self, type_id: str) -> ActivityType | None:
        """Retrieve an activity type by ID.

        Returns:
            The activity type or None if not found.
        """
        object_id = _object_id(type_id)
        if object_id is None:
            return None

        doc = self._collection.find_one({"_id": object_id})
        if doc is None:
            return None
        return ActivityType.from_dict(doc)

    @retry_on_connection_failure()
    def update(self, type_id: str, changes: dict[str, Any]) -> int:
        """Apply a partial update to an activity type.

        Args:
            type_id: The activity type ID.
            changes: Fields to change (unset or empty fields are kept).

        Returns:
            Number of modified documents (0 if not found).

        Raises:
            ValueError: If no updatable field is supplied.
        """
        original = self.get_by_id(type_id)
        if original is None:
            return 0

        updated = merge_activity_type_update(original, changes)
        doc = updated.to_dict()
        doc["updated_at"] = datetime.now(UTC)
        result = self._collection.update_one({"_id": _object_id(type_id)}, {"$set": doc})
        logger.info(f"Updated activity type {type_id}")
        return result.modified_count

    @retry_on_connection_failure()
    def delete(self, type_id: str) -> int:
        """Delete an activity type by ID.

        Returns:
            Number of deleted documents (0 if not found).
        """
        object_id = _object_id(type_id)
        if object_id is None:
            return 0
        result = self._collection.delete_one({"_id": object_id})
        return result.deleted_count


class ActivityRepository:
    """Repository for logged activities."""

    def __init__(self, collection: Collection[dict[str, Any]]) -> None:
        """Initialize repository with MongoDB collection.

        Args:
            collection: MongoDB collection for activities.
        """
        self._collection = collection
        self._ensure_indexes()

    def _ensure_indexes(self) -> None:
        """Create indexes for efficient queries."""
        self._collection.create_index([("timestamp", DESCENDING)])
        self._collection.create_index([("type_id", 1), ("timestamp", DESCENDING)])

    @retry_on_connection_failure()
    def insert(self, activity: Activity) -> str:
        """Save an activity and return its ID."""
        result = self._collection.insert_one(activity.to_dict())
        return str(result.inserted_id)

    @retry_on_connection_failure()
    def find_last_by_type(self, type_id: str) -> Activity | None:
        """Get the most recent activity logged for a type.

        Returns:
            The activity with the highest timestamp, or None if none logged.
        """
        cursor = self._collection.find({"type_id": type_id}).sort("timestamp", DESCENDING).limit(1)
        for doc in cursor:
            return Activity.from_dict(doc)
        return None


__all__ = ["ActivityRepository", "ActivityTypeRepository"]
