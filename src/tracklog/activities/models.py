"""Data models for activity types, logged activities and menu items.

Timestamps are epoch-millisecond integers at every boundary.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

NOT_AVAILABLE = "N/A"


class MenuStatus(Enum):
    """Next actionable state of an activity type."""

    NONE = "none"
    START = "start"
    END = "end"


@dataclass(frozen=True)
class ActivityType:
    """A user-defined kind of activity.

    Attributes:
        id: Storage identifier
        name: Display name (used for non-toggle types)
        toggle: True if the type has paired start/end semantics
        start_label: Label shown when the next action is to start
        end_label: Label shown when the next action is to end
        category_id: Owning category
        description: Optional free text
    """

    id: Any
    name: str
    toggle: bool = False
    start_label: str = ""
    end_label: str = ""
    category_id: Any = None
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for MongoDB storage."""
        return {
            "name": self.name,
            "toggle": self.toggle,
            "start_label": self.start_label,
            "end_label": self.end_label,
            "category_id": self.category_id,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ActivityType":
        """Create from MongoDB document or request payload."""
        raw_id = data.get("_id", data.get("id"))
        return cls(
            id=str(raw_id) if raw_id is not None else None,
            name=data.get("name", ""),
            toggle=bool(data.get("toggle", False)),
            start_label=data.get("start_label") or data.get("startLabel") or "",
            end_label=data.get("end_label") or data.get("endLabel") or "",
            category_id=data.get("category_id", data.get("categoryId")),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class Activity:
    """One logged event for an activity type.

    ``status`` keeps the stored value as-is ("start", "end", None or
    anything else a client wrote).
    """

    type_id: Any
    timestamp: int
    status: str | None = None
    description: str | None = None
    id: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for MongoDB storage."""
        return {
            "type_id": self.type_id,
            "timestamp": self.timestamp,
            "status": self.status,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Activity":
        """Create from MongoDB document."""
        raw_id = data.get("_id", data.get("id"))
        return cls(
            id=str(raw_id) if raw_id is not None else None,
            type_id=data.get("type_id", data.get("typeId")),
            timestamp=int(data.get("timestamp") or 0),
            status=data.get("status"),
            description=data.get("description"),
        )


@dataclass
class MenuItem:
    """Display-ready next action for one activity type.

    Built fresh on every derivation pass. ``last_logged`` is an elapsed
    string (or "N/A") for the flat menu and a raw timestamp (or 0) for the
    grouped menu, which also fills ``time_elapsed`` and ``description``.
    """

    name: str
    id: Any
    status: MenuStatus
    last_logged: str | int
    time_elapsed: str | None = None
    description: str | None = None

    @property
    def label(self) -> str:
        """Plain "name (elapsed)" label."""
        elapsed = self.time_elapsed if self.time_elapsed is not None else self.last_logged
        return f"{self.name} ({elapsed})"

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase shape handed to request handlers."""
        data: dict[str, Any] = {
            "name": self.name,
            "id": self.id,
            "status": self.status.value,
            "lastLogged": self.last_logged,
        }
        if self.time_elapsed is not None:
            data["timeElapsed"] = self.time_elapsed
        if self.description is not None:
            data["description"] = self.description
        return data


_UPDATABLE_FIELDS = ("name", "toggle", "start_label", "end_label", "category_id")


def merge_activity_type_update(original: ActivityType, changes: dict[str, Any]) -> ActivityType:
    """Apply a partial update to an activity type.

    Only truthy values in ``changes`` replace stored fields. camelCase keys
    (``startLabel``, ``endLabel``, ``categoryId``) are accepted as well.

    Raises:
        ValueError: If none of the updatable fields is supplied
    """
    normalized = {
        "name": changes.get("name"),
        "toggle": changes.get("toggle"),
        "start_label": changes.get("start_label") or changes.get("startLabel"),
        "end_label": changes.get("end_label") or changes.get("endLabel"),
        "category_id": changes.get("category_id") or changes.get("categoryId"),
    }
    if not any(normalized[key] for key in _UPDATABLE_FIELDS):
        raise ValueError("Missing name, toggle, startLabel, endLabel, categoryId")

    return ActivityType(
        id=original.id,
        name=normalized["name"] or original.name,
        toggle=bool(normalized["toggle"] or original.toggle),
        start_label=normalized["start_label"] or original.start_label,
        end_label=normalized["end_label"] or original.end_label,
        category_id=normalized["category_id"] or original.category_id,
        description=original.description,
    )


__all__ = [
    "NOT_AVAILABLE",
    "Activity",
    "ActivityType",
    "MenuItem",
    "MenuStatus",
    "merge_activity_type_update",
]
