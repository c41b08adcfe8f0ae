"""Activities module for tracklog.

Provides activity type, logged activity and menu item models.
"""

from .elapsed import format_elapsed, now_ms
from .models import (
    NOT_AVAILABLE,
    Activity,
    ActivityType,
    MenuItem,
    MenuStatus,
    merge_activity_type_update,
)

__all__ = [
    "NOT_AVAILABLE",
    "Activity",
    "ActivityType",
    "MenuItem",
    "MenuStatus",
    "format_elapsed",
    "merge_activity_type_update",
    "now_ms",
]
