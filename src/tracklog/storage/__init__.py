"""MongoDB storage module for tracklog.

Provides persistent storage for activity types and logged activities.
"""

from .client import MongoStorageClient, retry_on_connection_failure
from .repositories import ActivityRepository, ActivityTypeRepository

__all__ = [
    "ActivityRepository",
    "ActivityTypeRepository",
    "MongoStorageClient",
    "retry_on_connection_failure",
]
