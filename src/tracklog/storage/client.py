"""MongoDB storage client for tracklog.

Provides connection management, retry logic, and repository access.
"""

import logging
import time
from collections.abc import Callable
from functools import wraps
from typing import TYPE_CHECKING, Any, TypeVar

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

if TYPE_CHECKING:
    from .repositories import ActivityRepository, ActivityTypeRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


def retry_on_connection_failure(
    max_retries: int = 5,
    base_delay: float = 1.0,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator for exponential backoff retry on connection failures.

    Args:
        max_retries: Maximum number of retry attempts.
        base_delay: Base delay in seconds (doubles each retry).

    Returns:
        Decorated function with retry logic.
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            last_exception: Exception | None = None

            for attempt in range(max_retries):
                try:
                    return func(*args, **kwargs)
                except (ConnectionFailure, ServerSelectionTimeoutError) as e:
                    last_exception = e
                    if attempt < max_retries - 1:
                        delay = base_delay * (2**attempt)
                        logger.warning(
                            f"Connection failed (attempt {attempt + 1}/{max_retries}), "
                            f"retrying in {delay:.1f}s: {e}"
                        )
                        time.sleep(delay)
                    else:
                        logger.error(f"Connection failed after {max_retries} attempts: {e}")

            if last_exception:
                raise last_exception
            raise RuntimeError("Unexpected retry loop exit")

        return wrapper

    return decorator


class MongoStorageClient:
    """High-level MongoDB storage client.

    Manages connection and provides access to repositories.
    """

    def __init__(
        self,
        uri: str = "mongodb://localhost:27017",
        database_name: str = "tracklog",
        connect_timeout_ms: int = 5000,
        server_selection_timeout_ms: int = 5000,
        client_factory: Callable[..., "MongoClient[dict[str, Any]]"] = MongoClient,
    ) -> None:
        """Initialize the storage client.

        Args:
            uri: MongoDB connection URI.
            database_name: Name of the database to use.
            connect_timeout_ms: Connection timeout in milliseconds.
            server_selection_timeout_ms: Server selection timeout in milliseconds.
            client_factory: Callable building the MongoClient (mongomock in tests).
        """
        self._uri = uri
        self._database_name = database_name
        self._connect_timeout_ms = connect_timeout_ms
        self._server_selection_timeout_ms = server_selection_timeout_ms
        self._client_factory = client_factory

        self._client: MongoClient[dict[str, Any]] | None = None
        self._db: Database[dict[str, Any]] | None = None
        self._activity_types: "ActivityTypeRepository | None" = None
        self._activities: "ActivityRepository | None" = None

        self._connected = False

    def connect(self) -> None:
        """Connect to MongoDB.

        Raises:
            ConnectionFailure: If connection fails.
        """
        from .repositories import ActivityRepository, ActivityTypeRepository

        if self._connected:
            return

        try:
            self._client = self._client_factory(
                self._uri,
                connectTimeoutMS=self._connect_timeout_ms,
                serverSelectionTimeoutMS=self._server_selection_timeout_ms,
            )

            # Verify connection
            self._client.admin.command("ping")

            self._db = self._client[self._database_name]
            self._activity_types = ActivityTypeRepository(self._db["activity_types"])
            self._activities = ActivityRepository(self._db["activities"])
            self._connected = True

            logger.info(f"Connected to MongoDB at {self._uri}")

        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            self._connected = False
            raise

    def disconnect(self) -> None:
        """Disconnect from MongoDB."""
        if self._client is not None:
            self._client.close()
            self._client = None
            self._db = None
            self._activity_types = None
            self._activities = None
            self._connected = False
            logger.info("Disconnected from MongoDB")

    def is_connected(self) -> bool:
        """Check if connected to MongoDB."""
        if not self._connected or self._client is None:
            return False

        try:
            self._client.admin.command("ping")
            return True
        except Exception:
            self._connected = False
            return False

    def health_check(self) -> bool:
        """Perform a health check on the database."""
        return self.is_connected()

    @property
    def activity_types(self) -> "ActivityTypeRepository":
        """Get the activity types repository.

        Raises:
            RuntimeError: If not connected.
        """
        if self._activity_types is None:
            raise RuntimeError("Not connected to MongoDB. Call connect() first.")
        return self._activity_types

    @property
    def activities(self) -> "ActivityRepository":
        """Get the activities repository.

        Raises:
            RuntimeError: If not connected.
        """
        if self._activities is None:
            raise RuntimeError("Not connected to MongoDB. Call connect() first.")
        return self._activities

    @property
    def database(self) -> Database[dict[str, Any]]:
        """Get the database instance.

        Raises:
            RuntimeError: If not connected.
        """
        if self._db is None:
            raise RuntimeError("Not connected to MongoDB. Call connect() first.")
        return self._db

    def __enter__(self) -> "MongoStorageClient":
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        self.disconnect()


__all__ = [
    "MongoStorageClient",
    "retry_on_connection_failure",
]
