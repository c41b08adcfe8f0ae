"""Menu service wiring activity sources to the menu assemblers."""

import asyncio
import logging
from typing import Any, Protocol

from tracklog.activities.models import Activity, ActivityType
from tracklog.config import MenuConfig

from .assembler import MenuV1, MenuV2, derive_menu_v1, derive_menu_v2

logger = logging.getLogger(__name__)


class ActivitySource(Protocol):
    """Protocol for the record operations the menu needs."""

    async def list_activity_types(self) -> list[ActivityType]:
        """Return every activity type."""
        ...

    async def last_activity_for_type(self, type_id: Any) -> Activity | None:
        """Return the most recent activity of a type, if any."""
        ...


class TypeRepository(Protocol):
    """Protocol for synchronous activity type persistence."""

    def find_all(self) -> list[ActivityType]: ...


class LastActivityRepository(Protocol):
    """Protocol for synchronous activity persistence."""

    def find_last_by_type(self, type_id: str) -> Activity | None: ...


class RepositoryActivitySource:
    """Activity source backed by synchronous repositories.

    Each call runs in a worker thread so concurrent lookups do not block
    the event loop.
    """

    def __init__(
        self,
        activity_types: TypeRepository,
        activities: LastActivityRepository,
    ) -> None:
        self._activity_types = activity_types
        self._activities = activities

    async def list_activity_types(self) -> list[ActivityType]:
        return await asyncio.to_thread(self._activity_types.find_all)

    async def last_activity_for_type(self, type_id: Any) -> Activity | None:
        return await asyncio.to_thread(self._activities.find_last_by_type, type_id)


class MenuService:
    """Builds menus from the current state of an activity source."""

    def __init__(self, source: ActivitySource, config: MenuConfig | None = None) -> None:
        """Initialize menu service.

        Args:
            source: Provider of activity types and last activities
            config: Menu settings (gaming keyword, game marker)
        """
        self._source = source
        self._config = config or MenuConfig()

    async def menu_v1(self, now: int | None = None) -> MenuV1:
        """Build the flat menu.

        Raises:
            LookupFailure: If any last-activity lookup fails
        """
        types = await self._source.list_activity_types()
        logger.debug(f"Deriving v1 menu for {len(types)} activity types")
        return await derive_menu_v1(types, self._source.last_activity_for_type, now)

    async def menu_v2(self, now: int | None = None) -> MenuV2:
        """Build the grouped menu.

        Raises:
            LookupFailure: If any last-activity lookup fails
        """
        types = await self._source.list_activity_types()
        logger.debug(f"Deriving v2 menu for {len(types)} activity types")
        return await derive_menu_v2(
            types,
            self._source.last_activity_for_type,
            now,
            gaming_keyword=self._config.gaming_keyword,
            game_marker=self._config.game_marker,
        )


__all__ = [
    "ActivitySource",
    "MenuService",
    "RepositoryActivitySource",
]
