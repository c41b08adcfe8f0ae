"""Toggle-state resolution for activity types.

Turns an activity type and its most recent activity into the menu item
for the next action:

- non-toggle types always show their own name with status "none"
- toggle types with no history show the start label
- toggle types whose last activity was "start" show the end label
- any other last status shows the start label again
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from tracklog.activities.elapsed import format_elapsed, now_ms
from tracklog.activities.models import (
    NOT_AVAILABLE,
    Activity,
    ActivityType,
    MenuItem,
    MenuStatus,
)

from .errors import LookupFailure

logger = logging.getLogger(__name__)

LastActivityLookup = Callable[[Any], Awaitable[Activity | None]]
Resolver = Callable[[ActivityType, Activity | None, int | None], MenuItem]


def _elapsed(last_activity: Activity | None, now: int | None) -> str | None:
    if last_activity is not None and last_activity.timestamp:
        return format_elapsed(last_activity.timestamp, now)
    return None


def resolve_menu_item(
    activity_type: ActivityType,
    last_activity: Activity | None,
    now: int | None = None,
) -> MenuItem:
    """Resolve the flat-menu item for one activity type.

    ``last_logged`` holds the elapsed time since the last activity, or
    "N/A" when the type was never logged.
    """
    elapsed = _elapsed(last_activity, now) or NOT_AVAILABLE

    if not activity_type.toggle:
        return MenuItem(
            name=activity_type.name,
            id=activity_type.id,
            status=MenuStatus.NONE,
            last_logged=elapsed if last_activity is not None else NOT_AVAILABLE,
        )

    if last_activity is None:
        return MenuItem(
            name=activity_type.start_label,
            id=activity_type.id,
            status=MenuStatus.START,
            last_logged=NOT_AVAILABLE,
        )

    if last_activity.status == MenuStatus.START.value:
        return MenuItem(
            name=activity_type.end_label,
            id=activity_type.id,
            status=MenuStatus.END,
            last_logged=elapsed,
        )

    return MenuItem(
        name=activity_type.start_label,
        id=activity_type.id,
        status=MenuStatus.START,
        last_logged=elapsed,
    )


def resolve_menu_item_v2(
    activity_type: ActivityType,
    last_activity: Activity | None,
    now: int | None = None,
) -> MenuItem:
    """Resolve the enriched menu item for one activity type.

    ``last_logged`` is the raw timestamp of the last activity (0 when never
    logged) and ``time_elapsed`` carries the formatted duration. The
    description comes from the last activity, falling back to the type's
    own description when nothing was logged.
    """
    elapsed = _elapsed(last_activity, now) or NOT_AVAILABLE
    type_description = activity_type.description or ""

    if not activity_type.toggle:
        return MenuItem(
            name=activity_type.name,
            id=activity_type.id,
            status=MenuStatus.NONE,
            last_logged=last_activity.timestamp if last_activity is not None else 0,
            time_elapsed=elapsed,
            description=type_description,
        )

    if last_activity is None:
        return MenuItem(
            name=activity_type.start_label,
            id=activity_type.id,
            status=MenuStatus.START,
            last_logged=0,
            time_elapsed=NOT_AVAILABLE,
            description=type_description,
        )

    is_started = last_activity.status == MenuStatus.START.value
    return MenuItem(
        name=activity_type.end_label if is_started else activity_type.start_label,
        id=activity_type.id,
        status=MenuStatus.END if is_started else MenuStatus.START,
        last_logged=last_activity.timestamp or 0,
        time_elapsed=elapsed,
        description=last_activity.description or "",
    )


async def resolve_all(
    types: Iterable[ActivityType],
    lookup: LastActivityLookup,
    resolve: Resolver = resolve_menu_item,
    now: int | None = None,
) -> list[MenuItem]:
    """Resolve every activity type concurrently.

    One lookup task is started per type and the results are joined in the
    order the types were given. If any lookup fails, the remaining tasks
    are cancelled and a LookupFailure is raised.

    Args:
        types: Activity types to resolve
        lookup: Coroutine function returning the last activity for a type id
        resolve: Per-type resolver (flat or enriched)
        now: Reference time in epoch milliseconds, shared by the whole pass

    Returns:
        One menu item per type, in input order

    Raises:
        LookupFailure: If any lookup raises
    """
    if now is None:
        now = now_ms()

    async def resolve_one(activity_type: ActivityType) -> MenuItem:
        try:
            last_activity = await lookup(activity_type.id)
        except LookupFailure:
            raise
        except Exception as e:
            logger.error(f"Last activity lookup failed for type {activity_type.id!r}: {e}")
            raise LookupFailure(activity_type.id, e) from e
        return resolve(activity_type, last_activity, now)

    tasks = [asyncio.ensure_future(resolve_one(activity_type)) for activity_type in types]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        raise


__all__ = [
    "LastActivityLookup",
    "resolve_all",
    "resolve_menu_item",
    "resolve_menu_item_v2",
]
