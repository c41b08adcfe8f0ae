"""Menu assembly from resolved activity types.

Two presentations are built from the same per-type resolution:

- v1: a flat, deduplicated list of labels plus "id,status" pairs
- v2: labels grouped into in-progress, not-started and non-toggle items,
  each group ordered by recency, with the active game named for gaming
  sessions
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from tracklog.activities.models import NOT_AVAILABLE, ActivityType, MenuItem, MenuStatus

from .extraction import GAME_MARKER, extract_after_marker
from .resolver import LastActivityLookup, resolve_all, resolve_menu_item, resolve_menu_item_v2

logger = logging.getLogger(__name__)

GAMING_KEYWORD = "gaming"


@dataclass
class MenuV1:
    """Flat menu.

    ``items`` is deduplicated; ``ids`` is not and keeps one entry per
    activity type.
    """

    items: list[str] = field(default_factory=list)
    ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"items": list(self.items), "ids": list(self.ids)}


@dataclass
class MenuV2:
    """Grouped menu with labels and the structured items behind them."""

    labels: list[str] = field(default_factory=list)
    ids: list[MenuItem] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"labels": list(self.labels), "ids": [item.to_dict() for item in self.ids]}


def recency_key(item: MenuItem) -> tuple[bool, int]:
    """Sort key: never logged first, then most recent first."""
    return (item.last_logged != 0, -int(item.last_logged))


def oldest_first_key(item: MenuItem) -> tuple[bool, int]:
    """Sort key: never logged first, then oldest first."""
    return (item.last_logged != 0, int(item.last_logged))


def build_menu_v1(menu_items: Iterable[MenuItem]) -> MenuV1:
    """Format resolved items into the flat menu."""
    menu_items = list(menu_items)
    labels = [item.label for item in menu_items]
    return MenuV1(
        items=list(dict.fromkeys(labels)),
        ids=[f"{item.id},{item.status.value}" for item in menu_items],
    )


def format_in_progress_label(
    item: MenuItem,
    gaming_keyword: str = GAMING_KEYWORD,
    game_marker: str = GAME_MARKER,
) -> str:
    """Label for an in-progress item, naming the active game when known."""
    if gaming_keyword in item.name:
        active_game = extract_after_marker(item.description, game_marker)
        if active_game != NOT_AVAILABLE:
            return f"{item.name} - {active_game} ({item.time_elapsed})"
    return item.label


def build_menu_v2(
    menu_items: Iterable[MenuItem],
    gaming_keyword: str = GAMING_KEYWORD,
    game_marker: str = GAME_MARKER,
) -> MenuV2:
    """Group, sort and label resolved items into the v2 menu.

    Labels of the in-progress and not-started groups are ordered most
    recent first; non-toggle items are ordered oldest first. Never-logged
    items lead every group. ``ids`` keeps the resolver order within the
    in-progress and not-started groups.
    """
    menu_items = list(menu_items)
    in_progress = [item for item in menu_items if item.status == MenuStatus.END]
    not_started = [item for item in menu_items if item.status == MenuStatus.START]
    non_toggle = [item for item in menu_items if item.status == MenuStatus.NONE]

    non_toggle.sort(key=oldest_first_key)

    labels = [
        *(
            format_in_progress_label(item, gaming_keyword, game_marker)
            for item in sorted(in_progress, key=recency_key)
        ),
        *(item.label for item in sorted(not_started, key=recency_key)),
        *(item.label for item in non_toggle),
    ]

    return MenuV2(labels=labels, ids=[*in_progress, *not_started, *non_toggle])


async def derive_menu_v1(
    types: Iterable[ActivityType],
    lookup: LastActivityLookup,
    now: int | None = None,
) -> MenuV1:
    """Derive the flat menu for all activity types.

    Raises:
        LookupFailure: If any per-type lookup fails
    """
    menu_items = await resolve_all(types, lookup, resolve_menu_item, now)
    menu = build_menu_v1(menu_items)
    logger.debug(f"Derived v1 menu: {len(menu.items)} items, {len(menu.ids)} ids")
    return menu


async def derive_menu_v2(
    types: Iterable[ActivityType],
    lookup: LastActivityLookup,
    now: int | None = None,
    gaming_keyword: str = GAMING_KEYWORD,
    game_marker: str = GAME_MARKER,
) -> MenuV2:
    """Derive the grouped menu for all activity types.

    Raises:
        LookupFailure: If any per-type lookup fails
    """
    menu_items = await resolve_all(types, lookup, resolve_menu_item_v2, now)
    menu = build_menu_v2(menu_items, gaming_keyword, game_marker)
    logger.debug(f"Derived v2 menu: {len(menu.labels)} labels")
    return menu


__all__ = [
    "GAMING_KEYWORD",
    "MenuV1",
    "MenuV2",
    "build_menu_v1",
    "build_menu_v2",
    "derive_menu_v1",
    "derive_menu_v2",
    "format_in_progress_label",
    "oldest_first_key",
    "recency_key",
]
