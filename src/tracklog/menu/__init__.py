"""Menu derivation for tracklog.

Derives the next-action menu from activity types and the most recent
activity logged for each.
"""

from .assembler import MenuV1, MenuV2, build_menu_v1, build_menu_v2, derive_menu_v1, derive_menu_v2
from .errors import LookupFailure, MenuError
from .extraction import extract_after_marker
from .resolver import resolve_all, resolve_menu_item, resolve_menu_item_v2
from .service import ActivitySource, MenuService, RepositoryActivitySource

__all__ = [
    "ActivitySource",
    "LookupFailure",
    "MenuError",
    "MenuService",
    "MenuV1",
    "MenuV2",
    "RepositoryActivitySource",
    "build_menu_v1",
    "build_menu_v2",
    "derive_menu_v1",
    "derive_menu_v2",
    "extract_after_marker",
    "resolve_all",
    "resolve_menu_item",
    "resolve_menu_item_v2",
]
