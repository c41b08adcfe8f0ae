"""Error types for menu derivation."""

from typing import Any


class MenuError(Exception):
    """Base exception for menu derivation errors."""

    pass


class LookupFailure(MenuError):
    """Raised when the last-activity lookup for an activity type fails.

    Aborts the whole derivation pass; no partial menu is produced.
    """

    def __init__(self, type_id: Any, cause: BaseException | None = None) -> None:
        """Initialize lookup failure.

        Args:
            type_id: Activity type whose lookup failed.
            cause: Original exception raised by the lookup.
        """
        message = f"Failed to look up last activity for type {type_id!r}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.type_id = type_id
        self.cause = cause


__all__ = ["LookupFailure", "MenuError"]
