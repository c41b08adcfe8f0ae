"""Extraction of structured values embedded in free-text descriptions."""

from tracklog.activities.models import NOT_AVAILABLE

GAME_MARKER = "Game: "


def extract_after_marker(description: str | None, marker: str = GAME_MARKER) -> str:
    """Return the text following ``marker`` in a description.

    The value runs up to the next occurrence of the marker, if any.

    Args:
        description: Free-text description (may be None or empty)
        marker: Substring that precedes the value

    Returns:
        Extracted text, or "N/A" if the marker is absent

    Examples:
        >>> extract_after_marker("Game: Chess")
        'Chess'
        >>> extract_after_marker("reading")
        'N/A'
    """
    if not description or not marker or marker not in description:
        return NOT_AVAILABLE
    return description.split(marker)[1]


__all__ = ["GAME_MARKER", "extract_after_marker"]
