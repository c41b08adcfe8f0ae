"""tracklog - Activity logging with a live next-action menu.

tracklog keeps user-defined activity types and the activities logged
against them, and derives a menu of next possible actions:

- Toggle types alternate between their start and end labels
- Elapsed time since the last logged activity
- Grouped menu ordered by recency, naming the active game

Usage:
    python -m tracklog menu
    python -m tracklog --profile prod menu --v2
"""

__version__ = "0.1.0"

from .config import TracklogConfig
from .config.loader import load_config

__all__ = [
    "TracklogConfig",
    "__version__",
    "load_config",
]
