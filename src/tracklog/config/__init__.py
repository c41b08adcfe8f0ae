"""Configuration module for tracklog.

This module provides configuration loading and profile management.
"""

from dataclasses import dataclass, field


@dataclass
class StorageConfig:
    """MongoDB connection configuration."""

    uri: str = "mongodb://localhost:27017"
    database: str = "tracklog"
    connect_timeout_ms: int = 5000
    server_selection_timeout_ms: int = 5000


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"


@dataclass
class MenuConfig:
    """Menu derivation settings."""

    gaming_keyword: str = "gaming"
    game_marker: str = "Game: "


@dataclass
class TracklogConfig:
    """Main tracklog configuration."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    menu: MenuConfig = field(default_factory=MenuConfig)


# Public API
__all__ = [
    "LoggingConfig",
    "MenuConfig",
    "StorageConfig",
    "TracklogConfig",
]
