"""Configuration profile management.

Profiles are selected with the TRACKLOG_PROFILE environment variable.
"""

import os
from enum import Enum
from pathlib import Path

PROFILE_ENV = "TRACKLOG_PROFILE"


class Profile(Enum):
    """Available configuration profiles."""

    DEV = "dev"
    PROD = "prod"
    TEST = "test"


def detect_profile() -> Profile:
    """Detect appropriate configuration profile.

    Returns:
        Profile from TRACKLOG_PROFILE, or DEV when unset or unknown
    """
    env_profile = os.environ.get(PROFILE_ENV, "").lower()
    profile_map = {
        "prod": Profile.PROD,
        "dev": Profile.DEV,
        "test": Profile.TEST,
    }
    return profile_map.get(env_profile, Profile.DEV)


def get_profile_path(profile: Profile | None = None, config_dir: Path | None = None) -> Path:
    """Get path to profile configuration file.

    Args:
        profile: Profile to use, or None to auto-detect
        config_dir: Configuration directory, or None for default

    Returns:
        Path to profile YAML file
    """
    if profile is None:
        profile = detect_profile()

    if config_dir is None:
        # Default: config/ relative to project root
        config_dir = Path(__file__).parent.parent.parent.parent / "config"

    return config_dir / f"{profile.value}.yaml"


__all__ = [
    "PROFILE_ENV",
    "Profile",
    "detect_profile",
    "get_profile_path",
]
