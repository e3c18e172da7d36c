"""Persisted configuration and cleaning profiles."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from flutter_cleaner.models import TargetKind
from flutter_cleaner.paths import get_home_directory
from flutter_cleaner.targets import OPTIONAL_TARGETS

log = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".flutter_cache_cleaner"
CONFIG_FILE_NAME = "config.json"

PROFILES: dict[str, list[TargetKind]] = {
    "safe": [
        TargetKind.BUILD,
        TargetKind.DART_TOOL,
        TargetKind.FLUTTER_PLUGINS,
    ],
    "medium": [
        TargetKind.BUILD,
        TargetKind.DART_TOOL,
        TargetKind.FLUTTER_PLUGINS,
        TargetKind.GRADLE,
        TargetKind.PODS,
    ],
    "aggressive": [
        TargetKind.BUILD,
        TargetKind.DART_TOOL,
        TargetKind.FLUTTER_PLUGINS,
        TargetKind.IDEA,
        TargetKind.GRADLE,
        TargetKind.PODS,
        TargetKind.SYMLINKS,
    ],
}


class ConfigError(Exception):
    """Configuration could not be located, parsed or written."""


class Config(BaseModel):
    """User configuration."""

    model_config = ConfigDict(populate_by_name=True)

    preferred_roots: list[str] = Field(
        default_factory=list, alias="preferredRoots", description="Roots scanned by default"
    )
    default_targets: list[TargetKind] = Field(
        default_factory=list, alias="defaultTargets", description="Target kinds to clean"
    )
    profile: Optional[str] = Field(None, description="Profile name (safe, medium, aggressive)")

    @classmethod
    def from_profile(cls, name: str) -> "Config":
        """
        Build a config from a named profile.

        Raises:
            ConfigError: If the profile is unknown
        """
        key = name.lower()
        if key not in PROFILES:
            raise ConfigError(
                f"Unknown profile: {name} (choose from {', '.join(PROFILES)})"
            )
        return cls(profile=key, default_targets=list(PROFILES[key]))

    def target_kinds(self) -> list[TargetKind] | None:
        """Kinds this config restricts scanning to, or None for no restriction."""
        return list(self.default_targets) or None

    def needs_optional_targets(self) -> bool:
        """Whether any selected kind is outside the required tier."""
        return any(kind in OPTIONAL_TARGETS for kind in self.default_targets)

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def get_config_path() -> Path:
    """
    Location of the config file.

    Raises:
        ConfigError: If there is no home directory
    """
    home = get_home_directory()
    if not home:
        raise ConfigError("Cannot determine home directory")
    return Path(home) / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def load_config() -> Config | None:
    """Load the config file; None if missing or unreadable."""
    try:
        config_path = get_config_path()
    except ConfigError:
        return None

    if not config_path.is_file():
        return None

    try:
        with open(config_path) as f:
            return Config.model_validate(json.load(f))
    except (json.JSONDecodeError, ValidationError, OSError) as e:
        log.warning("Ignoring unreadable config %s: %s", config_path, e)
        return None


def save_config(config: Config) -> Path:
    """
    Write the config file, creating its directory.

    Raises:
        ConfigError: If the file cannot be written
    """
    config_path = get_config_path()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            json.dump(config.to_json(), f, indent=2)
    except OSError as e:
        raise ConfigError(f"Failed to save config: {e}") from e
    return config_path


def delete_config() -> None:
    """Remove the config file if present."""
    try:
        os.remove(get_config_path())
    except (ConfigError, OSError):
        pass
