"""Deployment profile resolver for lessmore.

This module builds the immutable StylesheetConfig from an explicit override
chain, lowest precedence first:

1. Profile defaults (PROFILE_DEFAULTS, selected by LESSMORE_ENV)
2. Top-level keys of lessmore.yaml
3. ``profiles.<name>`` keys of lessmore.yaml
4. Explicit overrides (CLI flags, keyword arguments)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import structlog

from lessmore_core.errors import ConfigurationError
from lessmore_core.schemas import CONFIG_FILE_NAME, StylesheetConfig, read_config_file

logger = structlog.get_logger(__name__)

# Environment variable for profile selection
PROFILE_ENV_VAR = "LESSMORE_ENV"

# Profile used when none is selected or the selected one is unknown
DEFAULT_PROFILE = "production"

PROFILE_DEFAULTS: dict[str, dict[str, Any]] = {
    "production": {
        "compression": True,
        "header": False,
        "destination_path": "stylesheets",
        "concat": None,
    },
    "development": {
        "compression": False,
        "header": True,
        "destination_path": "stylesheets",
        "concat": None,
    },
}

# Config keys holding filesystem paths, anchored to the config file's directory
PATH_KEYS = frozenset({"source_path", "destination_root"})


def get_profile_env() -> str:
    """Get the deployment profile from the environment.

    Returns:
        Profile name from LESSMORE_ENV, or "production".
    """
    return os.environ.get(PROFILE_ENV_VAR) or DEFAULT_PROFILE


class ProfileResolver:
    """Resolves configuration values through the override chain.

    Attributes:
        profile: Selected deployment profile name.
        config_file: Explicit lessmore.yaml path, or None to discover one.
        base_dir: Directory searched for lessmore.yaml when no file is given.

    Example:
        >>> resolver = ProfileResolver(profile="development")
        >>> config = resolver.resolve(source_path=Path("styles"))
        >>> config.header
        True
    """

    def __init__(
        self,
        profile: str | None = None,
        config_file: Path | str | None = None,
        base_dir: Path | str | None = None,
    ) -> None:
        """Initialize the ProfileResolver.

        Args:
            profile: Profile override. If None, reads LESSMORE_ENV.
            config_file: Explicit configuration file. Must exist if given.
            base_dir: Directory searched for lessmore.yaml when config_file
                is None. Defaults to the current directory.
        """
        self.profile = profile or get_profile_env()
        self.config_file = Path(config_file) if config_file is not None else None
        self.base_dir = Path(base_dir) if base_dir is not None else Path(".")

    def profile_defaults(self) -> dict[str, Any]:
        """Return the default values for the selected profile.

        Unknown profiles fall back to the production defaults.
        """
        defaults = PROFILE_DEFAULTS.get(self.profile)
        if defaults is None:
            logger.warning(
                "unknown_profile",
                profile=self.profile,
                fallback=DEFAULT_PROFILE,
            )
            defaults = PROFILE_DEFAULTS[DEFAULT_PROFILE]
        return dict(defaults)

    def find_config_file(self) -> Path | None:
        """Locate the configuration file, if any."""
        if self.config_file is not None:
            return self.config_file
        candidate = self.base_dir / CONFIG_FILE_NAME
        if candidate.is_file():
            logger.debug("config_file_found", path=str(candidate))
            return candidate
        return None

    def file_values(self) -> dict[str, Any]:
        """Return values from lessmore.yaml merged for the selected profile.

        Raises:
            FileNotFoundError: If an explicit config file is missing.
            ConfigurationError: If the file is malformed.
        """
        path = self.find_config_file()
        if path is None:
            return {}

        data = read_config_file(path)
        profiles = data.pop("profiles", None) or {}
        if not isinstance(profiles, dict):
            raise ConfigurationError(
                "profiles must be a mapping of profile names",
                file_path=str(path),
                field_path="profiles",
            )
        profile_values = profiles.get(self.profile) or {}
        if not isinstance(profile_values, dict):
            raise ConfigurationError(
                "Profile overrides must be a mapping",
                file_path=str(path),
                field_path=f"profiles.{self.profile}",
            )

        values = {**data, **profile_values}
        for key in PATH_KEYS & values.keys():
            if values[key] is not None:
                values[key] = path.parent / Path(str(values[key]))
        return values

    def resolve(self, **overrides: Any) -> StylesheetConfig:
        """Build the StylesheetConfig for the selected profile.

        Args:
            **overrides: Explicit values. None means "not set".

        Returns:
            Validated, immutable StylesheetConfig.

        Raises:
            ConfigurationError: If the config file is malformed.
            pydantic.ValidationError: If a resolved value is invalid.
        """
        values = self.profile_defaults()
        values.update(self.file_values())
        values.update({key: value for key, value in overrides.items() if value is not None})
        values["profile"] = self.profile

        config = StylesheetConfig.model_validate(values)
        logger.debug(
            "config_resolved",
            profile=self.profile,
            compression=config.compression,
            header=config.header,
            concat=config.concat,
        )
        return config
