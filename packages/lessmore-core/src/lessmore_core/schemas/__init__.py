"""Configuration schemas for lessmore."""

from __future__ import annotations

from lessmore_core.schemas.stylesheet_config import (
    CONFIG_FILE_NAME,
    StylesheetConfig,
    read_config_file,
)

__all__: list[str] = [
    "CONFIG_FILE_NAME",
    "StylesheetConfig",
    "read_config_file",
]
