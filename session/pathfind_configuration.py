"""
Configuration for the Sanctum path finder overlay.

This module provides a typed interface to overlay and logging settings,
loaded from the [tool.pathfind_sanctum] table of pyproject.toml and
PATHFIND_* environment variables.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}([0-9A-Fa-f]{2})?$"


class PathfindConfiguration(BaseSettings):
    """
    Typed configuration object for the path finder overlay.

    Every field has a default, so an empty [tool.pathfind_sanctum] table
    gives a working (debug-off) configuration.
    """

    # Debug overlay
    debug_enable: bool = Field(
        default=False, description="Draw per-room weight and annotation text"
    )
    debug_font_size_multiplier: float = Field(
        default=1.0, gt=0.0, le=10.0, description="Text scale for debug overlay"
    )
    validate_layout: bool = Field(
        default=True, description="Run the layout consistency check every cycle"
    )

    # Style
    text_color: str = Field(
        default="#FFFFFF", pattern=COLOR_PATTERN, description="Debug text color"
    )
    background_color: str = Field(
        default="#000000C8", pattern=COLOR_PATTERN, description="Debug text background"
    )
    best_path_color: str = Field(
        default="#00FF00", pattern=COLOR_PATTERN, description="Best path frame color"
    )
    frame_thickness: int = Field(
        default=3, ge=1, le=20, description="Best path frame thickness in pixels"
    )

    # Logging
    log_file: Optional[str] = Field(
        default=None, description="Optional human-readable log file"
    )
    json_log_file: Optional[str] = Field(
        default=None, description="Optional JSON lines log file"
    )
    log_level: str = Field(default="INFO", description="Logging level name")

    model_config = SettingsConfigDict(
        env_prefix="PATHFIND_",
        env_file=None,
        case_sensitive=False,
        extra="forbid",  # Catch typos in config early
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_toml(cls, config_file: Optional[Path] = None) -> "PathfindConfiguration":
        """
        Create PathfindConfiguration from the [tool.pathfind_sanctum] table.

        Args:
            config_file: Path to TOML file (defaults to pyproject.toml)

        Returns:
            PathfindConfiguration instance loaded from TOML

        Raises:
            FileNotFoundError: If config file doesn't exist
            KeyError: If the [tool.pathfind_sanctum] table is missing
        """
        load_dotenv()

        config_file = config_file or Path("pyproject.toml")

        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")

        with open(config_file, "rb") as f:
            toml_data = tomllib.load(f)

        try:
            pathfind_config = toml_data["tool"]["pathfind_sanctum"]
        except KeyError:
            raise KeyError("Missing [tool.pathfind_sanctum] section in pyproject.toml")

        debug_config = pathfind_config.get("debug", {})
        style_config = pathfind_config.get("style", {})
        files_config = pathfind_config.get("files", {})
        logging_config = pathfind_config.get("logging", {})

        config_dict = {
            # Debug overlay
            "debug_enable": debug_config.get("enable"),
            "debug_font_size_multiplier": debug_config.get("font_size_multiplier"),
            "validate_layout": debug_config.get("validate_layout"),
            # Style
            "text_color": style_config.get("text_color"),
            "background_color": style_config.get("background_color"),
            "best_path_color": style_config.get("best_path_color"),
            "frame_thickness": style_config.get("frame_thickness"),
            # Logging
            "log_file": files_config.get("log_file"),
            "json_log_file": files_config.get("json_log_file"),
            "log_level": logging_config.get("level"),
        }

        # PATHFIND_* environment variables win over TOML; missing keys use field defaults
        env_keys = {name.upper() for name in os.environ}
        return cls(
            **{
                key: value
                for key, value in config_dict.items()
                if value is not None and f"PATHFIND_{key.upper()}" not in env_keys
            }
        )
