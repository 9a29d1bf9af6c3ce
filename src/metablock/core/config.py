"""
Parser configuration.

Configuration is an immutable value object handed to every parsing entry
point. It can be built in code or read from the ``[metablock]`` table of a
TOML file (``[tool.metablock]`` inside a ``pyproject.toml``).
"""

from __future__ import annotations

import re
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError

CONFIG_TABLE = "metablock"


@lru_cache(maxsize=8)
def _rtrim_pattern(separator: str) -> re.Pattern[str]:
    return re.compile(f"(?:{re.escape(separator)})+$")


class Configuration(BaseModel):
    """
    Settings of the TSV dialect.

    Attributes:
        comment_indicator: Prefix of lines the caller skips entirely
        trigger_indicator: Prefix of section trigger lines (``#metadataBlock``)
        column_separator: Separator between columns
        allow_deep_field_nesting: Allow fields nested deeper than one level
    """

    comment_indicator: str = Field(default="%%", description="Comment line prefix")
    trigger_indicator: str = Field(default="#", description="Section trigger prefix")
    column_separator: str = Field(default="\t", description="Column separator")
    allow_deep_field_nesting: bool = Field(
        default=False, description="Permit parent chains longer than one level"
    )

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("comment_indicator", "trigger_indicator", "column_separator")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Indicators and separator must carry at least one character."""
        if not v:
            raise ValueError("may not be empty")
        return v

    @classmethod
    def default(cls) -> Configuration:
        return cls()

    def rtrim_columns(self, line: str | None) -> str | None:
        """Strip a trailing run of column separators."""
        if line is None:
            return None
        return _rtrim_pattern(self.column_separator).sub("", line)

    def trigger(self, keyword: str) -> str:
        """Build the trigger string for a section keyword."""
        return self.trigger_indicator + keyword

    def is_comment(self, line: str) -> bool:
        return line.startswith(self.comment_indicator)

    def split(self, line: str) -> list[str]:
        return line.split(self.column_separator)

    @property
    def deep_field_nesting_enabled(self) -> bool:
        return self.allow_deep_field_nesting


def load_config(path: Path) -> Configuration:
    """
    Load configuration from a TOML file.

    Reads the ``[metablock]`` table, or ``[tool.metablock]`` when the file is
    a ``pyproject.toml``. A file without either table yields the defaults.

    Args:
        path: Path to the TOML file

    Returns:
        Parsed Configuration

    Raises:
        ConfigurationError: If the file is missing, not valid TOML or holds
            invalid settings
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Configuration file not found: {path}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e

    table: dict[str, Any] = data.get(CONFIG_TABLE) or data.get("tool", {}).get(CONFIG_TABLE, {})
    try:
        return Configuration(**table)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e
