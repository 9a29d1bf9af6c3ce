"""Core metablock functionality: IR, validators, TSV builders, parser entry points."""

from . import ir
from .config import Configuration, load_config
from .errors import (
    BuilderStateError,
    ColumnValueError,
    ConfigurationError,
    ErrorContext,
    MetablockError,
    ParserError,
    StructureError,
)
from .parser import parse_block_section, parse_field_section, parse_lines

__all__ = [
    "ir",
    "Configuration",
    "load_config",
    "BuilderStateError",
    "ColumnValueError",
    "ConfigurationError",
    "ErrorContext",
    "MetablockError",
    "ParserError",
    "StructureError",
    "parse_block_section",
    "parse_field_section",
    "parse_lines",
]
