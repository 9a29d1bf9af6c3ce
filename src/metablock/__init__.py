"""
metablock - parser and validator for metadata block definitions.

Reads the tab-separated dialect describing metadata blocks and their fields
and produces an immutable, fully validated object graph.
"""

from __future__ import annotations

from ._version import get_version

# Re-export commonly used types for convenience
from .core import ir
from .core.config import Configuration, load_config
from .core.errors import (
    BuilderStateError,
    ColumnValueError,
    ConfigurationError,
    MetablockError,
    ParserError,
    StructureError,
)
from .core.ir import Block, Field, FieldType, FieldTypeRegistry, MetadataBlockDefinition
from .core.parser import parse_block_section, parse_field_section, parse_lines

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "Configuration",
    "load_config",
    "Block",
    "Field",
    "FieldType",
    "FieldTypeRegistry",
    "MetadataBlockDefinition",
    "MetablockError",
    "ParserError",
    "StructureError",
    "ColumnValueError",
    "BuilderStateError",
    "ConfigurationError",
    "parse_block_section",
    "parse_field_section",
    "parse_lines",
]
