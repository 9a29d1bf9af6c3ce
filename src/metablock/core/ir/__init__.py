"""
metablock Intermediate Representation (IR) types.

Immutable, validated-by-construction models handed to downstream consumers.
"""

from .blocks import DISPLAY_NAME_LIMIT, Block
from .definitions import MetadataBlockDefinition
from .field_types import (
    BUILTIN_FIELD_TYPES,
    DATE,
    EMAIL,
    FLOAT,
    INT,
    NONE,
    TEXT,
    TEXTBOX,
    URL,
    FieldType,
    FieldTypeRegistry,
)
from .fields import TITLE_LIMIT, Field

__all__ = [
    # Blocks
    "Block",
    "DISPLAY_NAME_LIMIT",
    "MetadataBlockDefinition",
    # Fields
    "Field",
    "TITLE_LIMIT",
    # Field types
    "FieldType",
    "FieldTypeRegistry",
    "BUILTIN_FIELD_TYPES",
    "NONE",
    "DATE",
    "EMAIL",
    "TEXT",
    "TEXTBOX",
    "URL",
    "INT",
    "FLOAT",
]
