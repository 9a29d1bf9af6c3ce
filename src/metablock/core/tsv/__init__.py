"""
TSV dialect of metadata block definitions.

Column contracts and stateful builders for the ``#metadataBlock`` and
``#datasetField`` sections.
"""

from .block_parser import BLOCK_KEYWORD, BlockBuilder, BlockBuilderState, BlockHeader
from .columns import ColumnEnum, ColumnSpec, parse_header_line, split_line
from .field_parser import (
    BOOLEAN_COLUMNS,
    FIELD_KEYWORD,
    FieldHeader,
    FieldsBuilder,
    FieldsBuilderState,
    resolve_hierarchy,
)

__all__ = [
    "BLOCK_KEYWORD",
    "BOOLEAN_COLUMNS",
    "BlockBuilder",
    "BlockBuilderState",
    "BlockHeader",
    "ColumnEnum",
    "ColumnSpec",
    "FIELD_KEYWORD",
    "FieldHeader",
    "FieldsBuilder",
    "FieldsBuilderState",
    "parse_header_line",
    "resolve_hierarchy",
    "split_line",
]
