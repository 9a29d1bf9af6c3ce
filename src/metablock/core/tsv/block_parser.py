"""
Parser for the ``#metadataBlock`` section.

A block section consists of a header line and exactly one definition line.
"""

from __future__ import annotations

import logging
from enum import Enum

from .. import validators
from ..config import Configuration
from ..errors import BuilderStateError, ParserError, make_structure_error, make_value_error
from ..ir import DISPLAY_NAME_LIMIT, Block
from .columns import ColumnEnum, ColumnSpec, split_line

logger = logging.getLogger(__name__)

BLOCK_KEYWORD = "metadataBlock"


class BlockHeader(ColumnEnum):
    """Columns of a metadata block definition, in canonical order."""

    KEYWORD = ColumnSpec(
        BLOCK_KEYWORD,
        validators.is_empty,
        "must have no value (be empty)",
        trigger=True,
    )
    NAME = ColumnSpec(
        "name",
        validators.is_valid_block_name,
        f"must not be blank and match regex pattern {validators.BLOCK_NAME_PATTERN}",
    )
    DATAVERSE_ALIAS = ColumnSpec(
        "dataverseAlias",
        lambda v: v == "" or validators.is_valid_alias(v),
        f"must be either empty or match regex pattern {validators.COLLECTION_ALIAS_PATTERN}",
    )
    DISPLAY_NAME = ColumnSpec(
        "displayName",
        lambda v: validators.is_not_blank_shorter_than(v, DISPLAY_NAME_LIMIT),
        "must not be blank and shorter than 257 chars",
    )
    BLOCK_URI = ColumnSpec(
        "blockURI",
        validators.is_valid_url,
        "must be a valid URL",
    )


class BlockBuilderState(str, Enum):
    """Lifecycle of a BlockBuilder."""

    READY = "ready"
    PARSED = "parsed"
    FAILED = "failed"


class BlockBuilder:
    """
    Stateful parser for one metadata block section.

    The header line is validated on construction, so an instance always
    knows its columns. Feed the definition line to
    ``parse_and_validate_line`` and collect the Block with ``build``.

    Not safe for concurrent use; use one instance per section.
    """

    def __init__(self, header: str, config: Configuration | None = None):
        """
        Initialize builder.

        Args:
            header: Header line of the section (``#metadataBlock\\tname...``)
            config: Parser configuration, defaults apply when omitted

        Raises:
            StructureError: If the header line is invalid
        """
        self.config = config or Configuration.default()
        self.header: list[BlockHeader] = BlockHeader.parse_and_validate(header, self.config)
        self.state = BlockBuilderState.READY
        self._block: Block | None = None

    def parse_and_validate_line(self, line: str | None, line_number: int | None = None) -> None:
        """
        Parse and validate the block definition line.

        Fails when the line is None or blank, when a line has been parsed
        before (one definition per section), when its column count differs
        from the header, or when any column value breaks its rule. Value
        errors of all columns are reported together.

        Args:
            line: Raw definition line
            line_number: Optional 1-based line number for error context

        Raises:
            StructureError: Wrong line shape or a second definition
            ParserError: With one ColumnValueError per invalid column
        """
        if line is None or validators.is_blank(line):
            self.state = BlockBuilderState.FAILED
            raise make_structure_error(
                "Must not be empty nor blanks only nor null.", line=line_number
            )

        if self.state is not BlockBuilderState.READY:
            self.state = BlockBuilderState.FAILED
            raise make_structure_error(
                "Must not add more than one metadata block definition", line=line_number
            )

        try:
            parts = split_line(line, len(self.header), self.config)
            self._block = self._parse_columns(parts, line_number)
        except ParserError:
            self.state = BlockBuilderState.FAILED
            raise
        self.state = BlockBuilderState.PARSED
        logger.debug("Parsed metadata block '%s'", self._block.name)

    def _parse_columns(self, parts: list[str], line_number: int | None) -> Block:
        if len(parts) != len(self.header):
            raise make_structure_error(
                f"Does not match length of metadata block headline "
                f"(expected {len(self.header)} columns, found {len(parts)})",
                line=line_number,
            )

        error = ParserError("Has validation errors:")
        values: dict[BlockHeader, str] = {}
        for column, value in zip(self.header, parts, strict=True):
            if column.is_valid(value):
                values[column] = value
            else:
                error.add_sub_error(
                    make_value_error(column.column_name, value, column.error_message, line_number)
                )

        if error.has_sub_errors:
            raise error

        return Block(
            name=values[BlockHeader.NAME],
            dataverse_alias=values[BlockHeader.DATAVERSE_ALIAS],
            display_name=values[BlockHeader.DISPLAY_NAME],
            block_uri=values[BlockHeader.BLOCK_URI],
        )

    @property
    def has_succeeded(self) -> bool:
        return self.state is BlockBuilderState.PARSED

    def build(self, last_line_index: int) -> Block:
        """
        Return the parsed Block, annotated with the last line of its section.

        Raises:
            BuilderStateError: If no line was parsed successfully
        """
        if self.state is not BlockBuilderState.PARSED or self._block is None:
            raise BuilderStateError(
                "Trying to build a block with errors or without parsing a line first"
            )
        return self._block.with_last_line_index(last_line_index)
