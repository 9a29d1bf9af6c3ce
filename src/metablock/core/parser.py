"""
Entry points for parsing metadata block definitions.

``parse_block_section`` and ``parse_field_section`` parse a single section
each. ``parse_lines`` walks the lines of a whole definition, splits them into
sections and feeds the builders. None of them read files; callers pass text
lines that are already decoded.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from enum import Enum

from .config import Configuration
from .errors import ErrorContext, ParserError, StructureError, make_structure_error
from .ir import Block, Field, FieldTypeRegistry, MetadataBlockDefinition
from .tsv import BlockBuilder, FieldsBuilder
from .tsv.block_parser import BLOCK_KEYWORD, BlockBuilderState
from .tsv.field_parser import FIELD_KEYWORD
from .validators import is_blank

logger = logging.getLogger(__name__)

VOCABULARY_KEYWORD = "controlledVocabulary"


def parse_block_section(
    header_line: str,
    data_line: str,
    config: Configuration | None = None,
    last_line_index: int = 0,
) -> Block:
    """
    Parse a metadata block section.

    Args:
        header_line: The ``#metadataBlock`` header line
        data_line: The block definition line
        config: Parser configuration, defaults apply when omitted
        last_line_index: Index of the last line of the section in its input

    Returns:
        The validated Block

    Raises:
        ParserError: If the header or the definition line is invalid
    """
    builder = BlockBuilder(header_line, config)
    builder.parse_and_validate_line(data_line)
    return builder.build(last_line_index)


def parse_field_section(
    header_line: str,
    containing_block: Block | str,
    data_lines: Iterable[str],
    config: Configuration | None = None,
    types: FieldTypeRegistry | None = None,
) -> list[Field]:
    """
    Parse a dataset field section.

    Every row is validated, even after earlier rows failed, and the
    problems of all rows are reported in one error.

    Args:
        header_line: The ``#datasetField`` header line
        containing_block: Block (or its name) the fields belong to
        data_lines: Field definition lines
        config: Parser configuration, defaults apply when omitted
        types: Field type registry, built-in types when omitted

    Returns:
        All fields in row order, with children resolved

    Raises:
        ParserError: If the header, any row or the hierarchy is invalid
    """
    builder = FieldsBuilder(header_line, containing_block, config, types)
    for row_index, line in enumerate(data_lines, start=1):
        try:
            builder.parse_and_validate_line(row_index, line)
        except ParserError:
            continue

    if builder.has_errors:
        error = ParserError(
            f"{len(builder.errors)} field definition(s) of block "
            f"'{builder.block_name}' failed validation"
        )
        for row_error in builder.errors:
            for leaf in _flatten(row_error):
                error.add_sub_error(leaf)
        raise error
    return builder.build()


class _Section(str, Enum):
    NONE = "none"
    BLOCK = "block"
    FIELDS = "fields"
    SKIPPED = "skipped"


class _SectionWalker:
    """Splits definition lines into sections and drives the builders."""

    def __init__(
        self,
        config: Configuration,
        types: FieldTypeRegistry,
        source: str | None,
    ):
        self.config = config
        self.types = types
        self.source = source
        self.section = _Section.NONE
        self.block_builder: BlockBuilder | None = None
        self.fields_builder: FieldsBuilder | None = None
        self.block: Block | None = None
        self.fields: list[Field] = []
        self.last_index = 0
        self.error = ParserError("Invalid metadata block definition")

    def feed(self, index: int, line: str) -> None:
        line_number = index + 1
        if line.startswith(self.config.trigger_indicator):
            self._close_section()
            self._open_section(line, line_number)
        elif self.section is _Section.SKIPPED:
            pass
        elif self.section is _Section.NONE:
            self._fail(
                make_structure_error(
                    "Definition line outside of any section", line_number, self.source
                )
            )
        else:
            self._parse_row(line, line_number)
        self.last_index = index

    def finish(self) -> MetadataBlockDefinition:
        self._close_section()
        if self.block is None and not self.error.has_sub_errors:
            self._fail(
                make_structure_error(
                    f"Missing '{self.config.trigger(BLOCK_KEYWORD)}' section",
                    source=self.source,
                )
            )
        if self.error.has_sub_errors:
            raise self.error
        assert self.block is not None
        return MetadataBlockDefinition(block=self.block, fields=tuple(self.fields))

    def _open_section(self, line: str, line_number: int) -> None:
        first_cell = self.config.split(line)[0]
        keyword = first_cell[len(self.config.trigger_indicator) :].casefold()

        try:
            if keyword == BLOCK_KEYWORD.casefold():
                if self.block_builder is not None:
                    raise make_structure_error(
                        "Only one metadata block section is allowed", line_number, self.source
                    )
                self.block_builder = BlockBuilder(line, self.config)
                self.section = _Section.BLOCK
            elif keyword == FIELD_KEYWORD.casefold():
                if self.fields_builder is not None:
                    raise make_structure_error(
                        "Only one dataset field section is allowed", line_number, self.source
                    )
                if self.block is None:
                    raise make_structure_error(
                        "Dataset field section requires a valid metadata block section before it",
                        line_number,
                        self.source,
                    )
                self.fields_builder = FieldsBuilder(line, self.block, self.config, self.types)
                self.section = _Section.FIELDS
            elif keyword == VOCABULARY_KEYWORD.casefold():
                logger.warning("Skipping '%s' section at line %d", first_cell, line_number)
                self.section = _Section.SKIPPED
            else:
                message = f"Unknown section '{first_cell}'"
                raise make_structure_error(message, line_number, self.source)
        except ParserError as e:
            self._fail(e, line_number)
            self.section = _Section.SKIPPED
            return
        logger.debug("Opened section '%s' at line %d", first_cell, line_number)

    def _parse_row(self, line: str, line_number: int) -> None:
        try:
            if self.section is _Section.BLOCK:
                assert self.block_builder is not None
                self.block_builder.parse_and_validate_line(line, line_number)
            else:
                assert self.fields_builder is not None
                self.fields_builder.parse_and_validate_line(line_number, line)
        except ParserError as e:
            self._fail(e, line_number)

    def _close_section(self) -> None:
        if self.section is _Section.BLOCK:
            assert self.block_builder is not None
            if self.block_builder.has_succeeded:
                self.block = self.block_builder.build(self.last_index)
            elif self.block_builder.state is BlockBuilderState.READY:
                self._fail(
                    make_structure_error(
                        "Metadata block section has no definition line",
                        self.last_index + 1,
                        self.source,
                    )
                )
        elif self.section is _Section.FIELDS:
            assert self.fields_builder is not None
            if not self.fields_builder.has_errors:
                try:
                    self.fields = self.fields_builder.build()
                except StructureError as e:
                    self._fail(e)
        self.section = _Section.NONE

    def _fail(self, error: ParserError, line_number: int | None = None) -> None:
        for leaf in _flatten(error, line_number, self.source):
            self.error.add_sub_error(leaf)


def parse_lines(
    lines: Iterable[str],
    config: Configuration | None = None,
    types: FieldTypeRegistry | None = None,
    source: str | None = None,
) -> MetadataBlockDefinition:
    """
    Parse the lines of a complete metadata block definition.

    Blank lines and comment lines are skipped. Trigger lines open the
    ``#metadataBlock`` and ``#datasetField`` sections; ``#controlledVocabulary``
    sections are skipped. Problems of all sections are collected and raised
    together.

    Args:
        lines: Decoded text lines (line breaks are stripped)
        config: Parser configuration, defaults apply when omitted
        types: Field type registry, built-in types when omitted
        source: Optional label of the input used in error messages

    Returns:
        The metadata block with all of its fields

    Raises:
        ParserError: With one sub-error per problem found
    """
    config = config or Configuration.default()
    walker = _SectionWalker(
        config, types if types is not None else FieldTypeRegistry.with_defaults(), source
    )
    for index, raw in enumerate(lines):
        line = raw.rstrip("\r\n")
        if is_blank(line) or config.is_comment(line):
            continue
        walker.feed(index, line)
    return walker.finish()


def _flatten(
    error: ParserError,
    line_number: int | None = None,
    source: str | None = None,
) -> Iterator[ParserError]:
    """
    Yield the leaves of an error, adding location context where missing.

    Keeps aggregation at two levels: a collecting error and its leaves.
    """
    leaves = error.sub_errors if error.has_sub_errors else (error,)
    for leaf in leaves:
        if leaf.context is not None or (line_number is None and source is None):
            yield leaf
        elif type(leaf) in (ParserError, StructureError):
            prefix = "" if leaf is error else f"{error.message} "
            context = ErrorContext(line=line_number, source=source)
            yield type(leaf)(f"{prefix}{leaf.message}", context)
        else:
            yield leaf
