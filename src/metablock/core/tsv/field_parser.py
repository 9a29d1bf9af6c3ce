"""
Parser for the ``#datasetField`` section.

Rows are validated one by one; a failing row is reported and does not
affect the rows accepted before it. Parent/child links are resolved in a
second pass once all rows are in, because a parent may be declared after
its children.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import ValidationError

from .. import validators
from ..config import Configuration
from ..errors import (
    BuilderStateError,
    ParserError,
    StructureError,
    make_structure_error,
    make_value_error,
)
from ..ir import TITLE_LIMIT, Block, Field, FieldTypeRegistry
from .columns import ColumnEnum, ColumnSpec, split_line

logger = logging.getLogger(__name__)

FIELD_KEYWORD = "datasetField"

_BOOLEAN_RULE = (
    f"must be either {validators.TRUE_LITERAL} or {validators.FALSE_LITERAL} (case-sensitive)"
)


class FieldHeader(ColumnEnum):
    """Columns of a dataset field definition, in canonical order."""

    KEYWORD = ColumnSpec(
        FIELD_KEYWORD,
        validators.is_empty,
        "must have no value (be empty)",
        trigger=True,
    )
    NAME = ColumnSpec(
        "name",
        validators.is_valid_field_name,
        f"must not be blank and match regex pattern {validators.FIELD_NAME_PATTERN}",
    )
    TITLE = ColumnSpec(
        "title",
        lambda v: validators.is_not_blank_shorter_than(v, TITLE_LIMIT),
        "must not be blank and shorter than 60 chars",
    )
    DESCRIPTION = ColumnSpec(
        "description",
        validators.is_any_text,
        "must be present (may be empty)",
    )
    WATERMARK = ColumnSpec(
        "watermark",
        validators.is_empty_or_not_blank,
        "must be empty or not blank",
    )
    FIELD_TYPE = ColumnSpec(
        "fieldType",
        validators.is_not_blank,
        "must not be blank",
    )
    DISPLAY_ORDER = ColumnSpec(
        "displayOrder",
        validators.is_unsigned_int,
        "must be a non-negative integer",
    )
    DISPLAY_FORMAT = ColumnSpec(
        "displayFormat",
        validators.is_empty_or_not_blank,
        "must be empty or not blank",
    )
    ADVANCED_SEARCH_FIELD = ColumnSpec(
        "advancedSearchField", validators.is_strict_boolean, _BOOLEAN_RULE
    )
    ALLOW_CONTROLLED_VOCABULARY = ColumnSpec(
        "allowControlledVocabulary", validators.is_strict_boolean, _BOOLEAN_RULE
    )
    ALLOW_MULTIPLES = ColumnSpec("allowmultiples", validators.is_strict_boolean, _BOOLEAN_RULE)
    FACETABLE = ColumnSpec("facetable", validators.is_strict_boolean, _BOOLEAN_RULE)
    DISPLAY_ON_CREATE = ColumnSpec("displayoncreate", validators.is_strict_boolean, _BOOLEAN_RULE)
    REQUIRED = ColumnSpec("required", validators.is_strict_boolean, _BOOLEAN_RULE)
    PARENT = ColumnSpec(
        "parent",
        lambda v: v == "" or validators.is_valid_field_name(v),
        "must be either empty or a valid field name",
    )
    METADATA_BLOCK_ID = ColumnSpec(
        "metadatablock_id",
        validators.is_valid_block_name,
        "must be the name of the containing metadata block",
    )
    TERM_URI = ColumnSpec(
        "termURI",
        lambda v: v == "" or validators.is_valid_url(v),
        "must be either empty or a valid URL",
    )


BOOLEAN_COLUMNS = (
    FieldHeader.ADVANCED_SEARCH_FIELD,
    FieldHeader.ALLOW_CONTROLLED_VOCABULARY,
    FieldHeader.ALLOW_MULTIPLES,
    FieldHeader.FACETABLE,
    FieldHeader.DISPLAY_ON_CREATE,
    FieldHeader.REQUIRED,
)


class FieldsBuilderState(str, Enum):
    """Lifecycle of a FieldsBuilder."""

    COLLECTING = "collecting"
    BUILT = "built"


class FieldsBuilder:
    """
    Stateful parser for one dataset field section.

    Bound to the metadata block the fields belong to: a row naming another
    block in its ``metadatablock_id`` column is invalid.

    Not safe for concurrent use; use one instance per section.
    """

    def __init__(
        self,
        header: str,
        containing_block: Block | str,
        config: Configuration | None = None,
        types: FieldTypeRegistry | None = None,
    ):
        """
        Initialize builder.

        Args:
            header: Header line of the section (``#datasetField\\tname...``)
            containing_block: Block (or its name) the fields belong to
            config: Parser configuration, defaults apply when omitted
            types: Field type registry, built-in types when omitted

        Raises:
            StructureError: If the header line is invalid
        """
        self.config = config or Configuration.default()
        self.types = types if types is not None else FieldTypeRegistry.with_defaults()
        self.block_name = (
            containing_block.name if isinstance(containing_block, Block) else containing_block
        )
        self.header: list[FieldHeader] = FieldHeader.parse_and_validate(header, self.config)
        self.state = FieldsBuilderState.COLLECTING
        self._fields: list[Field] = []
        self._names: set[str] = set()
        self._errors: list[ParserError] = []

    @property
    def fields(self) -> list[Field]:
        """Rows accepted so far, flat and in row order."""
        return list(self._fields)

    @property
    def errors(self) -> tuple[ParserError, ...]:
        """Errors of the rows rejected so far."""
        return tuple(self._errors)

    @property
    def has_errors(self) -> bool:
        return bool(self._errors)

    def parse_and_validate_line(self, row_index: int, line: str | None) -> Field:
        """
        Parse and validate one field definition row.

        Args:
            row_index: Line number of the row, used in error messages
            line: Raw definition line

        Returns:
            The accepted Field (without children, these are resolved by build)

        Raises:
            BuilderStateError: If the builder has already been built
            StructureError: Blank line, wrong column count or duplicate name
            ParserError: With one ColumnValueError per invalid column
        """
        if self.state is FieldsBuilderState.BUILT:
            raise BuilderStateError("Cannot add field definitions after the section was built")

        try:
            field = self._parse_line(row_index, line)
        except ParserError as e:
            self._errors.append(e)
            raise

        self._fields.append(field)
        self._names.add(field.name)
        logger.debug("Accepted field '%s' (line %s)", field.name, row_index)
        return field

    def _parse_line(self, row_index: int, line: str | None) -> Field:
        if line is None or validators.is_blank(line):
            raise make_structure_error("Must not be empty nor blanks only nor null.", line=row_index)

        parts = split_line(line, len(self.header), self.config)
        if len(parts) != len(self.header):
            raise make_structure_error(
                f"Does not match length of dataset field headline "
                f"(expected {len(self.header)} columns, found {len(parts)})",
                line=row_index,
            )

        error = ParserError("Has validation errors:")
        values: dict[FieldHeader, str] = {}
        for column, value in zip(self.header, parts, strict=True):
            rule = self._check(column, value)
            if rule is None:
                values[column] = value
            else:
                error.add_sub_error(make_value_error(column.column_name, value, rule, row_index))

        if error.has_sub_errors:
            raise error

        name = values[FieldHeader.NAME]
        if name in self._names:
            raise make_structure_error(
                f"Field '{name}' is defined more than once in block '{self.block_name}'",
                line=row_index,
            )

        try:
            return Field(
                name=name,
                title=values[FieldHeader.TITLE],
                description=values[FieldHeader.DESCRIPTION],
                watermark=values[FieldHeader.WATERMARK],
                type=self.types.lookup(values[FieldHeader.FIELD_TYPE]),
                display_order=int(values[FieldHeader.DISPLAY_ORDER]),
                display_format=values[FieldHeader.DISPLAY_FORMAT],
                advanced_search_field=_flag(values, FieldHeader.ADVANCED_SEARCH_FIELD),
                allow_controlled_vocabulary=_flag(values, FieldHeader.ALLOW_CONTROLLED_VOCABULARY),
                allow_multiples=_flag(values, FieldHeader.ALLOW_MULTIPLES),
                facetable=_flag(values, FieldHeader.FACETABLE),
                display_on_create=_flag(values, FieldHeader.DISPLAY_ON_CREATE),
                required=_flag(values, FieldHeader.REQUIRED),
                metadata_block=values[FieldHeader.METADATA_BLOCK_ID],
                term_uri=values[FieldHeader.TERM_URI] or None,
                parent=values[FieldHeader.PARENT] or None,
            )
        except ValidationError as e:
            raise make_structure_error(
                f"Field '{name}' failed model validation: {e}", line=row_index
            ) from e

    def _check(self, column: FieldHeader, value: str) -> str | None:
        """Return the violated rule for a cell, or None if the value is fine."""
        if not column.is_valid(value):
            return column.error_message
        if column is FieldHeader.FIELD_TYPE and not self.types.exists(value):
            return f"must be one of the known field types ({', '.join(self.types.ids())})"
        if column is FieldHeader.METADATA_BLOCK_ID and value != self.block_name:
            return f"must match the containing block '{self.block_name}'"
        return None

    def build(self) -> list[Field]:
        """
        Resolve the field hierarchy and return all fields.

        Every parent reference must name a field of this section. Cycles
        are rejected, and unless deep nesting is enabled a parent must be
        a top-level field. All hierarchy problems are reported together.

        Returns:
            All fields in row order, with children attached in row order

        Raises:
            BuilderStateError: If rows were rejected or build ran before
            StructureError: If the hierarchy cannot be resolved
        """
        if self.state is FieldsBuilderState.BUILT:
            raise BuilderStateError("Field section has already been built")
        if self._errors:
            raise BuilderStateError(
                f"Cannot build fields of block '{self.block_name}', "
                f"{len(self._errors)} row(s) failed validation"
            )

        fields = resolve_hierarchy(self._fields, self.config.deep_field_nesting_enabled)
        self.state = FieldsBuilderState.BUILT
        logger.debug("Built %d fields for block '%s'", len(fields), self.block_name)
        return fields


def _flag(values: dict[FieldHeader, str], column: FieldHeader) -> bool:
    return validators.parse_strict_boolean(values[column])


def resolve_hierarchy(rows: list[Field], allow_deep_nesting: bool = False) -> list[Field]:
    """
    Attach children to their parents.

    Args:
        rows: Flat fields in row order, names unique
        allow_deep_nesting: Permit parents that are nested themselves

    Returns:
        Fields in row order, each carrying its children in row order

    Raises:
        StructureError: With one sub-error per unresolved parent, cycle or
            forbidden nesting
    """
    index = {field.name: field for field in rows}
    error = StructureError("Invalid field hierarchy:")

    unresolved: set[str] = set()
    for field in rows:
        if field.parent is not None and field.parent not in index:
            unresolved.add(field.name)
            error.add_sub_error(
                f"Field '{field.name}' references unknown parent '{field.parent}'"
            )

    in_cycle: set[str] = set()
    for field in rows:
        if field.name in in_cycle or field.name in unresolved:
            continue
        chain: list[str] = []
        visited: set[str] = set()
        current: str | None = field.name
        while current is not None and current in index and current not in visited:
            visited.add(current)
            chain.append(current)
            current = index[current].parent
        if current is not None and current in visited:
            cycle = chain[chain.index(current) :]
            if not in_cycle.intersection(cycle):
                error.add_sub_error(
                    "Parent references form a cycle: " + " -> ".join([*cycle, current])
                )
            in_cycle.update(cycle)

    if not allow_deep_nesting:
        for field in rows:
            if field.parent is None or field.name in in_cycle or field.name in unresolved:
                continue
            if field.parent in in_cycle or field.parent in unresolved:
                continue
            grandparent = index[field.parent].parent
            if grandparent is not None:
                error.add_sub_error(
                    f"Field '{field.name}' is nested under '{field.parent}', which is itself "
                    f"nested under '{grandparent}'; deep field nesting is disabled"
                )

    if error.has_sub_errors:
        raise error

    children: dict[str, list[str]] = {field.name: [] for field in rows}
    for field in rows:
        if field.parent is not None:
            children[field.parent].append(field.name)

    built: dict[str, Field] = {}

    def assemble(name: str) -> Field:
        if name not in built:
            kids = tuple(assemble(child) for child in children[name])
            field = index[name]
            built[name] = field.model_copy(update={"children": kids}) if kids else field
        return built[name]

    return [assemble(field.name) for field in rows]
