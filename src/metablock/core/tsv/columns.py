"""
Column contracts for TSV sections.

Each section kind has a fixed, ordered list of columns. Header names are
compared case-insensitively, cell values with the case-sensitive rule of
their column. A header line is valid only if it names every column in the
canonical order; data lines are then read positionally.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TypeVar

from ..config import Configuration
from ..errors import StructureError
from ..validators import is_blank

C = TypeVar("C", bound="ColumnEnum")


@dataclass(frozen=True)
class ColumnSpec:
    """
    A single column of a section.

    Attributes:
        name: Canonical column name as written in the header
        test: Rule applied to raw cell values
        error_message: Description of the rule, always in the form "must ..."
        trigger: True for the first column, whose header cell is the trigger
    """

    name: str
    test: Callable[[str], bool]
    error_message: str
    trigger: bool = False

    def matches_header(self, text: str, config: Configuration) -> bool:
        """Case-insensitive comparison of a header cell with this column."""
        expected = config.trigger(self.name) if self.trigger else self.name
        return text.casefold() == expected.casefold()

    def is_valid(self, value: str | None) -> bool:
        """Case-sensitive check of a raw cell value."""
        return value is not None and self.test(value)


class ColumnEnum(Enum):
    """Base for the column registries of each section kind."""

    @property
    def column_name(self) -> str:
        return self.value.name

    @property
    def error_message(self) -> str:
        return self.value.error_message

    def is_valid(self, value: str | None) -> bool:
        return self.value.is_valid(value)

    def describe_rule(self) -> str:
        return self.value.error_message

    def __str__(self) -> str:
        return self.value.name

    @classmethod
    def keyword(cls) -> str:
        """The section keyword, i.e. the name of the trigger column."""
        return next(iter(cls)).value.name

    @classmethod
    def names(cls) -> list[str]:
        """Canonical column names, in order."""
        return [column.value.name for column in cls]

    @classmethod
    def by_name(cls: type[C], name: str) -> C | None:
        """Case-insensitive inverse lookup of a column."""
        folded = name.casefold()
        for column in cls:
            if column.value.name.casefold() == folded:
                return column
        return None

    @classmethod
    def parse_and_validate(cls: type[C], line: str | None, config: Configuration) -> list[C]:
        """
        Parse a header line into the canonical columns.

        Raises:
            StructureError: With one sub-error per problem found
        """
        return parse_header_line(line, list(cls), config)


def parse_header_line(line: str | None, columns: list[C], config: Configuration) -> list[C]:
    """
    Validate a header line against an ordered column list.

    Not lenient: every column must be present, in order. Names are matched
    case-insensitively. All mismatching positions are reported together.

    Args:
        line: Raw header line, starting with the trigger
        columns: Expected columns in canonical order
        config: Parser configuration

    Returns:
        The canonical columns, in canonical order

    Raises:
        StructureError: If the header is missing, has the wrong number of
            columns or any column name does not match
    """
    keyword = columns[0].value.name if columns else ""
    error = StructureError(f"Invalid header line for section '{config.trigger(keyword)}'")

    if line is None or is_blank(line):
        error.add_sub_error("Header line must not be empty nor blanks only nor null")
        raise error

    parts = config.split(config.rtrim_columns(line) or "")
    if len(parts) != len(columns):
        error.add_sub_error(
            f"Expected {len(columns)} columns ({', '.join(c.value.name for c in columns)}), "
            f"found {len(parts)}"
        )
        raise error

    for position, (text, column) in enumerate(zip(parts, columns, strict=True), start=1):
        if not column.value.matches_header(text, config):
            expected = (
                config.trigger(column.value.name) if column.value.trigger else column.value.name
            )
            error.add_sub_error(f"Column {position} is '{text}', expected '{expected}'")

    if error.has_sub_errors:
        raise error
    return list(columns)


def split_line(line: str, width: int, config: Configuration) -> list[str]:
    """
    Split a data line into cells.

    Separators beyond the header width are dropped when the cells they
    delimit are empty, which tolerates producers padding lines to a common
    width. Missing cells are never invented.
    """
    parts = config.split(line)
    if len(parts) > width and not any(parts[width:]):
        parts = parts[:width]
    return parts
