"""
Error types for metadata block parsing and validation.

Three kinds of failure are distinguished:

- Structural errors: the shape of a line or section is wrong (header columns,
  row width, duplicate definitions, unresolved or cyclic parents).
- Value errors: a single cell fails the rule of its column.
- State errors: a builder was used out of order. These are defects in the
  calling code, not problems with the input.
"""

from __future__ import annotations

from dataclasses import dataclass


class MetablockError(Exception):
    """Base exception for all metablock errors."""

    def __init__(self, message: str, context: ErrorContext | None = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class ParserError(MetablockError):
    """
    Raised when a line or section cannot be parsed.

    A ParserError is a composite: it may carry any number of sub-errors, so
    every invalid column of a line is reported in one pass. Callers test
    ``has_sub_errors`` to see whether anything was collected.
    """

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message, context)
        self._sub_errors: list[ParserError] = []

    def add_sub_error(self, error: ParserError | str) -> ParserError:
        """Append a sub-error (a plain message is wrapped into a ParserError)."""
        if isinstance(error, str):
            error = ParserError(error)
        self._sub_errors.append(error)
        return error

    @property
    def sub_errors(self) -> tuple[ParserError, ...]:
        return tuple(self._sub_errors)

    @property
    def has_sub_errors(self) -> bool:
        return bool(self._sub_errors)

    def details(self) -> str:
        """Message followed by one indented line per sub-error."""
        lines = [str(self)]
        lines.extend(f"  - {sub}" for sub in self._sub_errors)
        return "\n".join(lines)


class StructureError(ParserError):
    """
    Raised when the shape of the input is wrong.

    Examples:
    - Header columns missing, misordered or misspelled
    - Data line with a different column count than its header
    - Second block definition within one section
    - Parent reference that cannot be resolved or forms a cycle
    """

    pass


class ColumnValueError(ParserError):
    """Raised for a single cell that fails the rule of its column."""

    def __init__(
        self,
        column: str,
        value: str | None,
        rule: str,
        context: ErrorContext | None = None,
    ):
        self.column = column
        self.value = value
        self.rule = rule
        super().__init__(f"Invalid value '{value}' for column '{column}', {rule}", context)


class BuilderStateError(MetablockError):
    """
    Raised when a builder is used out of order.

    Examples:
    - build() before a line was parsed successfully
    - parsing another line after the builder has finished
    """

    pass


class ConfigurationError(MetablockError):
    """Raised when a configuration file cannot be read or parsed."""

    pass


@dataclass(frozen=True)
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        line: Line number (1-indexed), if known
        column: Column name, if the error concerns a single cell
        source: Optional label of the input (file name, URL, ...)
        snippet: Optional raw text of the offending line
    """

    line: int | None = None
    column: str | None = None
    source: str | None = None
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "citation.tsv:10 (column 'title')"
        """
        location = self.source or "<input>"
        if self.line is not None:
            location += f":{self.line}"
        if self.column:
            location += f" (column '{self.column}')"
        if self.snippet:
            location += f"\n    {self.snippet!r}"
        return location


def make_structure_error(
    message: str,
    line: int | None = None,
    source: str | None = None,
    snippet: str | None = None,
) -> StructureError:
    """
    Helper to create a StructureError with optional context.

    Args:
        message: Error description
        line: Optional line number (1-indexed)
        source: Optional input label
        snippet: Optional raw line

    Returns:
        StructureError with context if a location was provided
    """
    if line is not None or source is not None:
        return StructureError(message, ErrorContext(line=line, source=source, snippet=snippet))
    return StructureError(message)


def make_value_error(
    column: str,
    value: str | None,
    rule: str,
    line: int | None = None,
) -> ColumnValueError:
    """
    Helper to create a ColumnValueError, attaching the line number if known.

    Args:
        column: Canonical column name
        value: Offending raw value
        rule: Description of the violated rule ("must ...")
        line: Optional line number (1-indexed)

    Returns:
        ColumnValueError naming column, value and rule
    """
    if line is not None:
        return ColumnValueError(column, value, rule, ErrorContext(line=line, column=column))
    return ColumnValueError(column, value, rule)
