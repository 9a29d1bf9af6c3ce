"""Tests for error types and aggregation."""

from metablock.core.errors import (
    ColumnValueError,
    ErrorContext,
    MetablockError,
    ParserError,
    StructureError,
    make_structure_error,
    make_value_error,
)


class TestParserError:
    """Tests for the composite parser error."""

    def test_starts_without_sub_errors(self) -> None:
        error = ParserError("Has validation errors:")
        assert not error.has_sub_errors
        assert error.sub_errors == ()

    def test_collects_sub_errors_in_order(self) -> None:
        error = ParserError("Has validation errors:")
        error.add_sub_error("first")
        error.add_sub_error(make_value_error("name", "1abc", "must match"))

        assert error.has_sub_errors
        assert [str(e) for e in error.sub_errors] == [
            "first",
            "Invalid value '1abc' for column 'name', must match",
        ]

    def test_sub_errors_view_is_read_only(self) -> None:
        error = ParserError("x")
        view = error.sub_errors
        error.add_sub_error("y")
        assert view == ()
        assert len(error.sub_errors) == 1

    def test_details_lists_sub_errors(self) -> None:
        error = StructureError("Invalid header")
        error.add_sub_error("Column 2 is 'nam', expected 'name'")
        assert error.details() == "Invalid header\n  - Column 2 is 'nam', expected 'name'"

    def test_hierarchy(self) -> None:
        assert issubclass(StructureError, ParserError)
        assert issubclass(ColumnValueError, ParserError)
        assert issubclass(ParserError, MetablockError)


class TestColumnValueError:
    """Tests for single cell errors."""

    def test_carries_column_value_rule(self) -> None:
        error = make_value_error("facetable", "true", "must be TRUE or FALSE", line=7)
        assert error.column == "facetable"
        assert error.value == "true"
        assert error.rule == "must be TRUE or FALSE"
        assert error.context == ErrorContext(line=7, column="facetable")
        assert str(error).startswith("<input>:7 (column 'facetable'): ")


class TestErrorContext:
    """Tests for error location formatting."""

    def test_format_full(self) -> None:
        context = ErrorContext(line=3, column="name", source="citation.tsv")
        assert context.format() == "citation.tsv:3 (column 'name')"

    def test_format_with_snippet(self) -> None:
        context = ErrorContext(line=1, snippet="\tfoo")
        assert context.format() == "<input>:1\n    '\\tfoo'"

    def test_structure_error_without_location(self) -> None:
        error = make_structure_error("Wrong width")
        assert error.context is None
        assert str(error) == "Wrong width"

    def test_structure_error_with_location(self) -> None:
        error = make_structure_error("Wrong width", line=4, source="a.tsv")
        assert str(error) == "a.tsv:4: Wrong width"
