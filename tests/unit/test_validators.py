"""Tests for the cell value predicates."""

import pytest

from metablock.core import validators


class TestBlockName:
    """Tests for block name validation."""

    @pytest.mark.parametrize("name", ["foobar", "myFooBar", "a1234", "codeMeta20", "foo_bar"])
    def test_valid(self, name: str) -> None:
        assert validators.is_valid_block_name(name)

    @pytest.mark.parametrize(
        "name",
        [None, "", "   ", "a b", "1234", "hello.", "_asda", "foo-bar", "1abcd", "PascalCase",
         "customBLOCK", "foo__bar"],
    )
    def test_invalid(self, name: str | None) -> None:
        assert not validators.is_valid_block_name(name)


class TestFieldName:
    """Tests for field name validation."""

    @pytest.mark.parametrize(
        "name",
        ["foobar_", "foo_bar_", "_foobar", "_foo_bar", "foobar", "foobar1234", "foo_bar_1234",
         "coverage.Spectral.Bandpass"],
    )
    def test_valid(self, name: str) -> None:
        assert validators.is_valid_field_name(name)

    @pytest.mark.parametrize(
        "name", [None, "", "   ", "\t", "_foobar_", "_foo_bar_", "1abc", "foo bar", "foo."]
    )
    def test_invalid(self, name: str | None) -> None:
        assert not validators.is_valid_field_name(name)


class TestAlias:
    """Tests for collection alias validation."""

    @pytest.mark.parametrize(
        "alias",
        ["foobar", "myFooBar", "a1234", "codeMeta20", "foo_bar", "foo-bar", "_asda", "1abcd",
         "PascalCase", "ALIAS", "customALIAS"],
    )
    def test_valid(self, alias: str) -> None:
        assert validators.is_valid_alias(alias)

    @pytest.mark.parametrize("alias", [None, "", "   ", "a b", "1234", "hello.", "foo_", "foo-"])
    def test_invalid(self, alias: str | None) -> None:
        assert not validators.is_valid_alias(alias)


class TestUrl:
    """Tests for the two-stage URL check."""

    @pytest.mark.parametrize(
        "url",
        [
            "http://dataverse.org/citation",
            "https://dataverse.org/schema/citation/",
            "http://purl.org/dc/terms/title",
            "https://example.org/path?query=1#frag",
            "https://example.org/a%20b",
            "ftp://files.example.org/pub",
            "file:///tmp/schema",
        ],
    )
    def test_valid(self, url: str) -> None:
        assert validators.is_valid_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            None,
            "",
            "https://",
            "://test.com/test",
            "dataverse.org/test",
            "foo://example.org",
            "http://example.org/with space",
            "http://example.org/bad%zz",
            "http://example.org:99999/",
        ],
        ids=[
            "none",
            "empty",
            "no_host",
            "no_scheme",
            "relative",
            "unsupported_scheme",
            "unescaped_space",
            "broken_escape",
            "port_out_of_range",
        ],
    )
    def test_invalid(self, url: str | None) -> None:
        assert not validators.is_valid_url(url)


class TestBoolean:
    """Tests for strict boolean literals."""

    @pytest.mark.parametrize("value,expected", [("TRUE", True), ("FALSE", False)])
    def test_strict_literals(self, value: str, expected: bool) -> None:
        assert validators.is_strict_boolean(value)
        assert validators.parse_strict_boolean(value) is expected

    @pytest.mark.parametrize("value", [None, "", "true", "false", "True", "1", "0", "yes"])
    def test_other_spellings_rejected(self, value: str | None) -> None:
        assert not validators.is_strict_boolean(value)

    def test_parse_rejects_lowercase(self) -> None:
        with pytest.raises(ValueError):
            validators.parse_strict_boolean("true")


class TestTextRules:
    """Tests for the generic text predicates."""

    @pytest.mark.parametrize("value", [None, "", "   ", "\t"])
    def test_blank(self, value: str | None) -> None:
        assert validators.is_blank(value)

    @pytest.mark.parametrize("value,expected", [("", True), ("text", True), ("  ", False),
                                                (None, False)])
    def test_empty_or_not_blank(self, value: str | None, expected: bool) -> None:
        assert validators.is_empty_or_not_blank(value) is expected

    @pytest.mark.parametrize("value,expected", [("0", True), ("42", True), ("-1", False),
                                                ("1.5", False), ("", False), ("٣", False)])
    def test_unsigned_int(self, value: str, expected: bool) -> None:
        assert validators.is_unsigned_int(value) is expected

    def test_shorter_than(self) -> None:
        assert validators.is_not_blank_shorter_than("a" * 256, 257)
        assert not validators.is_not_blank_shorter_than("a" * 257, 257)
        assert not validators.is_not_blank_shorter_than(None, 257)


class TestTrailingNewline:
    """A trailing line break never satisfies a pattern rule."""

    @pytest.mark.parametrize(
        "predicate,value",
        [
            (validators.is_valid_block_name, "foo\n"),
            (validators.is_valid_field_name, "title\n"),
            (validators.is_valid_alias, "foo\n"),
            (validators.is_unsigned_int, "1\n"),
            (validators.is_valid_url, "http://dataverse.org/test\n"),
        ],
        ids=["block_name", "field_name", "alias", "unsigned_int", "url"],
    )
    def test_rejected(self, predicate, value: str) -> None:
        assert predicate(value.rstrip("\n"))
        assert not predicate(value)
