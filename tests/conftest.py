"""Shared pytest fixtures for metablock tests."""

from pathlib import Path

import pytest

from metablock.core.config import Configuration
from metablock.core.ir import Block, FieldTypeRegistry

BLOCK_HEADER_LINE = "#metadataBlock\tname\tdataverseAlias\tdisplayName\tblockURI"
BLOCK_LINE = "\ttest\t\tTest\thttp://dataverse.org/test"

FIELD_HEADER_LINE = (
    "#datasetField\tname\ttitle\tdescription\twatermark\tfieldType"
    "\tdisplayOrder\tdisplayFormat\tadvancedSearchField\tallowControlledVocabulary"
    "\tallowmultiples\tfacetable\tdisplayoncreate\trequired\tparent\tmetadatablock_id\ttermURI"
)
FIELD_LINE = (
    "\ttitle\tTitle\tThe main title of the Dataset\t\ttext"
    "\t0\t\tTRUE\tFALSE\tFALSE\tFALSE\tTRUE\tTRUE\t\tcitation\thttp://purl.org/dc/terms/title"
)


def _field_line(
    name: str,
    parent: str = "",
    block: str = "citation",
    field_type: str = "text",
    display_order: str = "0",
    term_uri: str = "",
    title: str = "Some Title",
) -> str:
    """Build a field definition line with sensible defaults."""
    return "\t".join(
        [
            "",
            name,
            title,
            "A description",
            "",
            field_type,
            display_order,
            "",
            "TRUE",
            "FALSE",
            "FALSE",
            "FALSE",
            "TRUE",
            "FALSE",
            parent,
            block,
            term_uri,
        ]
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def tsv_fixtures_dir(fixtures_dir: Path) -> Path:
    """Return path to TSV fixtures directory."""
    return fixtures_dir / "tsv"


@pytest.fixture
def block_header_line() -> str:
    return BLOCK_HEADER_LINE


@pytest.fixture
def block_line() -> str:
    return BLOCK_LINE


@pytest.fixture
def field_header_line() -> str:
    return FIELD_HEADER_LINE


@pytest.fixture
def valid_field_line() -> str:
    return FIELD_LINE


@pytest.fixture
def make_field_line():
    """Factory for field definition lines, see _field_line for the defaults."""
    return _field_line


@pytest.fixture
def config() -> Configuration:
    return Configuration.default()


@pytest.fixture
def deep_config() -> Configuration:
    return Configuration(allow_deep_field_nesting=True)


@pytest.fixture
def types() -> FieldTypeRegistry:
    return FieldTypeRegistry.with_defaults()


@pytest.fixture
def citation_block() -> Block:
    """Return a simple block for binding field sections."""
    return Block(
        name="citation",
        display_name="Citation Metadata",
        block_uri="https://dataverse.org/schema/citation/",
    )
