"""
Field definitions for metablock IR.

A Field belongs to exactly one metadata block and may be nested under a
parent field. Parent links are names, children are the resolved Field
objects, so a tree of Fields stays immutable once built.
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, field_validator

from .. import validators
from .blocks import Block
from .field_types import FieldType

TITLE_LIMIT = 60


class Field(BaseModel):
    """
    Definition of a single field of a metadata block.

    Attributes:
        name: Field identifier, unique within its block
        title: Short human readable title
        description: Longer help text, may be empty
        watermark: Placeholder text for input forms, may be empty
        type: Field type
        display_order: Non-negative position in forms
        display_format: Display template, may be empty
        metadata_block: Name of the containing block
        term_uri: Term URI, None when the block namespace applies
        parent: Name of the parent field, None for top-level fields
        children: Fields nested directly under this one, in row order
    """

    name: str
    title: str
    description: str = ""
    watermark: str = ""
    type: FieldType
    display_order: int
    display_format: str = ""
    advanced_search_field: bool = False
    allow_controlled_vocabulary: bool = False
    allow_multiples: bool = False
    facetable: bool = False
    display_on_create: bool = False
    required: bool = False
    metadata_block: str
    term_uri: str | None = None
    parent: str | None = None
    children: tuple[Field, ...] = ()

    model_config = ConfigDict(frozen=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not validators.is_valid_field_name(v):
            raise ValueError(
                f"Name must not be blank and match regex pattern {validators.FIELD_NAME_PATTERN}"
            )
        return v

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not validators.is_not_blank_shorter_than(v, TITLE_LIMIT):
            raise ValueError(f"Title '{v}' may not be blank or longer than 59 chars")
        return v

    @field_validator("watermark", "display_format")
    @classmethod
    def validate_empty_or_text(cls, v: str) -> str:
        if not validators.is_empty_or_not_blank(v):
            raise ValueError("must be empty or contain more than whitespace")
        return v

    @field_validator("display_order")
    @classmethod
    def validate_display_order(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Display order may not be a negative number")
        return v

    @field_validator("metadata_block")
    @classmethod
    def validate_metadata_block(cls, v: str) -> str:
        if not validators.is_valid_block_name(v):
            raise ValueError(f"Metadata block '{v}' is not a valid block name")
        return v

    @field_validator("term_uri")
    @classmethod
    def validate_term_uri(cls, v: str | None) -> str | None:
        if not v:
            return None
        if not validators.is_valid_url(v):
            raise ValueError("Term URI value must either be a valid URI or empty")
        return v

    @field_validator("parent")
    @classmethod
    def validate_parent(cls, v: str | None) -> str | None:
        if not v:
            return None
        if not validators.is_valid_field_name(v):
            raise ValueError(f"Parent '{v}' is not a valid field name")
        return v

    @property
    def has_parent(self) -> bool:
        return self.parent is not None

    @property
    def is_compound(self) -> bool:
        """True for fields that group child fields."""
        return bool(self.children)

    def resolve_term_uri(self, block: Block) -> str:
        """Term URI of this field, defaulting to the block namespace plus the field name."""
        if self.term_uri:
            return self.term_uri
        return f"{block.block_uri.rstrip('/')}/{self.name}"

    def walk(self) -> Iterator[Field]:
        """Yield this field and all descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Field):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)
