"""
Metadata block definitions for metablock IR.

A Block is validated when it is constructed; an instance that exists is
valid. Blocks compare and hash by name only.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .. import validators

DISPLAY_NAME_LIMIT = 257


class Block(BaseModel):
    """
    A metadata block: a named schema grouping a set of fields.

    Attributes:
        name: Block identifier (``citation``, ``codeMeta20``)
        dataverse_alias: Collection alias the block is limited to, empty for none
        display_name: Human readable name, shorter than 257 characters
        block_uri: Namespace URI of the block
        last_line_index: Index of the last input line of the block section,
            set by the section parser
    """

    name: str
    dataverse_alias: str = ""
    display_name: str
    block_uri: str
    last_line_index: int | None = Field(default=None, ge=0)

    model_config = ConfigDict(frozen=True)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not validators.is_valid_block_name(v):
            raise ValueError(
                f"Name must not be blank and match regex pattern {validators.BLOCK_NAME_PATTERN}"
            )
        return v

    @field_validator("dataverse_alias")
    @classmethod
    def validate_dataverse_alias(cls, v: str) -> str:
        if v and not validators.is_valid_alias(v):
            raise ValueError(
                "Dataverse alias must be either empty or match "
                f"{validators.COLLECTION_ALIAS_PATTERN}"
            )
        return v

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, v: str) -> str:
        if not validators.is_not_blank_shorter_than(v, DISPLAY_NAME_LIMIT):
            raise ValueError("Display name must not be blank and shorter than 257 chars")
        return v

    @field_validator("block_uri")
    @classmethod
    def validate_block_uri(cls, v: str) -> str:
        if not validators.is_valid_url(v):
            raise ValueError("Block URI must be a valid URI")
        return v

    @property
    def alias(self) -> str | None:
        """The collection alias, or None when the block is not limited."""
        return self.dataverse_alias or None

    def with_last_line_index(self, index: int) -> Block:
        """Return a copy annotated with the last line index of its section."""
        return self.model_validate({**self.model_dump(), "last_line_index": index})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Block):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)
