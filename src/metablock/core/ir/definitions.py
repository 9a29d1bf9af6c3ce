"""
Complete metadata block definition: one block and its fields.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator

from .blocks import Block
from .fields import Field


class MetadataBlockDefinition(BaseModel):
    """
    A parsed metadata block with all of its fields.

    Attributes:
        block: The metadata block
        fields: All fields in definition order; compound fields carry their
            children, which also appear in this tuple on their own
    """

    block: Block
    fields: tuple[Field, ...] = ()

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_fields_belong_to_block(self) -> MetadataBlockDefinition:
        foreign = [f.name for f in self.fields if f.metadata_block != self.block.name]
        if foreign:
            raise ValueError(
                f"Fields {', '.join(foreign)} do not belong to block '{self.block.name}'"
            )
        return self

    @property
    def roots(self) -> list[Field]:
        """Top-level fields, in definition order."""
        return [f for f in self.fields if f.parent is None]

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def get_field(self, name: str) -> Field | None:
        """Get a field by name."""
        for field in self.fields:
            if field.name == name:
                return field
        return None
