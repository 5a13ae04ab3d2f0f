"""
Canvas data models for Vászon.

This module defines the blocks of the business model canvas and the items
they hold. Instances are treated as immutable values: the canvas store
replaces them instead of mutating them in place.
"""

from typing import Tuple
from pydantic import BaseModel, ConfigDict, Field


class CanvasItem(BaseModel):
    """
    One freeform text entry belonging to exactly one block.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        description="Opaque identifier, unique within the owning block and never reused"
    )

    text: str = Field(
        ...,
        description="The text of the entry as the user typed it"
    )


class BlockDefinition(BaseModel):
    """
    A fixed named category of the canvas, as listed in the block catalog.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(
        ...,
        description="Stable identifier of the block (e.g. 'value-propositions')"
    )

    title: str = Field(
        ...,
        description="Human-readable title used in exports and AI prompts"
    )

    description: str = Field(
        default="",
        description="Guiding question shown with the block"
    )

    color: str = Field(
        default="slate",
        description="Presentation hint for the surrounding UI"
    )


class CanvasBlockData(BaseModel):
    """
    A catalog block together with its current items.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Identifier copied from the block definition")
    title: str = Field(..., description="Title copied from the block definition")
    description: str = Field(default="", description="Description copied from the block definition")
    color: str = Field(default="slate", description="Color copied from the block definition")

    items: Tuple[CanvasItem, ...] = Field(
        default=(),
        description="Items in append order"
    )

    @classmethod
    def from_definition(cls, definition: BlockDefinition) -> "CanvasBlockData":
        """Create an empty block for a catalog entry."""
        return cls(
            id=definition.id,
            title=definition.title,
            description=definition.description,
            color=definition.color,
            items=()
        )

    @property
    def is_empty(self) -> bool:
        return not self.items
