"""
Canvas store for Vászon.

This module holds the in-memory state of the canvas: one block per catalog
entry, each with a growable list of items. Every mutation builds a new tuple
of blocks, so a reference taken before a call never observes the change.
"""

import logging
import uuid
from typing import Iterable, List, Optional, Tuple

from ..models import CanvasBlockData, CanvasItem
from .catalog import BlockCatalog


def new_item_id() -> str:
    """Generate a fresh, never reused item id."""
    return f"item-{uuid.uuid4().hex}"


class CanvasStore:
    """
    Mutable collection of canvas blocks and their items.
    """

    def __init__(self, catalog: Optional[BlockCatalog] = None):
        """
        Initialize the store with one empty block per catalog entry.

        Args:
            catalog: The fixed block catalog (defaults to the built-in one)
        """
        self.catalog = catalog or BlockCatalog()
        self._blocks: Tuple[CanvasBlockData, ...] = tuple(
            CanvasBlockData.from_definition(definition) for definition in self.catalog
        )

    @property
    def blocks(self) -> Tuple[CanvasBlockData, ...]:
        """The current blocks in catalog order."""
        return self._blocks

    def get_block(self, block_id: str) -> Optional[CanvasBlockData]:
        """
        Get the current state of a block.

        Args:
            block_id: The id of the block

        Returns:
            The block, or None if the id is not in the catalog
        """
        for block in self._blocks:
            if block.id == block_id:
                return block
        return None

    def non_empty_blocks(self) -> List[CanvasBlockData]:
        """Blocks holding at least one item, in catalog order."""
        return [block for block in self._blocks if not block.is_empty]

    def item_count(self) -> int:
        return sum(len(block.items) for block in self._blocks)

    def is_empty(self) -> bool:
        """True if no block holds any item."""
        return all(block.is_empty for block in self._blocks)

    def add_item(self, block_id: str, text: str) -> Optional[CanvasItem]:
        """
        Append a new item to a block.

        Text that is empty after trimming is ignored. The text is stored
        unchanged otherwise.

        Args:
            block_id: The id of the target block
            text: The item text

        Returns:
            The created item, or None if nothing was added
        """
        if not text or not text.strip():
            return None
        added = self._append(block_id, [text])
        return added[0] if added else None

    def add_items(self, block_id: str, texts: Iterable[str]) -> List[CanvasItem]:
        """
        Append several items to a block in one step.

        Every string becomes its own item, including duplicates.

        Args:
            block_id: The id of the target block
            texts: Item texts in the order they should appear

        Returns:
            The created items
        """
        return self._append(block_id, list(texts))

    def update_item(self, block_id: str, item_id: str, new_text: str) -> bool:
        """
        Replace the text of an item.

        Args:
            block_id: The id of the block holding the item
            item_id: The id of the item
            new_text: The replacement text

        Returns:
            True if the item was found and updated
        """
        block = self.get_block(block_id)
        if block is None:
            logging.debug(f"update_item: unknown block {block_id}")
            return False

        updated = False
        items: List[CanvasItem] = []
        for item in block.items:
            if item.id == item_id:
                items.append(item.model_copy(update={"text": new_text}))
                updated = True
            else:
                items.append(item)

        if updated:
            self._replace(block.model_copy(update={"items": tuple(items)}))
        return updated

    def delete_item(self, block_id: str, item_id: str) -> bool:
        """
        Remove an item from a block.

        Args:
            block_id: The id of the block holding the item
            item_id: The id of the item

        Returns:
            True if the item was found and removed
        """
        block = self.get_block(block_id)
        if block is None:
            logging.debug(f"delete_item: unknown block {block_id}")
            return False

        items = tuple(item for item in block.items if item.id != item_id)
        if len(items) == len(block.items):
            return False

        self._replace(block.model_copy(update={"items": items}))
        return True

    def _append(self, block_id: str, texts: List[str]) -> List[CanvasItem]:
        block = self.get_block(block_id)
        if block is None:
            logging.debug(f"add: unknown block {block_id}")
            return []
        if not texts:
            return []

        new_items = [CanvasItem(id=new_item_id(), text=text) for text in texts]
        self._replace(block.model_copy(update={"items": (*block.items, *new_items)}))
        return new_items

    def _replace(self, new_block: CanvasBlockData) -> None:
        self._blocks = tuple(
            new_block if block.id == new_block.id else block
            for block in self._blocks
        )
