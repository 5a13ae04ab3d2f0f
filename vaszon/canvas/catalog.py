"""
Block catalog for Vászon.

This module defines the fixed set of canvas blocks. The catalog is built once
at startup, either from the built-in Business Model Canvas layout or from the
``canvas.blocks`` configuration section, and never changes afterwards.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from ..models import BlockDefinition


DEFAULT_BLOCKS: Tuple[BlockDefinition, ...] = (
    BlockDefinition(
        id="key-partners",
        title="Kulcspartnerek",
        description="Kik a legfontosabb partnereid és beszállítóid?",
        color="sky"
    ),
    BlockDefinition(
        id="key-activities",
        title="Kulcstevékenységek",
        description="Milyen kulcsfontosságú tevékenységeket igényel az értékajánlatod?",
        color="indigo"
    ),
    BlockDefinition(
        id="key-resources",
        title="Kulcserőforrások",
        description="Milyen kulcsfontosságú erőforrásokat igényel az értékajánlatod?",
        color="violet"
    ),
    BlockDefinition(
        id="value-propositions",
        title="Értékajánlat",
        description="Milyen értéket nyújtasz az ügyfeleidnek?",
        color="rose"
    ),
    BlockDefinition(
        id="customer-relationships",
        title="Ügyfélkapcsolatok",
        description="Milyen kapcsolatot vár el tőled az egyes ügyfélszegmens?",
        color="amber"
    ),
    BlockDefinition(
        id="channels",
        title="Csatornák",
        description="Milyen csatornákon keresztül éred el az ügyfeleidet?",
        color="orange"
    ),
    BlockDefinition(
        id="customer-segments",
        title="Ügyfélszegmensek",
        description="Kiknek teremtesz értéket? Kik a legfontosabb ügyfeleid?",
        color="emerald"
    ),
    BlockDefinition(
        id="cost-structure",
        title="Költségszerkezet",
        description="Melyek az üzleti modelled legfontosabb költségei?",
        color="slate"
    ),
    BlockDefinition(
        id="revenue-streams",
        title="Bevételi források",
        description="Milyen értékért hajlandók fizetni az ügyfeleid?",
        color="teal"
    ),
)


class BlockCatalog:
    """
    Immutable, ordered collection of block definitions.
    """

    def __init__(self, definitions: Optional[Iterable[BlockDefinition]] = None):
        """
        Initialize the catalog.

        Args:
            definitions: Block definitions in display order (defaults to the
                built-in Business Model Canvas blocks)

        Raises:
            ValueError: If two definitions share an id or the catalog is empty
        """
        blocks = tuple(definitions) if definitions is not None else DEFAULT_BLOCKS
        if not blocks:
            raise ValueError("Block catalog cannot be empty")

        seen = set()
        for block in blocks:
            if block.id in seen:
                raise ValueError(f"Duplicate block id in catalog: {block.id}")
            seen.add(block.id)

        self._blocks: Tuple[BlockDefinition, ...] = blocks
        self._by_id: Dict[str, BlockDefinition] = {block.id: block for block in blocks}

    @classmethod
    def from_config(cls, raw_blocks: List[Dict[str, Any]]) -> "BlockCatalog":
        """
        Build a catalog from the ``canvas.blocks`` configuration section.

        Invalid entries are logged and skipped. An empty section yields the
        default catalog.

        Args:
            raw_blocks: List of mappings with id, title, description and color

        Returns:
            The configured catalog
        """
        if not raw_blocks:
            return cls()

        definitions: List[BlockDefinition] = []
        for raw in raw_blocks:
            try:
                if not isinstance(raw, dict):
                    raise ValueError(f"expected a mapping, got {type(raw).__name__}")
                for required in ("id", "title"):
                    if not raw.get(required):
                        raise ValueError(f"missing required field '{required}'")
                definitions.append(BlockDefinition(**raw))
            except Exception as e:
                logging.error(f"Skipping invalid block definition {raw!r}: {e}")

        if not definitions:
            logging.warning("No valid block definitions in configuration, using defaults")
            return cls()

        logging.info(f"Loaded {len(definitions)} block definitions from configuration")
        return cls(definitions)

    def get(self, block_id: str) -> Optional[BlockDefinition]:
        """
        Get a block definition by id.

        Args:
            block_id: The id of the block

        Returns:
            The definition, or None if not found
        """
        return self._by_id.get(block_id)

    def ids(self) -> List[str]:
        return [block.id for block in self._blocks]

    def __iter__(self) -> Iterator[BlockDefinition]:
        return iter(self._blocks)

    def __len__(self) -> int:
        return len(self._blocks)

    def __contains__(self, block_id: object) -> bool:
        return block_id in self._by_id
