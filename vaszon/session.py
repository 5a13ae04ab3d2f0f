"""
Canvas session for Vászon.

A session ties the canvas store, the document ingestion pipeline, the
suggestion selections and the AI orchestrators together. It is the narrow
interface the surrounding UI (or the command line driver) talks to.
"""

import logging
from typing import Any, Dict, List, Optional

from .canvas import BlockCatalog, CanvasStore, SuggestionSelectionSet
from .config import ConfigManager
from .export import (
    FULL_EXPORT,
    ITEMS_EXPORT,
    SELECTIONS_EXPORT,
    build_artifact,
    serialize_full,
    serialize_items,
    serialize_selections,
)
from .ingestion import DocumentIngestionPipeline, FileSource
from .models import ExportArtifact, SummaryState, SuggestionState, UploadedDocument
from .orchestration import SuggestionOrchestrator, SummaryOrchestrator


class CanvasSession:
    """
    The state of one canvas editing session.
    """

    def __init__(self, catalog: Optional[BlockCatalog] = None, ai: Optional[Any] = None,
                 timeout: Optional[float] = None):
        """
        Initialize the session.

        Args:
            catalog: The block catalog (defaults to the built-in one)
            ai: Object providing extract_text, generate_summary and
                generate_suggestions (e.g. an AgentRunner), or None when the
                AI service is not configured
            timeout: Seconds to wait for any AI call (None waits forever)
        """
        self.ai = ai
        self.store = CanvasStore(catalog)
        self.selections = SuggestionSelectionSet()
        self.pipeline = DocumentIngestionPipeline(extractor=ai, timeout=timeout)
        self.summaries = SummaryOrchestrator(self.store, self.pipeline, summarizer=ai, timeout=timeout)
        self.suggestions = SuggestionOrchestrator(
            self.store, self.compose_concept, provider=ai, timeout=timeout
        )

    @classmethod
    def from_config(cls, cfg: ConfigManager, ai: Optional[Any] = None) -> "CanvasSession":
        """
        Build a session from configuration.

        Args:
            cfg: Loaded configuration
            ai: The AI capability; pass None to run without AI

        Returns:
            A new session
        """
        catalog = BlockCatalog.from_config(cfg.block_definitions)
        return cls(catalog=catalog, ai=ai, timeout=cfg.ai_timeout)

    @property
    def ai_available(self) -> bool:
        return self.ai is not None

    @property
    def business_concept(self) -> str:
        return self.summaries.business_concept

    @business_concept.setter
    def business_concept(self, value: str) -> None:
        self.summaries.business_concept = value or ""

    @property
    def document(self) -> Optional[UploadedDocument]:
        return self.pipeline.document

    @property
    def summary_state(self) -> SummaryState:
        return self.summaries.state

    def compose_concept(self) -> str:
        return self.summaries.compose_concept()

    # Canvas items

    def load_items(self, items_by_block: Dict[str, List[str]]) -> int:
        """
        Add items for several blocks, e.g. from a YAML file.

        Unknown block ids are logged and skipped.

        Args:
            items_by_block: Block id to item texts

        Returns:
            Number of items added
        """
        added = 0
        for block_id, texts in items_by_block.items():
            if block_id not in self.store.catalog:
                logging.warning(f"Skipping items for unknown block: {block_id}")
                continue
            for text in texts or []:
                if self.store.add_item(block_id, str(text)) is not None:
                    added += 1
        return added

    # Documents

    async def attach_file(self, source: FileSource) -> Optional[UploadedDocument]:
        return await self.pipeline.ingest_file(source)

    def attach_text(self, name: str, text: str) -> UploadedDocument:
        return self.pipeline.ingest_text(name, text)

    def remove_document(self) -> None:
        self.pipeline.remove_document()

    # AI

    def can_generate_summary(self) -> bool:
        """Whether the summary action should be offered right now."""
        has_context = bool(self.business_concept.strip()) or self.document is not None
        return (
            self.ai_available
            and not self.summary_state.is_pending
            and not self.pipeline.is_extracting
            and has_context
            and not self.store.is_empty()
        )

    async def generate_summary(self) -> SummaryState:
        return await self.summaries.generate_summary()

    async def generate_suggestions(self, block_id: str) -> SuggestionState:
        return await self.suggestions.generate(block_id)

    def toggle_suggestion(self, block_id: str, suggestion: str) -> bool:
        """
        Toggle the selection of a suggestion shown for a block.

        Raises:
            KeyError: If the block id is not in the catalog
        """
        block = self.store.get_block(block_id)
        if block is None:
            raise KeyError(f"Unknown block: {block_id}")
        return self.selections.toggle(block.title, suggestion)

    # Export

    def can_download(self) -> bool:
        """Whether the full export should be offered right now."""
        if self.pipeline.is_extracting:
            return False
        return not (self.store.is_empty() and not self.business_concept.strip() and self.document is None)

    def export(self, projection: str) -> ExportArtifact:
        """
        Serialize one projection of the session.

        Args:
            projection: One of "full", "items" or "selections"

        Returns:
            The export artifact

        Raises:
            ValueError: If the projection is unknown
        """
        if projection == FULL_EXPORT:
            content = serialize_full(
                self.business_concept, self.store.non_empty_blocks(),
                document=self.document, summary=self.summary_state.text
            )
        elif projection == ITEMS_EXPORT:
            content = serialize_items(self.store.non_empty_blocks())
        elif projection == SELECTIONS_EXPORT:
            content = serialize_selections(self.selections.group_by_block())
        else:
            raise ValueError(f"Unknown export projection: {projection}")
        return build_artifact(projection, content)
