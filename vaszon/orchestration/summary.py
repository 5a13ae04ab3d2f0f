"""
Summary orchestration for Vászon.

This module composes the full business concept (typed text plus the attached
document) and the canvas digest, sends them to the summary capability and
tracks the lifecycle of the request. Only the most recently started request
may change the visible state.
"""

import asyncio
import itertools
import logging
from typing import Iterable, Optional

from ..agents.capabilities import Summarizer
from ..canvas.store import CanvasStore
from ..errors import AINotConfiguredError, SummaryGenerationFailure
from ..ingestion.pipeline import DocumentIngestionPipeline
from ..models import CanvasBlockData, SummaryState, UploadedDocument


def compose_concept(business_concept: str, document: Optional[UploadedDocument]) -> str:
    """
    Build the full business concept used as AI context.

    Args:
        business_concept: The concept typed by the user
        document: The attached document, if any

    Returns:
        The concept followed by a delimited document section, stripped
    """
    full_concept = business_concept
    if document is not None:
        full_concept += f"\n\n--- Csatolt dokumentum ({document.name}) ---\n{document.content}"
    return full_concept.strip()


def canvas_digest(blocks: Iterable[CanvasBlockData]) -> str:
    """
    Render the non-empty blocks as titled bullet lists.

    Args:
        blocks: Canvas blocks in catalog order

    Returns:
        One "Title:" section per non-empty block, separated by blank lines
    """
    sections = []
    for block in blocks:
        if block.is_empty:
            continue
        bullets = "\n".join(f"- {item.text}" for item in block.items)
        sections.append(f"{block.title}:\n{bullets}")
    return "\n\n".join(sections)


class SummaryOrchestrator:
    """
    Runs summary requests and exposes their state.
    """

    def __init__(self, store: CanvasStore, pipeline: DocumentIngestionPipeline,
                 summarizer: Optional[Summarizer] = None, timeout: Optional[float] = None):
        """
        Initialize the orchestrator.

        Args:
            store: The canvas store to digest
            pipeline: The ingestion pipeline holding the attached document
            summarizer: The summary capability (None when AI is not configured)
            timeout: Seconds to wait for the summary (None waits forever)
        """
        self.store = store
        self.pipeline = pipeline
        self.summarizer = summarizer
        self.timeout = timeout
        self.business_concept = ""
        self.state = SummaryState()
        self.last_error: Optional[SummaryGenerationFailure] = None
        self._generations = itertools.count(1)
        self._current_generation = 0

    @property
    def summary(self) -> Optional[str]:
        return self.state.text

    def compose_concept(self) -> str:
        return compose_concept(self.business_concept, self.pipeline.document)

    async def generate_summary(self) -> SummaryState:
        """
        Request a new summary, discarding any previous result or error.

        Returns:
            The visible state after this request settled. If a newer request
            was started in the meantime, its state is returned unchanged.

        Raises:
            AINotConfiguredError: If no summary capability is available
        """
        if self.summarizer is None:
            raise AINotConfiguredError("Summary requested without a summary capability")

        generation = next(self._generations)
        self._current_generation = generation
        self.state = SummaryState(is_pending=True)
        self.last_error = None

        full_concept = self.compose_concept()
        digest = canvas_digest(self.store.non_empty_blocks())
        logging.info(f"Requesting summary #{generation} ({len(full_concept)} concept characters, "
                     f"{self.store.item_count()} items)")

        try:
            text = await asyncio.wait_for(
                self.summarizer.generate_summary(full_concept, digest),
                timeout=self.timeout
            )
        except Exception as e:
            if generation != self._current_generation:
                logging.info(f"Discarding stale summary failure #{generation}: {e}")
                return self.state
            failure = SummaryGenerationFailure(f"Summary generation failed: {e!r}")
            failure.__cause__ = e
            logging.error(f"Summary generation failed: {e}", exc_info=e)
            self.last_error = failure
            self.state = SummaryState(error=failure.user_message)
            return self.state

        if generation != self._current_generation:
            logging.info(f"Discarding stale summary #{generation}")
            return self.state

        self.state = SummaryState(text=text)
        logging.info(f"Summary #{generation} ready ({len(text)} characters)")
        return self.state
