"""
Per-block suggestion orchestration for Vászon.

Each block can ask the suggestion capability for candidate items. Requests
for different blocks are independent; within one block only the latest
request may change the visible state.
"""

import asyncio
import itertools
import logging
from typing import Callable, Dict, Iterable, List, Optional

from ..agents.capabilities import SuggestionProvider
from ..canvas.store import CanvasStore
from ..errors import AINotConfiguredError, SuggestionGenerationFailure
from ..models import CanvasItem, SuggestionState


class SuggestionOrchestrator:
    """
    Runs suggestion requests per block and commits accepted suggestions.
    """

    def __init__(self, store: CanvasStore, concept_provider: Callable[[], str],
                 provider: Optional[SuggestionProvider] = None, timeout: Optional[float] = None):
        """
        Initialize the orchestrator.

        Args:
            store: The canvas store suggestions are committed to
            concept_provider: Returns the current full business concept
            provider: The suggestion capability (None when AI is not configured)
            timeout: Seconds to wait for a response (None waits forever)
        """
        self.store = store
        self.concept_provider = concept_provider
        self.provider = provider
        self.timeout = timeout
        self.last_errors: Dict[str, SuggestionGenerationFailure] = {}
        self._states: Dict[str, SuggestionState] = {}
        self._generations = itertools.count(1)
        self._current: Dict[str, int] = {}

    def state(self, block_id: str) -> SuggestionState:
        return self._states.get(block_id, SuggestionState())

    async def generate(self, block_id: str) -> SuggestionState:
        """
        Ask for suggestions for one block.

        Args:
            block_id: The id of the block

        Returns:
            The visible state of the block after this request settled

        Raises:
            AINotConfiguredError: If no suggestion capability is available
            KeyError: If the block id is not in the catalog
        """
        if self.provider is None:
            raise AINotConfiguredError("Suggestions requested without a suggestion capability")
        block = self.store.get_block(block_id)
        if block is None:
            raise KeyError(f"Unknown block: {block_id}")

        generation = next(self._generations)
        self._current[block_id] = generation
        self._states[block_id] = SuggestionState(is_pending=True)
        self.last_errors.pop(block_id, None)

        try:
            suggestions = await asyncio.wait_for(
                self.provider.generate_suggestions(block.title, block.description, self.concept_provider()),
                timeout=self.timeout
            )
        except Exception as e:
            if self._current.get(block_id) != generation:
                logging.info(f"Discarding stale suggestion failure for {block_id}: {e}")
                return self.state(block_id)
            failure = SuggestionGenerationFailure(f"Suggestion generation failed for {block_id}: {e!r}")
            failure.__cause__ = e
            logging.error(f"Suggestion generation failed for {block.title}: {e}", exc_info=e)
            self.last_errors[block_id] = failure
            self._states[block_id] = SuggestionState(error=failure.user_message)
            return self._states[block_id]

        if self._current.get(block_id) != generation:
            logging.info(f"Discarding stale suggestions for {block_id}")
            return self.state(block_id)

        self._states[block_id] = SuggestionState(suggestions=list(suggestions))
        logging.info(f"Received {len(suggestions)} suggestions for {block.title}")
        return self._states[block_id]

    def accept(self, block_id: str, suggestions: Iterable[str]) -> List[CanvasItem]:
        """
        Commit suggestions to the canvas as new items.

        Args:
            block_id: The id of the target block
            suggestions: The suggestion texts to add

        Returns:
            The created items
        """
        texts = [text for text in suggestions if text.strip()]
        return self.store.add_items(block_id, texts)
