"""
Suggestion selection set for Vászon.

Holds the (block title, suggestion) pairs the user picked from AI output,
across all blocks, in the order they were picked.
"""

from typing import Dict, Iterator, List, Tuple

from ..models import SuggestionSelection


class SuggestionSelectionSet:
    """
    Ordered set of suggestion selections.
    """

    def __init__(self):
        self._selections: Tuple[SuggestionSelection, ...] = ()

    @property
    def selections(self) -> Tuple[SuggestionSelection, ...]:
        return self._selections

    def is_selected(self, block_title: str, suggestion: str) -> bool:
        return SuggestionSelection(block_title=block_title, suggestion=suggestion) in self._selections

    def toggle(self, block_title: str, suggestion: str) -> bool:
        """
        Add the pair if absent, remove it if present.

        Args:
            block_title: Title of the block the suggestion belongs to
            suggestion: The suggestion text

        Returns:
            True if the pair is selected after the call
        """
        selection = SuggestionSelection(block_title=block_title, suggestion=suggestion)
        if selection in self._selections:
            self._selections = tuple(s for s in self._selections if s != selection)
            return False
        self._selections = self._selections + (selection,)
        return True

    def clear(self) -> None:
        self._selections = ()

    def group_by_block(self) -> Dict[str, List[str]]:
        """
        Group the selected suggestions by block title.

        Titles appear in order of their first selection; suggestions keep
        their selection order within a group.

        Returns:
            Mapping of block title to suggestion texts
        """
        grouped: Dict[str, List[str]] = {}
        for selection in self._selections:
            grouped.setdefault(selection.block_title, []).append(selection.suggestion)
        return grouped

    def __len__(self) -> int:
        return len(self._selections)

    def __iter__(self) -> Iterator[SuggestionSelection]:
        return iter(self._selections)
