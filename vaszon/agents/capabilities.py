"""
AI capability interfaces used by the canvas core.

The core only depends on these protocols, so tests and offline runs can pass
in any object with matching coroutine methods.
"""

from typing import List, Protocol, runtime_checkable


@runtime_checkable
class TextExtractor(Protocol):
    async def extract_text(self, base64_content: str, mime_type: str) -> str:
        """Return the plain text of a base64-encoded document."""
        ...


@runtime_checkable
class Summarizer(Protocol):
    async def generate_summary(self, full_concept: str, canvas_digest: str) -> str:
        """Return a summary of the business concept and the canvas content."""
        ...


@runtime_checkable
class SuggestionProvider(Protocol):
    async def generate_suggestions(self, block_title: str, block_description: str,
                                   full_concept: str) -> List[str]:
        """Return candidate item texts for one block."""
        ...
