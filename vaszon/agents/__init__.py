"""AI agents for document extraction, summaries and suggestions."""

from .capabilities import TextExtractor, Summarizer, SuggestionProvider
from .registry import AgentRegistry, AgentConfig
from .runner import AgentRunner, parse_suggestions

__all__ = [
    "TextExtractor",
    "Summarizer",
    "SuggestionProvider",
    "AgentRegistry",
    "AgentConfig",
    "AgentRunner",
    "parse_suggestions",
]
