"""Orchestration of the asynchronous AI requests."""

from .summary import SummaryOrchestrator, compose_concept, canvas_digest
from .suggestions import SuggestionOrchestrator

__all__ = ["SummaryOrchestrator", "SuggestionOrchestrator", "compose_concept", "canvas_digest"]
