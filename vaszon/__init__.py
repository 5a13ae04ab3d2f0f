"""
Vászon: a business model canvas engine.

Keeps the canvas state, ingests documents as AI context and exports the
canvas as Markdown, with AI-assisted summaries and suggestions.
"""

__version__ = "0.1.0"
__author__ = "Vászon Project"

# Import main components
from .canvas import BlockCatalog, CanvasStore, SuggestionSelectionSet
from .models import CanvasItem, CanvasBlockData, UploadedDocument, SuggestionSelection
from .ingestion import DocumentIngestionPipeline, FileSource
from .orchestration import SummaryOrchestrator, SuggestionOrchestrator
from .agents import AgentRunner
from .session import CanvasSession

__all__ = [
    "BlockCatalog",
    "CanvasStore",
    "SuggestionSelectionSet",
    "CanvasItem",
    "CanvasBlockData",
    "UploadedDocument",
    "SuggestionSelection",
    "DocumentIngestionPipeline",
    "FileSource",
    "SummaryOrchestrator",
    "SuggestionOrchestrator",
    "AgentRunner",
    "CanvasSession",
]
