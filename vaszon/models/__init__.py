"""Data models for Vászon."""

from .canvas import CanvasItem, BlockDefinition, CanvasBlockData
from .documents import (
    IngestionState,
    UploadedDocument,
    SuggestionSelection,
    SummaryState,
    SuggestionState,
    ExportArtifact,
)

__all__ = [
    "CanvasItem",
    "BlockDefinition",
    "CanvasBlockData",
    "IngestionState",
    "UploadedDocument",
    "SuggestionSelection",
    "SummaryState",
    "SuggestionState",
    "ExportArtifact",
]
