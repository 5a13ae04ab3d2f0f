"""
Session state models for Vászon.

These models describe the attached document, the user's suggestion
selections and the state of the asynchronous AI requests.
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class IngestionState(str, Enum):
    """States of one document ingestion attempt."""

    IDLE = "idle"
    READING = "reading"
    EXTRACTING = "extracting"
    READY = "ready"
    FAILED = "failed"


class UploadedDocument(BaseModel):
    """
    The single document attached to the canvas as extra AI context.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        description="File name as selected by the user"
    )

    content: str = Field(
        default="",
        description="Plain text content; empty while extraction is running"
    )

    is_extracting: bool = Field(
        default=False,
        description="True while the text is being extracted from a binary document"
    )


class SuggestionSelection(BaseModel):
    """
    An AI suggestion the user picked for a block. Equality is structural.
    """

    model_config = ConfigDict(frozen=True)

    block_title: str = Field(..., description="Title of the block the suggestion belongs to")
    suggestion: str = Field(..., description="The suggested item text")


class SummaryState(BaseModel):
    """
    Visible state of the AI summary request.
    """

    model_config = ConfigDict(frozen=True)

    text: Optional[str] = None
    is_pending: bool = False
    error: Optional[str] = None


class SuggestionState(BaseModel):
    """
    Visible state of the AI suggestion request for one block.
    """

    model_config = ConfigDict(frozen=True)

    suggestions: List[str] = Field(default_factory=list)
    is_pending: bool = False
    error: Optional[str] = None


class ExportArtifact(BaseModel):
    """
    A serialized canvas projection ready to be downloaded or saved.
    """

    model_config = ConfigDict(frozen=True)

    filename: str = Field(..., description="Fixed file name of the projection")
    mime_type: str = Field(default="text/markdown", description="MIME type of the content")
    content: str = Field(..., description="The serialized document")

    def write_to(self, directory: str) -> Path:
        """
        Write the artifact into a directory as UTF-8.

        Args:
            directory: Target directory, created if missing

        Returns:
            Path of the written file
        """
        target_dir = Path(directory)
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / self.filename
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.content)
        return path
