"""
Document ingestion pipeline for Vászon.

This module turns an uploaded file into plain text that can be used as AI
context. Plain text files are read directly; PDF and Word documents are sent
to a text extraction capability as base64. Only one document can be attached
at a time, and only the latest upload attempt may change it.
"""

import asyncio
import base64
import itertools
import logging
from typing import Optional

from ..agents.capabilities import TextExtractor
from ..errors import ExtractionFailure, FileReadFailure, IngestionError, UnsupportedFileType
from ..models import IngestionState, UploadedDocument
from .sources import FileSource


PLAIN_TEXT_TYPES = frozenset({"text/plain", "text/markdown"})

EXTRACTABLE_TYPES = frozenset({
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
})

ACCEPTED_EXTENSIONS = (".txt", ".md", ".doc", ".docx", ".pdf")

TEXT_CLASS = "text"
BINARY_CLASS = "binary"


def classify_file(name: str, mime_type: str) -> str:
    """
    Decide how a file has to be ingested.

    Markdown is also recognized by its extension, because browsers and
    operating systems often do not report a MIME type for it.

    Args:
        name: File name
        mime_type: Declared MIME type

    Returns:
        TEXT_CLASS or BINARY_CLASS

    Raises:
        UnsupportedFileType: If the file is neither
    """
    if mime_type in PLAIN_TEXT_TYPES or name.lower().endswith(".md"):
        return TEXT_CLASS
    if mime_type in EXTRACTABLE_TYPES:
        return BINARY_CLASS
    raise UnsupportedFileType(f"Unsupported file type {mime_type!r} for {name!r}")


class DocumentIngestionPipeline:
    """
    Single-slot document ingestion with guarded asynchronous completion.
    """

    def __init__(self, extractor: Optional[TextExtractor] = None, timeout: Optional[float] = None):
        """
        Initialize the pipeline.

        Args:
            extractor: Capability used for PDF and Word documents; without it
                those documents fail to ingest
            timeout: Seconds to wait for the extractor (None waits forever)
        """
        self.extractor = extractor
        self.timeout = timeout
        self.document: Optional[UploadedDocument] = None
        self.state = IngestionState.IDLE
        self.error: Optional[str] = None
        self.last_error: Optional[IngestionError] = None
        self._attempts = itertools.count(1)
        self._current_attempt = 0

    @property
    def is_extracting(self) -> bool:
        return self.document is not None and self.document.is_extracting

    async def ingest_file(self, source: FileSource) -> Optional[UploadedDocument]:
        """
        Attach a file, replacing any attached document.

        Unsupported files are rejected before the first suspension point and
        leave the attached document untouched. For PDF and Word documents a
        placeholder document with ``is_extracting`` set is attached
        immediately, also before the first suspension point.

        Args:
            source: The selected file

        Returns:
            The attached document, or None if this attempt failed or was
            superseded by a newer one
        """
        self.error = None
        self.last_error = None

        try:
            file_class = classify_file(source.name, source.mime_type)
        except UnsupportedFileType as e:
            logging.warning(f"Rejected upload {source.name}: {e}")
            self.error = e.user_message
            self.last_error = e
            return None

        attempt = next(self._attempts)
        self._current_attempt = attempt

        if file_class == TEXT_CLASS:
            return await self._ingest_plain_text(source, attempt)
        return await self._ingest_binary(source, attempt)

    def ingest_text(self, name: str, text: str) -> UploadedDocument:
        """
        Attach pasted text as a document.

        Args:
            name: Display name for the document
            text: The document text

        Returns:
            The attached document
        """
        self._current_attempt = next(self._attempts)
        self.error = None
        self.last_error = None
        self.document = UploadedDocument(name=name, content=text)
        self.state = IngestionState.READY
        logging.info(f"Attached pasted document {name} ({len(text)} characters)")
        return self.document

    def remove_document(self) -> None:
        """Detach the document and forget any pending upload."""
        self._current_attempt = next(self._attempts)
        self.document = None
        self.error = None
        self.last_error = None
        self.state = IngestionState.IDLE

    async def _ingest_plain_text(self, source: FileSource, attempt: int) -> Optional[UploadedDocument]:
        self.state = IngestionState.READING
        try:
            raw = await source.read_bytes()
        except Exception as e:
            if self._is_stale(attempt, source):
                return None
            failure = FileReadFailure(f"Could not read {source.name}: {e}",
                                      user_message="Hiba a szöveges fájl olvasása közben.")
            self._fail(failure, e)
            return None

        if self._is_stale(attempt, source):
            return None

        # Undecodable bytes are replaced instead of failing the upload
        content = raw.decode("utf-8-sig", errors="replace")
        self.document = UploadedDocument(name=source.name, content=content)
        self.state = IngestionState.READY
        logging.info(f"Attached text document {source.name} ({len(content)} characters)")
        return self.document

    async def _ingest_binary(self, source: FileSource, attempt: int) -> Optional[UploadedDocument]:
        self.document = UploadedDocument(name=source.name, content="", is_extracting=True)
        self.state = IngestionState.READING

        try:
            raw = await source.read_bytes()
        except Exception as e:
            if self._is_stale(attempt, source):
                return None
            self._fail(FileReadFailure(f"Could not read {source.name}: {e}"), e)
            return None

        if self._is_stale(attempt, source):
            return None

        self.state = IngestionState.EXTRACTING
        try:
            extracted = await self._extract(base64.b64encode(raw).decode("ascii"), source.mime_type)
            if not extracted or not extracted.strip():
                raise ValueError("extractor returned no text")
        except Exception as e:
            if self._is_stale(attempt, source):
                return None
            self._fail(ExtractionFailure(f"Text extraction failed for {source.name}: {e!r}"), e)
            return None

        if self._is_stale(attempt, source):
            return None

        self.document = UploadedDocument(name=source.name, content=extracted)
        self.state = IngestionState.READY
        logging.info(f"Extracted {len(extracted)} characters from {source.name}")
        return self.document

    async def _extract(self, base64_content: str, mime_type: str) -> str:
        if self.extractor is None:
            raise RuntimeError("no text extraction capability configured")
        return await asyncio.wait_for(
            self.extractor.extract_text(base64_content, mime_type),
            timeout=self.timeout
        )

    def _is_stale(self, attempt: int, source: FileSource) -> bool:
        if attempt != self._current_attempt:
            logging.info(f"Discarding stale ingestion result for {source.name}")
            return True
        return False

    def _fail(self, failure: IngestionError, cause: BaseException) -> None:
        failure.__cause__ = cause
        logging.error(f"Ingestion failed: {failure}", exc_info=cause)
        self.document = None
        self.error = failure.user_message
        self.last_error = failure
        self.state = IngestionState.FAILED
