"""
Error taxonomy for Vászon.

Every failure that reaches the user carries a short Hungarian ``user_message``;
the technical cause stays available through exception chaining so whoever
logs the error can show the traceback.
"""

from typing import Optional


class VaszonError(Exception):
    """Base class for all Vászon errors."""

    default_message = "Váratlan hiba történt."

    def __init__(self, detail: Optional[str] = None, user_message: Optional[str] = None):
        self.user_message = user_message or self.default_message
        super().__init__(detail or self.user_message)


class IngestionError(VaszonError):
    """A document could not be turned into usable context text."""


class UnsupportedFileType(IngestionError):
    default_message = "Nem támogatott fájltípus. Támogatott: .txt, .md, .doc, .docx, .pdf"


class FileReadFailure(IngestionError):
    default_message = "Hiba a fájl beolvasása közben."


class ExtractionFailure(IngestionError):
    default_message = "Hiba a szöveg kinyerése közben a dokumentumból."


class SummaryGenerationFailure(VaszonError):
    default_message = "Hiba történt az összefoglaló készítése közben. Kérjük, próbálja újra később."


class SuggestionGenerationFailure(VaszonError):
    default_message = "Hiba történt az ötletek generálása közben. Kérjük, próbálja újra."


class AgentError(VaszonError):
    """The AI service could not be reached or returned an unusable response."""

    default_message = "Az MI szolgáltatás nem érhető el."


class AINotConfiguredError(VaszonError):
    """An AI operation was requested without a configured API key."""

    default_message = "Nincs beállítva API kulcs."
