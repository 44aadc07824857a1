"""Exception classes raised by the catalog merger pipeline.

Precondition and empty-result failures raise; row-level defects are counted
by the caller and never raised.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, Optional


class CatalogMergerError(Exception):
    """Base exception for all pipeline errors.

    Attributes:
        code: Error code (e.g., "MISSING_COLUMNS")
        message: Human-readable message
        details: Additional context
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class UnsupportedFileTypeError(CatalogMergerError):
    """File extension or export format is not handled."""

    def __init__(self, file_type: str, allowed: Iterable[str]):
        allowed = sorted(allowed)
        super().__init__(
            code="UNSUPPORTED_FILE_TYPE",
            message=f"Unsupported file type '{file_type}'. Use one of: {', '.join(allowed)}.",
            details={"file_type": file_type, "allowed": allowed},
        )


class FileParseError(CatalogMergerError):
    """Tabular file could not be parsed."""

    def __init__(self, name: str, reason: str):
        super().__init__(
            code="FILE_PARSE_ERROR",
            message=f"Could not parse {name}: {reason}",
            details={"file": name, "reason": reason},
        )


class MissingColumnsError(CatalogMergerError):
    """Requested columns are not present in the unified set."""

    def __init__(self, missing: Iterable[str]):
        missing = list(missing)
        super().__init__(
            code="MISSING_COLUMNS",
            message=f"Missing required columns: {', '.join(missing)}",
            details={"missing": missing},
        )


class EmptyTranslationError(CatalogMergerError):
    """No usable row survived a translation import."""

    def __init__(self, column: str, files: int, dropped: int = 0):
        super().__init__(
            code="EMPTY_TRANSLATION",
            message=f"No translated rows found for '{column}' in {files} file(s).",
            details={"column": column, "files": files, "dropped": dropped},
        )


class StorageError(CatalogMergerError):
    """A saved slot could not be read or written."""

    def __init__(self, slot: str, reason: str):
        super().__init__(
            code="STORAGE_ERROR",
            message=f"Storage slot '{slot}' failed: {reason}",
            details={"slot": slot, "reason": reason},
        )
