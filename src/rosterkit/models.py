"""Pydantic models for verdicts, previews, import results, and templates.

``RowVerdict`` and ``ValidatedRow`` are produced by the pure
canonicalize/validate core; ``PreviewRow``, ``PreviewResult``,
``ImportResult`` and ``TemplateFile`` are assembled by ``BulkImportRouter``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from rosterkit.errors import IngestError


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class FileFormat(str, Enum):
    """Upload formats the parsers understand."""

    CSV = "csv"
    XLSX = "xlsx"


class TemplateFormat(str, Enum):
    """Encodings the template emitter can produce."""

    CSV = "csv"
    EXCEL = "excel"


class RowStatus(str, Enum):
    """Preview status of a single row."""

    VALID = "valid"
    INVALID = "invalid"


# ---------------------------------------------------------------------------
# Core results
# ---------------------------------------------------------------------------


class RowVerdict(BaseModel):
    """Validity outcome for one canonical row.

    ``error`` is ``None`` when valid, otherwise every violated rule joined
    with ``"; "``.
    """

    valid: bool
    error: str | None = None


class ValidatedRow(BaseModel):
    """A canonical row, its source line number, and its verdict."""

    row_number: int
    data: dict[str, str]
    verdict: RowVerdict


# ---------------------------------------------------------------------------
# Router results
# ---------------------------------------------------------------------------


class PreviewRow(BaseModel):
    """One row as shown to the uploader before confirmation."""

    row_number: int
    data: dict[str, str]
    status: RowStatus
    error_message: str | None = None


class PreviewResult(BaseModel):
    """Final result of ``BulkImportRouter.preview()``."""

    filename: str
    file_format: FileFormat | None = None
    content_hash: str = ""
    total_rows: int = 0
    valid_rows: int = 0
    invalid_rows: int = 0
    preview_data: list[PreviewRow] = []
    errors: list[str] = []
    warnings: list[str] = []
    error_details: list[IngestError] = []
    processing_time_seconds: float = 0.0


class ImportResult(BaseModel):
    """Final result of ``BulkImportRouter.confirm()``."""

    total_rows: int = 0
    submitted_rows: int = 0
    written_rows: int = 0
    skipped_rows: int = 0
    errors: list[str] = []
    error_details: list[IngestError] = []


class TemplateFile(BaseModel):
    """A downloadable template with its filename and content type."""

    filename: str
    content_type: str
    content: bytes
