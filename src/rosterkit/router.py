"""BulkImportRouter -- orchestrator and public API for employee bulk imports.

Routes an uploaded file through the import pipeline:

1. Security scan via :class:`UploadSecurityScanner`.
2. Parse with :func:`parse_delimited_text` or :func:`read_spreadsheet_rows`;
   an unreadable workbook is reported as corrupt.
3. Enforce the non-empty and ``max_rows`` limits.
4. Report unknown and missing header columns as warnings.
5. Canonicalize and validate via :func:`canonicalize_and_validate`.
6. Flag e-mail addresses repeated within the upload.
7. Assemble and return :class:`PreviewResult`.

:meth:`BulkImportRouter.confirm` then hands the valid rows of a preview to
an injected :class:`EmployeeRowSink` in batches.  The router enforces
**fail-closed** semantics: any fatal error returns a result carrying error
codes and zero rows instead of raising.
"""

from __future__ import annotations

import hashlib
import logging
import time
from pathlib import Path

from rosterkit.config import ImportConfig
from rosterkit.contract import EMPLOYEE_CONTRACT, ColumnContract
from rosterkit.errors import ErrorCode, IngestError
from rosterkit.headers import missing_columns, unknown_columns
from rosterkit.models import (
    FileFormat,
    ImportResult,
    PreviewResult,
    PreviewRow,
    RowStatus,
    TemplateFile,
    TemplateFormat,
    ValidatedRow,
)
from rosterkit.parsers import parse_delimited_text, read_spreadsheet_rows
from rosterkit.pipeline import canonicalize_and_validate
from rosterkit.protocols import EmployeeRowSink
from rosterkit.security import UploadSecurityScanner
from rosterkit.template import build_template_file
from rosterkit.validator import is_valid_email

logger = logging.getLogger("rosterkit")

DUPLICATE_EMAIL_MESSAGE = "email is duplicated within this upload"


class BulkImportRouter:
    """Top-level orchestrator for employee bulk imports.

    Parameters
    ----------
    sink:
        Optional persistence backend used by :meth:`confirm`.
    config:
        Pipeline configuration.  Uses defaults when *None*.
    contract:
        Column contract.  Defaults to :data:`EMPLOYEE_CONTRACT`.
    """

    def __init__(
        self,
        sink: EmployeeRowSink | None = None,
        config: ImportConfig | None = None,
        contract: ColumnContract = EMPLOYEE_CONTRACT,
    ) -> None:
        self._config = config or ImportConfig()
        self._sink = sink
        self._contract = contract
        self._security_scanner = UploadSecurityScanner(self._config)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def can_handle(self, filename: str) -> bool:
        """Return True if *filename* ends with ``.csv`` or ``.xlsx``."""
        return filename.lower().endswith((".csv", ".xlsx"))

    def preview_file(self, file_path: str) -> PreviewResult:
        """Read *file_path* from disk and delegate to :meth:`preview`."""
        path = Path(file_path)
        return self.preview(path.read_bytes(), path.name)

    def preview(self, data: bytes, filename: str) -> PreviewResult:
        """Parse and validate an uploaded file without persisting anything.

        Parameters
        ----------
        data:
            The raw uploaded bytes.
        filename:
            Original filename; its extension selects the parser.

        Returns
        -------
        PreviewResult
            Per-row status and messages, counts, and any file-level
            errors or warnings.
        """
        overall_start = time.monotonic()
        config = self._config
        content_hash = hashlib.sha256(data).hexdigest()

        # ==============================================================
        # Step 1: Security Scan
        # ==============================================================
        security_errors = self._security_scanner.scan(filename, data)
        fatal_errors = [e for e in security_errors if e.code.startswith("E_")]
        warnings = [e for e in security_errors if not e.code.startswith("E_")]

        if fatal_errors:
            return self._fail(filename, None, fatal_errors, warnings, overall_start)

        # ==============================================================
        # Step 2: Parse
        # ==============================================================
        if filename.lower().endswith(".xlsx"):
            file_format = FileFormat.XLSX
            try:
                raw_rows = read_spreadsheet_rows(data)
            except Exception as exc:
                err = IngestError(
                    code=ErrorCode.E_PARSE_CORRUPT,
                    message=f"Could not read workbook: {exc}",
                    stage="parse",
                )
                return self._fail(filename, file_format, [err], warnings, overall_start)
        else:
            file_format = FileFormat.CSV
            raw_rows = parse_delimited_text(
                data,
                delimiter=config.csv_delimiter,
                quote=config.csv_quote,
                encoding=config.text_encoding,
            )

        # ==============================================================
        # Step 3: Row limits
        # ==============================================================
        data_row_count = max(len(raw_rows) - 1, 0)
        if data_row_count == 0:
            err = IngestError(
                code=ErrorCode.E_PARSE_EMPTY,
                message="File contains no data rows. Ensure the first row is the header.",
                stage="parse",
            )
            return self._fail(filename, file_format, [err], warnings, overall_start)

        if data_row_count > config.max_rows:
            err = IngestError(
                code=ErrorCode.E_ROWS_TOO_MANY,
                message=(
                    f"File contains {data_row_count} rows. Maximum allowed per "
                    f"upload is {config.max_rows}. Split the file and upload "
                    "in batches."
                ),
                stage="parse",
            )
            return self._fail(filename, file_format, [err], warnings, overall_start)

        # ==============================================================
        # Step 4: Header diagnostics
        # ==============================================================
        header_row = raw_rows[0]
        unknown = unknown_columns(header_row, self._contract)
        if unknown:
            warnings.append(
                IngestError(
                    code=ErrorCode.W_UNKNOWN_COLUMNS,
                    message=f"Ignored columns: {', '.join(unknown)}",
                    stage="canonicalize",
                    recoverable=True,
                )
            )
        missing = missing_columns(header_row, self._contract)
        if missing:
            warnings.append(
                IngestError(
                    code=ErrorCode.W_MISSING_COLUMNS,
                    message=f"Columns not found in header: {', '.join(missing)}",
                    stage="canonicalize",
                    recoverable=True,
                )
            )

        # ==============================================================
        # Step 5: Canonicalize and validate
        # ==============================================================
        validated = canonicalize_and_validate(raw_rows, self._contract)

        # ==============================================================
        # Step 6: Duplicate e-mails within the upload
        # ==============================================================
        if config.detect_duplicate_emails:
            warnings.extend(self._flag_duplicate_emails(validated))

        # ==============================================================
        # Step 7: Assemble result
        # ==============================================================
        preview_data = [
            PreviewRow(
                row_number=vr.row_number,
                data=vr.data,
                status=RowStatus.VALID if vr.verdict.valid else RowStatus.INVALID,
                error_message=vr.verdict.error,
            )
            for vr in validated
        ]
        valid_rows = sum(1 for r in preview_data if r.status is RowStatus.VALID)

        if config.log_sample_data and preview_data:
            logger.debug("rosterkit | file=%s | first row=%s", filename, preview_data[0].data)

        elapsed = time.monotonic() - overall_start
        logger.info(
            "rosterkit | file=%s | sha256=%s | rows=%d | valid=%d | invalid=%d | %.3fs",
            filename,
            content_hash[:12],
            len(preview_data),
            valid_rows,
            len(preview_data) - valid_rows,
            elapsed,
        )

        return PreviewResult(
            filename=filename,
            file_format=file_format,
            content_hash=content_hash,
            total_rows=len(preview_data),
            valid_rows=valid_rows,
            invalid_rows=len(preview_data) - valid_rows,
            preview_data=preview_data,
            warnings=[e.code.value for e in warnings],
            error_details=warnings,
            processing_time_seconds=elapsed,
        )

    def confirm(self, preview: PreviewResult) -> ImportResult:
        """Hand the valid rows of *preview* to the sink in batches.

        Invalid rows are counted as skipped and never reach the sink.
        Batches written before a sink failure are still counted.
        """
        valid = [r for r in preview.preview_data if r.status is RowStatus.VALID]
        total = len(preview.preview_data)
        skipped = total - len(valid)

        if self._sink is None:
            err = IngestError(
                code=ErrorCode.E_SINK_NOT_CONFIGURED,
                message="No row sink configured; cannot import rows.",
                stage="confirm",
            )
            return ImportResult(
                total_rows=total,
                skipped_rows=skipped,
                errors=[err.code.value],
                error_details=[err],
            )

        if not valid:
            err = IngestError(
                code=ErrorCode.E_SINK_NO_VALID_ROWS,
                message="No valid rows to import",
                stage="confirm",
            )
            return ImportResult(
                total_rows=total,
                skipped_rows=skipped,
                errors=[err.code.value],
                error_details=[err],
            )

        batch_size = self._config.sink_batch_size
        submitted = 0
        written = 0
        for i in range(0, len(valid), batch_size):
            batch = valid[i : i + batch_size]
            try:
                written += self._sink.write_rows(batch)
            except TimeoutError as exc:
                return self._sink_failure(
                    ErrorCode.E_BACKEND_SINK_TIMEOUT, exc, total, submitted, written, skipped
                )
            except Exception as exc:
                return self._sink_failure(
                    ErrorCode.E_BACKEND_SINK_CONNECT, exc, total, submitted, written, skipped
                )
            submitted += len(batch)

        logger.info(
            "rosterkit | confirm | submitted=%d | written=%d | skipped=%d",
            submitted,
            written,
            skipped,
        )
        return ImportResult(
            total_rows=total,
            submitted_rows=submitted,
            written_rows=written,
            skipped_rows=skipped,
        )

    def template(self, fmt: TemplateFormat | str = TemplateFormat.CSV) -> TemplateFile:
        """Build the downloadable template for this router's contract."""
        return build_template_file(
            fmt,
            contract=self._contract,
            sheet_name=self._config.template_sheet_name,
            creator=self._config.template_creator,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _flag_duplicate_emails(self, validated: list[ValidatedRow]) -> list[IngestError]:
        """Append a violation to rows repeating an earlier row's e-mail.

        Only well-formed addresses are tracked; comparison ignores case and
        surrounding whitespace.  The first occurrence is never flagged.
        """
        seen: set[str] = set()
        warnings: list[IngestError] = []
        for vr in validated:
            email = vr.data.get("email", "").strip().lower()
            if not email or not is_valid_email(email):
                continue
            if email not in seen:
                seen.add(email)
                continue
            verdict = vr.verdict
            if verdict.valid:
                vr.verdict = verdict.model_copy(
                    update={"valid": False, "error": DUPLICATE_EMAIL_MESSAGE}
                )
            else:
                vr.verdict = verdict.model_copy(
                    update={"error": f"{verdict.error}; {DUPLICATE_EMAIL_MESSAGE}"}
                )
            warnings.append(
                IngestError(
                    code=ErrorCode.W_DUPLICATE_EMAIL,
                    message=f"Row {vr.row_number}: {DUPLICATE_EMAIL_MESSAGE}",
                    stage="validate",
                    recoverable=True,
                    row_number=vr.row_number,
                )
            )
        return warnings

    def _fail(
        self,
        filename: str,
        file_format: FileFormat | None,
        fatal_errors: list[IngestError],
        warnings: list[IngestError],
        start: float,
    ) -> PreviewResult:
        elapsed = time.monotonic() - start
        logger.error(
            "rosterkit | file=%s | code=%s | detail=%s",
            filename,
            fatal_errors[0].code.value,
            fatal_errors[0].message,
        )
        return PreviewResult(
            filename=filename,
            file_format=file_format,
            errors=[e.code.value for e in fatal_errors],
            warnings=[e.code.value for e in warnings],
            error_details=fatal_errors + warnings,
            processing_time_seconds=elapsed,
        )

    def _sink_failure(
        self,
        code: ErrorCode,
        exc: Exception,
        total: int,
        submitted: int,
        written: int,
        skipped: int,
    ) -> ImportResult:
        err = IngestError(
            code=code,
            message=f"Row sink error: {exc}",
            stage="confirm",
        )
        logger.error(
            "rosterkit | confirm | code=%s | written=%d | detail=%s",
            code.value,
            written,
            exc,
        )
        return ImportResult(
            total_rows=total,
            submitted_rows=submitted,
            written_rows=written,
            skipped_rows=skipped,
            errors=[code.value],
            error_details=[err],
        )
