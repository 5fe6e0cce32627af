"""Pre-flight security scanner for uploaded employee files.

Rejects files with the wrong extension, no content, excessive size, or
(for ``.xlsx``) a body that is not a zip container, before any parsing
begins.
"""

from __future__ import annotations

import logging

from rosterkit.config import ImportConfig
from rosterkit.errors import ErrorCode, IngestError

logger = logging.getLogger("rosterkit")

ALLOWED_EXTENSIONS: tuple[str, ...] = (".csv", ".xlsx")

_ZIP_MAGIC = b"PK\x03\x04"


class UploadSecurityScanner:
    """Run pre-flight checks on an uploaded file.

    Returns a list of errors/warnings.  Fatal errors (``E_*`` codes) mean
    the file should not be processed further.
    """

    def __init__(self, config: ImportConfig) -> None:
        self.config = config

    def scan(self, filename: str, data: bytes) -> list[IngestError]:
        """Run all pre-flight checks.

        Returns:
            List of errors/warnings.  Fatal errors have codes starting
            with ``E_``.
        """
        errors: list[IngestError] = []
        lowered = filename.lower()

        # --- 1. Extension check ---
        if not lowered.endswith(ALLOWED_EXTENSIONS):
            errors.append(
                IngestError(
                    code=ErrorCode.E_SECURITY_BAD_EXTENSION,
                    message=(
                        f"Unsupported file type: {filename}. "
                        "Upload a .csv or .xlsx file"
                    ),
                    stage="security",
                )
            )
            return errors

        # --- 2. Empty file ---
        size = len(data)
        if size == 0:
            errors.append(
                IngestError(
                    code=ErrorCode.E_PARSE_EMPTY,
                    message=f"File is empty (0 bytes): {filename}",
                    stage="security",
                )
            )
            return errors

        # --- 3. File size limit ---
        max_bytes = self.config.max_file_size_mb * 1024 * 1024
        if size > max_bytes:
            errors.append(
                IngestError(
                    code=ErrorCode.E_SECURITY_TOO_LARGE,
                    message=(
                        f"File too large. Maximum allowed size is "
                        f"{self.config.max_file_size_mb} MB"
                    ),
                    stage="security",
                )
            )
            return errors

        # --- 4. Container signature ---
        if lowered.endswith(".xlsx") and not data.startswith(_ZIP_MAGIC):
            errors.append(
                IngestError(
                    code=ErrorCode.E_SECURITY_BAD_MAGIC,
                    message=f"File is not a valid .xlsx workbook: {filename}",
                    stage="security",
                )
            )
            return errors

        # --- 5. Large file warning ---
        if size > max_bytes // 2:
            errors.append(
                IngestError(
                    code=ErrorCode.W_LARGE_FILE,
                    message=f"File is {size / (1024 * 1024):.1f} MB",
                    stage="security",
                    recoverable=True,
                )
            )

        return errors
