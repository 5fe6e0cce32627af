"""Error codes and structured error model for the rosterkit package.

``ErrorCode`` contains every error/warning code an import can report.
``IngestError`` carries the code plus a ``row_number`` for location context.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Error codes for employee bulk imports.

    Values equal their names so they are stable strings suitable for
    metrics and alerting.  ``E_`` prefix = fatal, ``W_`` prefix = warning.
    """

    # Security
    E_SECURITY_BAD_EXTENSION = "E_SECURITY_BAD_EXTENSION"
    E_SECURITY_TOO_LARGE = "E_SECURITY_TOO_LARGE"
    E_SECURITY_BAD_MAGIC = "E_SECURITY_BAD_MAGIC"

    # Parse
    E_PARSE_EMPTY = "E_PARSE_EMPTY"
    E_PARSE_CORRUPT = "E_PARSE_CORRUPT"
    E_ROWS_TOO_MANY = "E_ROWS_TOO_MANY"

    # Sink
    E_SINK_NOT_CONFIGURED = "E_SINK_NOT_CONFIGURED"
    E_SINK_NO_VALID_ROWS = "E_SINK_NO_VALID_ROWS"
    E_BACKEND_SINK_TIMEOUT = "E_BACKEND_SINK_TIMEOUT"
    E_BACKEND_SINK_CONNECT = "E_BACKEND_SINK_CONNECT"

    # Warnings (non-fatal)
    W_LARGE_FILE = "W_LARGE_FILE"
    W_UNKNOWN_COLUMNS = "W_UNKNOWN_COLUMNS"
    W_MISSING_COLUMNS = "W_MISSING_COLUMNS"
    W_DUPLICATE_EMAIL = "W_DUPLICATE_EMAIL"


class IngestError(BaseModel):
    """Structured error with code, message, and context.

    ``row_number`` is the 1-based source line (the header is line 1) when
    the problem belongs to a single row, and ``None`` for file-level issues.
    """

    code: ErrorCode
    message: str
    stage: str | None = None
    recoverable: bool = False
    row_number: int | None = None
