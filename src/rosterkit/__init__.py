"""rosterkit -- bulk employee import from CSV and .xlsx uploads.

Public API re-exports for convenient access.
"""

from rosterkit.config import ImportConfig
from rosterkit.contract import EMPLOYEE_CONTRACT, EXAMPLE_ROW, ColumnContract
from rosterkit.errors import ErrorCode, IngestError
from rosterkit.headers import build_header_index, canonicalize_row, normalize_header_key
from rosterkit.models import (
    FileFormat,
    ImportResult,
    PreviewResult,
    PreviewRow,
    RowStatus,
    RowVerdict,
    TemplateFile,
    TemplateFormat,
    ValidatedRow,
)
from rosterkit.parsers import (
    parse_delimited_text,
    parse_spreadsheet_binary,
    read_spreadsheet_rows,
)
from rosterkit.pipeline import canonicalize_and_validate
from rosterkit.protocols import EmployeeRowSink
from rosterkit.router import BulkImportRouter
from rosterkit.security import UploadSecurityScanner
from rosterkit.template import build_template_file, emit_template
from rosterkit.validator import validate_row

__all__ = [
    # Router
    "BulkImportRouter",
    # Contract
    "ColumnContract",
    "EMPLOYEE_CONTRACT",
    "EXAMPLE_ROW",
    # Core operations
    "parse_delimited_text",
    "parse_spreadsheet_binary",
    "read_spreadsheet_rows",
    "normalize_header_key",
    "build_header_index",
    "canonicalize_row",
    "validate_row",
    "canonicalize_and_validate",
    "emit_template",
    "build_template_file",
    # Models
    "FileFormat",
    "TemplateFormat",
    "RowStatus",
    "RowVerdict",
    "ValidatedRow",
    "PreviewRow",
    "PreviewResult",
    "ImportResult",
    "TemplateFile",
    # Security
    "UploadSecurityScanner",
    # Errors
    "ErrorCode",
    "IngestError",
    # Config
    "ImportConfig",
    # Protocols
    "EmployeeRowSink",
]
