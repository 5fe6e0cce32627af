"""Downloadable bulk-upload templates in CSV and ``.xlsx`` form.

``emit_template()`` serializes the contract's header plus one example row.
The CSV quoting here is the inverse of ``parse_delimited_text()``, and the
workbook layout matches what ``parse_spreadsheet_binary()`` reads, so both
templates round-trip to the example row unchanged.
"""

from __future__ import annotations

import io

import openpyxl
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils import get_column_letter

from rosterkit.contract import EMPLOYEE_CONTRACT, EXAMPLE_ROW, ColumnContract
from rosterkit.models import TemplateFile, TemplateFormat

CSV_FILENAME = "employee-bulk-upload-template.csv"
EXCEL_FILENAME = "employee-bulk-upload-template.xlsx"
CSV_CONTENT_TYPE = "text/csv; charset=utf-8"
EXCEL_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_WIDE_COLUMNS = frozenset({"email", "work_location"})


def escape_csv_value(value: str) -> str:
    """Quote *value* if it contains a comma, quote, or line break."""
    if any(ch in value for ch in (",", '"', "\n", "\r")):
        return '"' + value.replace('"', '""') + '"'
    return value


def _check_example_row(contract: ColumnContract, example_row: dict[str, str]) -> None:
    expected = set(contract.fields)
    actual = set(example_row)
    if expected != actual:
        missing = sorted(expected - actual)
        extra = sorted(actual - expected)
        raise ValueError(
            f"Example row does not match the column contract "
            f"(missing: {missing}, unexpected: {extra})"
        )


def _check_excel_values(contract: ColumnContract, example_row: dict[str, str]) -> None:
    bad = [f for f in contract.fields if ILLEGAL_CHARACTERS_RE.search(example_row[f])]
    if bad:
        raise ValueError(
            f"Example row values contain characters not allowed in a workbook: {bad}"
        )


def _build_csv(contract: ColumnContract, example_row: dict[str, str]) -> bytes:
    header_line = ",".join(escape_csv_value(f) for f in contract.fields)
    example_line = ",".join(escape_csv_value(example_row[f]) for f in contract.fields)
    return "\r\n".join([header_line, example_line]).encode("utf-8")


def _build_excel(
    contract: ColumnContract,
    example_row: dict[str, str],
    sheet_name: str,
    creator: str,
) -> bytes:
    wb = openpyxl.Workbook()
    wb.properties.creator = creator
    ws = wb.active
    ws.title = sheet_name

    ws.append(list(contract.fields))
    ws.append([example_row[f] for f in contract.fields])

    # Store every cell as a literal string so "=..." is never a formula.
    for row in ws.iter_rows(min_row=1, max_row=2):
        for cell in row:
            if isinstance(cell.value, str):
                cell.data_type = "s"

    for idx, field in enumerate(contract.fields, start=1):
        letter = get_column_letter(idx)
        ws.column_dimensions[letter].width = 28 if field in _WIDE_COLUMNS else 18

    buffer = io.BytesIO()
    wb.save(buffer)
    wb.close()
    return buffer.getvalue()


def emit_template(
    contract: ColumnContract,
    example_row: dict[str, str],
    fmt: TemplateFormat | str,
    sheet_name: str = "Employees",
    creator: str = "rosterkit",
) -> bytes:
    """Serialize the contract header and *example_row* in the given format.

    Parameters
    ----------
    contract:
        Column contract whose field order defines the columns.
    example_row:
        One value per contract field; no more, no fewer.
    fmt:
        ``TemplateFormat.CSV`` / ``"csv"`` or ``TemplateFormat.EXCEL`` /
        ``"excel"``.
    sheet_name:
        Worksheet title for the Excel form.
    creator:
        Workbook author property for the Excel form.

    Returns
    -------
    bytes
        UTF-8 CSV (CRLF between the two records, no trailing newline) or
        ``.xlsx`` content.

    Raises
    ------
    ValueError
        If *fmt* is unknown, *example_row* does not match the contract, or
        (for the Excel form) a value holds a control character a workbook
        cannot store.
    """
    fmt = TemplateFormat(fmt)
    _check_example_row(contract, example_row)
    if fmt is TemplateFormat.CSV:
        return _build_csv(contract, example_row)
    _check_excel_values(contract, example_row)
    return _build_excel(contract, example_row, sheet_name, creator)


def build_template_file(
    fmt: TemplateFormat | str,
    contract: ColumnContract = EMPLOYEE_CONTRACT,
    example_row: dict[str, str] | None = None,
    sheet_name: str = "Employees",
    creator: str = "rosterkit",
) -> TemplateFile:
    """Build a downloadable template with filename and content type.

    Raises
    ------
    ValueError
        If *fmt* is neither ``"csv"`` nor ``"excel"``.
    """
    if not isinstance(fmt, TemplateFormat):
        try:
            fmt = TemplateFormat(fmt.lower())
        except ValueError:
            raise ValueError("Invalid format. Use format=csv or format=excel") from None

    content = emit_template(
        contract,
        example_row if example_row is not None else EXAMPLE_ROW,
        fmt,
        sheet_name=sheet_name,
        creator=creator,
    )
    if fmt is TemplateFormat.CSV:
        return TemplateFile(
            filename=CSV_FILENAME, content_type=CSV_CONTENT_TYPE, content=content
        )
    return TemplateFile(
        filename=EXCEL_FILENAME, content_type=EXCEL_CONTENT_TYPE, content=content
    )
