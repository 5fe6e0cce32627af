"""Raw-row extraction from delimited text and ``.xlsx`` workbooks.

Provides ``parse_delimited_text()``, an explicit two-state (quoted /
unquoted) character loop for CSV-style input, and
``parse_spreadsheet_binary()``, which reads the first worksheet of an
``.xlsx`` file with openpyxl.  Both return ``list[list[str]]`` whose first
row is the header row, and both return ``[]`` rather than raising when the
input is malformed or holds no data rows.
"""

from __future__ import annotations

import datetime as dt
import io
import logging

import openpyxl

logger = logging.getLogger("rosterkit")

_BOM = "\ufeff"


def parse_delimited_text(
    data: bytes | str,
    delimiter: str = ",",
    quote: str = '"',
    encoding: str = "utf-8",
) -> list[list[str]]:
    """Split delimited text into raw rows.

    Parameters
    ----------
    data:
        Raw file bytes, or text that has already been decoded.  Bytes are
        decoded with *encoding*; undecodable sequences are replaced rather
        than raised, and a leading byte-order mark is dropped.
    delimiter:
        Single field separator character.
    quote:
        Quote character.  Inside a quoted field a doubled quote stands for
        one literal quote, and delimiters and line breaks are literal.
    encoding:
        Text encoding used when *data* is bytes.

    Returns
    -------
    list[list[str]]
        The header row followed by data rows, or ``[]`` when fewer than two
        records were found.
    """
    if isinstance(data, bytes):
        text = data.decode(encoding, errors="replace")
    else:
        text = data
    if text.startswith(_BOM):
        text = text[1:]

    records: list[list[str]] = []
    record: list[str] = []
    cell: list[str] = []
    in_quotes = False
    i = 0
    n = len(text)

    while i < n:
        c = text[i]
        if in_quotes:
            if c == quote:
                if i + 1 < n and text[i + 1] == quote:
                    cell.append(quote)
                    i += 1
                else:
                    in_quotes = False
            else:
                cell.append(c)
        elif c == quote:
            in_quotes = True
        elif c == delimiter:
            record.append("".join(cell))
            cell = []
        elif c == "\n" or c == "\r":
            record.append("".join(cell))
            cell = []
            # \r\n is a single separator
            if c == "\r" and i + 1 < n and text[i + 1] == "\n":
                i += 1
            records.append(record)
            record = []
        else:
            cell.append(c)
        i += 1

    record.append("".join(cell))
    if any(record):
        records.append(record)

    if in_quotes:
        logger.debug("rosterkit | unterminated quote; remainder read as literal text")

    if len(records) < 2:
        return []
    return records


def _format_cell(value: object) -> str:
    """Convert an openpyxl cell value to its string representation."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, dt.datetime):
        if value.time() == dt.time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, dt.date):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        # Strip .0 from float values that are integers
        return str(int(value))
    return str(value)


def read_spreadsheet_rows(data: bytes) -> list[list[str]]:
    """Read every non-empty row of the first worksheet of an ``.xlsx`` file.

    Unlike :func:`parse_spreadsheet_binary` this raises when openpyxl cannot
    open or read the workbook, so callers can tell a corrupt upload from an
    empty one.  No minimum row count is applied.
    """
    wb = openpyxl.load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    try:
        if not wb.worksheets:
            return []
        rows: list[list[str]] = []
        for values in wb.worksheets[0].iter_rows(values_only=True):
            cells = [_format_cell(v) for v in values]
            if any(cells):
                rows.append(cells)
        return rows
    finally:
        wb.close()


def parse_spreadsheet_binary(data: bytes) -> list[list[str]]:
    """Read the first worksheet of an ``.xlsx`` file into raw rows.

    Every cell is stringified regardless of its original type.  Rows whose
    cells are all empty are skipped.  Content openpyxl cannot open is logged
    and yields ``[]``.

    Parameters
    ----------
    data:
        The raw ``.xlsx`` bytes.

    Returns
    -------
    list[list[str]]
        The header row followed by data rows, or ``[]`` when the sheet has
        fewer than two non-empty rows.
    """
    try:
        rows = read_spreadsheet_rows(data)
    except Exception as exc:
        logger.warning("rosterkit | openpyxl could not read workbook: %s", exc)
        return []

    if len(rows) < 2:
        return []
    return rows
