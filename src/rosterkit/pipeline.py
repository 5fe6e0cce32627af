"""Canonicalize and validate a parsed file in one pass."""

from __future__ import annotations

from rosterkit.contract import EMPLOYEE_CONTRACT, ColumnContract
from rosterkit.headers import build_header_index, canonicalize_row
from rosterkit.models import ValidatedRow
from rosterkit.validator import validate_row


def canonicalize_and_validate(
    raw_rows: list[list[str]],
    contract: ColumnContract = EMPLOYEE_CONTRACT,
) -> list[ValidatedRow]:
    """Turn parser output into canonical rows with verdicts.

    The first raw row is the header.  Each data row gets a ``row_number``
    matching its line in the source (the header is line 1, so the first
    data row is 2).  Rows are independent: an invalid row never affects
    the others.  Fewer than two raw rows yields ``[]``.
    """
    if len(raw_rows) < 2:
        return []

    header_index = build_header_index(raw_rows[0])
    results: list[ValidatedRow] = []
    for offset, raw_row in enumerate(raw_rows[1:]):
        row_number = offset + 2
        data = canonicalize_row(raw_row, header_index, contract)
        results.append(
            ValidatedRow(
                row_number=row_number,
                data=data,
                verdict=validate_row(data, row_number, contract),
            )
        )
    return results
