"""Header normalization and row canonicalization against a column contract.

Real-world exports spell headers inconsistently (``Staff ID``,
``first-name``, ``start date``).  ``normalize_header_key()`` folds them onto
a lowercase, underscore-separated key, and ``canonicalize_row()`` projects a
raw row onto exactly the contract's key set.
"""

from __future__ import annotations

import re

from rosterkit.contract import ColumnContract

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_header_key(raw: str) -> str:
    """Normalize a header cell to a lookup key.

    Examples:
        >>> normalize_header_key("  Staff ID ")
        'staff_id'
        >>> normalize_header_key("first-name")
        'first_name'
    """
    key = raw.strip().lower()
    key = _WHITESPACE_RE.sub("_", key)
    return key.replace("-", "_")


def build_header_index(header_row: list[str]) -> dict[str, int]:
    """Map each normalized header key to its column position.

    When two columns normalize to the same key the right-most one wins.
    """
    return {normalize_header_key(h): pos for pos, h in enumerate(header_row)}


def _lookup_position(field: str, header_index: dict[str, int]) -> int | None:
    # Underscore spelling first, then the space-separated alternate.
    if field in header_index:
        return header_index[field]
    return header_index.get(field.replace("_", " "))


def canonicalize_row(
    raw_row: list[str],
    header_index: dict[str, int],
    contract: ColumnContract,
) -> dict[str, str]:
    """Project *raw_row* onto the contract's fields.

    Values are taken verbatim.  A field whose column is absent from the
    header, or whose position lies past the end of a short row, is ``""``.
    Columns that match no contract field are ignored.
    """
    row: dict[str, str] = {}
    for field in contract.fields:
        pos = _lookup_position(field, header_index)
        if pos is None or pos >= len(raw_row):
            row[field] = ""
        else:
            row[field] = raw_row[pos]
    return row


def unknown_columns(header_row: list[str], contract: ColumnContract) -> list[str]:
    """Return header cells that resolve to no contract field."""
    known = set(contract.fields)
    known.update(f.replace("_", " ") for f in contract.fields)
    return [h for h in header_row if h.strip() and normalize_header_key(h) not in known]


def missing_columns(header_row: list[str], contract: ColumnContract) -> list[str]:
    """Return contract fields that no header cell resolves to."""
    index = build_header_index(header_row)
    return [f for f in contract.fields if _lookup_position(f, index) is None]
