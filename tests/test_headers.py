"""Unit tests for rosterkit.headers -- normalization and canonicalization."""

from __future__ import annotations

import pytest

from rosterkit.contract import EMPLOYEE_CONTRACT, ColumnContract
from rosterkit.headers import (
    build_header_index,
    canonicalize_row,
    missing_columns,
    normalize_header_key,
    unknown_columns,
)


class TestNormalizeHeaderKey:
    """Header spellings fold onto lowercase underscore keys."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("staff_id", "staff_id"),
            ("  Staff ID ", "staff_id"),
            ("EMAIL", "email"),
            ("First-Name", "first_name"),
            ("start \t  date", "start_date"),
            ("Job - Role", "job___role"),
            ("", ""),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_header_key(raw) == expected


class TestBuildHeaderIndex:
    """Normalized keys map to column positions."""

    def test_positions(self):
        index = build_header_index(["Staff ID", "Email"])
        assert index == {"staff_id": 0, "email": 1}

    def test_duplicate_keys_rightmost_wins(self):
        index = build_header_index(["email", "Email ", "other"])
        assert index["email"] == 1


class TestCanonicalizeRow:
    """Raw rows project onto exactly the contract's key set."""

    def test_full_key_set(self):
        index = build_header_index(list(EMPLOYEE_CONTRACT.fields))
        raw = [f"v{i}" for i in range(len(EMPLOYEE_CONTRACT.fields))]
        row = canonicalize_row(raw, index, EMPLOYEE_CONTRACT)
        assert list(row) == list(EMPLOYEE_CONTRACT.fields)
        assert row["staff_id"] == "v0"
        assert row["work_location"] == "v12"

    def test_missing_column_is_empty(self):
        index = build_header_index(["email"])
        row = canonicalize_row(["a@b.co"], index, EMPLOYEE_CONTRACT)
        assert row["email"] == "a@b.co"
        assert row["staff_id"] == ""
        assert set(row) == set(EMPLOYEE_CONTRACT.fields)

    def test_short_row_pads_with_empty(self):
        index = build_header_index(["staff_id", "first_name", "last_name"])
        row = canonicalize_row(["E1"], index, EMPLOYEE_CONTRACT)
        assert row["staff_id"] == "E1"
        assert row["first_name"] == ""
        assert row["last_name"] == ""

    def test_extra_columns_ignored(self):
        index = build_header_index(["staff_id", "notes"])
        row = canonicalize_row(["E1", "keep out"], index, EMPLOYEE_CONTRACT)
        assert "notes" not in row
        assert "keep out" not in row.values()

    def test_long_row_ignores_surplus_cells(self):
        index = build_header_index(["staff_id"])
        row = canonicalize_row(["E1", "surplus", "more"], index, EMPLOYEE_CONTRACT)
        assert row["staff_id"] == "E1"

    def test_values_not_trimmed(self):
        index = build_header_index(["first_name"])
        row = canonicalize_row(["  Jane "], index, EMPLOYEE_CONTRACT)
        assert row["first_name"] == "  Jane "

    def test_space_spelling_fallback(self):
        # An index built outside normalize_header_key may keep spaces.
        index = {"staff id": 0, "first name": 1}
        row = canonicalize_row(["E1", "Jane"], index, EMPLOYEE_CONTRACT)
        assert row["staff_id"] == "E1"
        assert row["first_name"] == "Jane"

    def test_underscore_spelling_preferred(self):
        index = {"staff id": 0, "staff_id": 1}
        row = canonicalize_row(["space", "underscore"], index, EMPLOYEE_CONTRACT)
        assert row["staff_id"] == "underscore"

    def test_custom_contract(self):
        contract = ColumnContract(fields=("code", "label"))
        index = build_header_index(["Label", "Code"])
        row = canonicalize_row(["L", "C"], index, contract)
        assert row == {"code": "C", "label": "L"}


class TestHeaderDiagnostics:
    """Unknown and missing column reports."""

    def test_unknown_columns(self):
        header = list(EMPLOYEE_CONTRACT.fields) + ["Notes", " "]
        assert unknown_columns(header, EMPLOYEE_CONTRACT) == ["Notes"]

    def test_no_unknown_columns_for_spaced_headers(self):
        header = [f.replace("_", " ").title() for f in EMPLOYEE_CONTRACT.fields]
        assert unknown_columns(header, EMPLOYEE_CONTRACT) == []

    def test_missing_columns(self):
        header = [f for f in EMPLOYEE_CONTRACT.fields if f != "work_location"]
        assert missing_columns(header, EMPLOYEE_CONTRACT) == ["work_location"]
