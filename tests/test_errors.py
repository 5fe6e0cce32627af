"""Tests for rosterkit.errors -- error codes and the IngestError model."""

from __future__ import annotations

from rosterkit.errors import ErrorCode, IngestError


class TestErrorCode:
    def test_values_equal_names(self):
        for code in ErrorCode:
            assert code.value == code.name

    def test_prefixes(self):
        for code in ErrorCode:
            assert code.value.startswith(("E_", "W_"))

    def test_string_comparison(self):
        assert ErrorCode.E_PARSE_EMPTY == "E_PARSE_EMPTY"


class TestIngestError:
    def test_defaults(self):
        err = IngestError(code=ErrorCode.E_PARSE_EMPTY, message="empty")
        assert err.stage is None
        assert err.recoverable is False
        assert err.row_number is None

    def test_json_round_trip(self):
        err = IngestError(
            code=ErrorCode.W_DUPLICATE_EMAIL,
            message="Row 3: email is duplicated within this upload",
            stage="validate",
            recoverable=True,
            row_number=3,
        )
        restored = IngestError.model_validate_json(err.model_dump_json())
        assert restored == err
        assert restored.code is ErrorCode.W_DUPLICATE_EMAIL
