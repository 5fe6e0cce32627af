"""Shared test fixtures for rosterkit tests."""

from __future__ import annotations

import io
from typing import Any
from unittest.mock import MagicMock

import openpyxl
import pytest

from rosterkit.config import ImportConfig
from rosterkit.contract import EMPLOYEE_CONTRACT, EXAMPLE_ROW

HEADER_LINE = ",".join(EMPLOYEE_CONTRACT.fields)

EXAMPLE_LINE = (
    "EMP001,Jane,Doe,jane.doe@example.com,+2348012345678,female,permanent,"
    "confirmed,2024-01-15,,Engineering,Software Engineer,Lagos HQ"
)


def build_csv(lines: list[str], newline: str = "\r\n") -> bytes:
    """Join pre-formatted CSV lines into UTF-8 bytes."""
    return newline.join(lines).encode("utf-8")


def build_xlsx(rows: list[list[Any]], title: str = "Employees") -> bytes:
    """Write *rows* to the first sheet of a new workbook and return its bytes."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = title
    for row in rows:
        ws.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    wb.close()
    return buffer.getvalue()


@pytest.fixture
def default_config() -> ImportConfig:
    """Return a default ImportConfig."""
    return ImportConfig()


@pytest.fixture
def example_row() -> dict[str, str]:
    """Return a mutable copy of the documented example row."""
    return dict(EXAMPLE_ROW)


@pytest.fixture
def example_csv() -> bytes:
    """Return the documented 13-column CSV with one example data row."""
    return build_csv([HEADER_LINE, EXAMPLE_LINE])


@pytest.fixture
def example_xlsx() -> bytes:
    """Return an .xlsx with the contract header and the example row."""
    return build_xlsx(
        [
            list(EMPLOYEE_CONTRACT.fields),
            [EXAMPLE_ROW[f] for f in EMPLOYEE_CONTRACT.fields],
        ]
    )


@pytest.fixture
def mock_sink() -> MagicMock:
    """Return a mock EmployeeRowSink that reports every row as written."""
    mock = MagicMock()
    mock.write_rows.side_effect = lambda rows: len(rows)
    return mock
