"""Per-row business-rule validation.

``validate_row()`` evaluates every rule and accumulates all violations
into a single message, so an uploader sees everything wrong with a row at
once instead of fixing one problem per attempt.
"""

from __future__ import annotations

import datetime as dt
import logging
import re

from rosterkit.contract import EMPLOYEE_CONTRACT, ColumnContract
from rosterkit.models import RowVerdict

logger = logging.getLogger("rosterkit")

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

DATE_FIELDS: tuple[str, ...] = ("start_date", "end_date")


def is_valid_email(value: str) -> bool:
    """Return True if *value* looks like ``local@domain.tld``."""
    return _EMAIL_RE.fullmatch(value) is not None


def is_valid_date(value: str) -> bool:
    """Return True if *value* is an ISO 8601 calendar date.

    A plain ``YYYY-MM-DD`` is the expected form; an ISO date-time (as
    produced from spreadsheet date cells carrying a time) is also accepted.
    """
    try:
        dt.date.fromisoformat(value)
        return True
    except ValueError:
        pass
    try:
        dt.datetime.fromisoformat(value)
        return True
    except ValueError:
        return False


def validate_row(
    row: dict[str, str],
    row_number: int,
    contract: ColumnContract = EMPLOYEE_CONTRACT,
) -> RowVerdict:
    """Apply the mandatory, enumeration, email, and date rules to *row*.

    Parameters
    ----------
    row:
        A canonical row (every contract key present).
    row_number:
        Source line number, used only for diagnostics.
    contract:
        The column contract supplying mandatory fields and enumerations.

    Returns
    -------
    RowVerdict
        Valid, or invalid with every violation joined by ``"; "``.
    """
    errors: list[str] = []

    for field in contract.required:
        if not row.get(field, "").strip():
            errors.append(f"{field} is required")

    for field, allowed in contract.enumerations.items():
        value = row.get(field, "").strip().lower()
        if value and value not in allowed:
            errors.append(f"{field} must be one of: {', '.join(allowed)}")

    email = row.get("email", "").strip()
    if email and not is_valid_email(email):
        errors.append("email must be a valid email address")

    for field in DATE_FIELDS:
        value = row.get(field, "").strip()
        if value and not is_valid_date(value):
            errors.append(f"{field} must be a valid date")

    if not errors:
        return RowVerdict(valid=True)

    logger.debug("rosterkit | row=%d | violations=%d", row_number, len(errors))
    return RowVerdict(valid=False, error="; ".join(errors))
