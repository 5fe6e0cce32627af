"""Backend protocol for persisting confirmed import rows.

The sink is the caller's persistence collaborator; rosterkit never decides
upsert keys or transactions.  The protocol is ``@runtime_checkable`` so
callers can optionally verify conformance with ``isinstance`` checks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from rosterkit.models import PreviewRow


@runtime_checkable
class EmployeeRowSink(Protocol):
    """Interface for employee persistence backends."""

    def write_rows(self, rows: list[PreviewRow]) -> int:
        """Persist a batch of valid rows. Returns count written."""
        ...
