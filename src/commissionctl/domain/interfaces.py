"""Collaborator interfaces consumed by the commission engine.

Concrete implementations live in ``commissionctl.infrastructure`` and
``commissionctl.output``; tests substitute in-memory ones.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from commissionctl.domain.operations import Operation
    from commissionctl.domain.rules import FeeSchedule


class FeeScheduleProvider(Protocol):
    """Supplies the fee rules before processing starts."""

    def fetch(self) -> FeeSchedule:
        """Return the schedule or raise ScheduleFetchError."""
        ...


class OperationSource(Protocol):
    """Supplies the ordered operation list."""

    def load(self) -> list[Operation]:
        """Return operations in input order or raise InputParseError."""
        ...


class ResultSink(Protocol):
    """Receives formatted commission lines."""

    def emit(self, line: str) -> None: ...
