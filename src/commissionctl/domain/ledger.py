"""Weekly free-withdrawal allowance ledger.

Tracks, per natural-person payer and ISO week, how much withdrawal
volume is still free of commission.

INVARIANT: remaining allowance for a key never increases and never goes
below zero within the lifetime of a ledger.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

WeekKey = tuple[str, dt.date]


def iso_week_start(day: dt.date) -> dt.date:
    """Monday of the ISO-8601 week containing *day*."""
    return day - dt.timedelta(days=day.weekday())


class WeeklyAllowanceLedger:
    """Remaining free volume keyed by ``(payer_id, week_start)``.

    Entries are created lazily by :meth:`remaining` and are never removed.
    One ledger belongs to one engine; do not share it between engines.
    """

    def __init__(self) -> None:
        self._remaining: dict[WeekKey, Decimal] = {}

    def __len__(self) -> int:
        return len(self._remaining)

    def __contains__(self, key: object) -> bool:
        return key in self._remaining

    def peek(self, payer_id: str, week_start: dt.date) -> Decimal | None:
        """Current remaining allowance, or None if the key was never touched."""
        return self._remaining.get((payer_id, week_start))

    def remaining(self, payer_id: str, week_start: dt.date, allowance: Decimal) -> Decimal:
        """Return the remaining allowance, opening the entry at *allowance* if absent."""
        key = (payer_id, week_start)
        if key not in self._remaining:
            self._remaining[key] = allowance
        return self._remaining[key]

    def set_remaining(self, payer_id: str, week_start: dt.date, value: Decimal) -> None:
        """Write back the remaining allowance for an existing entry.

        Raises:
            KeyError: the entry was never opened.
            ValueError: *value* is negative or larger than the current value.
        """
        key = (payer_id, week_start)
        current = self._remaining[key]
        if value < 0:
            raise ValueError(f"Remaining allowance cannot be negative: {value}")
        if value > current:
            raise ValueError(f"Remaining allowance cannot grow: {current} -> {value}")
        self._remaining[key] = value
