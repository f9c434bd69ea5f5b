"""Shared pytest fixtures and test helpers for commissionctl tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from commissionctl.domain.engine import CommissionEngine
from commissionctl.domain.rules import FeeSchedule

CASH_IN_RULE: dict[str, Any] = {"percents": "0.03", "max": {"amount": "5", "currency": "EUR"}}
CASH_OUT_JURIDICAL_RULE: dict[str, Any] = {
    "percents": "0.3",
    "min": {"amount": "0.5", "currency": "EUR"},
}
CASH_OUT_NATURAL_RULE: dict[str, Any] = {
    "percents": "0.3",
    "week_limit": {"amount": "1000", "currency": "EUR"},
}

SCHEDULE_DATA: dict[str, Any] = {
    "cash_in": CASH_IN_RULE,
    "cash_out_juridical": CASH_OUT_JURIDICAL_RULE,
    "cash_out_natural": CASH_OUT_NATURAL_RULE,
}

# Reference input with its expected output, one fee per record.
SAMPLE_OPERATIONS: list[dict[str, Any]] = [
    {"date": "2016-01-05", "user_id": 1, "user_type": "natural", "type": "cash_in",
     "operation": {"amount": 200.00, "currency": "EUR"}},
    {"date": "2016-01-06", "user_id": 2, "user_type": "juridical", "type": "cash_out",
     "operation": {"amount": 300.00, "currency": "EUR"}},
    {"date": "2016-01-06", "user_id": 1, "user_type": "natural", "type": "cash_out",
     "operation": {"amount": 30000, "currency": "EUR"}},
    {"date": "2016-01-07", "user_id": 1, "user_type": "natural", "type": "cash_out",
     "operation": {"amount": 1000.00, "currency": "EUR"}},
    {"date": "2016-01-07", "user_id": 1, "user_type": "natural", "type": "cash_out",
     "operation": {"amount": 100.00, "currency": "EUR"}},
    {"date": "2016-01-10", "user_id": 1, "user_type": "natural", "type": "cash_out",
     "operation": {"amount": 100.00, "currency": "EUR"}},
    {"date": "2016-01-10", "user_id": 2, "user_type": "juridical", "type": "cash_in",
     "operation": {"amount": 1000000.00, "currency": "EUR"}},
    {"date": "2016-01-10", "user_id": 3, "user_type": "natural", "type": "cash_out",
     "operation": {"amount": 1000.00, "currency": "EUR"}},
    {"date": "2016-02-15", "user_id": 1, "user_type": "natural", "type": "cash_out",
     "operation": {"amount": 300.00, "currency": "EUR"}},
]  # fmt: skip
SAMPLE_FEES = ["0.06", "0.90", "87.00", "3.00", "0.30", "0.30", "5.00", "0.00", "0.00"]


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test (the CLI reconfigures it)."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app = logging.getLogger("commissionctl")
    app_level = app.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app.setLevel(app_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def schedule() -> FeeSchedule:
    """The reference fee schedule (0.03% capped at 5, 0.3% min 0.5, 0.3% over 1000/week)."""
    return FeeSchedule.model_validate(SCHEDULE_DATA)


@pytest.fixture
def engine(schedule: FeeSchedule) -> CommissionEngine:
    """Fresh engine with an empty ledger."""
    return CommissionEngine(schedule)


@pytest.fixture
def schedule_file(tmp_path: Path) -> Path:
    """Local fee schedule JSON usable via ``schedule.file``."""
    path = tmp_path / "fees.json"
    path.write_text(json.dumps(SCHEDULE_DATA), encoding="utf-8")
    return path


@pytest.fixture
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory with no COMMISSIONCTL_* variables set.

    Use via ``@pytest.mark.usefixtures("_isolated_env")``.
    """
    monkeypatch.chdir(tmp_path)
    for name in (
        "COMMISSIONCTL_CONFIG",
        "COMMISSIONCTL_JSON_OUTPUT",
        "COMMISSIONCTL_VERBOSE",
        "COMMISSIONCTL_LOG_JSON",
        "COMMISSIONCTL_SCHEDULE__FILE",
        "COMMISSIONCTL_ENGINE__ON_UNRECOGNIZED",
    ):
        monkeypatch.delenv(name, raising=False)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_input(path: Path, records: list[dict[str, Any]]) -> Path:
    """Write *records* as a JSON operation list and return the path."""
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


def make_operation(
    amount: str | float,
    *,
    date: str = "2016-01-05",
    op_type: str = "cash_out",
    user_type: str | None = "natural",
    user_id: int | str | None = 1,
    currency: str = "EUR",
) -> dict[str, Any]:
    """Build one raw operation record."""
    record: dict[str, Any] = {
        "date": date,
        "type": op_type,
        "operation": {"amount": str(amount), "currency": currency},
    }
    if user_type is not None:
        record["user_type"] = user_type
    if user_id is not None:
        record["user_id"] = user_id
    return record
