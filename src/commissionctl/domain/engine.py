"""CommissionEngine — fee calculation with a per-payer weekly allowance.

Pipeline per operation: CLASSIFY → PRICE → ROUND UP → FORMAT

Deposits and organization withdrawals are priced independently. Natural
person withdrawals consume a weekly free allowance, so results depend on
the order operations are fed in: callers must pass them in input order
and must not process the same operation twice.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from decimal import ROUND_CEILING, Decimal
from typing import TYPE_CHECKING, assert_never

from commissionctl.domain.errors import MalformedOperationError
from commissionctl.domain.ledger import WeeklyAllowanceLedger, iso_week_start
from commissionctl.domain.operations import Operation, classify_operation
from commissionctl.domain.types import OperationKind, UnrecognizedPolicy

if TYPE_CHECKING:
    from commissionctl.domain.interfaces import FeeScheduleProvider
    from commissionctl.domain.rules import (
        DepositRule,
        FeeSchedule,
        IndividualWithdrawalRule,
        OrganizationWithdrawalRule,
    )

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
_HUNDRED = Decimal(100)


def round_fee_up(fee: Decimal) -> Decimal:
    """Round *fee* up to the next cent. Fees are never rounded down."""
    return fee.quantize(CENT, rounding=ROUND_CEILING)


def format_fee(fee: Decimal) -> str:
    """Round up and render with exactly two fraction digits."""
    return f"{round_fee_up(fee):.2f}"


def compute_deposit_fee(rule: DepositRule, amount: Decimal) -> Decimal:
    """Percentage of *amount*, capped at the rule's bound when one is set."""
    fee = rule.percent_rate * amount / _HUNDRED
    cap = rule.bound_amount
    if cap is not None and fee > cap:
        fee = cap
    return fee


def compute_organization_withdrawal_fee(
    rule: OrganizationWithdrawalRule, amount: Decimal
) -> Decimal:
    """Percentage of *amount*, raised to the rule's minimum when one is set."""
    fee = rule.percent_rate * amount / _HUNDRED
    floor = rule.bound_amount
    if floor is not None and fee < floor:
        fee = floor
    return fee


def compute_individual_withdrawal_fee(
    rule: IndividualWithdrawalRule,
    ledger: WeeklyAllowanceLedger,
    operation: Operation,
) -> Decimal:
    """Charge only the part of the withdrawal above the payer's remaining weekly allowance.

    Mutates *ledger*: the allowance for the operation's ISO week is consumed
    by the withdrawn amount (down to zero).
    """
    payer_id = operation.payer_id
    if payer_id is None:
        raise MalformedOperationError("Natural-person cash_out has no user_id")

    week_start = iso_week_start(operation.date)
    remaining = ledger.remaining(payer_id, week_start, rule.weekly_free_allowance)
    amount = operation.amount

    if amount <= remaining:
        fee = Decimal(0)
        remaining -= amount
    else:
        fee = (amount - remaining) * rule.percent_rate / _HUNDRED
        remaining = Decimal(0)

    ledger.set_remaining(payer_id, week_start, remaining)
    return fee


class CommissionEngine:
    """Prices an ordered sequence of operations against one fee schedule.

    The engine owns its :class:`WeeklyAllowanceLedger`. Build a new engine
    for each independent run.

    Attributes:
        schedule: The fee rules in force.
        ledger: Weekly allowance state, mutated by natural-person withdrawals.
        policy: What to do with operations that cannot be classified.
        warnings: Non-fatal issues from the most recent :meth:`process` call.
    """

    def __init__(
        self,
        schedule: FeeSchedule,
        *,
        policy: UnrecognizedPolicy = UnrecognizedPolicy.ZERO,
        ledger: WeeklyAllowanceLedger | None = None,
    ) -> None:
        self.schedule = schedule
        self.policy = policy
        self.ledger = ledger if ledger is not None else WeeklyAllowanceLedger()
        self.warnings: list[str] = []
        self._lock = threading.Lock()

    @classmethod
    def from_provider(
        cls,
        provider: FeeScheduleProvider,
        *,
        policy: UnrecognizedPolicy = UnrecognizedPolicy.ZERO,
    ) -> CommissionEngine:
        """Fetch the schedule from *provider*; ScheduleFetchError propagates."""
        return cls(provider.fetch(), policy=policy)

    def compute_fee(self, operation: Operation) -> Decimal:
        """Raw (unrounded) fee for one operation.

        Raises:
            MalformedOperationError: the operation cannot be classified.
        """
        kind = classify_operation(operation)
        self._check_currency(kind, operation)
        match kind:
            case OperationKind.DEPOSIT:
                return compute_deposit_fee(self.schedule.cash_in, operation.amount)
            case OperationKind.ORGANIZATION_WITHDRAWAL:
                return compute_organization_withdrawal_fee(
                    self.schedule.cash_out_juridical, operation.amount
                )
            case OperationKind.INDIVIDUAL_WITHDRAWAL:
                return compute_individual_withdrawal_fee(
                    self.schedule.cash_out_natural, self.ledger, operation
                )
            case _:
                assert_never(kind)

    def process(self, operations: Iterable[Operation]) -> list[str]:
        """Return one formatted fee per operation, in input order."""
        with self._lock:
            self.warnings = []
            fees: list[str] = []
            for index, operation in enumerate(operations):
                try:
                    fee = self.compute_fee(operation)
                except MalformedOperationError as exc:
                    if exc.index is None:
                        exc.index = index
                    if self.policy is UnrecognizedPolicy.ERROR:
                        raise
                    logger.debug("Operation %d priced at 0: %s", index, exc)
                    self.warnings.append(f"Operation {index}: {exc}; fee set to 0.00")
                    fee = Decimal(0)
                fees.append(format_fee(fee))
            return fees

    def _check_currency(self, kind: OperationKind, operation: Operation) -> None:
        match kind:
            case OperationKind.DEPOSIT:
                expected = self.schedule.cash_in.currency
            case OperationKind.ORGANIZATION_WITHDRAWAL:
                expected = self.schedule.cash_out_juridical.currency
            case OperationKind.INDIVIDUAL_WITHDRAWAL:
                expected = self.schedule.cash_out_natural.currency
            case _:
                assert_never(kind)
        if expected is not None and operation.currency != expected:
            logger.debug("Currency mismatch: %s vs %s", operation.currency, expected)
            self.warnings.append(
                f"Operation on {operation.date} is in {operation.currency}, "
                f"rule is in {expected}; amount used without conversion"
            )
