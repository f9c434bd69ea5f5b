"""Operation records and their classification.

INVARIANT: the engine only ever sees an :class:`OperationKind`; raw
``type``/``user_type`` strings stop here.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from commissionctl.domain.errors import MalformedOperationError
from commissionctl.domain.rules import Money
from commissionctl.domain.types import OperationKind, OperationType, UserType


class Operation(BaseModel):
    """One input record.

    ``type`` and ``user_type`` stay plain strings so that unknown values
    reach :func:`classify_operation` instead of failing validation.
    """

    model_config = ConfigDict(frozen=True)

    date: dt.date
    type: str
    user_type: str | None = None
    user_id: int | str | None = None
    operation: Money

    @property
    def amount(self) -> Decimal:
        return self.operation.amount

    @property
    def currency(self) -> str:
        return self.operation.currency

    @property
    def payer_id(self) -> str | None:
        """Ledger key for the payer (``1`` and ``"1"`` are the same payer)."""
        if self.user_id is None:
            return None
        return str(self.user_id)


def classify_operation(operation: Operation) -> OperationKind:
    """Map an operation's ``(type, user_type)`` onto its fee category.

    Raises:
        MalformedOperationError: unknown combination, or a natural-person
            withdrawal without a ``user_id``.
    """
    if operation.type == OperationType.CASH_IN:
        return OperationKind.DEPOSIT
    if operation.type == OperationType.CASH_OUT:
        if operation.user_type == UserType.JURIDICAL:
            return OperationKind.ORGANIZATION_WITHDRAWAL
        if operation.user_type == UserType.NATURAL:
            if operation.payer_id is None:
                raise MalformedOperationError(
                    "Natural-person cash_out has no user_id",
                    detail={"type": operation.type, "user_type": operation.user_type},
                )
            return OperationKind.INDIVIDUAL_WITHDRAWAL
    raise MalformedOperationError(
        f"Unrecognized operation: type={operation.type!r} user_type={operation.user_type!r}",
        detail={"type": operation.type, "user_type": operation.user_type},
    )
