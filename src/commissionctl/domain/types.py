"""Operation classification enums.

Input records carry free-form ``type`` and ``user_type`` strings. The
engine never dispatches on those strings directly: they are classified
into a closed :class:`OperationKind` first.
"""

from __future__ import annotations

from enum import StrEnum


class OperationType(StrEnum):
    """Direction of an operation as it appears in input records."""

    CASH_IN = "cash_in"
    CASH_OUT = "cash_out"


class UserType(StrEnum):
    """Payer category as it appears in input records."""

    NATURAL = "natural"
    JURIDICAL = "juridical"


class OperationKind(StrEnum):
    """Fee category an operation is charged under."""

    DEPOSIT = "deposit"
    ORGANIZATION_WITHDRAWAL = "organization_withdrawal"
    INDIVIDUAL_WITHDRAWAL = "individual_withdrawal"


class UnrecognizedPolicy(StrEnum):
    """What the engine does with an operation it cannot classify."""

    ZERO = "zero"
    ERROR = "error"
