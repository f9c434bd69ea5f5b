"""Exception hierarchy for commission calculation.

Domain and infrastructure code raise these; the service layer turns
them into a failed ServiceResult.
"""

from __future__ import annotations

from typing import Any


class CommissionError(Exception):
    """Base class for all commissionctl errors."""


class ScheduleFetchError(CommissionError):
    """The fee schedule could not be obtained or parsed."""


class InputParseError(CommissionError):
    """The operation list could not be read or parsed."""


class MalformedOperationError(InputParseError):
    """A single operation record is missing required fields or is invalid.

    Attributes:
        index: Zero-based position of the record in the input, if known.
        detail: Extra structured context (field errors, raw values).
    """

    def __init__(
        self,
        message: str,
        *,
        index: int | None = None,
        detail: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.index = index
        self.detail = detail or {}
