"""CommissionService — price an operation list end to end.

Pipeline: FETCH SCHEDULE → LOAD OPERATIONS → PROCESS → REPORT

The schedule is fetched before the input is read, and nothing is
processed unless both succeed.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

import structlog

from commissionctl.domain.engine import CommissionEngine
from commissionctl.domain.errors import (
    InputParseError,
    MalformedOperationError,
    ScheduleFetchError,
)
from commissionctl.domain.types import UnrecognizedPolicy
from commissionctl.services.result import ServiceResult

if TYPE_CHECKING:
    from commissionctl.domain.interfaces import FeeScheduleProvider, OperationSource

logger = logging.getLogger(__name__)
log = structlog.get_logger("commissionctl.services.commission")


class CommissionService:
    """Runs one calculation with injected collaborators.

    Usage::

        svc = CommissionService(RemoteFeeScheduleProvider(cfg))
        result = svc.calculate(JsonFileOperationSource(path))
    """

    def __init__(
        self,
        provider: FeeScheduleProvider,
        *,
        policy: UnrecognizedPolicy = UnrecognizedPolicy.ZERO,
    ) -> None:
        self._provider = provider
        self._policy = policy

    def calculate(self, source: OperationSource) -> ServiceResult:
        """Compute one fee per operation from *source*, in input order."""
        op = "calculate"
        started = time.perf_counter()

        try:
            engine = CommissionEngine.from_provider(self._provider, policy=self._policy)
        except ScheduleFetchError as exc:
            logger.debug("Schedule fetch failed", exc_info=True)
            return ServiceResult.failure(op, "SCHEDULE_FETCH_FAILED", str(exc))

        try:
            operations = source.load()
        except MalformedOperationError as exc:
            return ServiceResult.failure(
                op,
                "MALFORMED_OPERATION",
                str(exc),
                detail={"index": exc.index, **exc.detail},
            )
        except InputParseError as exc:
            return ServiceResult.failure(op, "INPUT_PARSE_FAILED", str(exc))

        try:
            fees = engine.process(operations)
        except MalformedOperationError as exc:
            return ServiceResult.failure(
                op,
                "MALFORMED_OPERATION",
                f"Operation {exc.index}: {exc}",
                detail={"index": exc.index, **exc.detail},
            )

        log.debug(
            "commission.calculated",
            count=len(fees),
            warnings=len(engine.warnings),
            weeks_tracked=len(engine.ledger),
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={"count": len(fees), "fees": fees},
            warnings=list(engine.warnings),
        )
