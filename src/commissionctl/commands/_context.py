"""AppContext — wiring for a single CLI invocation.

Configures logging, builds the collaborators from settings, and owns
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from commissionctl.config.logging import configure_logging
from commissionctl.infrastructure.schedule import build_provider
from commissionctl.output.formatters import format_result, format_warning
from commissionctl.output.sink import EchoSink
from commissionctl.services.commission import CommissionService

if TYPE_CHECKING:
    from commissionctl.config.settings import CommissionSettings
    from commissionctl.domain.interfaces import ResultSink
    from commissionctl.services.result import ServiceResult


class AppContext:
    """Shared state for one command invocation."""

    def __init__(
        self,
        settings: CommissionSettings,
        *,
        out: ResultSink | None = None,
        err: ResultSink | None = None,
    ) -> None:
        self.settings = settings
        self.out = out or EchoSink()
        self.err = err or EchoSink(err=True)
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def commission_service(self) -> CommissionService:
        provider = build_provider(self.settings.schedule, base_dir=self.settings.config_dir)
        return CommissionService(provider, policy=self.settings.engine.on_unrecognized)

    def emit(self, result: ServiceResult) -> None:
        """Write a ServiceResult with correct exit semantics.

        * Success: lines to stdout, warnings to stderr (JSON mode carries
          them in the payload instead).
        * Failure: diagnostic to stderr, exit code 1.
        """
        json_output = self.settings.json_output
        lines = format_result(result, json_output=json_output)
        if result.ok:
            for line in lines:
                self.out.emit(line)
            if not json_output:
                for warning in result.warnings:
                    self.err.emit(format_warning(warning))
            return
        for line in lines:
            self.err.emit(line)
        raise SystemExit(1)
