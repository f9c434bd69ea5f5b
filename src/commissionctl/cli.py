"""Root CLI command for commissionctl."""

from __future__ import annotations

from pathlib import Path

import click

from commissionctl import __version__
from commissionctl.commands._base import ExamplesCommand
from commissionctl.commands._context import AppContext
from commissionctl.config.settings import CommissionSettings
from commissionctl.domain.types import UnrecognizedPolicy
from commissionctl.infrastructure.operations import JsonFileOperationSource


@click.command(
    cls=ExamplesCommand,
    examples="""\
  commissionctl input.json
  commissionctl --json input.json
  commissionctl --strict input.json
  commissionctl -c ./commissionctl.toml input.json
  COMMISSIONCTL_SCHEDULE__FILE=fees.json commissionctl input.json""",
)
@click.version_option(version=__version__, prog_name="commissionctl")
@click.argument("input_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option("--strict", is_flag=True, help="Fail on operations that cannot be classified.")
def cli(
    input_file: Path,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    strict: bool,
) -> None:
    """Print the commission fee for each operation in INPUT_FILE, one per line."""
    engine_override = {"on_unrecognized": UnrecognizedPolicy.ERROR} if strict else None
    settings = CommissionSettings.from_cli(
        config_path=config_path,
        json_output=json_output or None,
        verbose=verbose or None,
        log_json=log_json or None,
        engine=engine_override,
    )
    app = AppContext(settings)
    result = app.commission_service().calculate(JsonFileOperationSource(input_file))
    app.emit(result)