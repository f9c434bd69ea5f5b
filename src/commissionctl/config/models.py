"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, commissionctl.toml only
contains overrides. With no config file at all the CLI talks to the
public fee schedule API.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from commissionctl.domain.types import UnrecognizedPolicy

# --- commissionctl.toml sections ---


class ScheduleConfig(BaseModel):
    """[schedule] section."""

    model_config = {"frozen": True}

    base_url: str = "https://developers.paysera.com/tasks/api"
    cash_in_path: str = "cash-in"
    cash_out_natural_path: str = "cash-out-natural"
    cash_out_juridical_path: str = "cash-out-juridical"
    timeout: float = Field(default=10.0, gt=0)
    file: Path | None = None


class EngineConfig(BaseModel):
    """[engine] section."""

    model_config = {"frozen": True}

    on_unrecognized: UnrecognizedPolicy = UnrecognizedPolicy.ZERO
