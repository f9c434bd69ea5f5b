"""Fee schedule providers.

Three implementations of the ``FeeScheduleProvider`` interface:

- Remote (default): three JSON endpoints fetched over HTTP with requests.
- File: one local JSON document holding all three rules.
- Static: an in-memory schedule.

No retries: a failed fetch is fatal for the run.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING, Any

import requests
from pydantic import BaseModel, ValidationError

from commissionctl.domain.errors import ScheduleFetchError
from commissionctl.domain.rules import (
    DepositRule,
    FeeSchedule,
    IndividualWithdrawalRule,
    OrganizationWithdrawalRule,
)

if TYPE_CHECKING:
    from commissionctl.config.models import ScheduleConfig
    from commissionctl.domain.interfaces import FeeScheduleProvider

logger = logging.getLogger(__name__)


class RemoteFeeScheduleProvider:
    """Fetch the three rules from the fee schedule API."""

    def __init__(
        self,
        config: ScheduleConfig,
        session: requests.Session | None = None,
    ) -> None:
        self._config = config
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/json"})

    def _url(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _get_json(self, path: str) -> Any:
        url = self._url(path)
        logger.debug("Fetching fee rule from %s", url)
        try:
            response = self._session.get(url, timeout=self._config.timeout)
            response.raise_for_status()
            return response.json(parse_float=Decimal)
        except requests.RequestException as exc:
            msg = f"Failed to fetch fee rule from {url}: {exc}"
            raise ScheduleFetchError(msg) from exc
        except ValueError as exc:
            msg = f"Invalid JSON from {url}: {exc}"
            raise ScheduleFetchError(msg) from exc

    def fetch(self) -> FeeSchedule:
        cfg = self._config
        parts: dict[str, Any] = {}
        try:
            for field_name, model_cls, path in (
                ("cash_in", DepositRule, cfg.cash_in_path),
                ("cash_out_natural", IndividualWithdrawalRule, cfg.cash_out_natural_path),
                ("cash_out_juridical", OrganizationWithdrawalRule, cfg.cash_out_juridical_path),
            ):
                parts[field_name] = self._fetch_rule(model_cls, path)
        finally:
            if self._owns_session:
                self._session.close()
        return FeeSchedule(**parts)

    def _fetch_rule(self, model_cls: type[BaseModel], path: str) -> Any:
        payload = self._get_json(path)
        try:
            return model_cls.model_validate(payload)
        except ValidationError as exc:
            msg = f"Unexpected fee rule shape from {self._url(path)}: {exc}"
            raise ScheduleFetchError(msg) from exc


class FileFeeScheduleProvider:
    """Read all three rules from a local JSON file.

    Expected layout::

        {
          "cash_in": {"percents": 0.03, "max": {"amount": 5, "currency": "EUR"}},
          "cash_out_natural": {"percents": 0.3, "week_limit": {"amount": 1000, "currency": "EUR"}},
          "cash_out_juridical": {"percents": 0.3, "min": {"amount": 0.5, "currency": "EUR"}}
        }
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    def fetch(self) -> FeeSchedule:
        logger.debug("Reading fee schedule from %s", self._path)
        try:
            raw = self._path.read_text(encoding="utf-8")
            data = json.loads(raw, parse_float=Decimal)
            return FeeSchedule.model_validate(data)
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Cannot read fee schedule {self._path}: {exc}"
            raise ScheduleFetchError(msg) from exc
        except json.JSONDecodeError as exc:
            msg = f"Invalid JSON in fee schedule {self._path}: {exc}"
            raise ScheduleFetchError(msg) from exc
        except ValidationError as exc:
            msg = f"Invalid fee schedule {self._path}: {exc}"
            raise ScheduleFetchError(msg) from exc


class StaticFeeScheduleProvider:
    """Serve a schedule that is already in memory."""

    def __init__(self, schedule: FeeSchedule) -> None:
        self._schedule = schedule

    def fetch(self) -> FeeSchedule:
        return self._schedule


def build_provider(
    config: ScheduleConfig,
    *,
    base_dir: Path | None = None,
    session: requests.Session | None = None,
) -> FeeScheduleProvider:
    """Pick the provider for *config*: a local file when ``file`` is set, else remote.

    A relative ``file`` is resolved against *base_dir* (the config file's
    directory) when given.
    """
    if config.file is not None:
        path = config.file
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        return FileFeeScheduleProvider(path)
    return RemoteFeeScheduleProvider(config, session=session)
