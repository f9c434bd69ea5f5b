"""Operation sources.

The input file is a UTF-8 JSON array of records::

    [
      {"date": "2016-01-05", "user_id": 1, "user_type": "natural",
       "type": "cash_in", "operation": {"amount": 200.00, "currency": "EUR"}}
    ]

Amounts are parsed as Decimal straight from the JSON text.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from pathlib import Path

from pydantic import ValidationError

from commissionctl.domain.errors import InputParseError, MalformedOperationError
from commissionctl.domain.operations import Operation

logger = logging.getLogger(__name__)


def parse_operations(raw: str, *, origin: str = "<input>") -> list[Operation]:
    """Parse a JSON array of operation records.

    Raises:
        InputParseError: invalid JSON or a non-array document.
        MalformedOperationError: a record fails validation.
    """
    try:
        data = json.loads(raw, parse_float=Decimal)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {origin}: {exc}"
        raise InputParseError(msg) from exc

    if not isinstance(data, list):
        msg = f"Expected a JSON array of operations in {origin}, got {type(data).__name__}"
        raise InputParseError(msg)

    operations: list[Operation] = []
    for index, record in enumerate(data):
        try:
            operations.append(Operation.model_validate(record))
        except ValidationError as exc:
            raise MalformedOperationError(
                f"Invalid operation #{index} in {origin}: {exc.error_count()} error(s)",
                index=index,
                detail={
                    "errors": exc.errors(
                        include_url=False, include_context=False, include_input=False
                    )
                },
            ) from exc
    return operations


class JsonFileOperationSource:
    """Load operations from a JSON file on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> list[Operation]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Cannot read input file {self.path}: {exc}"
            raise InputParseError(msg) from exc
        operations = parse_operations(raw, origin=str(self.path))
        logger.debug("Loaded %d operations from %s", len(operations), self.path)
        return operations
