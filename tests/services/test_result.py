"""Tests for ServiceResult and ServiceError."""

import json

import pytest

from commissionctl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="calculate", data={"fees": ["0.06"]})
        assert result.ok is True
        assert result.data == {"fees": ["0.06"]}
        assert result.warnings == []
        assert result.error is None

    def test_failure_helper(self) -> None:
        result = ServiceResult.failure("calculate", "INPUT_PARSE_FAILED", "bad", {"index": 3})
        assert result.ok is False
        assert result.error == ServiceError(
            code="INPUT_PARSE_FAILED", message="bad", detail={"index": 3}
        )

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="calculate", data={"count": 1}, warnings=["w"])
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["count"] == 1
        assert parsed["warnings"] == ["w"]

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="calculate")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_default_detail(self) -> None:
        assert ServiceError(code="E001", message="bad").detail == {}
