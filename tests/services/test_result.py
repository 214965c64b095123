"""Tests for the ServiceResult contract."""

from __future__ import annotations

import pytest

from sitectl.domain.errors import DomainConflictError, UnknownTargetError
from sitectl.services.base import BaseService
from sitectl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_defaults(self) -> None:
        result = ServiceResult(ok=True, op="synth")
        assert result.data == {}
        assert result.warnings == []
        assert result.error is None

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="synth")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]

    def test_json_roundtrip_shape(self) -> None:
        result = ServiceResult(
            ok=False,
            op="apply",
            error=ServiceError(code="DOMAIN_CONFLICT", message="taken"),
        )
        dumped = result.model_dump()
        assert dumped["error"] == {"code": "DOMAIN_CONFLICT", "message": "taken", "detail": {}}

    def test_failure_constructor(self) -> None:
        result = ServiceResult.failure("apply", "NO_PLATFORM", "nobody answered", {"hook": "x"})
        assert result.ok is False
        assert result.data == {}
        assert result.error == ServiceError(
            code="NO_PLATFORM", message="nobody answered", detail={"hook": "x"}
        )

    def test_error_from_exception(self) -> None:
        error = ServiceError.from_exception(UnknownTargetError("staging", ["main", "prod"]))
        assert error.code == "UNKNOWN_TARGET"
        assert "staging" in error.message


class TestFailureTranslation:
    def test_descriptor_error_to_result(self) -> None:
        exc = DomainConflictError("trakkyfood.it", "prod", "main")
        result = BaseService._failure("synth", exc)
        assert result.ok is False
        assert result.op == "synth"
        assert result.error is not None
        assert result.error.code == "DOMAIN_CONFLICT"
        assert result.error.detail == {
            "hostname": "trakkyfood.it",
            "existing": "prod",
            "requested": "main",
        }
