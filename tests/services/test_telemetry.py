"""Tests for operation tracing: OperationTrace, step(), @traced."""

from __future__ import annotations

import pytest
import structlog

from investctl.domain.errors import ErrorCode
from investctl.services.investment import InvestmentService
from investctl.services.result import ServiceResult
from investctl.services.telemetry import (
    OperationTrace,
    Step,
    enable_telemetry,
    step,
    traced,
)
from tests.conftest import SAMPLE_EXPIRATION_DATE, SAMPLE_INITIAL_DATE, create_investment


class _Recorder:
    """Minimal traced service used to observe the decorator in isolation."""

    @traced("apply")
    def apply(self, investment_id: int, amount: float) -> ServiceResult:
        with step("persist", amount=amount):
            context = structlog.contextvars.get_contextvars()
        return ServiceResult(ok=True, op="apply", data={"context": context})

    @traced("list_investments")
    def list_all(self) -> ServiceResult:
        return ServiceResult(ok=True, op="list_investments", meta={"source": "memory"})

    @traced("withdraw")
    def withdraw(self, investment_id: int, amount: float) -> ServiceResult:
        raise RuntimeError("database is locked")


class TestOperationTrace:
    def test_unfinished_has_zero_duration(self) -> None:
        assert OperationTrace("apply").duration_ms == 0.0

    def test_minimal_dict(self) -> None:
        trace = OperationTrace("list_investments")
        trace.finish("ok")
        assert trace.to_dict().keys() == {"operation", "outcome", "duration_ms"}

    def test_dict_with_id_and_steps(self) -> None:
        trace = OperationTrace("withdraw", investment_id=3)
        trace.steps.append(Step("load"))
        trace.finish(ErrorCode.INSUFFICIENT_BALANCE)
        data = trace.to_dict()
        assert data["investment_id"] == 3
        assert data["outcome"] == "INSUFFICIENT_BALANCE"
        assert data["steps"][0]["name"] == "load"
        assert "tags" not in data["steps"][0]


class TestStep:
    def test_outside_operation_yields_none(self) -> None:
        enable_telemetry()
        with step("persist") as current:
            assert current is None


class TestTraced:
    def test_disabled_leaves_meta_alone(self) -> None:
        result = _Recorder().list_all()
        assert result.meta == {"source": "memory"}

    def test_binds_operation_and_id_to_log_context(self) -> None:
        context = _Recorder().apply(5, 10.0).data["context"]
        assert context == {"operation": "apply", "investment_id": 5}
        assert "operation" not in structlog.contextvars.get_contextvars()

    def test_keyword_id_is_bound(self) -> None:
        context = _Recorder().apply(amount=1.0, investment_id=9).data["context"]
        assert context["investment_id"] == 9

    def test_trace_merged_into_existing_meta(self) -> None:
        enable_telemetry()
        result = _Recorder().list_all()
        assert result.meta is not None
        assert result.meta["source"] == "memory"
        assert result.meta["telemetry"]["operation"] == "list_investments"

    def test_step_tags_recorded(self) -> None:
        enable_telemetry()
        result = _Recorder().apply(5, 10.0)
        assert result.meta is not None
        trace = result.meta["telemetry"]
        assert trace["investment_id"] == 5
        assert len(trace["steps"]) == 1
        assert trace["steps"][0]["name"] == "persist"
        assert trace["steps"][0]["tags"] == {"amount": 10.0}

    def test_exception_propagates_and_context_cleared(self) -> None:
        enable_telemetry()
        with pytest.raises(RuntimeError, match="database is locked"):
            _Recorder().withdraw(1, 5.0)
        assert structlog.contextvars.get_contextvars() == {}
        with step("load") as current:
            assert current is None


class TestTracedInvestmentService:
    def test_lookup_step(self, service: InvestmentService) -> None:
        create_investment(service)
        enable_telemetry()
        result = service.find_by_name("sample")
        assert result.meta is not None
        (load,) = result.meta["telemetry"]["steps"]
        assert load["name"] == "load"
        assert load["tags"] == {"name": "sample"}

    def test_create_trace_carries_assigned_id(self, service: InvestmentService) -> None:
        enable_telemetry()
        create_investment(service)
        result = service.create_investment(
            "other",
            value=1.0,
            initial_date=SAMPLE_INITIAL_DATE,
            expiration_date=SAMPLE_EXPIRATION_DATE,
        )
        assert result.meta is not None
        trace = result.meta["telemetry"]
        assert trace["operation"] == "create_investment"
        assert trace["investment_id"] == 2
        assert [s["name"] for s in trace["steps"]] == ["check_unique_name", "persist"]

    def test_rejected_withdraw_records_outcome_without_persist(
        self, service: InvestmentService
    ) -> None:
        created = create_investment(service)
        enable_telemetry()
        result = service.withdraw(created["id"], 1_000_000)
        assert not result.ok
        assert result.meta is not None
        trace = result.meta["telemetry"]
        assert trace["outcome"] == "INSUFFICIENT_BALANCE"
        assert trace["investment_id"] == created["id"]
        assert [s["name"] for s in trace["steps"]] == ["load"]

    def test_list_without_telemetry_has_no_meta(self, service: InvestmentService) -> None:
        assert service.list_all().meta is None
