"""Operation tracing for InvestmentService.

Every traced service call binds ``operation`` (and ``investment_id`` when
the call names one) into structlog's context variables, so log lines
emitted while it runs carry both keys.

With ``--verbose`` the call also records an :class:`OperationTrace`: its
outcome (``"ok"`` or the error code) and the repository steps it ran,
each timed.  The trace lands in ``ServiceResult.meta["telemetry"]`` and
is logged once as ``operation.complete``.
"""

from __future__ import annotations

import functools
import inspect
import time
from collections.abc import Callable, Generator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec

import structlog

from investctl.services.result import ServiceResult

log = structlog.get_logger("investctl.telemetry")

_ID_PARAM = "investment_id"

_tracing: ContextVar[bool] = ContextVar("_tracing", default=False)
_active_trace: ContextVar[OperationTrace | None] = ContextVar("_active_trace", default=None)


def _elapsed_ms(started: float, ended: float | None) -> float:
    if ended is None:
        return 0.0
    return round((ended - started) * 1000, 2)


@dataclass
class Step:
    """One timed repository interaction inside an operation."""

    name: str
    tags: dict[str, Any] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)
    ended: float | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "duration_ms": _elapsed_ms(self.started, self.ended),
        }
        if self.tags:
            data["tags"] = self.tags
        return data


@dataclass
class OperationTrace:
    """What a single service operation did and how long it took."""

    operation: str
    investment_id: int | None = None
    outcome: str = "pending"
    steps: list[Step] = field(default_factory=list)
    started: float = field(default_factory=time.perf_counter)
    ended: float | None = None

    @property
    def duration_ms(self) -> float:
        return _elapsed_ms(self.started, self.ended)

    def finish(self, outcome: str) -> None:
        self.outcome = outcome
        self.ended = time.perf_counter()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "operation": self.operation,
            "outcome": self.outcome,
            "duration_ms": self.duration_ms,
        }
        if self.investment_id is not None:
            data["investment_id"] = self.investment_id
        if self.steps:
            data["steps"] = [s.to_dict() for s in self.steps]
        return data


@contextmanager
def step(name: str, **tags: Any) -> Generator[Step | None]:
    """Time a repository interaction within the active operation.

    Yields None outside a traced operation or when tracing is off.
    """
    trace = _active_trace.get()
    if trace is None:
        yield None
        return

    current = Step(name=name, tags=tags)
    trace.steps.append(current)
    try:
        yield current
    finally:
        current.ended = time.perf_counter()


def _outcome(result: ServiceResult) -> str:
    return "ok" if result.error is None else result.error.code


def _result_investment_id(result: ServiceResult) -> int | None:
    if result.error is not None:
        return result.error.detail.get("id")
    return result.data.get("id")


_P = ParamSpec("_P")


def traced(  # noqa: UP047
    operation: str,
) -> Callable[[Callable[_P, ServiceResult]], Callable[_P, ServiceResult]]:
    """Decorator: run a service method as the named *operation*.

    The method's ``investment_id`` argument, if it has one and it is
    set, is bound to the log context alongside the operation name.
    """

    def decorator(func: Callable[_P, ServiceResult]) -> Callable[_P, ServiceResult]:
        signature = inspect.signature(func)
        takes_id = _ID_PARAM in signature.parameters

        @functools.wraps(func)
        def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> ServiceResult:
            context: dict[str, Any] = {"operation": operation}
            if takes_id:
                investment_id = signature.bind(*args, **kwargs).arguments.get(_ID_PARAM)
                if investment_id is not None:
                    context[_ID_PARAM] = investment_id

            with structlog.contextvars.bound_contextvars(**context):
                if not _tracing.get():
                    return func(*args, **kwargs)

                trace = OperationTrace(operation, investment_id=context.get(_ID_PARAM))
                token = _active_trace.set(trace)
                try:
                    result = func(*args, **kwargs)
                except Exception:
                    trace.finish("exception")
                    _log_trace(trace)
                    raise
                finally:
                    _active_trace.reset(token)

                trace.finish(_outcome(result))
                if trace.investment_id is None:
                    trace.investment_id = _result_investment_id(result)
                _log_trace(trace)

            meta = {**(result.meta or {}), "telemetry": trace.to_dict()}
            return result.model_copy(update={"meta": meta})

        return wrapper

    return decorator


def _log_trace(trace: OperationTrace) -> None:
    log.debug(
        "operation.complete",
        outcome=trace.outcome,
        duration_ms=trace.duration_ms,
        steps=[s.name for s in trace.steps],
    )


def enable_telemetry() -> None:
    """Turn on operation traces for this context (``--verbose``)."""
    _tracing.set(True)


def disable_telemetry() -> None:
    _tracing.set(False)
