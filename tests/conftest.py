"""Shared pytest fixtures and test helpers for investctl tests."""

from __future__ import annotations

from collections.abc import Generator
from datetime import date
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from investctl.domain.investment import Investment
from investctl.infrastructure.database.engine import init_database
from investctl.infrastructure.repositories import (
    InMemoryInvestmentRepository,
    SqlInvestmentRepository,
)
from investctl.services.investment import InvestmentService
from investctl.services.telemetry import disable_telemetry

SAMPLE_NAME = "sample"
SAMPLE_VALUE = 1000.0
SAMPLE_INITIAL_DATE = date(2021, 1, 1)
SAMPLE_EXPIRATION_DATE = date(2022, 1, 1)

CREATE_ARGS = [
    "create",
    SAMPLE_NAME,
    "--value",
    "1000",
    "--initial-date",
    SAMPLE_INITIAL_DATE.isoformat(),
    "--expiration-date",
    SAMPLE_EXPIRATION_DATE.isoformat(),
]


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """Reset telemetry state; '-v' enables it through a ContextVar that outlives the invocation."""
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def repository() -> InMemoryInvestmentRepository:
    """Empty in-memory repository."""
    return InMemoryInvestmentRepository()


@pytest.fixture
def service(repository: InMemoryInvestmentRepository) -> InvestmentService:
    """InvestmentService bound to the in-memory repository."""
    return InvestmentService(repository)


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sql_repository(db_engine: Engine) -> SqlInvestmentRepository:
    """Repository over the temporary SQLite database."""
    return SqlInvestmentRepository(db_engine)


@pytest.fixture
def _isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp data root so the CLI creates an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_home")`` on command test
    classes.
    """
    monkeypatch.delenv("INVESTCTL_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def build_investment(**overrides: Any) -> Investment:
    """Build an Investment with sample defaults; keyword args override fields."""
    fields: dict[str, Any] = {
        "id": None,
        "name": SAMPLE_NAME,
        "value": SAMPLE_VALUE,
        "initial_date": SAMPLE_INITIAL_DATE,
        "expiration_date": SAMPLE_EXPIRATION_DATE,
    }
    fields.update(overrides)
    return Investment(**fields)


def create_investment(service: InvestmentService, **overrides: Any) -> dict[str, Any]:
    """Create an investment via the service, asserting success."""
    sample = build_investment(**overrides)
    result = service.create_investment(
        sample.name,
        value=sample.value,
        initial_date=sample.initial_date,
        expiration_date=sample.expiration_date,
        investment_id=sample.id,
    )
    assert result.ok, result.error
    return result.data
