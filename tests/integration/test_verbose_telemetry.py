"""End-to-end tests for ``--verbose`` operation traces and log context.

``-v`` turns on tracing in AppContext; the traced service call attaches
its trace to ``meta`` and the Rich renderer prints it, while log lines
emitted during the call carry the operation name and investment id.
"""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from investctl.cli import cli
from tests.conftest import CREATE_ARGS


def _log_events(stderr: str) -> list[dict[str, object]]:
    return [json.loads(line) for line in stderr.splitlines() if line.startswith("{")]


@pytest.mark.usefixtures("_isolated_home")
class TestVerboseTelemetry:
    def setup_method(self) -> None:
        self.runner = CliRunner()

    def test_verbose_create_shows_trace(self) -> None:
        result = self.runner.invoke(cli, ["-v", *CREATE_ARGS])
        assert result.exit_code == 0
        assert "meta:" in result.stdout
        assert "create_investment #1  [ok]" in result.stdout
        assert "check_unique_name" in result.stdout
        assert "persist" in result.stdout

    def test_non_verbose_no_trace(self) -> None:
        result = self.runner.invoke(cli, CREATE_ARGS)
        assert result.exit_code == 0
        assert "meta:" not in result.output
        assert "check_unique_name" not in result.output

    def test_verbose_json_includes_trace_in_meta(self) -> None:
        result = self.runner.invoke(cli, ["-v", "--json", *CREATE_ARGS])
        assert result.exit_code == 0
        trace = json.loads(result.stdout)["meta"]["telemetry"]
        assert trace["operation"] == "create_investment"
        assert trace["outcome"] == "ok"
        assert trace["investment_id"] == 1

    def test_service_logs_carry_operation(self) -> None:
        result = self.runner.invoke(cli, ["-v", "--log-json", "--json", *CREATE_ARGS])
        assert result.exit_code == 0
        events = _log_events(result.stderr)
        created = next(e for e in events if e["event"] == "Created investment 1 (sample)")
        assert created["operation"] == "create_investment"
        assert created["logger"] == "investctl.services.investment"

    def test_balance_logs_carry_investment_id(self) -> None:
        self.runner.invoke(cli, CREATE_ARGS)
        result = self.runner.invoke(cli, ["-v", "--log-json", "--json", "withdraw", "1", "200"])
        assert result.exit_code == 0
        complete = next(e for e in _log_events(result.stderr) if e["event"] == "operation.complete")
        assert complete["operation"] == "withdraw"
        assert complete["investment_id"] == 1
        assert complete["outcome"] == "ok"
        assert complete["steps"] == ["load", "persist"]

    def test_rejected_operation_logged_with_error_code(self) -> None:
        result = self.runner.invoke(cli, ["-v", "--log-json", "apply", "7", "10"])
        assert result.exit_code == 1
        complete = next(e for e in _log_events(result.stderr) if e["event"] == "operation.complete")
        assert complete["outcome"] == "NOT_FOUND"
        assert complete["investment_id"] == 7

    def test_verbose_error_shows_detail(self) -> None:
        result = self.runner.invoke(cli, ["-v", "withdraw", "7", "10"])
        assert result.exit_code == 1
        assert "detail:" in result.stderr
        assert "id: 7" in result.stderr
