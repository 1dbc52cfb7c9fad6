"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy repository initialization and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from investctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from investctl.config.settings import InvestSettings
    from investctl.infrastructure.repositories.base import InvestmentRepository
    from investctl.services.investment import InvestmentService
    from investctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The repository is
    lazily initialized on first use so ``--help`` and ``--version`` never
    trigger database access.
    """

    def __init__(self, settings: InvestSettings) -> None:
        self.settings = settings
        self._repository: InvestmentRepository | None = None

        from investctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from investctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def repository(self) -> InvestmentRepository:
        """The configured repository (created lazily on first access)."""
        if self._repository is None:
            from investctl.infrastructure.repositories.factory import create_repository

            self._repository = create_repository(self.settings)
        return self._repository

    @property
    def service(self) -> InvestmentService:
        """An InvestmentService bound to the repository."""
        from investctl.services.investment import InvestmentService

        return InvestmentService(self.repository)

    def close(self) -> None:
        """Release the repository if one was opened."""
        if self._repository is not None:
            self._repository.close()
            self._repository = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
            currency=self.settings.display.currency,
            decimals=self.settings.display.decimals,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
