"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy factory initialization and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from modelrules.config.logging import configure_logging
from modelrules.output.formatters import format_result
from modelrules.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from collections.abc import Callable

    from modelrules.config.settings import ModelRulesSettings
    from modelrules.services.factory import ValidationConfigurationFactory


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The factory is built on first use so ``--help`` and ``--version`` never
    import configured builders or scan plugin directories.
    """

    def __init__(self, settings: ModelRulesSettings) -> None:
        self.settings = settings
        self._factory: ValidationConfigurationFactory | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def factory(self) -> ValidationConfigurationFactory:
        """The configuration factory (created lazily on first access).

        Raises:
            ValueError: If a configured builder cannot be loaded.
            TypeError: If a builder declares a non-constraint marker type.
        """
        if self._factory is None:
            from modelrules.services.bootstrap import create_factory

            self._factory = create_factory(self.settings)
        return self._factory

    def run(
        self, op: str, action: Callable[[ValidationConfigurationFactory], ServiceResult]
    ) -> None:
        """Run *action* against the factory and emit its result.

        Startup failures (bad builder paths, invalid marker types) become an
        ``ok=False`` result for *op*.
        """
        try:
            factory = self.factory
        except (ValueError, TypeError) as exc:
            self.emit(
                ServiceResult(
                    ok=False,
                    op=op,
                    error=ServiceError(code="BOOTSTRAP_FAILED", message=str(exc)),
                )
            )
            return
        self.emit(action(factory))

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        json_output = self.settings.json_output
        output = format_result(result, json_output=json_output)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
