"""Root CLI group for modelrules with global flags and command registration."""

from __future__ import annotations

import click

from modelrules import __version__
from modelrules.commands import register_commands
from modelrules.commands._context import AppContext
from modelrules.config.settings import ModelRulesSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="modelrules")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """modelrules — derive validation rules for SQLAlchemy and pydantic models."""
    ctx.ensure_object(dict)
    try:
        settings = ModelRulesSettings.from_cli(
            config_path=config_path,
            json_output=json_output,
            verbose=verbose,
            log_json=log_json,
        )
    except ValueError as exc:
        click.echo(f"ERROR: invalid configuration - {exc}", err=True)
        raise SystemExit(1) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
