"""Command: derive and show the validation rules of one model class."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from modelrules.commands._base import ModelRulesCommand

if TYPE_CHECKING:
    from modelrules.commands._context import AppContext


@click.command(
    "inspect",
    cls=ModelRulesCommand,
    examples="""\
  modelrules inspect myapp.models:User
  modelrules inspect myapp.api.UserForm
  modelrules --json inspect myapp.models:Order""",
)
@click.argument("target")
@click.pass_obj
def inspect_cmd(app: AppContext, target: str) -> None:
    """Show the rules derived for the class at TARGET (module:Class)."""
    from modelrules.services.inspection import InspectService

    app.run("inspect", lambda factory: InspectService(factory).describe(target))
