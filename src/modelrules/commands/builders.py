"""Command: list registered rule builders."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from modelrules.commands._base import ModelRulesCommand

if TYPE_CHECKING:
    from modelrules.commands._context import AppContext


@click.command(
    cls=ModelRulesCommand,
    examples="""\
  modelrules builders
  modelrules --json builders""",
)
@click.pass_obj
def builders(app: AppContext) -> None:
    """List each constraint marker type and the builder handling it."""
    from modelrules.services.inspection import InspectService

    app.run("builders", lambda factory: InspectService(factory).list_builders())
