"""Human/JSON formatting of ServiceResult.

``--json`` emits the serialized result. Human mode renders derived rule
sets and builder listings as Rich tables.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table

from modelrules.output.console import create_console, get_output

if TYPE_CHECKING:
    from modelrules.services.result import ServiceResult


def describe_rule(rule: dict[str, Any]) -> str:
    """One-line summary of a rendered rule dict."""
    kind = rule["kind"]
    if kind == "mark":
        return str(rule["mark"])
    params = ", ".join(f"{k}={v}" for k, v in rule.items() if k != "kind")
    return f"{kind}({params})"


def _properties_table(properties: dict[str, list[dict[str, Any]]]) -> Table:
    table = Table(show_header=True, header_style="mr.dim")
    table.add_column("property", style="mr.property")
    table.add_column("rules")
    for name, rules in properties.items():
        table.add_row(escape(name), escape("; ".join(describe_rule(rule) for rule in rules)))
    return table


def _builders_table(builders: list[dict[str, str]]) -> Table:
    table = Table(show_header=True, header_style="mr.dim")
    table.add_column("marker")
    table.add_column("rule", style="mr.kind")
    table.add_column("builder")
    for entry in builders:
        table.add_row(escape(entry["marker"]), entry["rule"], escape(entry["builder"]))
    return table


def format_result(result: ServiceResult, *, json_output: bool = False) -> str:
    """Format a ServiceResult for display."""
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console()
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        console.print(f"[mr.error]ERROR[/]: {result.op} - {escape(message)}", soft_wrap=True)
        return get_output(console).rstrip("\n")

    console.print(f"[mr.ok]OK[/]: {result.op}")
    data = result.data
    if "model" in data:
        header = f"[mr.model]{escape(data['model'])}[/] ({data.get('kind', 'plain')})"
        if data.get("entity"):
            header += f" <- {escape(data['entity'])}"
        console.print(header, soft_wrap=True)
    if data.get("properties"):
        console.print(_properties_table(data["properties"]))
    if data.get("builders"):
        console.print(_builders_table(data["builders"]))
    return get_output(console).rstrip("\n")
