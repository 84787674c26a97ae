"""
scm.py - Show the detected source-control context.
"""

from __future__ import annotations

import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from service_artifact_ops.version_info import collect_scm_report

from ..util import get_state, load_project_config, project_environment

console = Console()


def _fmt(value) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def scm(
    ctx: typer.Context,
    base: Optional[str] = typer.Option(None, "--base", help="Base version to annotate"),
    as_json: bool = typer.Option(False, "--json", help="Output JSON"),
):
    """Show which SCM handler was selected and what it reports."""
    state = get_state(ctx)
    config = load_project_config(state)
    report = collect_scm_report(
        project_environment(state),
        base if base is not None else config.version,
        disabled=config.scm.disabled,
    )

    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=2))
        return

    if report.kind is None:
        console.print("[yellow]No SCM detected; versions are not annotated[/yellow]")

    table = Table(title="SCM Context")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Handler", _fmt(report.kind))
    table.add_row("Revision", _fmt(report.revision))
    table.add_row("Branch", _fmt(report.branch))
    table.add_row("Dirty", _fmt(report.dirty))
    table.add_row("Base version", report.base_version)
    table.add_row("Version", report.version)
    console.print(table)
