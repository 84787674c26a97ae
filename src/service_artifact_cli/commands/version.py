"""
version.py - Annotated version and VERSION file commands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from service_artifact_core.scm.selector import resolve_scm_context
from service_artifact_core.version import annotate_version
from service_artifact_ops import version_info as version_ops

from ..util import get_state, load_project_config, project_environment, resolve_project_root

console = Console()


def version(
    ctx: typer.Context,
    base: Optional[str] = typer.Argument(None, help="Base version (defaults to the configured version)"),
):
    """Print the SCM-annotated version."""
    state = get_state(ctx)
    config = load_project_config(state)
    context = resolve_scm_context(project_environment(state), disabled=config.scm.disabled)
    typer.echo(annotate_version(base if base is not None else config.version, context))


def version_info(
    ctx: typer.Context,
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Custom output path"),
    stdout: bool = typer.Option(False, "--stdout", help="Print the metadata instead of writing it"),
):
    """Generate the service artifact version information file."""
    state = get_state(ctx)
    config = load_project_config(state)
    project_root = resolve_project_root(state)
    environment = project_environment(state)

    if stdout:
        metadata = version_ops.build_metadata(project_root, config, environment)
        typer.echo(metadata.to_json())
        return

    if out is not None and not out.is_absolute():
        out = project_root / out
    path, metadata = version_ops.write_version_info(project_root, config, environment, out=out)
    console.print(f"[green]Wrote {metadata.name} {metadata.version}[/green] to {path}")
