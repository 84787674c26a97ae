from __future__ import annotations

import json

import typer
import tomli_w

from service_artifact_core.config import CONFIG_FILENAME, resolve_config_path
from service_artifact_core.errors import ServiceArtifactError

from ..util import err_console, get_state, load_project_config, resolve_project_root

app = typer.Typer(help="Configuration inspection and scaffolding")


@app.command("show")
def config_show(ctx: typer.Context):
    """Print the effective config as JSON."""
    state = get_state(ctx)
    project_root = resolve_project_root(state)
    config = load_project_config(state)
    try:
        source = resolve_config_path(project_root, state.config_path)
    except ServiceArtifactError as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    typer.echo(
        json.dumps(
            {
                "source": str(source) if source else None,
                "name": config.project_name(project_root),
                "config": config.model_dump(mode="json"),
            },
            indent=2,
            default=str,
        )
    )


@app.command("init")
def config_init(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
):
    """Write a starter service-artifact.toml."""
    state = get_state(ctx)
    project_root = resolve_project_root(state)
    target = project_root / CONFIG_FILENAME
    if target.exists() and not force:
        err_console.print(f"[red]{target} already exists (use --force to overwrite)[/red]")
        raise typer.Exit(1)

    config = load_project_config(state)
    data = config.to_toml_dict()
    data["name"] = config.project_name(project_root)
    target.write_text(tomli_w.dumps(data), encoding="utf-8")
    typer.echo(f"Wrote {target}")
