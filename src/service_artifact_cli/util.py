from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from service_artifact_core.config import ServiceArtifactConfig, load_config
from service_artifact_core.environment import Environment
from service_artifact_core.errors import ServiceArtifactError

err_console = Console(stderr=True, soft_wrap=True)


@dataclass
class CliState:
    project_dir: Path
    config_path: Optional[Path] = None
    verbose: bool = False


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def get_state(ctx: typer.Context) -> CliState:
    state = ctx.find_root().obj
    if not isinstance(state, CliState):
        state = CliState(project_dir=Path.cwd())
    return state


def resolve_project_root(state: CliState) -> Path:
    return state.project_dir.resolve()


def load_project_config(state: CliState) -> ServiceArtifactConfig:
    """Load config or exit with status 1 on error."""
    try:
        return load_config(resolve_project_root(state), state.config_path)
    except ServiceArtifactError as exc:
        err_console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)


def project_environment(state: CliState) -> Environment:
    return Environment.from_os(cwd=resolve_project_root(state))
