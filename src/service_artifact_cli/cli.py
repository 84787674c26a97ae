from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from .util import CliState, configure_logging

app = typer.Typer(help="service-artifact: SCM-aware versions and VERSION metadata for build pipelines")


@app.callback()
def _init(
    ctx: typer.Context,
    project_dir: Path = typer.Option(Path("."), "--project-dir", "-C", help="Project root to inspect"),
    config: Optional[Path] = typer.Option(None, "--config", help="Config file (default: service-artifact.toml)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log SCM probe details"),
):
    configure_logging(verbose)
    ctx.obj = CliState(project_dir=project_dir, config_path=config, verbose=verbose)


# Subcommands are registered in commands/*.py
from .commands import config_cmd  # noqa: E402
from .commands.doctor import doctor as doctor_fn  # noqa: E402
from .commands.scm import scm as scm_fn  # noqa: E402
from .commands.version import version as version_fn, version_info as version_info_fn  # noqa: E402

app.add_typer(config_cmd.app, name="config", help="Configuration inspection and scaffolding")
app.command(name="version")(version_fn)
app.command(name="version-info")(version_info_fn)
app.command(name="scm")(scm_fn)
app.command(name="doctor")(doctor_fn)


def main():
    app()
