"""
doctor.py - Environment health check command.

Checks the project config, the VERSION file location and SCM detection.
"""

from __future__ import annotations

import json
import os
import shutil
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional, List

import typer
from rich.console import Console
from rich.table import Table

from service_artifact_core.config import load_config, resolve_config_path
from service_artifact_core.environment import Environment
from service_artifact_core.errors import ServiceArtifactError
from service_artifact_core.scm.selector import resolve_scm_context

from ..util import get_state, resolve_project_root

console = Console()


@dataclass
class CheckResult:
    """Result of a single check."""
    name: str
    passed: bool
    message: str
    details: Optional[str] = None
    required: bool = True


@dataclass
class DoctorResult:
    """Overall doctor check result."""
    all_passed: bool
    checks: List[CheckResult]


def check_build_dir_writable(project_root: Path, config_path: Optional[Path] = None) -> CheckResult:
    """Check that the VERSION file can be written."""
    try:
        target = load_config(project_root, config_path).version_path(project_root)
    except ServiceArtifactError:
        return CheckResult(
            name="Build Directory",
            passed=False,
            message="Skipped (config is invalid)",
        )

    # version-info creates missing directories, so test the nearest existing one.
    existing = target.parent
    while not existing.exists() and existing != existing.parent:
        existing = existing.parent

    if not existing.is_dir() or not os.access(existing, os.W_OK):
        return CheckResult(
            name="Build Directory",
            passed=False,
            message=f"Cannot write {target}",
            details=f"{existing} is not a writable directory",
        )

    return CheckResult(
        name="Build Directory",
        passed=True,
        message=str(target),
    )


def check_config(project_root: Path, config_path: Optional[Path] = None) -> CheckResult:
    """Check that the project config loads."""
    try:
        source = resolve_config_path(project_root, config_path)
        config = load_config(project_root, config_path)
    except ServiceArtifactError as exc:
        return CheckResult(
            name="Config",
            passed=False,
            message="Config is invalid",
            details=str(exc),
        )

    origin = str(source) if source else "built-in defaults"
    return CheckResult(
        name="Config",
        passed=True,
        message=f"{config.project_name(project_root)} {config.version} ({origin})",
    )


def check_git_executable() -> CheckResult:
    """Check that git is on PATH; only git detection depends on it."""
    path = shutil.which("git")
    if path is None:
        return CheckResult(
            name="Git Executable",
            passed=False,
            message="git not found on PATH",
            details="Git working trees will not be detected",
            required=False,
        )
    return CheckResult(
        name="Git Executable",
        passed=True,
        message=path,
        required=False,
    )


def check_scm_detection(project_root: Path, config_path: Optional[Path] = None) -> CheckResult:
    """Report which SCM handler is selected for the project."""
    try:
        disabled = load_config(project_root, config_path).scm.disabled
    except ServiceArtifactError:
        disabled = []
    context = resolve_scm_context(Environment.from_os(cwd=project_root), disabled=disabled)
    if context.handler is None:
        return CheckResult(
            name="SCM Detection",
            passed=False,
            message="No SCM detected; versions will not be annotated",
            required=False,
        )
    return CheckResult(
        name="SCM Detection",
        passed=True,
        message=f"{context.kind.value} at revision {context.revision}",
        required=False,
    )


def run_doctor(project_root: Path, config_path: Optional[Path] = None) -> DoctorResult:
    """Run all doctor checks."""
    checks = [
        check_config(project_root, config_path),
        check_build_dir_writable(project_root, config_path),
        check_git_executable(),
        check_scm_detection(project_root, config_path),
    ]

    all_passed = all(c.passed for c in checks if c.required)
    return DoctorResult(all_passed=all_passed, checks=checks)


def format_result_plain(result: DoctorResult) -> None:
    """Print result in plain text format."""
    table = Table(title="Service Artifact Doctor", show_header=True)
    table.add_column("Check", style="bold")
    table.add_column("Status")
    table.add_column("Message")

    for check in result.checks:
        if check.passed:
            status = "[green]✓ PASS[/green]"
        elif check.required:
            status = "[red]✗ FAIL[/red]"
        else:
            status = "[yellow]! WARN[/yellow]"
        table.add_row(check.name, status, check.message)
        if check.details:
            table.add_row("", "", f"[dim]{check.details}[/dim]")

    console.print(table)

    if result.all_passed:
        console.print("\n[green bold]All required checks passed![/green bold]")
    else:
        console.print("\n[red bold]Some checks failed.[/red bold]")


def format_result_json(result: DoctorResult) -> None:
    """Print result in JSON format."""
    output = {
        "all_passed": result.all_passed,
        "checks": [asdict(c) for c in result.checks],
    }
    typer.echo(json.dumps(output, indent=2))


def doctor(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """
    Check environment health.

    Verifies:
    - Project config loads
    - The VERSION file location is writable
    - git is on PATH (warning only)
    - An SCM is detected (warning only)
    """
    state = get_state(ctx)
    result = run_doctor(resolve_project_root(state), state.config_path)

    if as_json:
        format_result_json(result)
    else:
        format_result_plain(result)

    raise typer.Exit(0 if result.all_passed else 1)
