"""Git handler."""

from __future__ import annotations

import logging
import re
import subprocess
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

from ..environment import Environment
from ..errors import ProbeFailure
from .base import ScmHandler, ScmKind

logger = logging.getLogger(__name__)

SHORT_REVISION_LENGTH = 7
_OBJECT_NAME = re.compile(r"^[0-9a-f]{7,64}$")


class GitRunner:
    """Runs git commands in a working directory."""

    def __init__(self, executable: str = "git"):
        self.executable = executable

    def run(self, args: list[str], cwd: Path, git_dir: Optional[Path] = None) -> Optional[str]:
        """Run a git command and return stripped stdout, or None on failure."""
        cmd = [self.executable]
        if git_dir is not None:
            cmd.append(f"--git-dir={git_dir}")
        cmd.extend(args)
        try:
            result = subprocess.run(
                cmd,
                cwd=str(cwd),
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            # git missing, cwd gone, permission denied
            logger.debug(f"Failed to run {' '.join(cmd)}: {exc}")
            return None

        if result.returncode != 0:
            logger.debug(f"{' '.join(cmd)} exited {result.returncode}: {result.stderr.strip()}")
            return None

        return result.stdout.strip()


@dataclass(frozen=True)
class GitSettings:
    """Variables the git handler reads."""
    git_dir: Optional[str] = None
    branch: Optional[str] = None

    VARIABLES = ("GIT_DIR", "GIT_BRANCH")

    @classmethod
    def from_environment(cls, environment: Environment) -> "GitSettings":
        return cls(
            git_dir=environment.get("GIT_DIR"),
            branch=environment.get("GIT_BRANCH"),
        )


class GitHandler(ScmHandler):
    """Detects a plain git working tree."""

    kind = ScmKind.GIT

    def __init__(
        self,
        environment: Environment,
        priority: int = 0,
        settings: Optional[GitSettings] = None,
        runner: Optional[GitRunner] = None,
    ):
        super().__init__(environment, priority=priority)
        self.settings = settings or GitSettings.from_environment(environment)
        self.runner = runner or GitRunner()
        self._results: Dict[Tuple[str, ...], Optional[str]] = {}
        self._lock = threading.Lock()

    def _git(self, *args: str) -> Optional[str]:
        # Each query shells out at most once per handler, across threads too.
        with self._lock:
            if args not in self._results:
                self._results[args] = self.runner.run(
                    list(args), self.environment.cwd, git_dir=self.control_dir
                )
            return self._results[args]

    @property
    def control_dir(self) -> Optional[Path]:
        if not self.settings.git_dir:
            return None
        path = Path(self.settings.git_dir)
        if not path.is_absolute():
            path = self.environment.cwd / path
        return path

    def _has_marker(self) -> bool:
        if self.control_dir is not None:
            return self.control_dir.is_dir()
        return self.environment.find_upwards(".git") is not None

    def is_available(self) -> bool:
        if not self._has_marker():
            logger.debug(f"No .git marker above {self.environment.cwd}")
            return False
        return self.revision is not None

    def _read_revision(self) -> str:
        output = self._git("rev-parse", "HEAD")
        if output is None:
            raise ProbeFailure("git rev-parse HEAD failed")
        if not _OBJECT_NAME.match(output):
            raise ProbeFailure(f"Unexpected output from git rev-parse HEAD: {output!r}")
        return output

    @property
    def revision(self) -> Optional[str]:
        try:
            return self._read_revision()
        except ProbeFailure as exc:
            logger.debug(f"Git revision unavailable: {exc}")
            return None

    @property
    def short_revision(self) -> Optional[str]:
        revision = self.revision
        if revision is None:
            return None
        return revision[:SHORT_REVISION_LENGTH]

    @property
    def branch(self) -> Optional[str]:
        if self.settings.branch:
            return self.settings.branch
        ref = self._git("rev-parse", "--abbrev-ref", "HEAD")
        if not ref or ref == "HEAD":  # detached
            return None
        return ref

    @property
    def dirty(self) -> Optional[bool]:
        status = self._git("status", "--porcelain")
        if status is None:
            return None
        return bool(status)

    def annotated_version(self, base_version: str) -> str:
        short = self.short_revision
        if short is None:
            return base_version
        version = f"{base_version}+{short}"
        if self.dirty:
            version += ".dirty"
        return version
