from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest
from hypothesis import HealthCheck, settings

from service_artifact_core.scm.git import GitRunner
from service_artifact_core.scm.selector import reset_scm_cache

# Prevent Hypothesis from writing a local example database (e.g. `.hypothesis/`) during tests.
settings.register_profile(
    "service-artifact-tests",
    database=None,
    # The autouse cache reset runs once per test, not once per example.
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("service-artifact-tests")

SCM_VARIABLES = (
    "GERRIT_CHANGE_NUMBER",
    "GERRIT_PATCHSET_NUMBER",
    "GERRIT_PATCHSET_REVISION",
    "GERRIT_BRANCH",
    "GIT_DIR",
    "GIT_BRANCH",
    "SERVICE_ARTIFACT_CONFIG",
)


class FakeGitRunner(GitRunner):
    """Answers git commands from a table and records every call."""

    def __init__(self, responses: Optional[Dict[Tuple[str, ...], Optional[str]]] = None):
        super().__init__()
        self.responses = responses or {}
        self.calls: List[Tuple[str, ...]] = []

    def run(self, args, cwd, git_dir=None):
        key = tuple(args)
        self.calls.append(key)
        return self.responses.get(key)


def git_responses(
    revision: Optional[str] = "abcd123",
    status: Optional[str] = "",
    branch: Optional[str] = "main",
) -> Dict[Tuple[str, ...], Optional[str]]:
    return {
        ("rev-parse", "HEAD"): revision,
        ("status", "--porcelain"): status,
        ("rev-parse", "--abbrev-ref", "HEAD"): branch,
    }


@pytest.fixture(autouse=True)
def _fresh_scm_cache():
    reset_scm_cache()
    yield
    reset_scm_cache()


@pytest.fixture
def clean_env(monkeypatch):
    """Strip SCM variables the host CI may have set."""
    for name in SCM_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def git_tree(tmp_path: Path) -> Path:
    """A directory with a .git marker (no real repository behind it)."""
    (tmp_path / ".git").mkdir()
    return tmp_path
