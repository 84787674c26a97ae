"""Tests for config resolution and validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from service_artifact_core.config import (
    CONFIG_ENV_VAR,
    ServiceArtifactConfig,
    load_config,
    resolve_config_path,
)
from service_artifact_core.errors import ConfigError


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_defaults_when_no_config(tmp_path: Path, clean_env):
    config = load_config(tmp_path)
    assert config == ServiceArtifactConfig()
    assert config.version == "0.0.0"
    assert config.project_name(tmp_path) == tmp_path.name
    assert config.version_path(tmp_path) == tmp_path / "build" / "VERSION"
    assert resolve_config_path(tmp_path) is None


def test_service_artifact_toml(tmp_path: Path, clean_env):
    _write(
        tmp_path / "service-artifact.toml",
        """
name = "billing-api"
version = "2.1.0"
build_dir = "out"

[scm]
disabled = ["gerrit"]
""",
    )
    config = load_config(tmp_path)
    assert config.project_name(tmp_path) == "billing-api"
    assert config.version == "2.1.0"
    assert config.scm.disabled == ["gerrit"]
    assert config.version_path(tmp_path) == tmp_path / "out" / "VERSION"


def test_pyproject_tool_table(tmp_path: Path, clean_env):
    _write(
        tmp_path / "pyproject.toml",
        """
[project]
name = "ignored"

[tool.service-artifact]
version = "3.0.0"
version_file = "VERSION.json"
""",
    )
    config = load_config(tmp_path)
    assert config.version == "3.0.0"
    assert config.version_path(tmp_path).name == "VERSION.json"


def test_pyproject_without_table_uses_defaults(tmp_path: Path, clean_env):
    _write(tmp_path / "pyproject.toml", '[project]\nname = "x"\n')
    assert load_config(tmp_path) == ServiceArtifactConfig()
    assert resolve_config_path(tmp_path) is None


def test_unreadable_pyproject_is_ignored(tmp_path: Path, clean_env, caplog):
    _write(tmp_path / "pyproject.toml", "[project\nname = \n")
    assert resolve_config_path(tmp_path) is None
    assert load_config(tmp_path) == ServiceArtifactConfig()
    assert "Ignoring unreadable" in caplog.text


def test_dedicated_file_wins_over_pyproject(tmp_path: Path, clean_env):
    _write(tmp_path / "pyproject.toml", '[tool.service-artifact]\nversion = "1.0"\n')
    _write(tmp_path / "service-artifact.toml", 'version = "2.0"\n')
    assert load_config(tmp_path).version == "2.0"


def test_env_var_points_at_config(tmp_path: Path, clean_env):
    custom = _write(tmp_path / "conf" / "custom.toml", 'version = "9.9.9"\n')
    clean_env.setenv(CONFIG_ENV_VAR, str(custom))
    assert resolve_config_path(tmp_path) == custom
    assert load_config(tmp_path).version == "9.9.9"


def test_explicit_missing_path_raises(tmp_path: Path, clean_env):
    with pytest.raises(ConfigError, match="Config file not found"):
        load_config(tmp_path, tmp_path / "missing.toml")


def test_invalid_toml_raises(tmp_path: Path, clean_env):
    _write(tmp_path / "service-artifact.toml", "version = \n")
    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(tmp_path)


def test_unknown_handler_kind_raises(tmp_path: Path, clean_env):
    _write(tmp_path / "service-artifact.toml", '[scm]\ndisabled = ["svn"]\n')
    with pytest.raises(ConfigError, match="unknown SCM handler"):
        load_config(tmp_path)


def test_blank_version_raises(tmp_path: Path, clean_env):
    _write(tmp_path / "service-artifact.toml", 'version = "  "\n')
    with pytest.raises(ConfigError, match="version"):
        load_config(tmp_path)


def test_toml_dict_round_trips_through_model():
    config = ServiceArtifactConfig(name="api", version="1.0", scm={"disabled": ["git"]})
    data = config.to_toml_dict()
    assert data["build_dir"] == "build"
    assert ServiceArtifactConfig.model_validate(data) == config
