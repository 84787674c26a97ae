"""Service artifact configuration loading."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError
from .scm.base import ScmKind

CONFIG_ENV_VAR = "SERVICE_ARTIFACT_CONFIG"
CONFIG_FILENAME = "service-artifact.toml"
PYPROJECT_TABLE = "service-artifact"

logger = logging.getLogger(__name__)


class ScmConfig(BaseModel):
    """SCM detection settings."""
    disabled: List[str] = Field(default_factory=list)

    @field_validator("disabled")
    @classmethod
    def _known_kinds(cls, value: List[str]) -> List[str]:
        known = {kind.value for kind in ScmKind}
        unknown = [kind for kind in value if kind not in known]
        if unknown:
            raise ValueError(
                f"unknown SCM handler(s) {', '.join(unknown)}; expected one of {', '.join(sorted(known))}"
            )
        return value


class ServiceArtifactConfig(BaseModel):
    """Effective configuration for one project."""
    name: Optional[str] = None
    version: str = "0.0.0"
    build_dir: Path = Path("build")
    version_file: str = "VERSION"
    scm: ScmConfig = Field(default_factory=ScmConfig)

    @field_validator("version")
    @classmethod
    def _non_empty_version(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("version must be a non-empty string")
        return value.strip()

    def project_name(self, project_root: Path) -> str:
        return self.name or project_root.resolve().name

    def version_path(self, project_root: Path) -> Path:
        build_dir = self.build_dir
        if not build_dir.is_absolute():
            build_dir = project_root / build_dir
        return build_dir / self.version_file

    def to_toml_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


def _read_toml(path: Path) -> Dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML ({exc})", path) from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config ({exc.strerror})", path) from exc


def _has_tool_table(pyproject: Path) -> bool:
    try:
        data = _read_toml(pyproject)
    except ConfigError as exc:
        # Unparseable pyproject.toml is not a config source.
        logger.warning(f"Ignoring unreadable {pyproject}: {exc}")
        return False
    tool = data.get("tool")
    return isinstance(tool, dict) and PYPROJECT_TABLE in tool


def resolve_config_path(project_root: Path, config_path: Optional[Path] = None) -> Optional[Path]:
    """Find the config file for project_root; None means built-in defaults."""
    raw = config_path or os.getenv(CONFIG_ENV_VAR)
    if raw:
        path = Path(raw)
        if not path.is_absolute():
            path = project_root / path
        if not path.exists():
            raise ConfigError("Config file not found", path)
        return path

    candidate = project_root / CONFIG_FILENAME
    if candidate.exists():
        return candidate

    pyproject = project_root / "pyproject.toml"
    if pyproject.exists() and _has_tool_table(pyproject):
        return pyproject
    return None


def load_config(project_root: Path, config_path: Optional[Path] = None) -> ServiceArtifactConfig:
    path = resolve_config_path(project_root, config_path)
    if path is None:
        return ServiceArtifactConfig()

    data = _read_toml(path)
    if path.name == "pyproject.toml":
        data = data.get("tool", {}).get(PYPROJECT_TABLE, {})
    if not isinstance(data, dict):
        raise ConfigError("Config must be a TOML table", path)

    try:
        return ServiceArtifactConfig.model_validate(data)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigError(f"Invalid config ({details})", path) from exc
