"""Settings for the workspace, remote mirror, and logging; loaded from config.yaml"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MANIFOLD_"


class Settings(BaseModel):
    app_name:       str = "manifold"
    workspace_root: str = Field(default="",        description="Default workspace holding <slug>.manifold projects")
    remote_host:    str = Field(default="0.0.0.0", description="Bind host for the remote mirror")
    remote_port:    int = Field(default=8787, ge=1, le=65535, description="Port for the remote mirror")
    remote_token:   str = Field(default="",        description="Shared secret; generated at serve time when blank")
    frontend_dir:   str = Field(default="dist",    description="Pre-built front-end bundle served by the remote mirror")
    log_level:      str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    @field_validator("workspace_root", "frontend_dir")
    @classmethod
    def _expand_path(cls, value: str) -> str:
        """Strip whitespace and expand ~ so env vars and config.yaml can use home-relative paths."""
        return os.path.expanduser(value.strip())


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MANIFOLD_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValueError as e:
        raise ValueError(f"Invalid settings: {e}") from e
