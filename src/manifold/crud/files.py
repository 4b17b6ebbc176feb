"""Whole-file JSON read/write with path-qualified errors"""

from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from manifold.core.errors import ProjectParseError, ProjectStorageError
from manifold.core.models import dump_json


M = TypeVar("M", bound=BaseModel)


def read_model(path: Path, model: type[M]) -> M:
    """Read and validate path as model. Raises ProjectStorageError / ProjectParseError."""
    try:
        content = path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise ProjectParseError(f"Failed parsing {path}: {e}") from e
    except OSError as e:
        raise ProjectStorageError(f"Failed reading {path}: {e}") from e
    try:
        return model.model_validate_json(content)
    except ValidationError as e:
        raise ProjectParseError(f"Failed parsing {path}: {e}") from e


def write_model(path: Path, value: BaseModel) -> None:
    """Overwrite path with pretty-printed camelCase JSON. No temp file or rename."""
    try:
        path.write_text(dump_json(value), encoding='utf-8')
    except OSError as e:
        raise ProjectStorageError(f"Failed writing {path}: {e}") from e


def ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ProjectStorageError(f"Failed creating {path}: {e}") from e
