"""Project registry: discover, create, and update project directories in a workspace"""

import logging
from datetime import datetime, timezone
from pathlib import Path

from manifold.core.errors import ProjectStorageError, ProjectValidationError
from manifold.core.models import ProjectMetadata, ProjectRecord
from manifold.core.normalize import default_doc
from manifold.core.utils.scan import iter_parsed
from manifold.core.utils.slug import normalize_site_url, normalize_slug
from manifold.crud.files import ensure_dir
from manifold.crud.store import PROJECT_META_FILE, read_metadata, save_doc, write_metadata


PROJECT_DIR_SUFFIX = ".manifold"

logger = logging.getLogger(__name__)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def project_record(project_dir: Path) -> ProjectRecord:
    """Build the ProjectRecord for a project directory from its project.json."""
    metadata = read_metadata(project_dir)
    path = str(project_dir.absolute())
    return ProjectRecord(
        id=path,
        name=metadata.name,
        path=path,
        updated_at=metadata.updated_at,
        site_url=metadata.site_url,
    )


def _project_dirs(workspace: Path) -> list[Path]:
    try:
        entries = sorted(workspace.iterdir())
    except OSError as e:
        raise ProjectStorageError(f"Failed reading workspace {workspace}: {e}") from e
    return [
        p for p in entries
        if p.name.endswith(PROJECT_DIR_SUFFIX) and p.is_dir() and (p / PROJECT_META_FILE).exists()
    ]


def list_projects(workspace_root: Path) -> list[ProjectRecord]:
    """Return projects under workspace_root, most recently updated first.

    A missing workspace yields []. Projects whose metadata can't be read are skipped.
    """
    if not workspace_root.exists():
        return []
    if not workspace_root.is_dir():
        raise ProjectValidationError("Workspace root must be a directory")
    records = list(iter_parsed(_project_dirs(workspace_root), project_record))
    return sorted(records, key=lambda r: r.updated_at, reverse=True)


def create_project(workspace_root: Path, name: str, slug: str, site_url: str) -> ProjectRecord:
    """Create <slug>.manifold with fresh metadata and a seeded default document.

    Raises ProjectValidationError if the slug normalizes to nothing or the
    directory already exists.
    """
    if not workspace_root.exists():
        ensure_dir(workspace_root)
    if not workspace_root.is_dir():
        raise ProjectValidationError("Workspace root must be a directory")

    normalized_slug = normalize_slug(slug)
    if not normalized_slug:
        raise ProjectValidationError("Project slug is required")

    project_dir = workspace_root / f"{normalized_slug}{PROJECT_DIR_SUFFIX}"
    if project_dir.exists():
        raise ProjectValidationError(f"Project {project_dir} already exists")
    ensure_dir(project_dir)

    timestamp = now_iso()
    metadata = ProjectMetadata(
        name=name.strip(),
        slug=normalized_slug,
        site_url=normalize_site_url(site_url),
        created_at=timestamp,
        updated_at=timestamp,
    )
    write_metadata(project_dir, metadata)
    save_doc(project_dir, default_doc(metadata))
    logger.info("Created project %s", project_dir)
    return project_record(project_dir)


def update_project_site_url(project_dir: Path, site_url: str) -> ProjectRecord:
    if not project_dir.is_dir():
        raise ProjectValidationError("Project path is invalid")
    metadata = read_metadata(project_dir)
    metadata = metadata.model_copy(update={
        "site_url": normalize_site_url(site_url),
        "updated_at": now_iso(),
    })
    write_metadata(project_dir, metadata)
    return project_record(project_dir)
