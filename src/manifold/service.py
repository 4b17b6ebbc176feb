"""Project and document operations shared by the local and remote transports"""

from pathlib import Path

from manifold.core.errors import ProjectValidationError
from manifold.core.models import BuilderProjectDoc, ProjectRecord
from manifold.crud import projects, store


class ProjectService:
    """The six project/document operations, implemented once.

    Transports pass plain strings; a blank workspace root falls back to
    default_workspace_root. All failures raise ProjectError subclasses whose
    message is meant for the end user.
    """

    def __init__(self, default_workspace_root: str = ""):
        self.default_workspace_root = default_workspace_root.strip()

    def remote_context(self) -> dict[str, str]:
        return {"workspaceRoot": self.default_workspace_root}

    def _workspace(self, workspace_root: str | None) -> Path:
        root = (workspace_root or "").strip() or self.default_workspace_root
        if not root:
            raise ProjectValidationError("Workspace root is required")
        return Path(root)

    def _project_dir(self, project_path: str) -> Path:
        project_dir = Path(project_path.strip())
        if not project_path.strip() or not project_dir.is_dir():
            raise ProjectValidationError("Project path is invalid")
        return project_dir

    def list_projects(self, workspace_root: str | None = None) -> list[ProjectRecord]:
        return projects.list_projects(self._workspace(workspace_root))

    def create_project(self, workspace_root: str | None, name: str, slug: str, site_url: str) -> ProjectRecord:
        return projects.create_project(self._workspace(workspace_root), name, slug, site_url)

    def update_project_site_url(self, project_path: str, site_url: str) -> ProjectRecord:
        return projects.update_project_site_url(self._project_dir(project_path), site_url)

    def load_builder_project(self, project_path: str) -> BuilderProjectDoc:
        return store.load_doc(self._project_dir(project_path))

    def save_builder_project(self, project_path: str, document: BuilderProjectDoc) -> BuilderProjectDoc:
        return store.save_doc(self._project_dir(project_path), document)
