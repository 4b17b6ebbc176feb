"""Local command surface: in-process calls to the project operations and remote server lifecycle"""

import inspect
import logging
from pathlib import Path
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_snake

from manifold.core.errors import ProjectValidationError
from manifold.core.models import BuilderProjectDoc, ProjectRecord
from manifold.remote.app import create_app
from manifold.remote.lifecycle import RemoteServerSlot, RemoteServerStatus
from manifold.service import ProjectService


DEFAULT_HOST = "0.0.0.0"

Picker = Callable[[], Optional[str]]

logger = logging.getLogger(__name__)


def _no_picker() -> Optional[str]:
    return None


class LocalCommands:
    """Named operations for an in-process caller.

    The six project/document operations delegate to a ProjectService; the
    remote server operations drive an injected RemoteServerSlot whose app is
    built around its own ProjectService rooted at the requested workspace.
    """

    def __init__(
        self,
        service: ProjectService,
        slot: Optional[RemoteServerSlot] = None,
        picker: Picker = _no_picker,
        frontend_dir: Optional[Path] = None,
    ):
        self.service = service
        self.slot = slot or RemoteServerSlot()
        self.picker = picker
        self.frontend_dir = frontend_dir

    # --- project / document operations ---

    def remote_context(self) -> dict[str, str]:
        return self.service.remote_context()

    def list_projects(self, workspace_root: str = "") -> list[ProjectRecord]:
        return self.service.list_projects(workspace_root)

    def create_project(self, workspace_root: str, name: str, slug: str, site_url: str = "") -> ProjectRecord:
        return self.service.create_project(workspace_root, name, slug, site_url)

    def update_project_site_url(self, project_path: str, site_url: str) -> ProjectRecord:
        return self.service.update_project_site_url(project_path, site_url)

    def load_builder_project(self, project_path: str) -> BuilderProjectDoc:
        return self.service.load_builder_project(project_path)

    def save_builder_project(self, project_path: str, document: Union[BuilderProjectDoc, dict]) -> None:
        if not isinstance(document, BuilderProjectDoc):
            try:
                document = BuilderProjectDoc.model_validate(document)
            except ValidationError as e:
                raise ProjectValidationError(f"Invalid document: {e}") from e
        self.service.save_builder_project(project_path, document)

    def pick_workspace_directory(self) -> Optional[str]:
        picked = self.picker()
        return str(Path(picked).absolute()) if picked else None

    # --- remote server lifecycle ---

    def start_remote_server(self, host: str, port: int, token: str, workspace_root: str) -> RemoteServerStatus:
        """Start the remote mirror, or return the running status if it is already up."""
        current = self.slot.status()
        if current.running:
            return current

        token = token.strip()
        workspace_root = workspace_root.strip()
        host = host.strip() or DEFAULT_HOST
        if not token:
            raise ProjectValidationError("Remote access token is required")
        if not workspace_root:
            raise ProjectValidationError("Workspace root is required")
        if not 1 <= port <= 65535:
            raise ProjectValidationError(f"Invalid port: {port}")

        remote_service = ProjectService(workspace_root)
        return self.slot.start(host, port, lambda: create_app(remote_service, token, self.frontend_dir))

    def stop_remote_server(self) -> RemoteServerStatus:
        return self.slot.stop()

    def get_remote_server_status(self) -> RemoteServerStatus:
        return self.slot.status()

    # --- name-based dispatch ---

    def invoke(self, command: str, args: Optional[dict[str, Any]] = None) -> Any:
        """Call a command by name with camelCase arguments; returns JSON-ready data.

        Raises ProjectError subclasses on failure, including unknown commands
        and missing/unexpected arguments.
        """
        handler = {
            "remote_context": self.remote_context,
            "list_projects": self.list_projects,
            "create_project": self.create_project,
            "update_project_site_url": self.update_project_site_url,
            "load_builder_project": self.load_builder_project,
            "save_builder_project": self.save_builder_project,
            "pick_workspace_directory": self.pick_workspace_directory,
            "start_remote_server": self.start_remote_server,
            "stop_remote_server": self.stop_remote_server,
            "get_remote_server_status": self.get_remote_server_status,
        }.get(command)
        if handler is None:
            raise ProjectValidationError(f"Unknown command: {command}")

        kwargs = {to_snake(k): v for k, v in (args or {}).items()}
        try:
            inspect.signature(handler).bind(**kwargs)
        except TypeError as e:
            raise ProjectValidationError(f"Invalid arguments for {command}: {e}") from e
        result = handler(**kwargs)
        logger.debug("Invoked %s", command)
        return _jsonable(result)


def _jsonable(value: Any) -> Any:
    if isinstance(value, RemoteServerStatus):
        # stopped status keeps host/port/serverUrl as explicit nulls
        return value.model_dump(by_alias=True)
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_none=True)
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    return value
