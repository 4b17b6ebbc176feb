"""
Remote mirror: the project/document operations over token-authenticated HTTP.

Every /health and /api/* request must carry the x-manifold-token header; any
other GET path serves the pre-built front-end bundle so a browser on another
device can load the builder and then talk to the API.
"""

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from manifold.core.errors import ProjectError
from manifold.core.models import BuilderProjectDoc, CamelModel, ProjectRecord
from manifold.remote.auth import TOKEN_HEADER, require_token
from manifold.remote.static import bundle_response
from manifold.service import ProjectService


class WorkspaceRequest(CamelModel):
    workspace_root: str = ""


class CreateProjectRequest(CamelModel):
    workspace_root: str = ""
    name: str = ""
    slug: str = ""
    site_url: str = ""


class SiteUrlRequest(CamelModel):
    project_path: str
    site_url: str = ""


class ProjectPathRequest(CamelModel):
    project_path: str


class SaveProjectRequest(CamelModel):
    project_path: str
    document: BuilderProjectDoc


def _api_router(service: ProjectService) -> APIRouter:
    router = APIRouter(prefix="/api", dependencies=[Depends(require_token)])

    @router.post("/remote-context")
    def remote_context() -> dict:
        return service.remote_context()

    @router.post("/list-projects")
    def list_projects(payload: Optional[WorkspaceRequest] = None) -> list[ProjectRecord]:
        return service.list_projects(payload.workspace_root if payload else "")

    @router.post("/create-project")
    def create_project(payload: CreateProjectRequest) -> ProjectRecord:
        return service.create_project(payload.workspace_root, payload.name, payload.slug, payload.site_url)

    @router.post("/update-project-site-url")
    def update_project_site_url(payload: SiteUrlRequest) -> ProjectRecord:
        return service.update_project_site_url(payload.project_path, payload.site_url)

    @router.post("/load-builder-project", response_model_exclude_none=True)
    def load_builder_project(payload: ProjectPathRequest) -> BuilderProjectDoc:
        return service.load_builder_project(payload.project_path)

    @router.post("/save-builder-project")
    def save_builder_project(payload: SaveProjectRequest) -> dict:
        service.save_builder_project(payload.project_path, payload.document)
        return {"ok": True}

    return router


def create_app(service: ProjectService, token: str, frontend_dir: Optional[Path] = None) -> FastAPI:
    """Build the remote mirror application around an existing ProjectService."""
    app = FastAPI(title="Manifold", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.token = token.strip()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["content-type", TOKEN_HEADER],
    )

    @app.exception_handler(ProjectError)
    async def project_error_handler(request: Request, exc: ProjectError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.get("/health", dependencies=[Depends(require_token)])
    def health() -> dict:
        """Connectivity and token check used by the remote access gate."""
        return {"status": "ok"}

    app.include_router(_api_router(service))

    # Must stay last: everything unmatched above falls through to the bundle.
    @app.get("/{full_path:path}", include_in_schema=False)
    def serve_bundle(full_path: str):
        return bundle_response(frontend_dir, full_path)

    return app
