"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError

from manifold.config import Settings, load_config
from manifold.core.errors import ProjectError
from manifold.core.models import BuilderProjectDoc, dump_json
from manifold.local import LocalCommands
from manifold.remote.auth import generate_token
from manifold.service import ProjectService


Workspace = Annotated[Optional[str], typer.Option("--workspace", "-w", help="Workspace root (or set MANIFOLD_WORKSPACE_ROOT)")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _prompt_picker() -> Optional[str]:
    """Ask for a directory on the terminal; None unless it names an existing directory."""
    answer = typer.prompt("Workspace directory", default="", show_default=False).strip()
    if answer and Path(answer).expanduser().is_dir():
        return str(Path(answer).expanduser())
    return None


def _commands(settings: Settings) -> LocalCommands:
    return LocalCommands(
        ProjectService(settings.workspace_root),
        picker=_prompt_picker,
        frontend_dir=Path(settings.frontend_dir),
    )


def main_callback(
    log_level: Annotated[Optional[str], typer.Option("--log-level", help="DEBUG, INFO, WARNING, ERROR")] = None,
    ):
    """Manifold website-builder project store."""
    settings = _settings(overrides={"log_level": log_level.upper() if log_level else None})
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")


def list_cmd(workspace: Workspace = None):
    """List projects in the workspace, most recently updated first."""
    commands = _commands(_settings(overrides={"workspace_root": workspace}))
    try:
        records = commands.list_projects()
    except ProjectError as e:
        _fail(str(e))
    if not records:
        typer.echo("No projects found.")
        return
    for r in records:
        typer.echo(f"{r.name}\t{r.site_url}\t{r.path}")


def create_cmd(
    name: Annotated[str, typer.Argument(help="Project display name")],
    slug: Annotated[Optional[str], typer.Option("--slug", help="Directory slug; defaults to the name")] = None,
    site_url: Annotated[str, typer.Option("--site-url", help="Public site URL")] = "",
    workspace: Workspace = None,
    ):
    """Create <slug>.manifold with a seeded home page."""
    commands = _commands(_settings(overrides={"workspace_root": workspace}))
    try:
        record = commands.create_project("", name, slug if slug is not None else name, site_url)
    except ProjectError as e:
        _fail(str(e))
    typer.echo(f"Created {record.path}")


def set_url_cmd(
    project_path: Annotated[str, typer.Argument(help="Project directory")],
    site_url: Annotated[str, typer.Argument(help="New public site URL")],
    ):
    """Update a project's site URL."""
    commands = _commands(_settings())
    try:
        record = commands.update_project_site_url(project_path, site_url)
    except ProjectError as e:
        _fail(str(e))
    typer.echo(f"{record.name}: {record.site_url}")


def load_cmd(project_path: Annotated[str, typer.Argument(help="Project directory")]):
    """Load (and repair) a project's document and print it as JSON."""
    commands = _commands(_settings())
    try:
        doc = commands.load_builder_project(project_path)
    except ProjectError as e:
        _fail(str(e))
    typer.echo(dump_json(doc))


def save_cmd(
    project_path: Annotated[str, typer.Argument(help="Project directory")],
    document: Annotated[str, typer.Argument(help="Document JSON file, or '-' for stdin")],
    ):
    """Normalize and save a document JSON into a project directory."""
    commands = _commands(_settings())
    try:
        raw = typer.get_text_stream("stdin").read() if document == "-" else Path(document).read_text(encoding="utf-8")
    except OSError as e:
        _fail(f"Failed reading {document}", e)
    try:
        doc = BuilderProjectDoc.model_validate_json(raw)
    except ValidationError as e:
        _fail("Invalid document", e)
    try:
        commands.save_builder_project(project_path, doc)
    except ProjectError as e:
        _fail(str(e))
    typer.echo(f"Saved {len(doc.pages)} page(s) to {project_path}")


def serve_cmd(
    host: Annotated[Optional[str], typer.Option("--host", help="Bind host")] = None,
    port: Annotated[Optional[int], typer.Option("--port", help="Bind port")] = None,
    token: Annotated[Optional[str], typer.Option("--token", help="Access token; generated when omitted")] = None,
    workspace: Workspace = None,
    frontend: Annotated[Optional[str], typer.Option("--frontend-dir", help="Front-end bundle directory")] = None,
    ):
    """Run the remote mirror in the foreground until interrupted."""
    settings = _settings(overrides={
        "remote_host": host, "remote_port": port, "remote_token": token,
        "workspace_root": workspace, "frontend_dir": frontend,
    })
    access_token = settings.remote_token.strip()
    if not access_token:
        access_token = generate_token()
        typer.echo(f"Access token: {access_token}")

    commands = _commands(settings)
    try:
        status = commands.start_remote_server(
            settings.remote_host, settings.remote_port, access_token, settings.workspace_root,
        )
    except ProjectError as e:
        _fail(str(e))
    typer.echo(f"Serving {settings.workspace_root} at {status.server_url} (Ctrl+C to stop)")
    try:
        commands.slot.wait()
    except KeyboardInterrupt:
        commands.stop_remote_server()
        typer.echo("Stopped.")


def pick_cmd():
    """Choose a workspace directory and print its absolute path."""
    commands = _commands(_settings())
    picked = commands.pick_workspace_directory()
    if picked is None:
        typer.echo("No directory selected.")
        raise typer.Exit(1)
    typer.echo(picked)


def token_cmd():
    """Print a freshly generated remote access token."""
    typer.echo(generate_token())
