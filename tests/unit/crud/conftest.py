"""Shared fixtures for crud unit tests"""

import pytest

from manifold.crud.projects import create_project


@pytest.fixture(name="workspace")
def workspace_fixture(tmp_path):
    """An empty workspace directory path (not yet created)."""
    return tmp_path / "workspace"


@pytest.fixture(name="project_dir")
def project_dir_fixture(workspace):
    """A freshly created project with the seeded default document."""
    create_project(workspace, "Demo Site", "demo", "demo.example.com")
    return workspace / "demo.manifold"
