"""Root test configuration: isolate tests from MANIFOLD_* variables in the calling shell"""

import os

import pytest


@pytest.fixture(autouse=True)
def clean_manifold_env(monkeypatch):
    """Drop MANIFOLD_* env vars so settings come only from what each test sets."""
    for name in list(os.environ):
        if name.startswith("MANIFOLD_"):
            monkeypatch.delenv(name, raising=False)
