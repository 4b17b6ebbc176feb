"""Unit tests for config.py"""

import pytest

from manifold.config import load_config


def test_load_config_defaults(tmp_path, monkeypatch):
    """Settings defaults apply when no config.yaml, env var, or CLI override exists."""
    monkeypatch.chdir(tmp_path)
    settings = load_config()
    assert settings.workspace_root == ""
    assert settings.remote_host == "0.0.0.0"
    assert settings.remote_port == 8787
    assert settings.frontend_dir == "dist"


def test_load_config_reads_config_yaml(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("workspace_root: /srv/sites\nremote_port: 9000\n")
    settings = load_config()
    assert settings.workspace_root == "/srv/sites"
    assert settings.remote_port == 9000


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """MANIFOLD_WORKSPACE_ROOT takes precedence over config.yaml."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("workspace_root: /from/yaml\n")
    monkeypatch.setenv("MANIFOLD_WORKSPACE_ROOT", "/from/env")
    assert load_config().workspace_root == "/from/env"


def test_load_config_env_port_coerced(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MANIFOLD_REMOTE_PORT", "9100")
    assert load_config().remote_port == 9100


def test_load_config_cli_overrides_env(tmp_path, monkeypatch):
    """A non-None CLI override beats the env var; None overrides are ignored."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MANIFOLD_REMOTE_TOKEN", "env-token")
    settings = load_config(overrides={"remote_token": "cli-token", "remote_host": None})
    assert settings.remote_token == "cli-token"
    assert settings.remote_host == "0.0.0.0"


def test_load_config_invalid_yaml(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_non_mapping_yaml(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config()


def test_load_config_rejects_bad_port(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ValueError, match="Invalid settings"):
        load_config(overrides={"remote_port": 70000})


def test_load_config_expands_home_paths(tmp_path, monkeypatch):
    """workspace_root and frontend_dir accept ~ and surrounding whitespace."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    (tmp_path / "config.yaml").write_text("workspace_root: ' ~/sites '\nfrontend_dir: ~/ui/dist\n")
    settings = load_config()
    assert settings.workspace_root == str(tmp_path / "home" / "sites")
    assert settings.frontend_dir == str(tmp_path / "home" / "ui" / "dist")


def test_load_config_blank_workspace_stays_blank(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_config(overrides={"workspace_root": "   "}).workspace_root == ""
