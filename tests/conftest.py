"""
Test configuration shared by all pmsync tests.

Keeps every test away from the user's real ~/.config/pmsync settings
and from client credentials set in the environment.
"""

import pytest


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point pmsync's settings file at an empty temporary location."""
    config_dir = tmp_path / "pmsync-config"
    monkeypatch.setenv("PMSYNC_CONFIG_DIR", str(config_dir))
    monkeypatch.setenv("PMSYNC_CONFIG_FILE", str(config_dir / "config.yaml"))
    monkeypatch.delenv("PMSYNC_CLIENT_ID", raising=False)
    monkeypatch.delenv("PMSYNC_CLIENT_SECRET", raising=False)
    return config_dir
