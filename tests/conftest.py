"""Shared fixtures for the totalcomp test suite."""

import pytest

from totalcomp.sdk import get_fiscal_year_store, load_fiscal_year


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config directory at an empty temp dir and reset the active snapshot.

    Keeps a developer's ~/.config/totalcomp overrides out of the tests.
    """
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("TOTALCOMP_CONFIG_PATH", str(config_dir))
    get_fiscal_year_store().reset()
    yield config_dir
    get_fiscal_year_store().reset()


@pytest.fixture
def fy2025(isolated_config):
    """Bundled 2025 fiscal-year tables."""
    return load_fiscal_year(2025)
