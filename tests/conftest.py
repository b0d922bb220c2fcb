"""Shared fixtures: every test runs against its own throwaway config file."""

import pytest

import niceowner.config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path):
    """Point niceowner.config at a fresh file under tmp_path."""
    original = niceowner.config._config_file
    config_file = tmp_path / "niceowner.toml"
    niceowner.config.use_file(config_file)
    try:
        yield config_file
    finally:
        niceowner.config._config_file = original
        niceowner.config.reload()
