"""Shared test fixtures"""

import pytest

from retrycmd.infrastructure.config.config_manager import ENV_OVERRIDES


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep RETRY_* variables and stray .retry.yml files out of every test"""
    for name in ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
