"""Shared fixtures."""

import pytest


@pytest.fixture(autouse=True)
def clean_vault_env(monkeypatch):
    """Isolate tests from FLASH_VAULT_* variables in the caller's environment."""
    for name in (
        "FLASH_VAULT_CONTAINER_PATH",
        "FLASH_VAULT_FILE_MODE",
        "FLASH_VAULT_AUTHENTICATE_HEADER",
        "FLASH_VAULT_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
