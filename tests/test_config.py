"""Tests for vault configuration."""

from pathlib import Path

import pytest
from pydantic import ValidationError
from flashvault.config import VaultConfig


class TestVaultConfig:
    """Test defaults and validation."""

    def test_defaults(self) -> None:
        """Defaults match the original tool with owner-only permissions."""
        config = VaultConfig()

        assert config.container_path == Path("auth.bin")
        assert config.file_mode == 0o600
        assert config.authenticate_header is False
        assert config.log_level == "INFO"

    @pytest.mark.parametrize("mode", [0o644, 0o640, 0o604, 0o666, 0o620, 0o602, 0o777])
    def test_shared_modes_rejected(self, mode: int) -> None:
        """Modes giving group or others any access are refused."""
        with pytest.raises(ValidationError, match="group or others"):
            VaultConfig(file_mode=mode)

    @pytest.mark.parametrize("mode", [-1, 0o1000])
    def test_mode_range(self, mode: int) -> None:
        """Modes outside permission bits are refused."""
        with pytest.raises(ValidationError):
            VaultConfig(file_mode=mode)

    def test_log_level_normalized(self) -> None:
        """Log level names are case-insensitive."""
        assert VaultConfig(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self) -> None:
        """Unknown log levels are refused."""
        with pytest.raises(ValidationError, match="log level"):
            VaultConfig(log_level="chatty")


class TestFromEnv:
    """Test loading configuration from the environment."""

    def test_empty_environment(self) -> None:
        """No variables yields the defaults."""
        assert VaultConfig.from_env() == VaultConfig()

    def test_all_variables(self, monkeypatch) -> None:
        """Every variable is honored."""
        monkeypatch.setenv("FLASH_VAULT_CONTAINER_PATH", "/var/lib/flash/creds.bin")
        monkeypatch.setenv("FLASH_VAULT_FILE_MODE", "400")
        monkeypatch.setenv("FLASH_VAULT_AUTHENTICATE_HEADER", "true")
        monkeypatch.setenv("FLASH_VAULT_LOG_LEVEL", "warning")

        config = VaultConfig.from_env()

        assert config.container_path == Path("/var/lib/flash/creds.bin")
        assert config.file_mode == 0o400
        assert config.authenticate_header is True
        assert config.log_level == "WARNING"

    @pytest.mark.parametrize("value,expected", [("1", True), ("YES", True), ("0", False), ("no", False)])
    def test_authenticate_header_values(self, monkeypatch, value: str, expected: bool) -> None:
        """Boolean flags accept common spellings."""
        monkeypatch.setenv("FLASH_VAULT_AUTHENTICATE_HEADER", value)
        assert VaultConfig.from_env().authenticate_header is expected

    def test_invalid_file_mode(self, monkeypatch) -> None:
        """Non-octal modes raise ValueError."""
        monkeypatch.setenv("FLASH_VAULT_FILE_MODE", "rw-------")

        with pytest.raises(ValueError):
            VaultConfig.from_env()

    def test_world_readable_mode_from_env(self, monkeypatch) -> None:
        """Validation applies to environment values too."""
        monkeypatch.setenv("FLASH_VAULT_FILE_MODE", "644")

        with pytest.raises(ValueError):
            VaultConfig.from_env()
