"""
Vault Configuration - validated settings for the file layer and CLI.

Reads optional overrides from environment variables:
    FLASH_VAULT_CONTAINER_PATH = <path of the container file>
    FLASH_VAULT_FILE_MODE = <octal permission bits, e.g. 600>
    FLASH_VAULT_AUTHENTICATE_HEADER = 1 | true | yes
    FLASH_VAULT_LOG_LEVEL = DEBUG | INFO | WARNING | ERROR | CRITICAL

Security Note:
    Keys are never read from configuration. The key string is supplied
    by the operator per invocation.
"""
import os
import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger("flashvault.config")

DEFAULT_CONTAINER_NAME = "auth.bin"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TRUE_VALUES = ("1", "true", "yes", "on")


class VaultConfig(BaseModel):
    """Validated vault configuration."""

    container_path: Path = Field(default=Path(DEFAULT_CONTAINER_NAME))
    file_mode: int = Field(default=0o600, ge=0, le=0o777)
    authenticate_header: bool = False
    log_level: str = Field(default="INFO")

    @field_validator("file_mode")
    @classmethod
    def validate_file_mode(cls, v: int) -> int:
        """Reject modes that give group or others any access to secrets."""
        if v & 0o077:
            raise ValueError(f"file_mode {v:#o} grants access to group or others")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unsupported log level: {v}")
        return level

    @classmethod
    def from_env(cls) -> "VaultConfig":
        """Create VaultConfig from FLASH_VAULT_* environment variables.

        Returns:
            Populated VaultConfig instance.

        Raises:
            ValueError: If a variable holds an invalid value.
        """
        kwargs: dict = {}

        container_path = os.environ.get("FLASH_VAULT_CONTAINER_PATH")
        if container_path:
            kwargs["container_path"] = container_path

        file_mode = os.environ.get("FLASH_VAULT_FILE_MODE")
        if file_mode:
            kwargs["file_mode"] = int(file_mode, 8)

        authenticate_header = os.environ.get("FLASH_VAULT_AUTHENTICATE_HEADER")
        if authenticate_header is not None:
            kwargs["authenticate_header"] = authenticate_header.strip().lower() in _TRUE_VALUES

        log_level = os.environ.get("FLASH_VAULT_LOG_LEVEL")
        if log_level:
            kwargs["log_level"] = log_level

        config = cls(**kwargs)
        logger.debug(
            "Loaded config: container_path=%s file_mode=%#o authenticate_header=%s",
            config.container_path, config.file_mode, config.authenticate_header,
        )
        return config
