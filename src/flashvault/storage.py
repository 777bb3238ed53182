"""
File layer for credentials containers.

Reads the certificate and macaroon from disk, seals them, and writes the
container atomically: data goes to a temporary file in the target
directory, is flushed to disk, and is renamed over the destination only
once complete, after which the directory entry is flushed too. A failed
write never leaves a partial container behind.

Containers are written with 600 permissions by default (owner read/write).
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Tuple, Union

from .config import VaultConfig
from .envelope import seal_credentials, open_credentials
from .types import CredentialsFileError

logger = logging.getLogger("flashvault.storage")

PathLike = Union[str, Path]


def read_file(path: PathLike) -> bytes:
    """
    Read a whole file.

    Raises:
        CredentialsFileError: If the file cannot be read
    """
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise CredentialsFileError(str(path), e.strerror or "read failed") from e


def _fsync_directory(directory: Path) -> None:
    """Persist a rename by flushing the directory entry."""
    dir_fd = os.open(directory, os.O_RDONLY)
    try:
        os.fsync(dir_fd)
    finally:
        os.close(dir_fd)


def write_container(path: PathLike, data: bytes, mode: int = 0o600) -> None:
    """
    Atomically write data to path with the given permissions.

    Args:
        path: Destination file
        data: Bytes to write
        mode: Permission bits for the final file

    Raises:
        CredentialsFileError: If the file cannot be written
    """
    target = Path(path)
    directory = target.parent

    try:
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=directory)
    except OSError as e:
        raise CredentialsFileError(str(path), e.strerror or "write failed") from e

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, target)
        _fsync_directory(directory)
    except OSError as e:
        raise CredentialsFileError(str(path), e.strerror or "write failed") from e
    finally:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)

    logger.debug("Wrote %d bytes to %s (mode %#o)", len(data), target, mode)


def encrypt_credentials(
    cert_path: PathLike,
    macaroon_path: PathLike,
    config: Optional[VaultConfig] = None,
) -> str:
    """
    Seal a certificate file and macaroon file into a container file.

    Args:
        cert_path: TLS certificate file
        macaroon_path: Macaroon file
        config: Output path, permissions and header mode. Defaults apply if omitted.

    Returns:
        The key string needed to open the container

    Raises:
        CredentialsFileError: If an input cannot be read or the output cannot be written
        EntropyError: If the random source fails
    """
    config = config or VaultConfig()

    cert = read_file(cert_path)
    macaroon = read_file(macaroon_path)

    key_string, container = seal_credentials(
        cert,
        macaroon,
        authenticate_header=config.authenticate_header,
    )
    write_container(config.container_path, container, config.file_mode)

    logger.info("Encrypted credentials file '%s' saved", config.container_path)
    return key_string


def decrypt_credentials(
    key_string: str,
    auth_path: PathLike,
    config: Optional[VaultConfig] = None,
) -> Tuple[bytes, bytes]:
    """
    Open a container file.

    Args:
        key_string: Key returned by encrypt_credentials
        auth_path: Container file
        config: Header mode. Defaults apply if omitted.

    Returns:
        Tuple of (cert, macaroon)

    Raises:
        CredentialsFileError: If the container cannot be read
        ContainerFormatError, KeyEncodingError, AuthenticationError: See open_credentials
    """
    config = config or VaultConfig()

    container = read_file(auth_path)
    return open_credentials(
        key_string,
        container,
        authenticate_header=config.authenticate_header,
    )
