"""Command line front end for the credential vault.

Usage:
    flash-vault -c TLS_CERT -m MACAROON [-o OUTPUT]
    flash-vault -a AUTH_FILE -k KEY [--export-dir DIR]

Options:
    -c, --cert FILE           TLS certificate file to seal
    -m, --macaroon FILE       Macaroon file to seal
    -o, --output FILE         Container path (default: auth.bin or FLASH_VAULT_CONTAINER_PATH)
    -a, --auth FILE           Container file to open
    -k, --key KEY             Encryption key, or "-" to read it from stdin
    --export-dir DIR          Write the opened tls.cert and admin.macaroon here
    --authenticate-header     Bind the header to the ciphertext (must match when opening)
    -v, --verbose             Debug logging
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import VaultConfig
from .storage import encrypt_credentials, decrypt_credentials, write_container
from .types import (
    VaultError,
    EntropyError,
    KeyEncodingError,
    ContainerFormatError,
    AuthenticationError,
    CredentialsFileError,
)

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)-8s %(message)s"

EXPORTED_CERT_NAME = "tls.cert"
EXPORTED_MACAROON_NAME = "admin.macaroon"

_ERROR_KINDS = (
    (EntropyError, "entropy failure"),
    (KeyEncodingError, "invalid key"),
    (ContainerFormatError, "invalid container"),
    (AuthenticationError, "authentication failed"),
    (CredentialsFileError, "file error"),
)

logger = logging.getLogger("flashvault.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="flash-vault",
        description="Seal or open an encrypted Lightning node credentials file",
    )
    parser.add_argument("-c", "--cert", help="TLS certificate file")
    parser.add_argument("-m", "--macaroon", help="Admin macaroon file")
    parser.add_argument("-o", "--output", help="Container file to write")
    parser.add_argument("-a", "--auth", help="Authentication (container) file")
    parser.add_argument("-k", "--key", help="Encryption key, or '-' to read from stdin")
    parser.add_argument("--export-dir", help="Directory for the opened certificate and macaroon")
    parser.add_argument(
        "--authenticate-header",
        action="store_true",
        help="Authenticate the container header as associated data",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def describe_error(error: VaultError) -> str:
    """One-line operator message for a vault error. Never contains key material."""
    for error_type, kind in _ERROR_KINDS:
        if isinstance(error, error_type):
            return f"{kind}: {error}"
    return str(error)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = VaultConfig.from_env()
    except ValueError as e:
        parser.error(f"invalid configuration: {e}")

    updates: dict = {}
    if args.output:
        updates["container_path"] = Path(args.output)
    if args.authenticate_header:
        updates["authenticate_header"] = True
    if args.verbose:
        updates["log_level"] = "DEBUG"
    config = config.model_copy(update=updates)

    logging.basicConfig(level=config.log_level, format=LOG_FORMAT, datefmt="%H:%M:%S")

    try:
        if args.cert and args.macaroon:
            return _seal(args, config)
        if args.auth and args.key:
            return _open(args, config)
    except VaultError as e:
        print(f"error: {describe_error(e)}", file=sys.stderr)
        return 1
    except ValueError as e:
        # segment too large for the container header
        print(f"error: invalid input: {e}", file=sys.stderr)
        return 1

    parser.error(
        "auth file and encryption key (-a, -k) are required; "
        "alternatively generate them first with -c and -m"
    )
    return 2


def _seal(args: argparse.Namespace, config: VaultConfig) -> int:
    key_string = encrypt_credentials(args.cert, args.macaroon, config)
    print(f"Encrypted credentials file '{config.container_path}' saved.")
    print(f"Encryption key: {key_string}")
    print()
    print(f"{config.container_path} with the encryption key can now be used to connect to the node")
    return 0


def _open(args: argparse.Namespace, config: VaultConfig) -> int:
    key_string = sys.stdin.readline() if args.key == "-" else args.key
    cert, macaroon = decrypt_credentials(key_string, args.auth, config)

    print(f"Certificate: {len(cert)} bytes")
    print(f"Macaroon: {len(macaroon)} bytes")

    if args.export_dir:
        export_dir = Path(args.export_dir)
        write_container(export_dir / EXPORTED_CERT_NAME, cert, config.file_mode)
        write_container(export_dir / EXPORTED_MACAROON_NAME, macaroon, config.file_mode)
        logger.info("Exported credentials to %s", export_dir)
        print(f"Exported {EXPORTED_CERT_NAME} and {EXPORTED_MACAROON_NAME} to {export_dir}")

    return 0
