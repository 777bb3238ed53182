"""
flash-vault - Encrypted credentials for Lightning node clients

Seals a TLS certificate and macaroon into one AES-256-GCM container keyed by a
fresh, hex-encoded keyset that the operator keeps out-of-band.
"""

from .keys import generate_key, generate_keyset, parse_key, encode_key
from .aead import encrypt, decrypt
from .envelope import (
    CredentialsHeader,
    serialize_header,
    deserialize_header,
    seal_credentials,
    open_credentials,
    is_credentials_container,
)
from .types import (
    HEADER_SIZE,
    KEY_SIZE,
    NONCE_SIZE,
    TAG_SIZE,
    VaultError,
    EntropyError,
    KeyEncodingError,
    ContainerFormatError,
    AuthenticationError,
    CredentialsFileError,
)
from .config import VaultConfig
from .storage import (
    read_file,
    write_container,
    encrypt_credentials,
    decrypt_credentials,
)

__version__ = "0.1.0"

__all__ = [
    # Keys
    "generate_key",
    "generate_keyset",
    "parse_key",
    "encode_key",
    # AEAD
    "encrypt",
    "decrypt",
    # Envelope
    "CredentialsHeader",
    "serialize_header",
    "deserialize_header",
    "seal_credentials",
    "open_credentials",
    "is_credentials_container",
    # Constants
    "HEADER_SIZE",
    "KEY_SIZE",
    "NONCE_SIZE",
    "TAG_SIZE",
    # Errors
    "VaultError",
    "EntropyError",
    "KeyEncodingError",
    "ContainerFormatError",
    "AuthenticationError",
    "CredentialsFileError",
    # Config
    "VaultConfig",
    # Storage
    "read_file",
    "write_container",
    "encrypt_credentials",
    "decrypt_credentials",
]
