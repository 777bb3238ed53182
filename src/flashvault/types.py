"""Type definitions for the flash credential vault."""


# Container constants
HEADER_SIZE = 8
MAX_SEGMENT_SIZE = 2**32 - 1

# AES-256-GCM constants
KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16

# Tink keyset and ciphertext constants
AES_GCM_TYPE_URL = "type.googleapis.com/google.crypto.tink.AesGcmKey"
TINK_PREFIX_SIZE = 5  # 1 marker byte + 4-byte key id

# Smallest ciphertext the AEAD layer can emit for an empty plaintext
MIN_CIPHERTEXT_SIZE = NONCE_SIZE + TAG_SIZE


# Exception types
class VaultError(Exception):
    """Base exception for credential vault errors."""
    pass


class EntropyError(VaultError):
    """Secure random source unavailable."""
    pass


class KeyEncodingError(VaultError):
    """Key string is not valid hex or not a well-formed keyset."""
    pass


class ContainerFormatError(VaultError):
    """Container is truncated or its header is malformed."""
    pass


class AuthenticationError(VaultError):
    """Ciphertext failed authentication (wrong key or tampered data)."""

    def __init__(self) -> None:
        super().__init__("Decryption failed - incorrect key or corrupted data")


class CredentialsFileError(VaultError):
    """Reading or writing a credentials file failed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
