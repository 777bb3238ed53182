"""AES-256-GCM encryption and decryption under a Tink keyset."""

from typing import Optional

import tink
from tink import aead

from .types import AuthenticationError, EntropyError, KeyEncodingError

aead.register()


def _primitive(handle: tink.KeysetHandle) -> aead.Aead:
    try:
        return handle.primitive(aead.Aead)
    except tink.TinkError as e:
        raise KeyEncodingError("Keyset cannot be used for AEAD") from e


def encrypt(
    handle: tink.KeysetHandle,
    plaintext: bytes,
    associated_data: Optional[bytes] = None,
) -> bytes:
    """
    Encrypt plaintext under the keyset's primary key.

    Format:
        [prefix]  0x01 + key id (4 bytes, big-endian) for TINK keys, empty for RAW keys
        [nonce]   12 random bytes, fresh for every call
        [rest]    AES-GCM ciphertext + 16-byte tag

    Args:
        handle: Keyset whose primary key is used
        plaintext: Data to encrypt
        associated_data: Optional data authenticated but not encrypted

    Returns:
        Ciphertext bytes

    Raises:
        EntropyError: If the cipher cannot produce a ciphertext
    """
    primitive = _primitive(handle)
    try:
        return primitive.encrypt(bytes(plaintext), bytes(associated_data or b""))
    except tink.TinkError as e:
        raise EntropyError("Encryption failed") from e


def decrypt(
    handle: tink.KeysetHandle,
    ciphertext: bytes,
    associated_data: Optional[bytes] = None,
) -> bytes:
    """
    Decrypt and authenticate a ciphertext produced by encrypt.

    Args:
        handle: Keyset holding the key the ciphertext was produced with
        ciphertext: Output of encrypt
        associated_data: Must equal the value passed to encrypt

    Returns:
        Decrypted plaintext

    Raises:
        AuthenticationError: If no key authenticates the ciphertext. Wrong keys,
            tampered data and truncated input are deliberately indistinguishable.
    """
    primitive = _primitive(handle)
    try:
        return primitive.decrypt(bytes(ciphertext), bytes(associated_data or b""))
    except tink.TinkError as e:
        raise AuthenticationError() from e
