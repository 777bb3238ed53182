"""Key generation and transport encoding for the credential vault."""

import binascii
import io
import logging

import tink
from tink import aead, cleartext_keyset_handle

from .types import AES_GCM_TYPE_URL, EntropyError, KeyEncodingError

aead.register()

logger = logging.getLogger("flashvault.keys")


def generate_keyset() -> tink.KeysetHandle:
    """
    Generate a fresh single-key AES-256-GCM keyset.

    Returns:
        KeysetHandle holding one enabled primary key with a TINK output prefix

    Raises:
        EntropyError: If key generation fails
    """
    try:
        return tink.new_keyset_handle(aead.aead_key_templates.AES256_GCM)
    except tink.TinkError as e:
        raise EntropyError("Key generation failed") from e


def encode_key(handle: tink.KeysetHandle) -> str:
    """Encode a keyset handle as a lowercase hex cleartext keyset."""
    buf = io.BytesIO()
    try:
        cleartext_keyset_handle.write(tink.BinaryKeysetWriter(buf), handle)
    except tink.TinkError as e:
        raise EntropyError("Keyset serialization failed") from e
    return buf.getvalue().hex()


def generate_key() -> str:
    """
    Generate a new AES-256-GCM key and return its transport encoding.

    The returned string is the hex encoding of a cleartext binary keyset.
    Whoever holds this string can open every container sealed with it.

    Returns:
        Lowercase hex key string

    Raises:
        EntropyError: If key generation fails
    """
    handle = generate_keyset()
    logger.info("Key successfully generated (key id %d)", handle.keyset_info().primary_key_id)
    return encode_key(handle)


def parse_key(key_string: str) -> tink.KeysetHandle:
    """
    Parse a hex key string back into a keyset handle.

    Surrounding whitespace is ignored so keys pasted from a terminal work.
    Only AES-GCM keysets are accepted.

    Args:
        key_string: Hex string produced by generate_key

    Returns:
        KeysetHandle usable with encrypt/decrypt

    Raises:
        KeyEncodingError: If the string is not hex or not a valid AES-GCM keyset
    """
    try:
        data = binascii.unhexlify(key_string.strip())
    except ValueError as e:
        raise KeyEncodingError("Key is not a valid hex string") from e

    try:
        handle = cleartext_keyset_handle.read(tink.BinaryKeysetReader(data))
        handle.primitive(aead.Aead)
    except tink.TinkError as e:
        raise KeyEncodingError("Key is not a valid keyset") from e

    info = handle.keyset_info()
    for key_info in info.key_info:
        if key_info.type_url != AES_GCM_TYPE_URL:
            raise KeyEncodingError(f"Unsupported key type: {key_info.type_url!r}")

    logger.debug("Parsed keyset with %d key(s), primary key id %d", len(info.key_info), info.primary_key_id)
    return handle
