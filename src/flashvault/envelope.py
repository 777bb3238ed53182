"""Credentials container encoding and decoding."""

import logging
from dataclasses import dataclass
from typing import Tuple

from .aead import encrypt, decrypt
from .keys import generate_keyset, encode_key, parse_key
from .types import (
    HEADER_SIZE,
    MAX_SEGMENT_SIZE,
    MIN_CIPHERTEXT_SIZE,
    TINK_PREFIX_SIZE,
    ContainerFormatError,
)

logger = logging.getLogger("flashvault.envelope")


@dataclass
class CredentialsHeader:
    """Cleartext lengths of the certificate and macaroon segments."""
    cert_length: int
    macaroon_length: int

    def size(self) -> int:
        """Size of the encoded header in bytes."""
        return HEADER_SIZE

    def serialize(self) -> bytes:
        return serialize_header(self.cert_length, self.macaroon_length)


def serialize_header(cert_length: int, macaroon_length: int) -> bytes:
    """
    Encode segment lengths as a container header.

    Format (8 bytes):
        [0..3]  certLength (big-endian uint32)
        [4..7]  macaroonLength (big-endian uint32)

    Raises:
        ValueError: If a length is negative or does not fit in 32 bits
    """
    for name, value in (("cert_length", cert_length), ("macaroon_length", macaroon_length)):
        if not 0 <= value <= MAX_SEGMENT_SIZE:
            raise ValueError(f"{name} must fit in an unsigned 32-bit integer, got {value}")

    return (
        cert_length.to_bytes(4, byteorder="big")
        + macaroon_length.to_bytes(4, byteorder="big")
    )


def deserialize_header(data: bytes) -> CredentialsHeader:
    """
    Decode a container header.

    Raises:
        ContainerFormatError: If data is not exactly 8 bytes
    """
    if len(data) != HEADER_SIZE:
        raise ContainerFormatError(f"Invalid header size: {len(data)} bytes (expected {HEADER_SIZE})")

    return CredentialsHeader(
        cert_length=int.from_bytes(data[0:4], byteorder="big"),
        macaroon_length=int.from_bytes(data[4:8], byteorder="big"),
    )


def seal_credentials(
    cert: bytes,
    macaroon: bytes,
    *,
    authenticate_header: bool = False,
) -> Tuple[str, bytes]:
    """
    Encrypt a certificate and macaroon into a single container under a new key.

    Container format:
        [0..7]  header (segment lengths, cleartext)
        [8..]   AEAD ciphertext of cert || macaroon

    Args:
        cert: TLS certificate bytes (opaque)
        macaroon: Macaroon bytes (opaque)
        authenticate_header: Bind the header to the ciphertext as associated
            data. Containers sealed this way only open with the same flag.

    Returns:
        Tuple of (key_string, container). The key must be stored apart from
        the container.

    Raises:
        ValueError: If either segment is 4 GiB or larger
        EntropyError: If the random source fails
    """
    header_bytes = serialize_header(len(cert), len(macaroon))
    logger.debug("Header: %s", header_bytes.hex())

    handle = generate_keyset()
    associated_data = header_bytes if authenticate_header else None
    ciphertext = encrypt(handle, bytes(cert) + bytes(macaroon), associated_data)

    logger.info(
        "Sealed %d-byte certificate and %d-byte macaroon (key id %d)",
        len(cert), len(macaroon), handle.keyset_info().primary_key_id,
    )
    return encode_key(handle), header_bytes + ciphertext


def open_credentials(
    key_string: str,
    container: bytes,
    *,
    authenticate_header: bool = False,
) -> Tuple[bytes, bytes]:
    """
    Decrypt a container back into the certificate and macaroon.

    Args:
        key_string: Key returned by seal_credentials
        container: Container returned by seal_credentials
        authenticate_header: Must match the value used when sealing

    Returns:
        Tuple of (cert, macaroon)

    Raises:
        ContainerFormatError: If the container is truncated or the header
            does not describe the decrypted data
        KeyEncodingError: If the key string cannot be parsed
        AuthenticationError: If the key is wrong or the data was tampered with
    """
    if len(container) < HEADER_SIZE:
        raise ContainerFormatError(
            f"Container too short: {len(container)} bytes (minimum {HEADER_SIZE})"
        )

    header_bytes = bytes(container[:HEADER_SIZE])
    header = deserialize_header(header_bytes)
    handle = parse_key(key_string)

    associated_data = header_bytes if authenticate_header else None
    plaintext = decrypt(handle, bytes(container[HEADER_SIZE:]), associated_data)

    if header.cert_length + header.macaroon_length != len(plaintext):
        raise ContainerFormatError(
            f"Header lengths ({header.cert_length} + {header.macaroon_length}) "
            f"do not match decrypted size {len(plaintext)}"
        )

    logger.info(
        "Opened container: %d-byte certificate, %d-byte macaroon",
        header.cert_length, header.macaroon_length,
    )
    return plaintext[: header.cert_length], plaintext[header.cert_length :]


def is_credentials_container(data: bytes) -> bool:
    """
    Check if data looks like a credentials container.

    Args:
        data: Bytes to check

    Returns:
        True if the header lengths are consistent with the ciphertext size
    """
    if len(data) < HEADER_SIZE + MIN_CIPHERTEXT_SIZE:
        return False

    header = deserialize_header(bytes(data[:HEADER_SIZE]))
    expected = HEADER_SIZE + header.cert_length + header.macaroon_length + MIN_CIPHERTEXT_SIZE
    return len(data) - expected in (0, TINK_PREFIX_SIZE)
