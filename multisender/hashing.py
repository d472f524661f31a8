"""Keccak-256 helpers.

Ethereum uses the original Keccak padding, not the finalized SHA3-256, so
hashlib.sha3_256 gives different digests. pycryptodome exposes the right one.
"""

from Crypto.Hash import keccak


def keccak256(data: bytes) -> bytes:
    """Return the 32-byte Keccak-256 digest of data."""
    h = keccak.new(digest_bits=256)
    h.update(data)
    return h.digest()


def keccak256_hex(data: bytes) -> str:
    """Return the Keccak-256 digest of data as a 0x-prefixed hex string."""
    return "0x" + keccak256(data).hex()


def hex_to_bytes(value: str) -> bytes:
    """Decode a hex string with or without 0x prefix.

    Raises:
        ValueError: If value is not valid hex
    """
    if value.startswith(("0x", "0X")):
        value = value[2:]
    return bytes.fromhex(value)
