"""Shared type definitions for addresses, amounts and salts.

These types are used by the contracts, the API models and the scripts.
"""

import re
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from multisender.constants import ZERO_ADDRESS
from multisender.hashing import keccak256

# Maximum uint256 value
UINT256_MAX = 2**256 - 1


def validate_uint256(value: Any) -> str:
    """Validate that a value is a valid uint256 decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        Valid uint256 as decimal string

    Raises:
        ValueError: If value is not a valid non-negative integer within uint256 range
    """
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise ValueError("Uint256 must be string or int, got bool")

    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Uint256 cannot be negative: {value}")
        if value > UINT256_MAX:
            raise ValueError(f"Uint256 overflow: {value} > 2^256-1")
        return str(value)

    if not isinstance(value, str):
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    try:
        int_value = int(value)
    except ValueError as err:
        raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err

    if int_value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if int_value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")

    return value


# Ethereum address (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]
_ADDRESS_RE = re.compile(r"0x[a-fA-F0-9]{40}")

# 256-bit unsigned integer as decimal string (validated)
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]

# CREATE2 salt (32 bytes = 64 hex chars)
Bytes32 = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{64}$")]


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize an Ethereum address to lowercase.

    Args:
        address: An Ethereum address (with or without 0x prefix)
        validate: If True, raises ValueError for invalid addresses.

    Returns:
        Lowercase address with 0x prefix

    Raises:
        ValueError: If validate=True and address is not a valid Ethereum address
    """
    if not isinstance(address, str):
        raise ValueError(f"Address must be a string, got {type(address).__name__}")

    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr

    if validate and not is_valid_address(addr):
        raise ValueError(f"Invalid address: {address}")

    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a valid Ethereum address (case-insensitive)."""
    return isinstance(address, str) and _ADDRESS_RE.fullmatch(address) is not None


def is_zero_address(address: str) -> bool:
    """True for the all-zero address."""
    return normalize_address(address) == ZERO_ADDRESS


def to_checksum_address(address: str) -> str:
    """Return the EIP-55 mixed-case checksum form of an address.

    Raises:
        ValueError: If the address is not valid
    """
    addr = normalize_address(address, validate=True)[2:]
    digest = keccak256(addr.encode("ascii")).hex()
    return "0x" + "".join(
        c.upper() if c.isalpha() and int(digest[i], 16) >= 8 else c for i, c in enumerate(addr)
    )


def normalize_salt(salt: str | bytes) -> str:
    """Normalize a CREATE2 salt to 0x + 64 lowercase hex chars.

    Raises:
        ValueError: If the salt is not exactly 32 bytes
    """
    if isinstance(salt, bytes):
        raw = salt
    else:
        value = salt[2:] if salt.startswith(("0x", "0X")) else salt
        try:
            raw = bytes.fromhex(value)
        except ValueError as err:
            raise ValueError(f"Salt must be hex: {salt!r}") from err
    if len(raw) != 32:
        raise ValueError(f"Salt must be 32 bytes, got {len(raw)}")
    return "0x" + raw.hex()
