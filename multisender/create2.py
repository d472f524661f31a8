"""Contract address derivation.

Both deployment schemes are pure functions of their inputs, so the same
address comes out on every chain and in every off-chain tool that uses them:

    CREATE:  keccak256(rlp([deployer, nonce]))[12:]
    CREATE2: keccak256(0xff ++ deployer ++ salt ++ keccak256(init_code))[12:]

The factory, the ledger, the HTTP API and scripts/calculate_address.py all
call into this module.
"""

from multisender.constants import CREATE2_PREFIX
from multisender.hashing import hex_to_bytes, keccak256
from multisender.models.types import normalize_address, normalize_salt


def create2_address(deployer: str, salt: str | bytes, init_code_hash: str | bytes) -> str:
    """Compute the CREATE2 address for a deployer, salt and init code hash.

    Args:
        deployer: Address of the deploying contract
        salt: 32-byte salt (hex string or bytes)
        init_code_hash: keccak256 of the creation code (hex string or bytes)

    Returns:
        Lowercase 0x-prefixed address

    Raises:
        ValueError: If any input has the wrong length
    """
    deployer_bytes = hex_to_bytes(normalize_address(deployer, validate=True))
    salt_bytes = hex_to_bytes(normalize_salt(salt))
    if isinstance(init_code_hash, str):
        init_code_hash = hex_to_bytes(init_code_hash)
    if len(init_code_hash) != 32:
        raise ValueError(f"Init code hash must be 32 bytes, got {len(init_code_hash)}")

    digest = keccak256(CREATE2_PREFIX + deployer_bytes + salt_bytes + init_code_hash)
    return "0x" + digest[12:].hex()


def create2_address_from_code(deployer: str, salt: str | bytes, init_code: bytes) -> str:
    """Compute the CREATE2 address from the raw creation code."""
    return create2_address(deployer, salt, keccak256(init_code))


def create_address(deployer: str, nonce: int) -> str:
    """Compute the CREATE address of the contract deployed at a given nonce.

    Raises:
        ValueError: If nonce is negative
    """
    if nonce < 0:
        raise ValueError(f"Nonce cannot be negative: {nonce}")
    deployer_bytes = hex_to_bytes(normalize_address(deployer, validate=True))
    digest = keccak256(_rlp_address_and_nonce(deployer_bytes, nonce))
    return "0x" + digest[12:].hex()


def salt_from_label(label: str) -> str:
    """Derive a salt from a human-readable label: keccak256(utf8(label))."""
    return "0x" + keccak256(label.encode("utf-8")).hex()


def _rlp_address_and_nonce(address: bytes, nonce: int) -> bytes:
    # RLP of the two-item list [address, nonce]. The payload never reaches
    # 56 bytes (21 + at most 9), so the short list header applies.
    encoded_address = bytes([0x80 + len(address)]) + address
    if nonce == 0:
        encoded_nonce = b"\x80"
    elif nonce < 0x80:
        encoded_nonce = bytes([nonce])
    else:
        raw = nonce.to_bytes((nonce.bit_length() + 7) // 8, "big")
        encoded_nonce = bytes([0x80 + len(raw)]) + raw
    payload = encoded_address + encoded_nonce
    return bytes([0xC0 + len(payload)]) + payload
