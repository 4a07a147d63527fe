"""
Hashing Utilities
One-way compression functions and the hex codec used by the Merkle tree.

This module provides:
- SHA3-256 (default) and SHA-256 digests over raw bytes
- Lookup of a hash function by algorithm name
- Hex encoding with 0x prefix, and strict decoding with optional prefix
- Hashing of a left/right concatenation

Determinism Notes:
- Digests are computed over the exact bytes given, nothing is normalized
- Decoding never pads or truncates
"""
from __future__ import annotations

import hashlib
from typing import Callable

from merkle_core.schemas.errors import HexFormatException, UnsupportedHashException


HashFunction = Callable[[bytes], bytes]

DEFAULT_HASH_ALGORITHM = "sha3_256"


def sha3_256(data: bytes) -> bytes:
    """
    Compute SHA3-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA3-256 digest
    """
    return hashlib.sha3_256(data).digest()


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


HASH_FUNCTIONS: dict[str, HashFunction] = {
    "sha3_256": sha3_256,
    "sha256": sha256,
}


def get_hash_function(name: str) -> HashFunction:
    """
    Resolve a hash function by algorithm name.

    Names are case-insensitive and accept "-" in place of "_"
    (e.g. "SHA3-256").

    Raises:
        UnsupportedHashException: If no function is registered under the name
    """
    key = name.strip().lower().replace("-", "_")
    try:
        return HASH_FUNCTIONS[key]
    except KeyError:
        raise UnsupportedHashException(name, supported=sorted(HASH_FUNCTIONS)) from None


def hash_name(hash_fn: HashFunction) -> str | None:
    """Return the registered name of a hash function, if it has one."""
    for name, fn in HASH_FUNCTIONS.items():
        if fn is hash_fn:
            return name
    return None


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string, optionally 0x-prefixed, to bytes.

    Args:
        hex_string: Hex string, with or without 0x prefix

    Returns:
        Decoded bytes

    Raises:
        HexFormatException: If the string has odd length or contains
                            non-hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
        >>> from_hex("deadbeef").hex()
        'deadbeef'
    """
    if not isinstance(hex_string, str):
        raise HexFormatException(
            f"Expected a hex string, got {type(hex_string).__name__}",
            value=repr(hex_string),
        )

    hex_content = hex_string
    if hex_content[:2] in ("0x", "0X"):
        hex_content = hex_content[2:]

    if len(hex_content) % 2 != 0:
        raise HexFormatException(
            f"Hex string must have even length, got length {len(hex_content)}",
            value=hex_string,
        )

    # bytes.fromhex tolerates whitespace between bytes, the wire format does not
    if any(ch.isspace() for ch in hex_content):
        raise HexFormatException("Hex string must not contain whitespace", value=hex_string)

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise HexFormatException(f"Invalid hex characters in string: {e}", value=hex_string) from e


def hash_concat(left: bytes, right: bytes, hash_fn: HashFunction = sha3_256) -> bytes:
    """
    Hash the concatenation of two byte sequences, left operand first.

    This is the Merkle parent rule: parent = H(left ++ right)
    """
    return hash_fn(left + right)


__all__ = [
    "HashFunction",
    "DEFAULT_HASH_ALGORITHM",
    "HASH_FUNCTIONS",
    "sha3_256",
    "sha256",
    "get_hash_function",
    "hash_name",
    "to_hex",
    "from_hex",
    "hash_concat",
]
