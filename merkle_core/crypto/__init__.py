"""
Core cryptographic utilities.

Hash functions and the 0x-prefixed hex codec used for every digest.
"""
from .hashing import (
    DEFAULT_HASH_ALGORITHM,
    HASH_FUNCTIONS,
    HashFunction,
    sha3_256,
    sha256,
    get_hash_function,
    hash_name,
    to_hex,
    from_hex,
    hash_concat,
)

__all__ = [
    "DEFAULT_HASH_ALGORITHM",
    "HASH_FUNCTIONS",
    "HashFunction",
    "sha3_256",
    "sha256",
    "get_hash_function",
    "hash_name",
    "to_hex",
    "from_hex",
    "hash_concat",
]
