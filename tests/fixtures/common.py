"""
Common constants and factories for merkle tree tests.
"""

from merkle_core.merkle import MerkleTree


ZERO_LEAF = "0x" + "00" * 32
AB_LEAF = "0x" + "ab" * 32
REPUNIT = int("1" * 64, 16)


def distinct_leaf(offset: int) -> str:
    """
    32-byte leaf digest, unique per offset.

    Offsets 0-15 give offset * 0x1111...1 (0x00..00 through 0xff..ff).
    Larger offsets give the offset itself, zero-padded to 32 bytes.
    """
    value = offset * REPUNIT if offset < 16 else offset
    return f"0x{value:064x}"


def make_distinct_tree(depth: int = 5) -> MerkleTree:
    """
    Tree built from all-zero leaves, then every leaf set to distinct_leaf(offset).

    Depth 5 gives 16 leaves: 0x00..00, 0x11..11, ..., 0xff..ff.
    """
    mt = MerkleTree(depth, ZERO_LEAF)
    for offset, index in enumerate(mt.leaf_range()):
        mt.set(index, distinct_leaf(offset))
    return mt
