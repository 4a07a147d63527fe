"""
Merkle Core

Fixed-depth, array-indexed Merkle tree: index arithmetic, construction,
point mutation and inclusion proofs.

Usage:
    from merkle_core.merkle import MerkleTree

    mt = MerkleTree(5, "0x" + "00" * 32)
    mt.set(mt.leaf_range().start, "0x" + "11" * 32)
    path = mt.proof(0)
    assert mt.verify(path, "0x" + "11" * 32) == mt.root()
"""

__version__ = "0.1.0"
