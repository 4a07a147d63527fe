"""
Merkle Tree and Inclusion Proofs

This module provides:
- MerkleTree: fixed-depth tree built from a uniform initial leaf
- verify_path: recompute a candidate root from a leaf and its path
- build_tree: construct a tree from runtime configuration
- MerkleProver / MerkleVerifier: convenience wrappers

Usage:
    from merkle_core.merkle import MerkleTree, MerkleVerifier

    mt = MerkleTree(4, "0x" + "ab" * 32)
    path = mt.proof(2)
    assert MerkleVerifier.verify(path, mt.leaf(2), mt.root())
"""
from .merkle_tree import (
    MerkleTree,
    ProofPath,
    build_tree,
    leaf_level,
    verify_path,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
)

from merkle_core.schemas.proof import Side


__all__ = [
    # Core types
    "MerkleTree",
    "ProofPath",
    "Side",
    # Core functions
    "build_tree",
    "leaf_level",
    "verify_path",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
