"""
Merkle Proofs Convenience Wrappers
Thin wrappers around the tree's proof functions for a cleaner API.

This module provides class-based interfaces:
- MerkleProver: Generate proofs and proof documents for leaves
- MerkleVerifier: Verify paths and proof documents

These are convenience wrappers around the functions in merkle_tree.py.
"""
from __future__ import annotations

from typing import Sequence

from merkle_core.crypto.hashing import HashFunction, from_hex, get_hash_function, sha3_256
from merkle_core.merkle.merkle_tree import MerkleTree, ProofPath, verify_path
from merkle_core.schemas.errors import MerkleVerificationException
from merkle_core.schemas.proof import ProofDocument, Side


class MerkleProver:
    """
    Convenience class for generating Merkle proofs.

    Example:
        >>> mt = MerkleTree(3, "0x" + "00" * 32)
        >>> len(MerkleProver.prove(mt, 1))
        2
    """

    @staticmethod
    def prove(tree: MerkleTree, leaf_index: int) -> ProofPath:
        """
        Inclusion path for a leaf.

        Args:
            tree: Tree holding the leaf
            leaf_index: Zero-based offset of the leaf

        Raises:
            TreeIndexException: If leaf_index does not name a leaf
        """
        return tree.proof(leaf_index)

    @staticmethod
    def prove_document(tree: MerkleTree, leaf_index: int) -> ProofDocument:
        """Inclusion path packaged as a ProofDocument."""
        return tree.proof_document(leaf_index)


class MerkleVerifier:
    """
    Convenience class for verifying Merkle proofs.

    Example:
        >>> mt = MerkleTree(3, "0x" + "00" * 32)
        >>> proof = MerkleProver.prove(mt, 1)
        >>> MerkleVerifier.verify(proof, mt.leaf(1), mt.root())
        True
    """

    @staticmethod
    def compute_root(
        path: Sequence[tuple[Side | str, str]],
        leaf_digest: str,
        hash_fn: HashFunction = sha3_256,
    ) -> str:
        """Candidate root for leaf_digest under path."""
        return verify_path(path, leaf_digest, hash_fn)

    @staticmethod
    def verify(
        path: Sequence[tuple[Side | str, str]],
        leaf_digest: str,
        root: str,
        hash_fn: HashFunction = sha3_256,
    ) -> bool:
        """
        Check that path takes leaf_digest to root.

        Roots are compared as decoded bytes, so hex case and prefix do not matter.
        """
        computed = verify_path(path, leaf_digest, hash_fn)
        return _same_digest(computed, root)

    @staticmethod
    def verify_document(document: ProofDocument, leaf_digest: str | None = None) -> bool:
        """
        Verify a ProofDocument against its own root.

        Args:
            document: Proof to check
            leaf_digest: Leaf to test; defaults to the leaf recorded in the document

        Raises:
            ValueError: If no leaf digest is available
            UnsupportedHashException: If the document names an unknown hash
        """
        leaf = leaf_digest if leaf_digest is not None else document.leaf
        if leaf is None:
            raise ValueError("Proof document has no leaf digest; pass one explicitly")
        hash_fn = get_hash_function(document.hash_algorithm)
        return MerkleVerifier.verify(document.pairs(), leaf, document.root, hash_fn)

    @staticmethod
    def assert_inclusion(
        path: Sequence[tuple[Side | str, str]],
        leaf_digest: str,
        root: str,
        hash_fn: HashFunction = sha3_256,
        leaf_index: int | None = None,
    ) -> None:
        """
        Like verify(), but raise instead of returning False.

        Raises:
            MerkleVerificationException: If the computed root differs from root
        """
        computed = verify_path(path, leaf_digest, hash_fn)
        if not _same_digest(computed, root):
            raise MerkleVerificationException(
                "Proof path does not reproduce the expected root",
                leaf_index=leaf_index,
                details={"expected_root": root, "computed_root": computed},
            )


def _same_digest(a: str, b: str) -> bool:
    return from_hex(a) == from_hex(b)


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
]
