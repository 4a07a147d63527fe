"""
Merkle Tree Implementation
Fixed-depth, array-indexed Merkle tree with point mutation and inclusion proofs.

This module provides:
- MerkleTree: construction from a uniform initial leaf, root query,
  leaf mutation with root-path rebalancing, proof generation
- verify_path: recompute a candidate root from a leaf and its proof path
- build_tree: construct a tree from runtime configuration

Layout (Hard Contracts):
1. One digest per node in a flat list, slot 0 reserved and unused
2. nodes[1] is the root; children of i are 2i and 2i+1
3. Leaf level L: 0 for depth 0, 1 for depth 1, depth - 1 for depth >= 2.
   Leaves occupy [2**L, 2**(L+1))
4. Every internal node i satisfies nodes[i] == H(nodes[2i] + nodes[2i+1])
   after construction and after every completed set()

Indexing conventions:
- set() and rebalance() take an absolute array index
- proof() takes a zero-based offset within the leaf range
"""
from __future__ import annotations

import logging
from typing import Iterator, Sequence

from merkle_core.config.runtime import RuntimeConfig, get_default_config
from merkle_core.crypto.hashing import (
    HashFunction,
    from_hex,
    get_hash_function,
    hash_concat,
    hash_name,
    sha3_256,
    to_hex,
)
from merkle_core.schemas.errors import ErrorCodes, ProofFormatException, TreeIndexException
from merkle_core.schemas.proof import ProofDocument, ProofStep, Side
from merkle_core.tree.binary_tree import (
    left_child,
    parent,
    right_child,
    sibling,
)


logger = logging.getLogger(__name__)

ProofPath = list[tuple[Side, str]]


def leaf_level(depth: int) -> int:
    """Level holding the leaves for a tree of the given depth."""
    if depth < 2:
        return depth
    return depth - 1


class MerkleTree:
    """
    Complete Merkle tree of fixed depth.

    Not safe for concurrent use: set() and rebalance() mutate the node
    array in place. Callers sharing an instance across threads must
    serialize access themselves.

    Example:
        >>> mt = MerkleTree(0, "0x" + "ab" * 32)
        >>> mt.root() == "0x" + "ab" * 32
        True
    """

    def __init__(
        self,
        depth: int,
        initial_leaf: str,
        hash_fn: HashFunction = sha3_256,
    ) -> None:
        """
        Build a tree whose leaves all hold initial_leaf.

        Args:
            depth: Tree depth (>= 0), fixed for the life of the tree
            initial_leaf: Hex digest, optionally 0x-prefixed
            hash_fn: One-way compression function H

        Raises:
            HexFormatException: If initial_leaf is not valid hex
            TreeIndexException: If depth is negative
        """
        if depth < 0:
            raise TreeIndexException(
                f"Depth must be non-negative, got {depth}",
                code=ErrorCodes.INVALID_DEPTH,
                details={"depth": depth},
            )

        self._depth = depth
        self._hash_fn = hash_fn
        self._nodes: list[bytes] = self._build(depth, from_hex(initial_leaf))

    def _build(self, depth: int, leaf: bytes) -> list[bytes]:
        if depth == 0:
            return [b"", leaf]

        if depth == 1:
            return [b"", hash_concat(leaf, leaf, self._hash_fn), leaf, leaf]

        size = 1 << depth
        nodes: list[bytes] = [b""] * size

        first_leaf = 1 << (depth - 1)
        for i in range(first_leaf, size):
            nodes[i] = leaf

        # Scoped to this call. With a uniform leaf, each level has a single
        # distinct concatenation, so this costs one hash per level.
        seen: dict[str, bytes] = {}
        hash_calls = 0
        cache_hits = 0

        for current_depth in range(depth - 2, 0, -1):
            for i in range(1 << current_depth, 1 << (current_depth + 1)):
                concatenation = nodes[left_child(i)] + nodes[right_child(i)]
                key = concatenation.hex()
                hashed = seen.get(key)
                if hashed is None:
                    hashed = self._hash_fn(concatenation)
                    seen[key] = hashed
                    hash_calls += 1
                else:
                    cache_hits += 1
                nodes[i] = hashed

        nodes[1] = hash_concat(nodes[left_child(1)], nodes[right_child(1)], self._hash_fn)
        hash_calls += 1

        logger.debug(
            f"Built Merkle tree depth={depth} nodes={size - 1} "
            f"hash_calls={hash_calls} cache_hits={cache_hits}"
        )
        return nodes

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def hash_fn(self) -> HashFunction:
        return self._hash_fn

    @property
    def hash_algorithm(self) -> str:
        """Registered name of the hash function, or "custom"."""
        return hash_name(self._hash_fn) or "custom"

    def root(self) -> str:
        """Root digest as a 0x-prefixed hex string."""
        return to_hex(self._nodes[1])

    def get(self, index: int) -> bytes:
        """Raw digest stored at an array index."""
        self._check_node(index)
        return self._nodes[index]

    def nodes(self) -> list[bytes]:
        """Copy of the digest array, reserved slot included."""
        return list(self._nodes)

    def leaf_range(self) -> range:
        """Half-open range of array indices holding leaves."""
        level = leaf_level(self._depth)
        return range(1 << level, 1 << (level + 1))

    def leaf_count(self) -> int:
        return len(self.leaf_range())

    def leaf_index(self, offset: int) -> int:
        """
        Translate a zero-based leaf offset to its array index.

        Raises:
            TreeIndexException: If offset does not name a leaf
        """
        leaves = self.leaf_range()
        if offset < 0 or offset >= len(leaves):
            raise TreeIndexException(
                f"Leaf offset {offset} out of range for {len(leaves)} leaves",
                index=offset,
                code=ErrorCodes.NON_LEAF_PROOF,
            )
        return leaves[offset]

    def leaf(self, offset: int) -> str:
        """Digest of the leaf at a zero-based offset, 0x-prefixed."""
        return to_hex(self._nodes[self.leaf_index(offset)])

    def pretty_lines(self) -> Iterator[str]:
        """One line per node, in array order."""
        for i in range(1, len(self._nodes)):
            yield f"Index {i} and value {to_hex(self._nodes[i])}"

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"MerkleTree(depth={self._depth}, root={self.root()!r})"

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set(self, index: int, value: str) -> None:
        """
        Set the digest of a leaf and rebalance its root path.

        Args:
            index: Absolute array index of the leaf (see leaf_range())
            value: Hex digest, optionally 0x-prefixed

        Raises:
            TreeIndexException: If index is not a leaf
            HexFormatException: If value is not valid hex
        """
        if index not in self.leaf_range():
            raise TreeIndexException(
                f"Attempt to mutate non-leaf index {index}",
                index=index,
                code=ErrorCodes.NON_LEAF_MUTATION,
                details={"leaf_range": [self.leaf_range().start, self.leaf_range().stop]},
            )

        digest = from_hex(value)
        self._nodes[index] = digest
        logger.debug(f"Set leaf index={index} value={to_hex(digest)}")
        self.rebalance(index)

    def rebalance(self, index: int) -> None:
        """
        Recompute every ancestor of index, bottom-up, ending at the root.

        Costs one hash per level above index; the reserved slot is never
        written.
        """
        self._check_node(index)
        current = index
        while current > 1:
            up = parent(current)
            self._nodes[up] = hash_concat(
                self._nodes[left_child(up)],
                self._nodes[right_child(up)],
                self._hash_fn,
            )
            current = up

    # ------------------------------------------------------------------
    # Proofs
    # ------------------------------------------------------------------

    def proof(self, leaf_index: int) -> ProofPath:
        """
        Inclusion path for the leaf at a zero-based offset.

        Each entry is (side of the current node, 0x-prefixed sibling digest),
        in leaf-to-root order. Its length is the leaf level of the tree.

        Raises:
            TreeIndexException: If leaf_index does not name a leaf
        """
        current = self.leaf_index(leaf_index)
        path: ProofPath = []
        while current > 1:
            path.append((Side.of(current), to_hex(self._nodes[sibling(current)])))
            current = parent(current)

        logger.debug(f"Generated proof for leaf {leaf_index} with {len(path)} steps")
        return path

    def proof_document(self, leaf_index: int) -> ProofDocument:
        """Inclusion path packaged with the leaf, root and tree parameters."""
        path = self.proof(leaf_index)
        return ProofDocument(
            hash_algorithm=self.hash_algorithm,
            depth=self._depth,
            leaf_index=leaf_index,
            leaf=self.leaf(leaf_index),
            root=self.root(),
            path=[ProofStep(side=side, sibling=sib) for side, sib in path],
        )

    def verify(
        self,
        path: Sequence[tuple[Side | str, str]],
        leaf_digest: str,
    ) -> str:
        """
        Candidate root for leaf_digest under path, hashed with this tree's H.

        Use verify_path directly to check a proof without the tree.
        """
        return verify_path(path, leaf_digest, self._hash_fn)

    def _check_node(self, index: int) -> None:
        if index < 1 or index >= len(self._nodes):
            raise TreeIndexException(
                f"Index {index} out of range for tree of depth {self._depth}",
                index=index,
            )


def verify_path(
    path: Sequence[tuple[Side | str, str]],
    leaf_digest: str,
    hash_fn: HashFunction = sha3_256,
) -> str:
    """
    Fold a proof path over a leaf digest and return the candidate root.

    The caller decides inclusion by comparing the result with the published
    root.

    Algorithm:
    1. Start with the leaf digest
    2. For each (side, sibling), leaf to root:
       - LEFT:  acc = H(acc + sibling)
       - RIGHT: acc = H(sibling + acc)
    3. Return acc, 0x-prefixed

    Raises:
        HexFormatException: If the leaf or any sibling is not valid hex
        ProofFormatException: If a side is not "left"/"right"
    """
    acc = from_hex(leaf_digest)
    for step, (side, sibling_digest) in enumerate(path):
        sib = from_hex(sibling_digest)
        try:
            side = Side(side)
        except ValueError:
            raise ProofFormatException(
                f"Invalid side {side!r} in proof step {step}", step=step
            ) from None
        if side is Side.LEFT:
            acc = hash_concat(acc, sib, hash_fn)
        else:
            acc = hash_concat(sib, acc, hash_fn)
    return to_hex(acc)


def build_tree(
    depth: int | None = None,
    initial_leaf: str | None = None,
    config: RuntimeConfig | None = None,
) -> MerkleTree:
    """
    Construct a MerkleTree using runtime configuration for anything not given.

    Raises:
        TreeIndexException: If depth exceeds the configured maximum
        UnsupportedHashException: If the configured hash is unknown
    """
    config = config or get_default_config()
    tree_config = config.tree

    if depth is None:
        depth = tree_config.default_depth
    if initial_leaf is None:
        initial_leaf = tree_config.initial_leaf

    if depth > tree_config.max_depth:
        raise TreeIndexException(
            f"Depth {depth} exceeds configured maximum {tree_config.max_depth}",
            code=ErrorCodes.INVALID_DEPTH,
            details={"depth": depth, "max_depth": tree_config.max_depth},
        )

    hash_fn = get_hash_function(tree_config.hash_algorithm)
    logger.info(f"Building Merkle tree depth={depth} hash={tree_config.hash_algorithm}")
    return MerkleTree(depth, initial_leaf, hash_fn=hash_fn)


__all__ = [
    "ProofPath",
    "leaf_level",
    "MerkleTree",
    "verify_path",
    "build_tree",
]
