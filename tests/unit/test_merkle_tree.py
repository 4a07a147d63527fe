"""
Merkle Tree Unit Tests
Tests for merkle_core/merkle/merkle_tree.py

Tests:
1. Construction for depth 0, 1 and >= 2, with regression roots
2. Node invariant after construction and after mutation
3. Per-construction memoization keeps hash calls at one per level
4. set() validation happens before any write
5. rebalance() touches only the root path and is idempotent
6. build_tree() honours runtime configuration
"""
import pytest

from fixtures.common import AB_LEAF, ZERO_LEAF, distinct_leaf, make_distinct_tree

from merkle_core.config.runtime import RuntimeConfig
from merkle_core.crypto.hashing import from_hex, sha256, sha3_256, to_hex
from merkle_core.merkle import MerkleTree, build_tree, leaf_level
from merkle_core.schemas.errors import (
    ErrorCodes,
    HexFormatException,
    TreeIndexException,
    UnsupportedHashException,
)
from merkle_core.tree.binary_tree import left_child, parent, right_child


DEPTH_20_AB_ROOT = "0xd4490f4d374ca8a44685fe9471c5b8dbe58cdffd13d30d9aba15dd29efb92930"
DEPTH_1_AB_ROOT = "0x699fc94ff1ec83f1abf531030e324003e7758298281645245f7c698425a5e0e7"
DEPTH_5_DISTINCT_ROOT = "0x57054e43fa56333fd51343b09460d48b9204999c376624f52480c5593b91eff4"


class CountingHash:
    """sha3_256 that records how often it was called."""

    def __init__(self):
        self.calls = 0

    def __call__(self, data: bytes) -> bytes:
        self.calls += 1
        return sha3_256(data)


def assert_invariant(mt: MerkleTree) -> None:
    """Every internal node is H(left + right)."""
    nodes = mt.nodes()
    for i in range(1, mt.leaf_range().start):
        expected = mt.hash_fn(nodes[left_child(i)] + nodes[right_child(i)])
        assert nodes[i] == expected, f"Invariant broken at index {i}"


class TestConstruction:
    """Tests for tree construction."""

    def test_depth_zero_is_root_only(self):
        """Depth 0: the single node holds the initial leaf unhashed."""
        mt = MerkleTree(0, AB_LEAF)

        assert mt.root() == AB_LEAF
        assert len(mt) == 2

    def test_depth_one_root(self):
        """Depth 1: two leaves, root = H(leaf + leaf)."""
        mt = MerkleTree(1, AB_LEAF)
        leaf = from_hex(AB_LEAF)

        assert mt.root() == DEPTH_1_AB_ROOT
        assert mt.root() == to_hex(sha3_256(leaf + leaf))
        assert mt.get(2) == leaf
        assert mt.get(3) == leaf

    @pytest.mark.slow
    def test_depth_twenty_regression_root(self):
        mt = MerkleTree(20, AB_LEAF)

        assert mt.root() == DEPTH_20_AB_ROOT

    def test_unprefixed_initial_leaf(self):
        assert MerkleTree(1, AB_LEAF[2:]).root() == DEPTH_1_AB_ROOT

    def test_initial_leaf_must_be_hex(self):
        with pytest.raises(HexFormatException):
            MerkleTree(20, "Unexpected")

    def test_negative_depth_rejected(self):
        with pytest.raises(TreeIndexException) as exc_info:
            MerkleTree(-1, AB_LEAF)

        assert exc_info.value.code == ErrorCodes.INVALID_DEPTH

    def test_layout_allocates_two_to_the_depth_slots(self):
        mt = MerkleTree(6, ZERO_LEAF)

        assert len(mt) == 64
        assert mt.leaf_range() == range(32, 64)

    @pytest.mark.parametrize("depth", [2, 3, 4, 7])
    def test_invariant_holds_after_construction(self, depth):
        assert_invariant(MerkleTree(depth, AB_LEAF))

    def test_depth_two_matches_manual_computation(self):
        mt = MerkleTree(2, AB_LEAF)
        leaf = from_hex(AB_LEAF)

        assert mt.leaf_range() == range(2, 4)
        assert mt.root() == to_hex(sha3_256(leaf + leaf))

    def test_memoization_hashes_once_per_level(self):
        """A uniform tree costs depth - 1 hash calls, not 2**(depth-1) - 1."""
        counter = CountingHash()
        mt = MerkleTree(10, AB_LEAF, hash_fn=counter)

        assert counter.calls == 9
        assert_invariant(mt)

    def test_memoization_does_not_leak_between_trees(self):
        """Each construction starts with an empty cache."""
        first = CountingHash()
        MerkleTree(8, AB_LEAF, hash_fn=first)
        second = CountingHash()
        MerkleTree(8, AB_LEAF, hash_fn=second)

        assert first.calls == second.calls == 7

    def test_custom_hash_changes_every_digest(self):
        sha3_tree = MerkleTree(4, AB_LEAF)
        sha2_tree = MerkleTree(4, AB_LEAF, hash_fn=sha256)

        assert sha3_tree.root() != sha2_tree.root()
        assert sha2_tree.hash_algorithm == "sha256"
        assert_invariant(sha2_tree)


class TestQueries:
    """Tests for root(), leaf_range() and friends."""

    def test_root_is_prefixed_hex(self):
        root = MerkleTree(3, ZERO_LEAF).root()

        assert root.startswith("0x")
        assert len(root) == 2 + 64

    @pytest.mark.parametrize(
        "depth,expected",
        [(0, range(1, 2)), (1, range(2, 4)), (2, range(2, 4)), (5, range(16, 32))],
    )
    def test_leaf_range(self, depth, expected):
        assert MerkleTree(depth, ZERO_LEAF).leaf_range() == expected

    def test_leaf_level(self):
        assert [leaf_level(d) for d in range(5)] == [0, 1, 1, 2, 3]

    def test_leaf_by_offset(self, distinct_tree):
        assert distinct_tree.leaf(0) == ZERO_LEAF
        assert distinct_tree.leaf(3) == "0x" + "33" * 32
        assert distinct_tree.leaf_count() == 16

    def test_get_rejects_reserved_slot(self):
        with pytest.raises(TreeIndexException):
            MerkleTree(3, ZERO_LEAF).get(0)

    def test_nodes_is_a_copy(self):
        mt = MerkleTree(3, ZERO_LEAF)
        mt.nodes()[1] = b"tampered"

        assert mt.get(1) != b"tampered"

    def test_pretty_lines(self):
        mt = MerkleTree(2, AB_LEAF)
        lines = list(mt.pretty_lines())

        assert len(lines) == 3
        assert lines[0] == f"Index 1 and value {mt.root()}"
        assert lines[2] == f"Index 3 and value {AB_LEAF}"


class TestMutation:
    """Tests for set() and rebalance()."""

    def test_ad_hoc_mutation_regression_root(self, distinct_tree):
        assert distinct_tree.root() == DEPTH_5_DISTINCT_ROOT

    def test_invariant_holds_after_mutation(self, distinct_tree):
        assert_invariant(distinct_tree)

    def test_thirty_two_distinct_leaves(self):
        """Depth 6 fills offsets past 15 with distinct 32-byte digests."""
        mt = make_distinct_tree(6)
        leaves = [mt.leaf(offset) for offset in range(mt.leaf_count())]

        assert len(leaves) == 32
        assert len(set(leaves)) == 32
        assert all(len(from_hex(leaf)) == 32 for leaf in leaves)
        assert_invariant(mt)

    def test_mutation_only_touches_root_path(self):
        """Setting leaf 0 rewrites its ancestors and nothing else."""
        mt = make_distinct_tree(5)
        before = mt.nodes()

        first_leaf = mt.leaf_range().start
        mt.set(first_leaf, "0x" + "ee" * 32)
        after = mt.nodes()

        changed = {i for i in range(1, len(before)) if before[i] != after[i]}
        path = set()
        current = first_leaf
        while current >= 1:
            path.add(current)
            current = parent(current)
        assert changed == path

    def test_set_zero_leaf_on_distinct_tree(self):
        """Leaf 0 of a distinct tree back to all-zero leaves siblings untouched."""
        mt = make_distinct_tree(5)
        mt.set(16, distinct_leaf(9))
        before = mt.nodes()

        mt.set(16, ZERO_LEAF)
        after = mt.nodes()

        for i in (17, 9, 5, 3):
            assert before[i] == after[i]
        for i in (16, 8, 4, 2, 1):
            assert before[i] != after[i]
        assert mt.root() == DEPTH_5_DISTINCT_ROOT

    def test_rebalance_hashes_once_per_level(self):
        counter = CountingHash()
        mt = MerkleTree(6, ZERO_LEAF, hash_fn=counter)
        counter.calls = 0

        mt.set(40, AB_LEAF)

        assert counter.calls == 5

    def test_rebalance_is_idempotent(self, distinct_tree):
        distinct_tree.rebalance(20)
        first = distinct_tree.root()
        distinct_tree.rebalance(20)

        assert distinct_tree.root() == first == DEPTH_5_DISTINCT_ROOT

    def test_rebalance_never_writes_reserved_slot(self, distinct_tree):
        distinct_tree.rebalance(31)

        assert distinct_tree.nodes()[0] == b""

    def test_set_non_leaf_rejected(self):
        mt = MerkleTree(5, ZERO_LEAF)

        for index in (0, 1, 15, 32):
            with pytest.raises(TreeIndexException, match="non-leaf") as exc_info:
                mt.set(index, AB_LEAF)
            assert exc_info.value.code == ErrorCodes.NON_LEAF_MUTATION

    def test_set_bad_hex_leaves_tree_untouched(self):
        mt = MerkleTree(5, ZERO_LEAF)
        before = mt.nodes()

        with pytest.raises(HexFormatException):
            mt.set(16, "0xnothex")

        assert mt.nodes() == before

    def test_set_on_depth_zero_replaces_root(self):
        mt = MerkleTree(0, ZERO_LEAF)
        mt.set(1, AB_LEAF)

        assert mt.root() == AB_LEAF

    def test_set_on_depth_one_updates_root(self):
        mt = MerkleTree(1, ZERO_LEAF)
        mt.set(3, AB_LEAF)

        expected = sha3_256(from_hex(ZERO_LEAF) + from_hex(AB_LEAF))
        assert mt.root() == to_hex(expected)

    def test_same_leaves_same_root_regardless_of_order(self):
        forward = MerkleTree(4, ZERO_LEAF)
        backward = MerkleTree(4, ZERO_LEAF)
        leaves = list(forward.leaf_range())

        for offset, index in enumerate(leaves):
            forward.set(index, distinct_leaf(offset))
        for offset, index in reversed(list(enumerate(leaves))):
            backward.set(index, distinct_leaf(offset))

        assert forward.root() == backward.root()


class TestBuildTree:
    """Tests for build_tree() with runtime configuration."""

    def test_defaults_from_config(self):
        config = RuntimeConfig.from_dict({
            "tree": {"default_depth": 1, "initial_leaf": AB_LEAF},
        })

        assert build_tree(config=config).root() == DEPTH_1_AB_ROOT

    def test_explicit_arguments_win(self):
        config = RuntimeConfig.from_dict({"tree": {"default_depth": 7}})

        mt = build_tree(0, AB_LEAF, config=config)
        assert mt.depth == 0

    def test_max_depth_enforced(self):
        config = RuntimeConfig.from_dict({"tree": {"max_depth": 4}})

        with pytest.raises(TreeIndexException) as exc_info:
            build_tree(5, ZERO_LEAF, config=config)

        assert exc_info.value.code == ErrorCodes.INVALID_DEPTH
        assert exc_info.value.details["max_depth"] == 4

    def test_default_max_depth_rejects_unallocatable_tree(self):
        """Depth 32 would need 2**32 slots; the default cap stops it first."""
        config = RuntimeConfig()

        assert config.tree.max_depth == 24
        with pytest.raises(TreeIndexException) as exc_info:
            build_tree(32, ZERO_LEAF, config=config)

        assert exc_info.value.code == ErrorCodes.INVALID_DEPTH

    def test_configured_hash_algorithm(self):
        config = RuntimeConfig.from_dict({"tree": {"hash_algorithm": "sha256"}})

        mt = build_tree(3, ZERO_LEAF, config=config)
        assert mt.hash_fn is sha256
        assert mt.root() == MerkleTree(3, ZERO_LEAF, hash_fn=sha256).root()

    def test_unknown_hash_algorithm(self):
        config = RuntimeConfig.from_dict({"tree": {"hash_algorithm": "whirlpool"}})

        with pytest.raises(UnsupportedHashException):
            build_tree(3, ZERO_LEAF, config=config)
