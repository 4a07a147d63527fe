"""
Indexed Binary Tree
Pointer-free index arithmetic for a complete binary tree stored as a flat,
one-based array.

Slot 0 of the array is reserved and never addresses a node, so that for
every index i >= 1:

    parent(i) = i // 2
    left(i)   = 2 * i
    right(i)  = 2 * i + 1

A node is equivalently addressed by (depth, offset) with 0 <= offset < 2**depth
and index = 2**depth + offset.

This module provides:
- Pure index functions (node_index, depth_and_offset, parent, left_child,
  right_child, height)
- BinaryTree: a small payload container laid out with the same arithmetic
"""
from __future__ import annotations

from typing import Generic, Optional, TypeVar

from merkle_core.schemas.errors import TreeIndexException


T = TypeVar("T")

# Parent of the root; never a valid node address.
NO_PARENT = 0


def node_index(depth: int, offset: int) -> int:
    """
    Return the array index of the node at (depth, offset).

    The caller must keep 0 <= offset < 2**depth. An out-of-range offset is
    not guarded and yields an index belonging to another depth.

    Example:
        >>> node_index(0, 0)
        1
        >>> node_index(3, 7)
        15
    """
    return (1 << depth) + offset


def depth_and_offset(index: int) -> tuple[int, int]:
    """
    Inverse of node_index.

    Raises:
        TreeIndexException: If index < 1 (slot 0 is reserved)

    Example:
        >>> depth_and_offset(15)
        (3, 7)
    """
    if index < 1:
        raise TreeIndexException(
            f"Index {index} is not a node address; this tree uses one-based indexing",
            index=index,
        )
    depth = index.bit_length() - 1
    return depth, index - (1 << depth)


def parent(index: int) -> int:
    """Parent index; the root's parent is the reserved sentinel 0."""
    return index // 2


def left_child(index: int) -> int:
    return 2 * index


def right_child(index: int) -> int:
    return 2 * index + 1


def sibling(index: int) -> int:
    """The other child of index's parent (flip the lowest bit)."""
    return index ^ 1


def is_left_child(index: int) -> bool:
    return index % 2 == 0


def height(node_count: int) -> int:
    """
    Depth implied by a fully populated array of node_count slots
    (reserved slot excluded): floor(log2(node_count + 1)).
    """
    if node_count < 0:
        raise TreeIndexException(f"Node count must be non-negative, got {node_count}")
    return (node_count + 1).bit_length() - 1


class BinaryTree(Generic[T]):
    """
    Complete binary tree of arbitrary payloads in array form.

    Nodes are appended in breadth-first order, so the array is always a
    complete tree: every level full except possibly the last, which fills
    left to right.

    Example:
        >>> bt = BinaryTree(0)
        >>> bt.add(1)
        >>> bt.array_representation()
        [None, 0, 1]
    """

    def __init__(self, root_value: T) -> None:
        self._nodes: list[Optional[T]] = [None, root_value]

    def add(self, value: T) -> None:
        """Append a node at the next free position."""
        self._nodes.append(value)

    def get(self, index: int) -> T:
        """
        Payload stored at index.

        Raises:
            TreeIndexException: If index is 0 or past the last node
        """
        if index < 1 or index >= len(self._nodes):
            raise TreeIndexException(
                f"Index {index} out of range for tree with {len(self)} nodes",
                index=index,
            )
        return self._nodes[index]  # type: ignore[return-value]

    def array_representation(self) -> list[Optional[T]]:
        """Copy of the backing array, reserved slot included."""
        return list(self._nodes)

    def height(self) -> int:
        return height(len(self))

    def __len__(self) -> int:
        return len(self._nodes) - 1

    # Index arithmetic is the same for every tree; exposed here for convenience.
    node_index = staticmethod(node_index)
    depth_and_offset = staticmethod(depth_and_offset)
    parent = staticmethod(parent)
    left_child = staticmethod(left_child)
    right_child = staticmethod(right_child)


__all__ = [
    "NO_PARENT",
    "node_index",
    "depth_and_offset",
    "parent",
    "left_child",
    "right_child",
    "sibling",
    "is_left_child",
    "height",
    "BinaryTree",
]
