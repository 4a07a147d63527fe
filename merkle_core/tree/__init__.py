"""
Indexed binary tree arithmetic.
"""
from .binary_tree import (
    NO_PARENT,
    BinaryTree,
    depth_and_offset,
    height,
    is_left_child,
    left_child,
    node_index,
    parent,
    right_child,
    sibling,
)

__all__ = [
    "NO_PARENT",
    "BinaryTree",
    "depth_and_offset",
    "height",
    "is_left_child",
    "left_child",
    "node_index",
    "parent",
    "right_child",
    "sibling",
]
