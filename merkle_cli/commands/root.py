"""
CLI Root and Show Commands

Build a tree, optionally mutate leaves, and print its root or every node.

Usage:
    merkle root --depth 20 --leaf 0xabab...ab
    merkle root --depth 5 --leaf 0x00...00 --set 16=0x11...11 --json
    merkle show --depth 3 --leaf 0x00...00
"""

from __future__ import annotations

import logging
from argparse import Namespace

from merkle_cli.commands.common import (
    EXIT_SUCCESS,
    print_json,
    report_error,
    tree_from_args,
)
from merkle_core.schemas.errors import MerkleTreeException


logger = logging.getLogger(__name__)


def root_cmd(args: Namespace) -> int:
    """
    Execute the root command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    try:
        tree = tree_from_args(args)
    except MerkleTreeException as e:
        return report_error(e, args.json)

    logger.info(f"Computed root for depth {tree.depth}")
    if args.json:
        print_json({
            "depth": tree.depth,
            "hash_algorithm": tree.hash_algorithm,
            "leaf_range": [tree.leaf_range().start, tree.leaf_range().stop],
            "root": tree.root(),
        })
    else:
        print(tree.root())
    return EXIT_SUCCESS


def show_cmd(args: Namespace) -> int:
    """Print every node of the tree, one per line."""
    try:
        tree = tree_from_args(args)
    except MerkleTreeException as e:
        return report_error(e, False)

    for line in tree.pretty_lines():
        print(line)
    return EXIT_SUCCESS
