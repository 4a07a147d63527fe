"""
Shared helpers for commands that build a tree from CLI arguments.
"""

from __future__ import annotations

import argparse
import json
import sys
from argparse import Namespace
from typing import Any

from merkle_core.merkle import MerkleTree, build_tree
from merkle_core.schemas.errors import MerkleTreeException


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def parse_assignment(text: str) -> tuple[int, str]:
    """Parse an INDEX=HEX assignment given to --set."""
    index, sep, value = text.partition("=")
    if not sep or not index.strip() or not value.strip():
        raise argparse.ArgumentTypeError(f"expected INDEX=HEX, got {text!r}")
    try:
        return int(index.strip(), 0), value.strip()
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid index in {text!r}") from None


def add_tree_arguments(parser: argparse.ArgumentParser) -> None:
    """Options describing the tree a command operates on."""
    parser.add_argument(
        "--depth", "-d",
        type=int,
        default=None,
        help="Tree depth (default: from config)",
    )
    parser.add_argument(
        "--leaf", "-l",
        type=str,
        default=None,
        help="Initial digest for every leaf, hex (default: from config)",
    )
    parser.add_argument(
        "--set",
        dest="assignments",
        type=parse_assignment,
        action="append",
        default=[],
        metavar="INDEX=HEX",
        help="Set a leaf after construction. INDEX is the absolute array index "
             "(first leaf is 2**(depth-1) for depth >= 2). May be repeated.",
    )


def tree_from_args(args: Namespace) -> MerkleTree:
    """Build the tree described by the arguments and apply --set assignments."""
    tree = build_tree(args.depth, args.leaf, config=args.cli_config.runtime)
    for index, value in args.assignments:
        tree.set(index, value)
    return tree


def report_error(e: MerkleTreeException, output_json: bool) -> int:
    """Print a library error and return the runtime-error exit code."""
    if output_json:
        print(json.dumps(e.to_error_model().model_dump(), indent=2))
    else:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
    return EXIT_RUNTIME_ERROR


def print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))
