"""
CLI Proof Command

Generate an inclusion proof for one leaf and emit it as a JSON document.

Usage:
    merkle proof 3 --depth 5 --leaf 0x00...00 [--set INDEX=HEX ...] [--out proof.json]

The positional argument is the zero-based leaf offset, unlike --set which
takes an absolute array index.
"""

from __future__ import annotations

import logging
from argparse import Namespace
from pathlib import Path

from merkle_cli.commands.common import (
    EXIT_SUCCESS,
    report_error,
    tree_from_args,
)
from merkle_core.schemas.errors import MerkleTreeException


logger = logging.getLogger(__name__)


def proof_cmd(args: Namespace) -> int:
    """
    Execute the proof command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    try:
        tree = tree_from_args(args)
        document = tree.proof_document(args.leaf_index)
    except MerkleTreeException as e:
        return report_error(e, False)

    payload = document.model_dump_json(indent=2)
    if args.out:
        out_path = Path(args.out)
        out_path.write_text(payload + "\n")
        logger.info(f"Wrote proof for leaf {args.leaf_index} to {out_path}")
        print(f"root: {document.root}")
        print(f"proof: {out_path}")
    else:
        print(payload)
    return EXIT_SUCCESS
