"""
CLI Verify Command

Recompute a root from a proof document and a leaf digest, offline.

Usage:
    merkle verify proof.json [--leaf-digest HEX] [--root HEX] [--json]

Exit codes: 0 when the recomputed root matches, 2 when it does not,
1 on unreadable input.
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path

from pydantic import ValidationError

from merkle_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    print_json,
    report_error,
)
from merkle_core.crypto.hashing import from_hex, get_hash_function
from merkle_core.merkle import verify_path
from merkle_core.schemas.errors import MerkleTreeException
from merkle_core.schemas.proof import ProofDocument


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    leaf_index: int = 0
    leaf: str = ""
    expected_root: str = ""
    computed_root: str = ""
    ok: bool = False


def load_proof(path: Path) -> ProofDocument:
    """Read and validate a proof document."""
    return ProofDocument.model_validate_json(path.read_text())


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    proof_path = Path(args.proof_path)
    if not proof_path.exists():
        print(f"Error: Proof not found: {proof_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        document = load_proof(proof_path)
    except ValidationError as e:
        print(f"Error loading proof: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    leaf = args.leaf_digest or document.leaf
    if leaf is None:
        print("Error: proof has no leaf digest; pass --leaf-digest", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    expected_root = args.root or document.root

    try:
        hash_fn = get_hash_function(document.hash_algorithm)
        computed_root = verify_path(document.pairs(), leaf, hash_fn)
        ok = from_hex(computed_root) == from_hex(expected_root)
    except MerkleTreeException as e:
        return report_error(e, args.json)

    logger.info(f"Verified proof for leaf {document.leaf_index}: ok={ok}")
    summary = VerifySummary(
        proof_path=str(proof_path),
        leaf_index=document.leaf_index,
        leaf=leaf,
        expected_root=expected_root,
        computed_root=computed_root,
        ok=ok,
    )

    if args.json:
        print_json(asdict(summary))
    else:
        print(f"leaf_index: {summary.leaf_index}")
        print(f"expected_root: {summary.expected_root}")
        print(f"computed_root: {summary.computed_root}")
        print(f"ok: {str(summary.ok).lower()}")

    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED
