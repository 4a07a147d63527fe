"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m merkle_cli root [--depth D] [--leaf HEX] [--set INDEX=HEX ...] [--json]
    python -m merkle_cli show [--depth D] [--leaf HEX] [--set INDEX=HEX ...]
    python -m merkle_cli proof OFFSET [--depth D] [--leaf HEX] [--set ...] [--out PATH]
    python -m merkle_cli verify PROOF [--leaf-digest HEX] [--root HEX] [--json]
    python -m merkle_cli config --init | --show

Environment Variables:
    MERKLE_HASH_ALGORITHM       Hash function (sha3_256, sha256)
    MERKLE_MAX_DEPTH            Largest depth accepted (default: 24)
    MERKLE_DEFAULT_DEPTH        Depth when --depth is omitted (default: 20)
    MERKLE_INITIAL_LEAF         Leaf digest when --leaf is omitted
    MERKLE_LOG_LEVEL            Log level (default: INFO)
    MERKLE_LOG_FILE             Optional log file
    MERKLE_OUTPUT_FORMAT        human or json (json implies --json)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from merkle_cli import __version__
from merkle_cli.commands import proof, root, verify
from merkle_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    add_tree_arguments,
)
from merkle_cli.config import config_to_dict, get_default_config_template, load_config


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkle",
        description="Build fixed-depth Merkle trees, generate and verify inclusion proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./merkle.json or ~/.config/merkle/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Print the root digest of a tree",
        description="Build a tree from a uniform initial leaf, apply --set mutations, print the root.",
    )
    add_tree_arguments(root_parser)
    root_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    root_parser.set_defaults(func=root.root_cmd)

    # --- show command ---
    show_parser = subparsers.add_parser(
        "show",
        help="Print every node digest of a tree",
        description="Build a tree and print one line per node, in array order.",
    )
    add_tree_arguments(show_parser)
    show_parser.set_defaults(func=root.show_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Generate an inclusion proof for a leaf",
        description="Build a tree and write the inclusion proof for one leaf as JSON.",
    )
    proof_parser.add_argument(
        "leaf_index",
        type=int,
        help="Zero-based offset of the leaf within the leaf range (not an array index)",
    )
    add_tree_arguments(proof_parser)
    proof_parser.add_argument(
        "--out", "-o",
        type=str,
        default=None,
        help="Write the proof to this file instead of stdout",
    )
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof offline",
        description="Recompute the root from a proof and a leaf digest and compare.",
    )
    verify_parser.add_argument(
        "proof_path",
        type=str,
        help="Path to a proof document written by `merkle proof`",
    )
    verify_parser.add_argument(
        "--leaf-digest",
        type=str,
        default=None,
        help="Leaf digest to test (default: leaf recorded in the proof)",
    )
    verify_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Expected root (default: root recorded in the proof)",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="merkle.json",
        help="Path for config file (default: merkle.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        return EXIT_SUCCESS

    print(json.dumps(config_to_dict(args.cli_config), indent=2))
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.runtime.logging.level
    setup_logging(level=log_level, log_file=config.runtime.logging.file)

    # Attach config to args for commands to use
    args.cli_config = config
    if hasattr(args, "json") and config.default_output_format == "json":
        args.json = True

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if getattr(args, "debug", False) or log_level == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
