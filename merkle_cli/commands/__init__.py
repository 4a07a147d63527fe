"""
CLI command modules.
"""

from merkle_cli.commands import root, proof, verify

__all__ = ["root", "proof", "verify"]
