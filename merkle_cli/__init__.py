"""
Merkle CLI

Command-line interface for building fixed-depth Merkle trees and
producing/checking inclusion proofs.

Usage:
    python -m merkle_cli root --depth 20 --leaf 0xabab...ab
    python -m merkle_cli proof 3 --depth 5 --out proof.json
    python -m merkle_cli verify proof.json --leaf-digest 0x33...33
"""

__version__ = "0.1.0"
