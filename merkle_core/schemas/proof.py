"""
Schemas
File: proof.py

Purpose: Wire models for Merkle inclusion proofs.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


PROOF_SCHEMA_VERSION = "1.0"

_HEX_PATTERN = r"^0[xX]([0-9a-fA-F]{2})*$"


class Side(str, Enum):
    """
    Which child the *current* node is at one level of a proof path.

    The sibling is always the opposite side.
    """

    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def of(cls, index: int) -> "Side":
        """Side of a node given its array index (even = left, odd = right)."""
        return cls.LEFT if index % 2 == 0 else cls.RIGHT


class ProofStep(BaseModel):
    """One level of an inclusion path."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    side: Side = Field(..., description="Side of the current node at this level")
    sibling: str = Field(..., description="0x-prefixed sibling digest", pattern=_HEX_PATTERN)


class ProofDocument(BaseModel):
    """
    Self-describing inclusion proof, as written by `merkle proof`.

    `path` is in leaf-to-root order. `leaf_index` is the zero-based offset
    within the leaf range, not an array index.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default=PROOF_SCHEMA_VERSION)
    hash_algorithm: str = Field(..., min_length=1)
    depth: int = Field(..., ge=0)
    leaf_index: int = Field(..., ge=0, description="Leaf-relative offset")
    leaf: str | None = Field(default=None, pattern=_HEX_PATTERN)
    root: str = Field(..., pattern=_HEX_PATTERN)
    path: list[ProofStep] = Field(default_factory=list)

    @field_validator("root", "leaf")
    @classmethod
    def _lowercase_prefix(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return "0x" + v[2:].lower()

    def pairs(self) -> list[tuple[Side, str]]:
        """The path as (side, sibling) tuples."""
        return [(step.side, step.sibling) for step in self.path]


__all__ = [
    "PROOF_SCHEMA_VERSION",
    "Side",
    "ProofStep",
    "ProofDocument",
]
