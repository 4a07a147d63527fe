"""
Schemas

Error taxonomy and proof wire models.
"""

from .errors import (
    ErrorCodes,
    HexFormatException,
    MerkleError,
    MerkleTreeException,
    MerkleVerificationException,
    ProofFormatException,
    TreeIndexException,
    UnsupportedHashException,
)

from .proof import (
    PROOF_SCHEMA_VERSION,
    ProofDocument,
    ProofStep,
    Side,
)

__all__ = [
    "ErrorCodes",
    "HexFormatException",
    "MerkleError",
    "MerkleTreeException",
    "MerkleVerificationException",
    "ProofFormatException",
    "TreeIndexException",
    "UnsupportedHashException",
    "PROOF_SCHEMA_VERSION",
    "ProofDocument",
    "ProofStep",
    "Side",
]
