"""
Schemas
File: errors.py

Purpose: Error taxonomy for the Merkle tree library.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Input format errors
    HEX_FORMAT_ERROR = "HEX_FORMAT_ERROR"

    # Domain / usage errors
    INVALID_NODE_INDEX = "INVALID_NODE_INDEX"
    NON_LEAF_MUTATION = "NON_LEAF_MUTATION"
    NON_LEAF_PROOF = "NON_LEAF_PROOF"
    INVALID_DEPTH = "INVALID_DEPTH"

    # Configuration errors
    UNSUPPORTED_HASH = "UNSUPPORTED_HASH"

    # Merkle & commitment errors
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"
    ROOT_MISMATCH = "ROOT_MISMATCH"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Base error model for structured error communication.

    Used by the CLI to report failures as JSON without a traceback.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.HEX_FORMAT_ERROR],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "MerkleTreeException":
        """Convert this error model to a raised exception."""
        return MerkleTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleTreeException(Exception):
    """
    Base exception for all Merkle tree errors.

    Every operation is deterministic, so none of these is retryable:
    repeating the call with the same inputs raises the same error.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLE_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> MerkleError:
        """Convert this exception to a MerkleError model."""
        return MerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class HexFormatException(MerkleTreeException, ValueError):
    """Raised when a digest string is not valid hexadecimal."""

    def __init__(
        self,
        message: str,
        value: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if value is not None:
            full_details["value"] = value
        super().__init__(
            message=message,
            code=ErrorCodes.HEX_FORMAT_ERROR,
            details=full_details,
        )


class TreeIndexException(MerkleTreeException, IndexError):
    """
    Raised on a domain/usage error: an index or depth outside the
    documented domain of an operation.
    """

    def __init__(
        self,
        message: str,
        index: int | None = None,
        code: str = ErrorCodes.INVALID_NODE_INDEX,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if index is not None:
            full_details["index"] = index
        super().__init__(
            message=message,
            code=code,
            details=full_details,
        )


class UnsupportedHashException(MerkleTreeException, ValueError):
    """Raised when a hash algorithm name is not registered."""

    def __init__(self, name: str, supported: list[str] | None = None) -> None:
        super().__init__(
            message=f"Unsupported hash algorithm: {name!r}",
            code=ErrorCodes.UNSUPPORTED_HASH,
            details={"algorithm": name, "supported": supported or []},
        )


class MerkleVerificationException(MerkleTreeException):
    """Raised when a Merkle proof does not reproduce the expected root."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.ROOT_MISMATCH,
            details=full_details,
        )


class ProofFormatException(MerkleTreeException, ValueError):
    """Raised when a proof path entry is malformed, e.g. an unknown side."""

    def __init__(
        self,
        message: str,
        step: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if step is not None:
            full_details["step"] = step
        super().__init__(
            message=message,
            code=ErrorCodes.MERKLE_PROOF_INVALID,
            details=full_details,
        )
