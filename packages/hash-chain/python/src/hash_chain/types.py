# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Shared type definitions for the hash-chain package.

All models are frozen Pydantic v2 models. A node's fields are set once at
construction and cannot be reassigned, which is what makes a previously
computed commitment hash meaningful.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hash_chain.hashing import compute_hash, hash_to_hex

# Predecessor hash of the genesis node and of the uninitialized sentinel.
ZERO_HASH: bytes = bytes(32)

GENESIS_PAYLOAD: str = "Genesis Node"
INVALID_PAYLOAD: str = "Invalid"

MAX_SERIAL: int = 2**64 - 1
MIN_TIMESTAMP: int = -(2**63)
MAX_TIMESTAMP: int = 2**63 - 1


class HashChainNode(BaseModel):
    """
    A single tamper-evident record in a hash chain.

    ``prev_hash`` commits to the predecessor; the node's own ``hash`` is
    derived on demand from all four stored fields and is never stored.
    Construct nodes through :mod:`hash_chain.node` rather than directly so the
    linkage invariant holds.
    """

    model_config = ConfigDict(frozen=True)

    serial: Annotated[int, Field(ge=0, le=MAX_SERIAL)] = 0
    timestamp: Annotated[int, Field(ge=MIN_TIMESTAMP, le=MAX_TIMESTAMP)] = 0
    prev_hash: Annotated[bytes, Field(min_length=32, max_length=32)] = ZERO_HASH
    payload: str = INVALID_PAYLOAD

    @field_validator("payload")
    @classmethod
    def payload_must_encode_as_utf8(cls, value: str) -> str:
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise ValueError(f"payload is not encodable as UTF-8: {exc.reason}") from exc
        return value

    @property
    def hash(self) -> bytes:
        """The 32-byte commitment hash of this node."""
        return compute_hash(self)

    @property
    def hash_hex(self) -> str:
        return hash_to_hex(self.hash)

    @property
    def prev_hash_hex(self) -> str:
        return hash_to_hex(self.prev_hash)

    def is_uninitialized(self) -> bool:
        """
        Return ``True`` when this node is neither a genesis node nor a real
        chain member: a zero timestamp, or serial 0 without the genesis payload.
        """
        return self.timestamp == 0 or (self.serial == 0 and self.payload != GENESIS_PAYLOAD)

    def info(self, verbose: bool = False) -> str:
        from hash_chain.node import info

        return info(self, verbose=verbose)


class ValidNode(BaseModel):
    """Returned by ``parse`` when a record decoded and its hash checked out."""

    model_config = ConfigDict(frozen=True)

    valid: Literal[True] = True
    node: HashChainNode


class InvalidNode(BaseModel):
    """
    Returned by ``parse`` when a record was malformed or failed its hash check.

    ``node`` is always the uninitialized sentinel so callers that only want a
    node can use ``result.node`` without branching.
    """

    model_config = ConfigDict(frozen=True)

    valid: Literal[False] = False
    node: HashChainNode = Field(default_factory=HashChainNode)
    reason: str


ParseResult = ValidNode | InvalidNode


class ChainVerificationSuccess(BaseModel):
    """Returned by ``verify_chain`` when every link is intact."""

    model_config = ConfigDict(frozen=True)

    valid: Literal[True] = True
    node_count: int
    head_hash: str


class ChainVerificationFailure(BaseModel):
    """Returned by ``verify_chain`` at the first broken link."""

    model_config = ConfigDict(frozen=True)

    valid: Literal[False] = False
    node_count: int
    broken_at: int
    reason: str


ChainVerificationResult = ChainVerificationSuccess | ChainVerificationFailure
