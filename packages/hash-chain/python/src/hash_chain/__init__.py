# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
hash-chain: tamper-evident linked records for append-only, verifiable logs.

Public API surface:

    Node construction:
        create_genesis  - First node of a new chain
        extend          - Successor of an existing node
        uninitialized   - The "no valid node" sentinel
        is_uninitialized, info

    Hashing:
        compute_hash, hash_to_hex, hex_to_hash

    Text encoding:
        FIELD_SEP, serialize, parse, parse_node, write_nodes, read_nodes

    Chain:
        verify_chain
        ChainFileStorage - Flat, append-only chain file

    Types:
        HashChainNode, ValidNode, InvalidNode, ParseResult,
        ChainVerificationResult, ChainVerificationSuccess,
        ChainVerificationFailure, ZERO_HASH, GENESIS_PAYLOAD

    Errors:
        HashChainError, HashDecodeError, ChainFileError
"""

from hash_chain.chain import verify_chain
from hash_chain.codec import FIELD_SEP, parse, parse_node, read_nodes, serialize, write_nodes
from hash_chain.config import DemoConfig, HashChainConfig, StorageConfig
from hash_chain.errors import ChainFileError, HashChainError, HashDecodeError
from hash_chain.hashing import compute_hash, hash_to_hex, hex_to_hash
from hash_chain.node import create_genesis, extend, info, is_uninitialized, uninitialized
from hash_chain.storage.file import ChainFileStorage
from hash_chain.types import (
    GENESIS_PAYLOAD,
    ZERO_HASH,
    ChainVerificationFailure,
    ChainVerificationResult,
    ChainVerificationSuccess,
    HashChainNode,
    InvalidNode,
    ParseResult,
    ValidNode,
)

__all__ = [
    # Node construction
    "create_genesis",
    "extend",
    "uninitialized",
    "is_uninitialized",
    "info",
    # Hashing
    "compute_hash",
    "hash_to_hex",
    "hex_to_hash",
    # Text encoding
    "FIELD_SEP",
    "serialize",
    "parse",
    "parse_node",
    "write_nodes",
    "read_nodes",
    # Chain
    "verify_chain",
    "ChainFileStorage",
    # Config
    "HashChainConfig",
    "DemoConfig",
    "StorageConfig",
    # Types
    "HashChainNode",
    "ValidNode",
    "InvalidNode",
    "ParseResult",
    "ChainVerificationResult",
    "ChainVerificationSuccess",
    "ChainVerificationFailure",
    "ZERO_HASH",
    "GENESIS_PAYLOAD",
    # Errors
    "HashChainError",
    "HashDecodeError",
    "ChainFileError",
]
