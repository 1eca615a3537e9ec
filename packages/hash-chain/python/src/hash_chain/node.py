# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Construction helpers for HashChainNode instances.

A node comes into existence in exactly one of three ways:

1. ``create_genesis`` builds the distinguished first node of a chain.
2. ``extend`` builds the successor of an existing node, capturing the
   predecessor's commitment hash at construction time.
3. ``hash_chain.codec.parse`` rebuilds a node from its text record.

``uninitialized`` returns the sentinel that stands in for "no valid node".
"""

from __future__ import annotations

import time

from hash_chain.hashing import compute_hash
from hash_chain.types import GENESIS_PAYLOAD, INVALID_PAYLOAD, ZERO_HASH, HashChainNode


def _current_timestamp() -> int:
    """Return the current wall-clock time in whole Unix seconds."""
    return int(time.time())


def create_genesis(timestamp: int | None = None) -> HashChainNode:
    """
    Create the genesis node for a new chain.

    The genesis node has serial 0, an all-zero ``prev_hash`` and the literal
    payload ``"Genesis Node"``.

    Parameters
    ----------
    timestamp:
        Override the wall-clock timestamp (useful in tests).
    """
    return HashChainNode(
        serial=0,
        timestamp=_current_timestamp() if timestamp is None else timestamp,
        prev_hash=ZERO_HASH,
        payload=GENESIS_PAYLOAD,
    )


def extend(
    predecessor: HashChainNode,
    payload: str,
    timestamp: int | None = None,
) -> HashChainNode:
    """
    Create the node that follows ``predecessor`` in the chain.

    Parameters
    ----------
    predecessor:
        The current chain tip.  Its commitment hash becomes the new node's
        ``prev_hash`` and its serial plus one becomes the new serial.
    payload:
        Caller content.  Must not contain ``~`` or a line terminator if the
        node is going to be serialized.
    timestamp:
        Override the wall-clock timestamp (useful in tests).
    """
    return HashChainNode(
        serial=predecessor.serial + 1,
        timestamp=_current_timestamp() if timestamp is None else timestamp,
        prev_hash=compute_hash(predecessor),
        payload=payload,
    )


def uninitialized() -> HashChainNode:
    """Return the sentinel node: serial 0, timestamp 0, zero hash, ``"Invalid"``."""
    return HashChainNode(
        serial=0,
        timestamp=0,
        prev_hash=ZERO_HASH,
        payload=INVALID_PAYLOAD,
    )


def is_uninitialized(node: HashChainNode) -> bool:
    return node.is_uninitialized()


def info(node: HashChainNode, verbose: bool = False) -> str:
    """
    Return a human-readable summary of ``node``.

    With ``verbose`` the previous and current hashes are included as hex.
    """
    lines = [
        f"Serial:     {node.serial}" + ("\n" if verbose else "\t") + f"Timestamp : {node.timestamp}",
    ]
    if verbose:
        lines.append(f"Prev Hash : {node.prev_hash_hex}")
    lines.append("Payload:")
    lines.append(node.payload)
    if verbose:
        lines.append(f"This Hash : {node.hash_hex}")
    return "\n".join(lines) + "\n"
