# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Chain-level linkage verification.

Parsing checks each record against its own trailing hash, which catches edits
to a single record.  It cannot catch a record that was removed, reordered or
replaced wholesale with a self-consistent forgery.  ``verify_chain`` closes
that gap by checking every node's ``prev_hash`` against its predecessor.
"""

from __future__ import annotations

from typing import Sequence

from hash_chain.hashing import hash_to_hex
from hash_chain.types import (
    ZERO_HASH,
    ChainVerificationFailure,
    ChainVerificationResult,
    ChainVerificationSuccess,
    HashChainNode,
)


def verify_chain(nodes: Sequence[HashChainNode]) -> ChainVerificationResult:
    """
    Walk ``nodes`` from index 0 and check every link.

    Node ``i`` must be initialized, carry serial ``i``, and have a
    ``prev_hash`` equal to the hash of node ``i - 1`` (the zero hash for
    index 0).

    Returns
    -------
    ChainVerificationSuccess
        When every link is intact; ``head_hash`` is the hex hash of the last
        node, or the zero hash for an empty chain.
    ChainVerificationFailure
        At the first broken link, with its index and a reason.
    """
    expected_prev_hash = ZERO_HASH

    for index, node in enumerate(nodes):
        if node.is_uninitialized():
            return ChainVerificationFailure(
                node_count=len(nodes),
                broken_at=index,
                reason=f"Node at index {index} is uninitialized or failed to parse.",
            )

        if node.prev_hash != expected_prev_hash:
            return ChainVerificationFailure(
                node_count=len(nodes),
                broken_at=index,
                reason=(
                    f"Node at index {index} has prev_hash "
                    f'"{node.prev_hash_hex}" but expected '
                    f'"{hash_to_hex(expected_prev_hash)}".'
                ),
            )

        if node.serial != index:
            return ChainVerificationFailure(
                node_count=len(nodes),
                broken_at=index,
                reason=f"Node at index {index} has serial {node.serial}.",
            )

        expected_prev_hash = node.hash

    return ChainVerificationSuccess(
        node_count=len(nodes),
        head_hash=hash_to_hex(expected_prev_hash),
    )
