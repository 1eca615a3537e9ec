# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation
"""Shared fixtures for hash-chain tests."""

from __future__ import annotations

import pytest

from hash_chain.node import create_genesis, extend
from hash_chain.types import HashChainNode

GENESIS_TIME = 1_700_000_000


@pytest.fixture
def genesis() -> HashChainNode:
    """A genesis node with a fixed timestamp."""
    return create_genesis(timestamp=GENESIS_TIME)


@pytest.fixture
def chain(genesis: HashChainNode) -> list[HashChainNode]:
    """Genesis plus three nodes, one second apart."""
    nodes = [genesis]
    for index in range(1, 4):
        nodes.append(extend(nodes[-1], f"Node # {index}", timestamp=GENESIS_TIME + index))
    return nodes
