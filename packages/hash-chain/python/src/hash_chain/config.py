# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, Field


class StorageConfig(BaseModel, frozen=True):
    """
    Configuration for ChainFileStorage.

    Attributes:
        encoding: Text encoding of the chain file.
        decode_errors: How undecodable bytes are handled on read.  With
            "replace" a damaged line decodes to U+FFFD characters, fails its
            hash check and is reported in place; "strict" raises instead.
    """

    encoding: Annotated[str, Field(min_length=1)] = "utf-8"
    decode_errors: Literal["replace", "strict"] = "replace"


class DemoConfig(BaseModel, frozen=True):
    """
    Configuration for the ``hash-chain demo`` command.

    Attributes:
        node_count: Number of nodes minted after the genesis node.
        interval_seconds: Pause between mints, so timestamps differ.
        chain_file: Where the minted chain is written and read back from.
        verbose: When True, node summaries include both hashes.
    """

    node_count: Annotated[int, Field(ge=0)] = 10
    interval_seconds: Annotated[float, Field(ge=0)] = 0.5
    chain_file: Path = Path("hash_chain_data.txt")
    verbose: bool = True


class HashChainConfig(BaseModel, frozen=True):
    """
    Top-level configuration for the hash-chain command-line driver.

    Example::

        config = HashChainConfig(
            demo=DemoConfig(node_count=3, interval_seconds=0),
            storage=StorageConfig(encoding="utf-8"),
        )
    """

    demo: DemoConfig = Field(default_factory=DemoConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
