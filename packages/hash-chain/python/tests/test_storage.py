# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation
"""
Tests for ChainFileStorage.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import pytest

from hash_chain.chain import verify_chain
from hash_chain.codec import serialize, write_nodes
from hash_chain.config import StorageConfig
from hash_chain.errors import ChainFileError
from hash_chain.node import extend
from hash_chain.storage.file import ChainFileStorage
from hash_chain.types import ChainVerificationFailure, HashChainNode


class TestChainFileStorage:
    def test_missing_file_reads_as_empty(self, tmp_path: Path) -> None:
        storage = ChainFileStorage(tmp_path / "chain.txt")
        assert asyncio.run(storage.all()) == []
        assert asyncio.run(storage.count()) == 0

    def test_directory_path_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ChainFileError) as exc_info:
            ChainFileStorage(tmp_path)
        assert exc_info.value.code == "CHAIN_FILE_ERROR"

    def test_write_all_then_read_back(self, tmp_path: Path, chain: list[HashChainNode]) -> None:
        storage = ChainFileStorage(tmp_path / "chain.txt")
        written = asyncio.run(storage.write_all(chain))
        assert written == 4
        assert asyncio.run(storage.all()) == chain
        assert verify_chain(asyncio.run(storage.all())).valid is True

    def test_write_all_replaces_existing_content(self, tmp_path: Path, chain: list[HashChainNode]) -> None:
        storage = ChainFileStorage(tmp_path / "chain.txt")
        asyncio.run(storage.write_all(chain))
        asyncio.run(storage.write_all(chain[:2]))
        assert asyncio.run(storage.count()) == 2

    def test_append_one_node_at_a_time(self, tmp_path: Path, chain: list[HashChainNode]) -> None:
        storage = ChainFileStorage(tmp_path / "chain.txt")
        for node in chain:
            asyncio.run(storage.append(node))
        text = (tmp_path / "chain.txt").read_text(encoding="utf-8")
        assert text == "".join(serialize(node) + "\n" for node in chain)

    def test_append_after_unterminated_file(self, tmp_path: Path, chain: list[HashChainNode]) -> None:
        path = tmp_path / "chain.txt"
        with open(path, "w", encoding="utf-8") as sink:
            write_nodes(chain[:3], sink)
        storage = ChainFileStorage(path)
        asyncio.run(storage.append(chain[3]))
        assert asyncio.run(storage.all()) == chain

    def test_corrupted_line_becomes_sentinel_in_place(
        self,
        tmp_path: Path,
        chain: list[HashChainNode],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        path = tmp_path / "chain.txt"
        lines = [serialize(node) for node in chain]
        lines[2] = lines[2].replace("Node # 2", "Node # 7")
        path.write_text("\n".join(lines), encoding="utf-8")

        storage = ChainFileStorage(path)
        with caplog.at_level(logging.WARNING, logger="hash_chain.storage"):
            nodes = asyncio.run(storage.all())

        assert len(nodes) == 4
        assert nodes[2].is_uninitialized() is True
        assert any("chain.txt:3" in message for message in caplog.messages)
        result = verify_chain(nodes)
        assert isinstance(result, ChainVerificationFailure)
        assert result.broken_at == 2

    def test_undecodable_bytes_become_sentinel_in_place(
        self, tmp_path: Path, chain: list[HashChainNode]
    ) -> None:
        path = tmp_path / "chain.txt"
        asyncio.run(ChainFileStorage(path).write_all(chain))
        path.write_bytes(path.read_bytes().replace(b"Node # 2", b"Node # \xff"))

        nodes = asyncio.run(ChainFileStorage(path).all())

        assert len(nodes) == 4
        assert nodes[2].is_uninitialized() is True
        result = verify_chain(nodes)
        assert isinstance(result, ChainVerificationFailure)
        assert result.broken_at == 2

    def test_undecodable_last_line_reads_as_sentinel(
        self, tmp_path: Path, chain: list[HashChainNode]
    ) -> None:
        path = tmp_path / "chain.txt"
        asyncio.run(ChainFileStorage(path).write_all(chain))
        path.write_bytes(path.read_bytes().replace(b"Node # 3", b"Node # \xff"))

        tip = ChainFileStorage.read_last_node_sync(path)

        assert tip is not None
        assert tip.is_uninitialized() is True

    def test_strict_decoding_raises_on_undecodable_bytes(
        self, tmp_path: Path, chain: list[HashChainNode]
    ) -> None:
        path = tmp_path / "chain.txt"
        asyncio.run(ChainFileStorage(path).write_all(chain))
        path.write_bytes(path.read_bytes().replace(b"Node # 2", b"Node # \xff"))

        storage = ChainFileStorage(path, StorageConfig(decode_errors="strict"))
        with pytest.raises(UnicodeDecodeError):
            asyncio.run(storage.all())

    def test_non_ascii_payload_with_configured_encoding(
        self, tmp_path: Path, genesis: HashChainNode
    ) -> None:
        node = extend(genesis, "naïve café", timestamp=5)
        storage = ChainFileStorage(tmp_path / "chain.txt", StorageConfig(encoding="utf-16"))
        asyncio.run(storage.write_all([genesis, node]))
        assert asyncio.run(storage.all()) == [genesis, node]

    def test_read_last_node_sync(self, tmp_path: Path, chain: list[HashChainNode]) -> None:
        path = tmp_path / "chain.txt"
        asyncio.run(ChainFileStorage(path).write_all(chain))
        assert ChainFileStorage.read_last_node_sync(path) == chain[-1]

    def test_read_last_node_sync_missing_or_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "chain.txt"
        assert ChainFileStorage.read_last_node_sync(path) is None
        path.write_text("\n\n", encoding="utf-8")
        assert ChainFileStorage.read_last_node_sync(path) is None

    def test_resume_extending_from_file(self, tmp_path: Path, chain: list[HashChainNode]) -> None:
        path = tmp_path / "chain.txt"
        storage = ChainFileStorage(path)
        asyncio.run(storage.write_all(chain))
        tip = ChainFileStorage.read_last_node_sync(path)
        assert tip is not None
        asyncio.run(storage.append(extend(tip, "Node # 4", timestamp=tip.timestamp + 1)))
        assert verify_chain(asyncio.run(storage.all())).node_count == 5
