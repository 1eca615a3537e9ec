# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Append-only chain file storage.

Nodes are stored one canonical record per line, in chain order.  The file is
only ever appended to or written whole; existing lines are never rewritten.

Reading always parses the entire file from disk.  Lines that fail to parse are
kept as uninitialized sentinels in their original position so that
``verify_chain`` reports exactly where the file was damaged.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import aiofiles
import aiofiles.os

from hash_chain.codec import parse, serialize
from hash_chain.config import StorageConfig
from hash_chain.errors import ChainFileError
from hash_chain.types import HashChainNode, InvalidNode, ParseResult

logger = logging.getLogger("hash_chain.storage")


class ChainFileStorage:
    """
    Flat text-file storage for a single hash chain.

    Parameters
    ----------
    file_path:
        Path to the chain file.  The file is created on first write.
    config:
        Storage options.  Defaults to UTF-8.
    """

    def __init__(self, file_path: str | Path, config: StorageConfig | None = None) -> None:
        self._file_path = Path(file_path)
        self._config: StorageConfig = config or StorageConfig()
        if self._file_path.is_dir():
            raise ChainFileError(str(self._file_path), "path is a directory.")

    @property
    def file_path(self) -> Path:
        return self._file_path

    async def _needs_separator(self) -> bool:
        # Files written by codec.write_nodes have no trailing newline.
        if not await aiofiles.os.path.exists(self._file_path):
            return False
        size = await aiofiles.os.path.getsize(self._file_path)
        if size == 0:
            return False
        async with aiofiles.open(self._file_path, mode="rb") as file_handle:
            await file_handle.seek(size - 1)
            last_byte = await file_handle.read(1)
        return last_byte != b"\n"

    async def append(self, node: HashChainNode) -> None:
        """Append one node as a newline-terminated record."""
        line = serialize(node) + "\n"
        if await self._needs_separator():
            line = "\n" + line
        async with aiofiles.open(
            self._file_path, mode="a", encoding=self._config.encoding
        ) as file_handle:
            await file_handle.write(line)
        logger.debug("Appended node %d to %s", node.serial, self._file_path)

    async def write_all(self, nodes: Iterable[HashChainNode]) -> int:
        """
        Create or replace the file with ``nodes``.

        Returns the number of records written.
        """
        lines = [serialize(node) + "\n" for node in nodes]
        async with aiofiles.open(
            self._file_path, mode="w", encoding=self._config.encoding
        ) as file_handle:
            await file_handle.write("".join(lines))
        logger.debug("Wrote %d nodes to %s", len(lines), self._file_path)
        return len(lines)

    async def results(self) -> list[ParseResult]:
        """Parse every non-blank line of the file, in file order."""
        if not await aiofiles.os.path.exists(self._file_path):
            return []

        results: list[ParseResult] = []
        line_number = 0
        async with aiofiles.open(
            self._file_path,
            mode="r",
            encoding=self._config.encoding,
            errors=self._config.decode_errors,
        ) as file_handle:
            async for line in file_handle:
                line_number += 1
                if not line.strip():
                    continue
                result = parse(line)
                if isinstance(result, InvalidNode):
                    logger.warning(
                        "Invalid record at %s:%d: %s",
                        self._file_path,
                        line_number,
                        result.reason,
                    )
                results.append(result)

        return results

    async def all(self) -> list[HashChainNode]:
        """Return every node in the file; invalid lines become sentinels."""
        return [result.node for result in await self.results()]

    async def count(self) -> int:
        """Return the number of records (valid or not) in the file."""
        return len(await self.results())

    @staticmethod
    def read_last_node_sync(
        file_path: str | Path,
        encoding: str = "utf-8",
        decode_errors: str = "replace",
    ) -> HashChainNode | None:
        """
        Parse the last non-empty line of the file synchronously.

        Every line is read but only the last one is parsed, which is enough to
        resume extending an existing chain file.  Returns ``None`` when the
        file is missing or empty, and the uninitialized sentinel when the last
        line is invalid.
        """
        path = Path(file_path)
        if not path.exists():
            return None
        last_line: str | None = None
        with open(path, encoding=encoding, errors=decode_errors) as file_handle:
            for line in file_handle:
                if line.strip():
                    last_line = line
        if last_line is None:
            return None
        return parse(last_line).node
