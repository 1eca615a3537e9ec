# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
SHA-256 commitment hashing for hash-chain nodes.

The commitment is a single streaming SHA-256 over four fields, fed in this
fixed order:

1. ``serial``    as 8 bytes, unsigned, little-endian
2. ``timestamp`` as 8 bytes, signed, little-endian
3. ``prev_hash`` as its 32 raw bytes
4. ``payload``   as UTF-8 bytes, with no length prefix or delimiter

Every field except the payload is fixed-width and the payload is always last,
so the concatenation is unambiguous. The byte order is part of the hash input
format: changing it would invalidate every existing chain.
"""

from __future__ import annotations

import hashlib
import re
import struct
from typing import TYPE_CHECKING

from hash_chain.errors import HashDecodeError

if TYPE_CHECKING:
    from hash_chain.types import HashChainNode

HASH_SIZE: int = 32
HASH_HEX_LENGTH: int = HASH_SIZE * 2

_SERIAL_FORMAT = struct.Struct("<Q")
_TIMESTAMP_FORMAT = struct.Struct("<q")
_HEX_PATTERN = re.compile(r"[0-9a-fA-F]*")


def compute_hash(node: HashChainNode) -> bytes:
    """Return the 32-byte SHA-256 commitment of ``node``."""
    hasher = hashlib.sha256()
    hasher.update(_SERIAL_FORMAT.pack(node.serial))
    hasher.update(_TIMESTAMP_FORMAT.pack(node.timestamp))
    hasher.update(node.prev_hash)
    hasher.update(node.payload.encode("utf-8"))
    return hasher.digest()


def hash_to_hex(raw_hash: bytes) -> str:
    """Return ``raw_hash`` as lowercase hex with no prefix."""
    return raw_hash.hex()


def hex_to_hash(hash_str: str) -> bytes:
    """
    Decode a 64-character hex string into a 32-byte hash.

    Raises
    ------
    HashDecodeError
        If ``hash_str`` is not exactly 64 hex digits.  Short or long input is
        rejected outright, never truncated or padded.
    """
    if len(hash_str) != HASH_HEX_LENGTH:
        raise HashDecodeError(
            hash_str,
            f"expected {HASH_HEX_LENGTH} characters, received {len(hash_str)}.",
        )
    # bytes.fromhex tolerates embedded whitespace, so check the digits first.
    if _HEX_PATTERN.fullmatch(hash_str) is None:
        raise HashDecodeError(hash_str, "string contains non-hexadecimal characters.")
    return bytes.fromhex(hash_str)
