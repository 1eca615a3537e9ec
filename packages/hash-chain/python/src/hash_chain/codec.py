# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
Canonical text encoding for hash-chain nodes.

One node is one line of five ``~``-separated fields::

    <serial>~<timestamp>~<prev_hash_hex>~<payload>~<hash_hex>

- ``serial`` and ``timestamp`` are decimal integers.
- Both hashes are exactly 64 lowercase hex characters with no prefix.
- ``payload`` is written raw.  It is not escaped, so a payload containing
  ``~`` or a line terminator produces a record that will not parse back.

``parse`` is total: it never raises.  A malformed record, or one whose
trailing hash does not match the hash recomputed from its fields, yields an
``InvalidNode`` carrying the uninitialized sentinel.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator, TextIO

from pydantic import ValidationError

from hash_chain.errors import HashDecodeError
from hash_chain.hashing import hex_to_hash
from hash_chain.node import uninitialized
from hash_chain.types import HashChainNode, InvalidNode, ParseResult, ValidNode

logger = logging.getLogger("hash_chain.codec")

FIELD_SEP: str = "~"

_SERIAL_PATTERN = re.compile(r"[0-9]{1,20}")
_TIMESTAMP_PATTERN = re.compile(r"-?[0-9]{1,19}")


def serialize(node: HashChainNode) -> str:
    """Return the canonical one-line record for ``node``, without a newline."""
    return FIELD_SEP.join(
        [
            str(node.serial),
            str(node.timestamp),
            node.prev_hash_hex,
            node.payload,
            node.hash_hex,
        ]
    )


def _invalid(reason: str) -> InvalidNode:
    logger.debug("Rejected hash-chain record: %s", reason)
    return InvalidNode(node=uninitialized(), reason=reason)


def parse(record: str) -> ParseResult:
    """
    Parse one canonical record into a node.

    Leading whitespace is skipped and only the first line of ``record`` is
    considered.  Fields are consumed left to right; the first failure stops
    the parse.

    Returns
    -------
    ValidNode
        When every field decoded and the trailing hash matches the hash
        recomputed from the first four fields.
    InvalidNode
        Otherwise, with the uninitialized sentinel and a reason.
    """
    line = record.lstrip().partition("\n")[0].rstrip("\r")

    serial_text, sep, rest = line.partition(FIELD_SEP)
    if not sep:
        return _invalid("missing delimiter after serial field.")
    if _SERIAL_PATTERN.fullmatch(serial_text) is None:
        return _invalid(f"serial field {serial_text!r} is not an unsigned decimal integer.")

    timestamp_text, sep, rest = rest.partition(FIELD_SEP)
    if not sep:
        return _invalid("missing delimiter after timestamp field.")
    if _TIMESTAMP_PATTERN.fullmatch(timestamp_text) is None:
        return _invalid(f"timestamp field {timestamp_text!r} is not a decimal integer.")

    prev_hash_text, sep, rest = rest.partition(FIELD_SEP)
    if not sep:
        return _invalid("missing delimiter after prev_hash field.")
    try:
        prev_hash = hex_to_hash(prev_hash_text)
    except HashDecodeError as exc:
        return _invalid(f"prev_hash field: {exc.message}")

    payload, sep, hash_text = rest.partition(FIELD_SEP)
    if not sep:
        return _invalid("missing delimiter after payload field.")
    try:
        claimed_hash = hex_to_hash(hash_text)
    except HashDecodeError as exc:
        return _invalid(f"hash field: {exc.message}")

    try:
        node = HashChainNode(
            serial=int(serial_text),
            timestamp=int(timestamp_text),
            prev_hash=prev_hash,
            payload=payload,
        )
    except ValidationError as exc:
        return _invalid(f"invalid field value: {exc.errors()[0]['msg']}")

    if node.hash != claimed_hash:
        return _invalid(
            f"hash mismatch for serial {node.serial}: record claims {hash_text} "
            f"but recomputed hash is {node.hash_hex}."
        )
    if node.is_uninitialized():
        return _invalid(f"record for serial {node.serial} describes an uninitialized node.")

    return ValidNode(node=node)


def parse_node(record: str) -> HashChainNode:
    """Parse ``record`` and return the node, or the sentinel on failure."""
    return parse(record).node


def write_nodes(nodes: Iterable[HashChainNode], sink: TextIO) -> int:
    """
    Write ``nodes`` to ``sink`` one record per line, in order.

    Records are newline-separated with no trailing newline.  Returns the
    number of records written.
    """
    written = 0
    for node in nodes:
        if written:
            sink.write("\n")
        sink.write(serialize(node))
        written += 1
    return written


def read_nodes(source: Iterable[str]) -> Iterator[ParseResult]:
    """Yield one parse result per non-blank line of ``source``."""
    for line in source:
        if not line.strip():
            continue
        yield parse(line)
