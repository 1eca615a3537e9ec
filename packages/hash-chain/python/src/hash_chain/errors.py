# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation
from __future__ import annotations


class HashChainError(Exception):
    """Base class for all hash-chain errors."""

    def __init__(self, message: str, code: str = "HASH_CHAIN_ERROR") -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class HashDecodeError(HashChainError):
    """
    Raised when a hex string cannot be decoded into a 32-byte hash.

    Attributes:
        value: The offending text.
    """

    def __init__(self, value: str, detail: str) -> None:
        super().__init__(
            f"Cannot decode hash string: {detail}",
            code="HASH_DECODE_ERROR",
        )
        self.value = value


class ChainFileError(HashChainError):
    """Raised when a chain file path cannot be used for reading or writing."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(
            f"Chain file '{path}' is unusable: {detail}",
            code="CHAIN_FILE_ERROR",
        )
        self.path = path
