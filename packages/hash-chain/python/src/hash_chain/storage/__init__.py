# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

from .file import ChainFileStorage

__all__ = ["ChainFileStorage"]
