# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2026 MuVeraAI Corporation

"""
hash-chain command-line driver.

Usage::

    hash-chain demo --count 10 --interval 0.5 --output hash_chain_data.txt
    hash-chain verify hash_chain_data.txt
    hash-chain show hash_chain_data.txt --verbose
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path
from typing import TextIO

from pydantic import ValidationError

from hash_chain.chain import verify_chain
from hash_chain.config import DemoConfig, HashChainConfig, StorageConfig
from hash_chain.errors import HashChainError
from hash_chain.node import create_genesis, extend
from hash_chain.storage.file import ChainFileStorage
from hash_chain.types import ZERO_HASH, ChainVerificationSuccess, HashChainNode

logger = logging.getLogger("hash_chain.cli")


def mint_chain(config: DemoConfig, out: TextIO) -> list[HashChainNode]:
    """Mint a genesis node plus ``config.node_count`` successors, printing each."""
    chain = [create_genesis()]
    print(chain[0].info(verbose=config.verbose), file=out)

    for index in range(1, config.node_count + 1):
        if config.interval_seconds:
            time.sleep(config.interval_seconds)
        chain.append(extend(chain[-1], f"Node # {index}"))
        print(chain[-1].info(verbose=config.verbose), file=out)

    return chain


async def _write_and_reload(
    chain: list[HashChainNode],
    storage: ChainFileStorage,
) -> list[HashChainNode]:
    await storage.write_all(chain)
    return await storage.all()


def run_demo(config: HashChainConfig, out: TextIO = sys.stdout) -> int:
    """
    Mint a chain, write it to disk, read it back and check every link.

    Returns the number of broken links found in the rebuilt chain.
    """
    chain = mint_chain(config.demo, out)
    storage = ChainFileStorage(config.demo.chain_file, config.storage)
    rebuilt = asyncio.run(_write_and_reload(chain, storage))

    print("\n\nRe-built from file:", file=out)
    broken = 0
    prev_hash = ZERO_HASH
    for node in rebuilt:
        print(node.info(verbose=config.demo.verbose), file=out)
        if node.prev_hash != prev_hash:
            print("Hash check failed.\n", file=out)
            broken += 1
        prev_hash = node.hash

    logger.info(
        "Demo chain of %d nodes written to %s with %d broken links",
        len(rebuilt),
        storage.file_path,
        broken,
    )
    return broken


def _run_demo_command(args: argparse.Namespace) -> int:
    config = HashChainConfig(
        demo=DemoConfig(
            node_count=args.count,
            interval_seconds=args.interval,
            chain_file=args.output,
            verbose=not args.quiet,
        ),
        storage=StorageConfig(encoding=args.encoding),
    )
    return 0 if run_demo(config) == 0 else 1


def _load(args: argparse.Namespace) -> list[HashChainNode] | None:
    path = Path(args.path)
    if not path.exists():
        print(f"error: chain file '{path}' does not exist", file=sys.stderr)
        return None
    storage = ChainFileStorage(path, StorageConfig(encoding=args.encoding))
    return asyncio.run(storage.all())


def _run_verify_command(args: argparse.Namespace) -> int:
    nodes = _load(args)
    if nodes is None:
        return 2
    result = verify_chain(nodes)
    if isinstance(result, ChainVerificationSuccess):
        print(f"OK: {result.node_count} nodes, head {result.head_hash}")
        return 0
    print(f"FAILED at index {result.broken_at}: {result.reason}")
    return 1


def _run_show_command(args: argparse.Namespace) -> int:
    nodes = _load(args)
    if nodes is None:
        return 2
    for node in nodes:
        print(node.info(verbose=args.verbose))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hash-chain",
        description="Build, inspect and verify tamper-evident hash chains.",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--encoding", default="utf-8",
        help="Chain file text encoding (default: utf-8)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    demo = subparsers.add_parser(
        "demo",
        help="Mint a chain, write it to a file and read it back.",
    )
    demo.add_argument(
        "--count", type=int, default=10,
        help="Nodes to mint after the genesis node (default: 10)",
    )
    demo.add_argument(
        "--interval", type=float, default=0.5,
        help="Seconds to wait between mints (default: 0.5)",
    )
    demo.add_argument(
        "--output", type=Path, default=Path("hash_chain_data.txt"),
        help="Chain file to write (default: hash_chain_data.txt)",
    )
    demo.add_argument(
        "--quiet", action="store_true",
        help="Omit hashes from node summaries.",
    )
    demo.set_defaults(handler=_run_demo_command)

    verify = subparsers.add_parser("verify", help="Verify every link of a chain file.")
    verify.add_argument("path", help="Chain file to verify.")
    verify.set_defaults(handler=_run_verify_command)

    show = subparsers.add_parser("show", help="Print every node of a chain file.")
    show.add_argument("path", help="Chain file to print.")
    show.add_argument(
        "--verbose", action="store_true",
        help="Include previous and current hashes.",
    )
    show.set_defaults(handler=_run_show_command)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.handler(args)
    except ValidationError as exc:
        parser.error(f"invalid option value: {exc.errors()[0]['msg']}")
    except HashChainError as exc:
        print(f"error: {exc.message}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
