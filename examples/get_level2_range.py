#!/usr/bin/env python3
"""
get_level2_range.py - read a manager balance and order book depth on mainnet

This example shows how to:
  1) Connect to a Sui fullnode via HTTP JSON-RPC
  2) Register a balance manager with the DeepBook client
  3) Run two read-only queries (dev-inspect, nothing is signed or submitted)

Environment
-----------
DEEPBOOK_ENV        (default: testnet; this example forces mainnet unless --env is given)
DEEPBOOK_RPC_URL    (default: public fullnode of the environment)
DEEPBOOK_TIMEOUT    (default: 30)

Usage
-----
python examples/get_level2_range.py \
  --manager 0x344c2734b1d211bd15212bfb7847c66a3b18803f3f5ab00f5ff6f87b6fe6d27d \
  --pool SUI_USDC --low 0.1 --high 100
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

from deepbook_sdk import DeepBookClient, DeepBookError, NetworkConfig, SuiRpcClient

# Dev-inspect only needs a syntactically valid sender.
DEFAULT_SENDER = "0x" + "0" * 63 + "1"


async def main(args: argparse.Namespace) -> int:
    os.environ.setdefault("DEEPBOOK_ENV", args.env)
    net = NetworkConfig.from_env()

    async with SuiRpcClient.from_config(net) as rpc:
        db = DeepBookClient(
            rpc,
            address=args.sender,
            env=net.env,
            balance_managers={"MANAGER_1": {"address": args.manager}},
        )
        try:
            balance = await db.check_manager_balance("MANAGER_1", args.coin)
            print(f"balance: {balance.balance} ({balance.coin_type})")

            level2 = await db.get_level2_range(args.pool, args.low, args.high, not args.asks)
            for price, qty in zip(level2.prices, level2.quantities):
                print(f"  {price:>14.9f}  {qty:>18.9f}")
        except DeepBookError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    p = argparse.ArgumentParser(description="DeepBook level-2 range demo")
    p.add_argument("--env", default="mainnet")
    p.add_argument("--sender", default=DEFAULT_SENDER)
    p.add_argument("--manager", required=True, help="balance manager object id")
    p.add_argument("--coin", default="SUI")
    p.add_argument("--pool", default="SUI_USDC")
    p.add_argument("--low", type=float, default=0.1)
    p.add_argument("--high", type=float, default=100.0)
    p.add_argument("--asks", action="store_true", help="show the ask side instead of bids")
    p.add_argument("-v", "--verbose", action="store_true")
    args = p.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    sys.exit(asyncio.run(main(args)))
