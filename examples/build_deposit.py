#!/usr/bin/env python3
"""
build_deposit.py - build (but do not sign) a deposit + limit order transaction

The resulting TransactionKind is printed as base64; hand it to a wallet or
signer of your choice. The fullnode is only used to look up object versions.

Usage
-----
python examples/build_deposit.py --sender 0x... --manager 0x... --amount 1.5 --price 3.2 --qty 1
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from deepbook_sdk import (
    DeepBookClient,
    DeepBookError,
    NetworkConfig,
    PlaceLimitOrderParams,
    TransactionBuilder,
    SuiRpcClient,
)


async def main(args: argparse.Namespace) -> int:
    net = NetworkConfig(env=args.env)
    async with SuiRpcClient.from_config(net) as rpc:
        db = DeepBookClient(
            rpc,
            address=args.sender,
            env=net.env,
            balance_managers={"MANAGER_1": {"address": args.manager}},
        )
        ptb = TransactionBuilder()
        try:
            await db.balance_manager.deposit_into_manager(ptb, "MANAGER_1", "SUI", args.amount)
            await db.deep_book.place_limit_order(
                ptb,
                PlaceLimitOrderParams(
                    pool_key=args.pool,
                    balance_manager_key="MANAGER_1",
                    client_order_id=1,
                    price=args.price,
                    quantity=args.qty,
                    is_bid=False,
                ),
            )
        except DeepBookError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1

    for cmd in ptb.commands:
        print(getattr(cmd, "target", type(cmd).__name__))
    print(ptb.to_b64())
    return 0


if __name__ == "__main__":
    p = argparse.ArgumentParser(description="Build a DeepBook deposit + order transaction")
    p.add_argument("--env", default="testnet")
    p.add_argument("--sender", required=True)
    p.add_argument("--manager", required=True)
    p.add_argument("--pool", default="SUI_DBUSDC")
    p.add_argument("--amount", type=float, default=1.0)
    p.add_argument("--price", type=float, required=True)
    p.add_argument("--qty", type=float, required=True)
    sys.exit(asyncio.run(main(p.parse_args())))
