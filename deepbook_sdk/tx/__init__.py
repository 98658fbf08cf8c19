"""
deepbook_sdk.tx
===============

Programmable transaction helpers built on pysui's transaction builder.

Typical usage
-------------
    from deepbook_sdk.tx import TransactionBuilder

    ptb = TransactionBuilder()
    await client.balance_manager.deposit_into_manager(ptb, "MANAGER_1", "SUI", 1.5)
    tx_b64 = ptb.to_b64()
"""

from __future__ import annotations

from . import builder as builder
from .builder import (  # noqa: F401
    Argument,
    ImmOrOwnedObject,
    MoveCall,
    Pure,
    SharedObject,
    TransactionBuilder,
    TransferObjects,
)

__all__ = [
    "builder",
    "Argument",
    "ImmOrOwnedObject",
    "MoveCall",
    "Pure",
    "SharedObject",
    "TransactionBuilder",
    "TransferObjects",
]
