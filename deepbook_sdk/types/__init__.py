"""
deepbook_sdk.types
==================

Datatypes shared by the registry, the contract wrappers and the client.

- :mod:`deepbook_sdk.types.core`  : CoinInfo, PoolInfo, BalanceManager, proof authority
- :mod:`deepbook_sdk.types.params`: order enums, parameter records, query results
"""

from __future__ import annotations

from .core import (  # noqa: F401
    BalanceManager,
    CoinInfo,
    OwnerProof,
    PoolInfo,
    ProofAuthority,
    TraderProof,
)
from .params import (  # noqa: F401
    BaseQuantityOut,
    CreatePoolAdminParams,
    Level2Range,
    Level2TicksFromMid,
    ManagerBalance,
    OrderType,
    PlaceLimitOrderParams,
    PlaceMarketOrderParams,
    ProposalParams,
    QuoteQuantityOut,
    SelfMatchingOptions,
    VaultBalances,
)

__all__ = [
    "BalanceManager",
    "CoinInfo",
    "OwnerProof",
    "PoolInfo",
    "ProofAuthority",
    "TraderProof",
    "BaseQuantityOut",
    "CreatePoolAdminParams",
    "Level2Range",
    "Level2TicksFromMid",
    "ManagerBalance",
    "OrderType",
    "PlaceLimitOrderParams",
    "PlaceMarketOrderParams",
    "ProposalParams",
    "QuoteQuantityOut",
    "SelfMatchingOptions",
    "VaultBalances",
]
