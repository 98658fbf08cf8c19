"""
Order enums, operation parameter records and decoded query results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Union

from ..constants import MAX_TIMESTAMP

__all__ = [
    "OrderType",
    "SelfMatchingOptions",
    "PlaceLimitOrderParams",
    "PlaceMarketOrderParams",
    "ProposalParams",
    "CreatePoolAdminParams",
    "ManagerBalance",
    "Level2Range",
    "Level2TicksFromMid",
    "QuoteQuantityOut",
    "BaseQuantityOut",
    "VaultBalances",
]


class OrderType(IntEnum):
    NO_RESTRICTION = 0
    IMMEDIATE_OR_CANCEL = 1
    FILL_OR_KILL = 2
    POST_ONLY = 3


class SelfMatchingOptions(IntEnum):
    SELF_MATCHING_ALLOWED = 0
    CANCEL_TAKER = 1
    CANCEL_MAKER = 2


# ---- Parameters --------------------------------------------------------------


@dataclass(frozen=True)
class PlaceLimitOrderParams:
    pool_key: str
    balance_manager_key: str
    client_order_id: Union[int, str]
    price: float
    quantity: float
    is_bid: bool
    expiration: int = MAX_TIMESTAMP
    order_type: OrderType = OrderType.NO_RESTRICTION
    self_matching_option: SelfMatchingOptions = SelfMatchingOptions.SELF_MATCHING_ALLOWED
    pay_with_deep: bool = True


@dataclass(frozen=True)
class PlaceMarketOrderParams:
    pool_key: str
    balance_manager_key: str
    client_order_id: Union[int, str]
    quantity: float
    is_bid: bool
    self_matching_option: SelfMatchingOptions = SelfMatchingOptions.SELF_MATCHING_ALLOWED
    pay_with_deep: bool = True


@dataclass(frozen=True)
class ProposalParams:
    """Fees are fractions (0.001 = 10 bps); `stake_required` is in DEEP."""

    pool_key: str
    balance_manager_key: str
    taker_fee: float
    maker_fee: float
    stake_required: float


@dataclass(frozen=True)
class CreatePoolAdminParams:
    base_coin_key: str
    quote_coin_key: str
    tick_size: float
    lot_size: float
    min_size: float
    whitelisted: bool
    stable_pool: bool


# ---- Query results -----------------------------------------------------------


@dataclass(frozen=True)
class ManagerBalance:
    coin_type: str
    balance: float


@dataclass(frozen=True)
class Level2Range:
    prices: List[float] = field(default_factory=list)
    quantities: List[float] = field(default_factory=list)


@dataclass(frozen=True)
class Level2TicksFromMid:
    bid_prices: List[float] = field(default_factory=list)
    bid_quantities: List[float] = field(default_factory=list)
    ask_prices: List[float] = field(default_factory=list)
    ask_quantities: List[float] = field(default_factory=list)


@dataclass(frozen=True)
class QuoteQuantityOut:
    base_quantity: float
    base_out: float
    quote_out: float
    deep_required: float


@dataclass(frozen=True)
class BaseQuantityOut:
    quote_quantity: float
    base_out: float
    quote_out: float
    deep_required: float


@dataclass(frozen=True)
class VaultBalances:
    base: float
    quote: float
    deep: float
