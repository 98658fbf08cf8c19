"""
Registry records: coins, pools, balance managers.

All records are frozen dataclasses. Address fields are normalized to the
canonical 66-character form on construction, so a malformed literal fails
when the registry is built rather than halfway through a transaction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from .. import address as _addr
from ..errors import ConfigError

__all__ = [
    "CoinInfo",
    "PoolInfo",
    "OwnerProof",
    "TraderProof",
    "ProofAuthority",
    "BalanceManager",
]


@dataclass(frozen=True)
class CoinInfo:
    """
    A coin known to the registry.

    `coin_type` is the fully qualified Move type (`<package>::<module>::<name>`)
    and `scalar` is 10**decimals.
    """

    key: str
    address: str
    coin_type: str
    scalar: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "address", _addr.normalize(self.address, f"coins.{self.key}.address"))
        if isinstance(self.scalar, bool) or not isinstance(self.scalar, int) or self.scalar <= 0:
            raise ConfigError(f"scalar must be a positive integer, got {self.scalar!r}", kind="coin", key=self.key)
        if self.coin_type.count("::") < 2:
            raise ConfigError(f"coin type must be <address>::<module>::<name>, got {self.coin_type!r}", kind="coin", key=self.key)


@dataclass(frozen=True)
class PoolInfo:
    """A pool and the registry keys of its base and quote coins."""

    key: str
    address: str
    base_coin: str
    quote_coin: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "address", _addr.normalize(self.address, f"pools.{self.key}.address"))


# ---- Trade-proof authority ---------------------------------------------------


@dataclass(frozen=True)
class OwnerProof:
    """The sender owns the balance manager: `generate_proof_as_owner(manager)`."""

    manager: str


@dataclass(frozen=True)
class TraderProof:
    """The sender holds a delegated TradeCap: `generate_proof_as_trader(manager, trade_cap)`."""

    manager: str
    trade_cap: str


ProofAuthority = Union[OwnerProof, TraderProof]


@dataclass(frozen=True)
class BalanceManager:
    """
    A balance manager the caller trades through.

    If `trade_cap` is set the caller is a delegated trader; otherwise it is
    assumed to own the manager. The choice is fixed once, here, as `proof`.
    """

    address: str
    trade_cap: Optional[str] = None
    key: Optional[str] = field(default=None, compare=False)
    proof: ProofAuthority = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        where = f"balance_managers.{self.key}" if self.key else "balance_manager"
        address = _addr.normalize(self.address, f"{where}.address")
        object.__setattr__(self, "address", address)
        if self.trade_cap is not None:
            trade_cap = _addr.normalize(self.trade_cap, f"{where}.trade_cap")
            object.__setattr__(self, "trade_cap", trade_cap)
            object.__setattr__(self, "proof", TraderProof(manager=address, trade_cap=trade_cap))
        else:
            object.__setattr__(self, "proof", OwnerProof(manager=address))
