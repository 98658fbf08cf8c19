"""
SDK configuration: the DeepBook registry and the network settings.

- `DeepBookConfig` is an immutable snapshot of package ids, coins, pools and
  balance managers for one environment. Contract wrappers receive the same
  instance by reference; nothing mutates it after construction.
- `NetworkConfig` holds the fullnode endpoint and HTTP behaviour, with
  overrides via environment variables (DEEPBOOK_*).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from . import address as _addr
from . import constants as C
from .errors import ConfigError, UnknownKeyError
from .types.core import BalanceManager, CoinInfo, PoolInfo
from .version import user_agent

__all__ = ["Environment", "DeepBookConfig", "NetworkConfig"]


class Environment(str, Enum):
    MAINNET = "mainnet"
    TESTNET = "testnet"

    @classmethod
    def parse(cls, value: Union["Environment", str]) -> "Environment":
        if isinstance(value, Environment):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigError(f"unknown environment {value!r} (expected mainnet or testnet)", kind="environment") from None


CoinSpec = Union[CoinInfo, Mapping[str, Any]]
PoolSpec = Union[PoolInfo, Mapping[str, Any]]
ManagerSpec = Union[BalanceManager, Mapping[str, Any]]


def _coin(key: str, spec: CoinSpec) -> CoinInfo:
    if isinstance(spec, CoinInfo):
        return spec
    try:
        return CoinInfo(
            key=key,
            address=spec["address"],
            coin_type=spec.get("type") or spec["coin_type"],
            scalar=spec["scalar"],
        )
    except KeyError as e:
        raise ConfigError(f"coin entry is missing field {e.args[0]!r}", kind="coin", key=key) from None


def _pool(key: str, spec: PoolSpec) -> PoolInfo:
    if isinstance(spec, PoolInfo):
        return spec
    try:
        return PoolInfo(
            key=key,
            address=spec["address"],
            base_coin=spec["base_coin"],
            quote_coin=spec["quote_coin"],
        )
    except KeyError as e:
        raise ConfigError(f"pool entry is missing field {e.args[0]!r}", kind="pool", key=key) from None


def _manager(key: str, spec: ManagerSpec) -> BalanceManager:
    if isinstance(spec, BalanceManager):
        return spec
    try:
        return BalanceManager(address=spec["address"], trade_cap=spec.get("trade_cap"), key=key)
    except KeyError as e:
        raise ConfigError(f"balance manager entry is missing field {e.args[0]!r}", kind="balance manager", key=key) from None


class DeepBookConfig:
    """
    Environment-scoped registry of coins, pools and balance managers.

    Parameters
    ----------
    env : "mainnet" | "testnet" (or `Environment`).
    address : the sender address used for simulations.
    admin_cap : optional DeepbookAdminCap object id (admin operations only).
    balance_managers, coins, pools : optional maps replacing the built-in
        defaults for that kind. Values may be records or plain mappings.
    package_ids : optional override of deepbook_package_id / registry_id /
        deep_treasury_id.

    Raises ConfigError if an address literal is malformed or a pool refers to
    a coin key that is not in the coin map.
    """

    __slots__ = (
        "_env",
        "_address",
        "_admin_cap",
        "_package_ids",
        "_coins",
        "_pools",
        "_balance_managers",
    )

    def __init__(
        self,
        env: Union[Environment, str],
        address: str,
        admin_cap: Optional[str] = None,
        balance_managers: Optional[Mapping[str, ManagerSpec]] = None,
        coins: Optional[Mapping[str, CoinSpec]] = None,
        pools: Optional[Mapping[str, PoolSpec]] = None,
        package_ids: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._env = Environment.parse(env)
        self._address = _addr.normalize(address, "address")
        self._admin_cap = _addr.normalize(admin_cap, "admin_cap") if admin_cap is not None else None

        if self._env is Environment.MAINNET:
            default_ids, default_coins, default_pools = C.MAINNET_PACKAGE_IDS, C.MAINNET_COINS, C.MAINNET_POOLS
        else:
            default_ids, default_coins, default_pools = C.TESTNET_PACKAGE_IDS, C.TESTNET_COINS, C.TESTNET_POOLS

        ids: Dict[str, str] = dict(default_ids)
        for k, v in (package_ids or {}).items():
            if k not in ids:
                raise ConfigError(f"unknown package id field {k!r}", kind="package_ids", key=k)
            ids[k] = v
        self._package_ids = MappingProxyType({k: _addr.normalize(v, k) for k, v in ids.items()})

        self._coins = MappingProxyType(
            {k: _coin(k, v) for k, v in (coins if coins is not None else default_coins).items()}
        )
        self._pools = MappingProxyType(
            {k: _pool(k, v) for k, v in (pools if pools is not None else default_pools).items()}
        )
        self._balance_managers = MappingProxyType(
            {k: _manager(k, v) for k, v in (balance_managers or {}).items()}
        )

        for pool in self._pools.values():
            for side, coin_key in (("base", pool.base_coin), ("quote", pool.quote_coin)):
                if coin_key not in self._coins:
                    raise ConfigError(
                        f"pool {pool.key!r} {side} coin {coin_key!r} is not in the coin map",
                        kind="pool",
                        key=pool.key,
                    )

    def __repr__(self) -> str:
        return (
            f"DeepBookConfig(env={self._env.value!r}, address={self._address!r}, "
            f"coins={sorted(self._coins)}, pools={sorted(self._pools)}, "
            f"balance_managers={sorted(self._balance_managers)})"
        )

    # ------------------------------------------------------------------ Accessors

    @property
    def env(self) -> Environment:
        return self._env

    @property
    def address(self) -> str:
        return self._address

    @property
    def admin_cap(self) -> Optional[str]:
        return self._admin_cap

    @property
    def deepbook_package_id(self) -> str:
        return self._package_ids["deepbook_package_id"]

    @property
    def registry_id(self) -> str:
        return self._package_ids["registry_id"]

    @property
    def deep_treasury_id(self) -> str:
        return self._package_ids["deep_treasury_id"]

    @property
    def coins(self) -> Mapping[str, CoinInfo]:
        return self._coins

    @property
    def pools(self) -> Mapping[str, PoolInfo]:
        return self._pools

    @property
    def balance_managers(self) -> Mapping[str, BalanceManager]:
        return self._balance_managers

    # ------------------------------------------------------------------ Lookups

    def get_coin(self, key: str) -> CoinInfo:
        try:
            return self._coins[key]
        except KeyError:
            raise UnknownKeyError(f"coin {key!r} not found", kind="coin", key=key) from None

    def get_pool(self, key: str) -> PoolInfo:
        try:
            return self._pools[key]
        except KeyError:
            raise UnknownKeyError(f"pool {key!r} not found", kind="pool", key=key) from None

    def get_balance_manager(self, key: str) -> BalanceManager:
        try:
            return self._balance_managers[key]
        except KeyError:
            raise UnknownKeyError(
                f"balance manager {key!r} not found", kind="balance manager", key=key
            ) from None

    def get_pool_coins(self, key: str) -> Tuple[PoolInfo, CoinInfo, CoinInfo]:
        """(pool, base coin, quote coin) for a pool key."""
        pool = self.get_pool(key)
        return pool, self.get_coin(pool.base_coin), self.get_coin(pool.quote_coin)

    def require_admin_cap(self) -> str:
        if self._admin_cap is None:
            raise ConfigError("admin operations need an admin_cap", kind="admin_cap")
        return self._admin_cap


# ---- Network -----------------------------------------------------------------


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None else default


def _ensure_scheme(url: Optional[str], allowed: tuple[str, ...]) -> Optional[str]:
    if not url:
        return url
    lower = url.lower()
    if not any(lower.startswith(f"{sch}://") for sch in allowed):
        raise ConfigError(f"URL must start with {allowed}, got: {url!r}", kind="rpc_url")
    return url


@dataclass(slots=True)
class NetworkConfig:
    env: Environment = Environment.TESTNET
    rpc_url: Optional[str] = None
    request_timeout: float = 30.0
    user_agent: str = field(default_factory=user_agent)

    def __post_init__(self) -> None:
        self.env = Environment.parse(self.env)
        if not self.rpc_url:
            self.rpc_url = C.FULLNODE_URLS[self.env.value]
        _ensure_scheme(self.rpc_url, ("http", "https"))

    @classmethod
    def from_env(cls, prefix: str = "DEEPBOOK_") -> "NetworkConfig":
        """
        Create config from environment variables:

        DEEPBOOK_ENV            (mainnet | testnet, default testnet)
        DEEPBOOK_RPC_URL        (http/https, default: public fullnode of DEEPBOOK_ENV)
        DEEPBOOK_TIMEOUT        (float seconds)
        DEEPBOOK_USER_AGENT     (str)
        """
        return cls(
            env=Environment.parse(_env(f"{prefix}ENV", Environment.TESTNET.value)),
            rpc_url=_env(f"{prefix}RPC_URL"),
            request_timeout=float(_env(f"{prefix}TIMEOUT", "30.0")),
            user_agent=_env(f"{prefix}USER_AGENT") or user_agent(),
        )

    def http_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "env": self.env.value,
            "rpc_url": self.rpc_url,
            "request_timeout": float(self.request_timeout),
            "user_agent": self.user_agent,
        }
