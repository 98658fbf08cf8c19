"""
deepbook_sdk.client
===================

`DeepBookClient` bundles the configuration registry and every contract wrapper
behind one object, and runs the read-only queries: each builds a fresh
transaction, simulates it with `sui_devInspectTransactionBlock` as the
configured sender and decodes the BCS return values into result records.

Example
-------
    from deepbook_sdk import DeepBookClient, SuiRpcClient

    async with SuiRpcClient("https://fullnode.mainnet.sui.io:443") as rpc:
        db = DeepBookClient(
            rpc,
            address="0x…",
            env="mainnet",
            balance_managers={"MANAGER_1": {"address": "0x344c…d27d"}},
        )
        print(await db.check_manager_balance("MANAGER_1", "SUI"))
        print(await db.get_level2_range("SUI_USDC", 0.1, 100.0, True))

State-changing operations are reached through the contract attributes
(`db.balance_manager`, `db.deep_book`, `db.governance`, `db.flash_loans`,
`db.deep_book_admin`) with a caller-owned builder.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Protocol, Union

from . import address as _addr
from .config import DeepBookConfig, Environment
from .constants import DEEP_SCALAR
from .contracts.balance_manager import BalanceManagerContract
from .contracts.deepbook import DeepBookContract
from .contracts.deepbook_admin import DeepBookAdminContract
from .contracts.flashloan import FlashLoanContract
from .contracts.governance import GovernanceContract
from .contracts.objects import ObjectResolver
from .errors import DecodeError
from .rpc.http import return_values
from .rpc import returns
from .tx.builder import TransactionBuilder
from .types.params import (
    BaseQuantityOut,
    Level2Range,
    Level2TicksFromMid,
    ManagerBalance,
    QuoteQuantityOut,
    VaultBalances,
)
from .units import from_base_units, units_to_price

logger = logging.getLogger(__name__)

__all__ = ["DeepBookClient", "SuiRpc"]


class SuiRpc(Protocol):
    async def get_object(self, object_id: str) -> Dict[str, Any]: ...

    async def dev_inspect_transaction(self, sender: str, tx: Any) -> Dict[str, Any]: ...


def _values(result: Mapping[str, Any], count: int, what: str) -> List[bytes]:
    values = return_values(result)
    if len(values) < count:
        raise DecodeError(f"{what}: expected {count} return values, got {len(values)}", what=what, length=len(values))
    return values


class DeepBookClient:
    def __init__(
        self,
        rpc: SuiRpc,
        address: str,
        env: Union[Environment, str],
        balance_managers: Optional[Mapping[str, Any]] = None,
        coins: Optional[Mapping[str, Any]] = None,
        pools: Optional[Mapping[str, Any]] = None,
        admin_cap: Optional[str] = None,
        package_ids: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.rpc = rpc
        self.config = DeepBookConfig(
            env,
            address,
            admin_cap=admin_cap,
            balance_managers=balance_managers,
            coins=coins,
            pools=pools,
            package_ids=package_ids,
        )
        self.resolver = ObjectResolver(rpc)
        self.balance_manager = BalanceManagerContract(self.config, self.resolver)
        self.deep_book = DeepBookContract(self.config, self.resolver, self.balance_manager)
        self.deep_book_admin = DeepBookAdminContract(self.config, self.resolver)
        self.flash_loans = FlashLoanContract(self.config, self.resolver)
        self.governance = GovernanceContract(self.config, self.resolver, self.balance_manager)

    @property
    def address(self) -> str:
        return self.config.address

    def __repr__(self) -> str:
        return f"DeepBookClient(env={self.config.env.value!r}, address={self.address!r})"

    async def _inspect(self, ptb: TransactionBuilder) -> Dict[str, Any]:
        logger.debug("dev-inspect %d command(s) as %s", len(ptb.commands), _addr.short(self.address))
        return await self.rpc.dev_inspect_transaction(self.address, ptb)

    # ------------------------------------------------------------------ queries

    async def check_manager_balance(self, manager_key: str, coin_key: str) -> ManagerBalance:
        """Balance of `coin_key` held by the manager, in human units."""
        coin = self.config.get_coin(coin_key)
        ptb = TransactionBuilder()
        await self.balance_manager.check_manager_balance(ptb, manager_key, coin_key)
        raw = _values(await self._inspect(ptb), 1, "balance")[0]
        balance = returns.decode_u64(raw, what="balance")
        return ManagerBalance(coin_type=coin.coin_type, balance=from_base_units(balance, coin.scalar))

    async def whitelisted(self, pool_key: str) -> bool:
        ptb = TransactionBuilder()
        await self.deep_book.whitelisted(ptb, pool_key)
        return returns.decode_bool(_values(await self._inspect(ptb), 1, "whitelisted")[0], what="whitelisted")

    async def mid_price(self, pool_key: str) -> float:
        _pool, base, quote = self.config.get_pool_coins(pool_key)
        ptb = TransactionBuilder()
        await self.deep_book.mid_price(ptb, pool_key)
        raw = _values(await self._inspect(ptb), 1, "mid_price")[0]
        return units_to_price(returns.decode_u64(raw, what="mid_price"), base.scalar, quote.scalar)

    async def get_quote_quantity_out(self, pool_key: str, base_quantity: float) -> QuoteQuantityOut:
        _pool, base, quote = self.config.get_pool_coins(pool_key)
        ptb = TransactionBuilder()
        await self.deep_book.get_quote_quantity_out(ptb, pool_key, base_quantity)
        values = _values(await self._inspect(ptb), 3, "quote_quantity_out")
        return QuoteQuantityOut(
            base_quantity=base_quantity,
            base_out=from_base_units(returns.decode_u64(values[0], what="base_out"), base.scalar),
            quote_out=from_base_units(returns.decode_u64(values[1], what="quote_out"), quote.scalar),
            deep_required=from_base_units(returns.decode_u64(values[2], what="deep_required"), DEEP_SCALAR),
        )

    async def get_base_quantity_out(self, pool_key: str, quote_quantity: float) -> BaseQuantityOut:
        _pool, base, quote = self.config.get_pool_coins(pool_key)
        ptb = TransactionBuilder()
        await self.deep_book.get_base_quantity_out(ptb, pool_key, quote_quantity)
        values = _values(await self._inspect(ptb), 3, "base_quantity_out")
        return BaseQuantityOut(
            quote_quantity=quote_quantity,
            base_out=from_base_units(returns.decode_u64(values[0], what="base_out"), base.scalar),
            quote_out=from_base_units(returns.decode_u64(values[1], what="quote_out"), quote.scalar),
            deep_required=from_base_units(returns.decode_u64(values[2], what="deep_required"), DEEP_SCALAR),
        )

    async def account_open_orders(self, pool_key: str, manager_key: str) -> List[int]:
        """Ids of the manager's open orders in the pool."""
        ptb = TransactionBuilder()
        await self.deep_book.account_open_orders(ptb, pool_key, manager_key)
        raw = _values(await self._inspect(ptb), 1, "open_orders")[0]
        # VecSet<u128> is a struct holding one vector<u128>.
        return returns.decode_vector_u128(raw, what="open_orders")

    async def get_level2_range(
        self,
        pool_key: str,
        price_low: float,
        price_high: float,
        is_bid: bool,
    ) -> Level2Range:
        """Price levels and their quantities between `price_low` and `price_high` on one side."""
        _pool, base, quote = self.config.get_pool_coins(pool_key)
        ptb = TransactionBuilder()
        await self.deep_book.get_level2_range(ptb, pool_key, price_low, price_high, is_bid)
        values = _values(await self._inspect(ptb), 2, "level2_range")
        prices = returns.decode_vector_u64(values[0], what="level2 prices")
        quantities = returns.decode_vector_u64(values[1], what="level2 quantities")
        return Level2Range(
            prices=[units_to_price(p, base.scalar, quote.scalar) for p in prices],
            quantities=[from_base_units(q, base.scalar) for q in quantities],
        )

    async def get_level2_ticks_from_mid(self, pool_key: str, ticks: int) -> Level2TicksFromMid:
        _pool, base, quote = self.config.get_pool_coins(pool_key)
        ptb = TransactionBuilder()
        await self.deep_book.get_level2_ticks_from_mid(ptb, pool_key, ticks)
        values = _values(await self._inspect(ptb), 4, "level2_ticks")
        decoded = [returns.decode_vector_u64(v, what="level2 ticks") for v in values[:4]]
        return Level2TicksFromMid(
            bid_prices=[units_to_price(p, base.scalar, quote.scalar) for p in decoded[0]],
            bid_quantities=[from_base_units(q, base.scalar) for q in decoded[1]],
            ask_prices=[units_to_price(p, base.scalar, quote.scalar) for p in decoded[2]],
            ask_quantities=[from_base_units(q, base.scalar) for q in decoded[3]],
        )

    async def vault_balances(self, pool_key: str) -> VaultBalances:
        _pool, base, quote = self.config.get_pool_coins(pool_key)
        ptb = TransactionBuilder()
        await self.deep_book.vault_balances(ptb, pool_key)
        values = _values(await self._inspect(ptb), 3, "vault_balances")
        return VaultBalances(
            base=from_base_units(returns.decode_u64(values[0], what="vault base"), base.scalar),
            quote=from_base_units(returns.decode_u64(values[1], what="vault quote"), quote.scalar),
            deep=from_base_units(returns.decode_u64(values[2], what="vault deep"), DEEP_SCALAR),
        )

    async def get_pool_id_by_assets(self, base_coin_key: str, quote_coin_key: str) -> str:
        ptb = TransactionBuilder()
        await self.deep_book.get_pool_id_by_assets(ptb, base_coin_key, quote_coin_key)
        raw = _values(await self._inspect(ptb), 1, "pool_id")[0]
        return _addr.from_bytes(returns.decode_address(raw, what="pool_id"))
