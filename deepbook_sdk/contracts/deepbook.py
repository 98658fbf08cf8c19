"""
deepbook_sdk.contracts.deepbook
===============================

Wrapper for the `pool` Move module: order placement and maintenance, swaps,
and the read-only pool getters used by `DeepBookClient`.

All pool functions are generic over `<Base, Quote>`; the type arguments come
from the pool's coin keys. Prices scale as

    round(price * FLOAT_SCALAR * quote_scalar / base_scalar)

and quantities by the base coin scalar.
"""

from __future__ import annotations

import logging
import re
from typing import List, Union

from ..config import DeepBookConfig
from ..tx.builder import Argument, TransactionBuilder
from ..types.core import CoinInfo, PoolInfo
from ..types.params import PlaceLimitOrderParams, PlaceMarketOrderParams
from ..units import price_to_units, to_base_units
from .balance_manager import BalanceManagerContract
from .objects import ObjectResolver, clock_object

logger = logging.getLogger(__name__)

__all__ = ["DeepBookContract", "POOL_MODULE"]

POOL_MODULE = "pool"

_DECIMAL_RE = re.compile(r"^-?[0-9]+$")


def _order_id(value: Union[int, float, str], what: str = "order_id") -> int:
    """Integer ids and counters: ints, integral floats or decimal strings."""
    if isinstance(value, bool):
        raise ValueError(f"{what} must be an integer, got {value!r}")
    if isinstance(value, int):
        n = value
    elif isinstance(value, float) and value.is_integer():
        n = int(value)
    elif isinstance(value, str) and _DECIMAL_RE.match(value.strip()):
        n = int(value.strip())
    else:
        raise ValueError(f"{what} must be an integer, got {value!r}")
    if n < 0:
        raise ValueError(f"{what} must be non-negative")
    return n


class DeepBookContract:
    """Builds calls into `<deepbook>::pool`."""

    def __init__(
        self,
        config: DeepBookConfig,
        resolver: ObjectResolver,
        balance_manager: BalanceManagerContract,
    ) -> None:
        self._config = config
        self._resolver = resolver
        self._balance_manager = balance_manager

    def _package(self) -> str:
        return self._config.deepbook_package_id

    def _pool_types(self, pool_key: str) -> tuple[PoolInfo, CoinInfo, CoinInfo, list[str]]:
        pool, base, quote = self._config.get_pool_coins(pool_key)
        return pool, base, quote, [base.coin_type, quote.coin_type]

    def _pool_call(
        self,
        ptb: TransactionBuilder,
        function: str,
        type_arguments: list[str],
        arguments: list[Argument],
        *,
        results: int = 1,
    ) -> Union[Argument, List[Argument]]:
        return ptb.move_call(self._package(), POOL_MODULE, function, type_arguments, arguments, results=results)

    # ------------------------------------------------------------------ orders

    async def place_limit_order(self, ptb: TransactionBuilder, params: PlaceLimitOrderParams) -> Argument:
        pool, base, quote, types = self._pool_types(params.pool_key)
        client_order_id = _order_id(params.client_order_id, "client_order_id")
        input_price = price_to_units(params.price, base.scalar, quote.scalar)
        input_quantity = to_base_units(params.quantity, base.scalar, what="quantity")
        expiration = _order_id(params.expiration, "expiration")

        proof = await self._balance_manager.prepare_proof(params.balance_manager_key)
        pool_obj = await self._resolver.shared_mut(pool.address)
        with ptb.atomic():
            trade_proof = self._balance_manager.append_proof(ptb, proof)
            return self._pool_call(
                ptb,
                "place_limit_order",
                types,
                [
                    ptb.obj(pool_obj),
                    self._balance_manager.manager_argument(ptb, proof),
                    trade_proof,
                    ptb.pure_u64(client_order_id),
                    ptb.pure_u8(int(params.order_type)),
                    ptb.pure_u8(int(params.self_matching_option)),
                    ptb.pure_u64(input_price),
                    ptb.pure_u64(input_quantity),
                    ptb.pure_bool(params.is_bid),
                    ptb.pure_bool(params.pay_with_deep),
                    ptb.pure_u64(expiration),
                    ptb.obj(clock_object()),
                ],
            )

    async def place_market_order(self, ptb: TransactionBuilder, params: PlaceMarketOrderParams) -> Argument:
        pool, base, _quote, types = self._pool_types(params.pool_key)
        client_order_id = _order_id(params.client_order_id, "client_order_id")
        input_quantity = to_base_units(params.quantity, base.scalar, what="quantity")

        proof = await self._balance_manager.prepare_proof(params.balance_manager_key)
        pool_obj = await self._resolver.shared_mut(pool.address)
        with ptb.atomic():
            trade_proof = self._balance_manager.append_proof(ptb, proof)
            return self._pool_call(
                ptb,
                "place_market_order",
                types,
                [
                    ptb.obj(pool_obj),
                    self._balance_manager.manager_argument(ptb, proof),
                    trade_proof,
                    ptb.pure_u64(client_order_id),
                    ptb.pure_u8(int(params.self_matching_option)),
                    ptb.pure_u64(input_quantity),
                    ptb.pure_bool(params.is_bid),
                    ptb.pure_bool(params.pay_with_deep),
                    ptb.obj(clock_object()),
                ],
            )

    async def modify_order(
        self,
        ptb: TransactionBuilder,
        pool_key: str,
        balance_manager_key: str,
        order_id: Union[int, str],
        new_quantity: float,
    ) -> Argument:
        """Reduce the open quantity of `order_id` to `new_quantity` (base units are derived)."""
        pool, base, _quote, types = self._pool_types(pool_key)
        oid = _order_id(order_id)
        input_quantity = to_base_units(new_quantity, base.scalar, what="new_quantity")

        proof = await self._balance_manager.prepare_proof(balance_manager_key)
        pool_obj = await self._resolver.shared_mut(pool.address)
        with ptb.atomic():
            trade_proof = self._balance_manager.append_proof(ptb, proof)
            return self._pool_call(
                ptb,
                "modify_order",
                types,
                [
                    ptb.obj(pool_obj),
                    self._balance_manager.manager_argument(ptb, proof),
                    trade_proof,
                    ptb.pure_u128(oid),
                    ptb.pure_u64(input_quantity),
                    ptb.obj(clock_object()),
                ],
            )

    async def cancel_order(
        self,
        ptb: TransactionBuilder,
        pool_key: str,
        balance_manager_key: str,
        order_id: Union[int, str],
    ) -> Argument:
        pool, _base, _quote, types = self._pool_types(pool_key)
        oid = _order_id(order_id)

        proof = await self._balance_manager.prepare_proof(balance_manager_key)
        pool_obj = await self._resolver.shared_mut(pool.address)
        with ptb.atomic():
            trade_proof = self._balance_manager.append_proof(ptb, proof)
            return self._pool_call(
                ptb,
                "cancel_order",
                types,
                [
                    ptb.obj(pool_obj),
                    self._balance_manager.manager_argument(ptb, proof),
                    trade_proof,
                    ptb.pure_u128(oid),
                    ptb.obj(clock_object()),
                ],
            )

    async def cancel_all_orders(
        self,
        ptb: TransactionBuilder,
        pool_key: str,
        balance_manager_key: str,
    ) -> Argument:
        pool, _base, _quote, types = self._pool_types(pool_key)

        proof = await self._balance_manager.prepare_proof(balance_manager_key)
        pool_obj = await self._resolver.shared_mut(pool.address)
        with ptb.atomic():
            trade_proof = self._balance_manager.append_proof(ptb, proof)
            return self._pool_call(
                ptb,
                "cancel_all_orders",
                types,
                [
                    ptb.obj(pool_obj),
                    self._balance_manager.manager_argument(ptb, proof),
                    trade_proof,
                    ptb.obj(clock_object()),
                ],
            )

    async def withdraw_settled_amounts(
        self,
        ptb: TransactionBuilder,
        pool_key: str,
        balance_manager_key: str,
    ) -> Argument:
        return await self._proof_only_call(ptb, "withdraw_settled_amounts", pool_key, balance_manager_key)

    async def claim_rebates(
        self,
        ptb: TransactionBuilder,
        pool_key: str,
        balance_manager_key: str,
    ) -> Argument:
        return await self._proof_only_call(ptb, "claim_rebates", pool_key, balance_manager_key)

    async def _proof_only_call(
        self,
        ptb: TransactionBuilder,
        function: str,
        pool_key: str,
        balance_manager_key: str,
    ) -> Argument:
        pool, _base, _quote, types = self._pool_types(pool_key)

        proof = await self._balance_manager.prepare_proof(balance_manager_key)
        pool_obj = await self._resolver.shared_mut(pool.address)
        with ptb.atomic():
            trade_proof = self._balance_manager.append_proof(ptb, proof)
            return self._pool_call(
                ptb,
                function,
                types,
                [ptb.obj(pool_obj), self._balance_manager.manager_argument(ptb, proof), trade_proof],
            )

    async def add_deep_price_point(
        self,
        ptb: TransactionBuilder,
        target_pool_key: str,
        reference_pool_key: str,
    ) -> Argument:
        """Feed the reference pool's DEEP price into the target pool."""
        target, _tb, _tq, target_types = self._pool_types(target_pool_key)
        reference, _rb, _rq, reference_types = self._pool_types(reference_pool_key)

        target_obj = await self._resolver.shared_mut(target.address)
        reference_obj = await self._resolver.shared(reference.address)
        with ptb.atomic():
            return self._pool_call(
                ptb,
                "add_deep_price_point",
                target_types + reference_types,
                [ptb.obj(target_obj), ptb.obj(reference_obj), ptb.obj(clock_object())],
            )

    # ------------------------------------------------------------------ swaps

    async def swap_exact_base_for_quote(
        self,
        ptb: TransactionBuilder,
        pool_key: str,
        base_coin: Argument,
        deep_coin: Argument,
        min_quote_out: float,
    ) -> List[Argument]:
        """
        Swap all of `base_coin` for quote. Returns the `(base, quote, deep)`
        remainder coins as three handles.
        """
        pool, _base, quote, types = self._pool_types(pool_key)
        min_out = to_base_units(min_quote_out, quote.scalar, what="min_quote_out")

        pool_obj = await self._resolver.shared_mut(pool.address)
        with ptb.atomic():
            return self._pool_call(
                ptb,
                "swap_exact_base_for_quote",
                types,
                [ptb.obj(pool_obj), base_coin, deep_coin, ptb.pure_u64(min_out), ptb.obj(clock_object())],
                results=3,
            )

    async def swap_exact_quote_for_base(
        self,
        ptb: TransactionBuilder,
        pool_key: str,
        quote_coin: Argument,
        deep_coin: Argument,
        min_base_out: float,
    ) -> List[Argument]:
        pool, base, _quote, types = self._pool_types(pool_key)
        min_out = to_base_units(min_base_out, base.scalar, what="min_base_out")

        pool_obj = await self._resolver.shared_mut(pool.address)
        with ptb.atomic():
            return self._pool_call(
                ptb,
                "swap_exact_quote_for_base",
                types,
                [ptb.obj(pool_obj), quote_coin, deep_coin, ptb.pure_u64(min_out), ptb.obj(clock_object())],
                results=3,
            )

    # ------------------------------------------------------------------ read-only

    async def _read_pool(self, ptb: TransactionBuilder, pool_key: str, function: str, *extra, clock: bool = False) -> Argument:
        pool, _base, _quote, types = self._pool_types(pool_key)
        pool_obj = await self._resolver.shared(pool.address)
        with ptb.atomic():
            args = [ptb.obj(pool_obj)]
            for build in extra:
                args.append(build(ptb))
            if clock:
                args.append(ptb.obj(clock_object()))
            return self._pool_call(ptb, function, types, args)

    async def whitelisted(self, ptb: TransactionBuilder, pool_key: str) -> Argument:
        return await self._read_pool(ptb, pool_key, "whitelisted")

    async def mid_price(self, ptb: TransactionBuilder, pool_key: str) -> Argument:
        return await self._read_pool(ptb, pool_key, "mid_price", clock=True)

    async def vault_balances(self, ptb: TransactionBuilder, pool_key: str) -> Argument:
        return await self._read_pool(ptb, pool_key, "vault_balances")

    async def get_level2_range(
        self,
        ptb: TransactionBuilder,
        pool_key: str,
        price_low: float,
        price_high: float,
        is_bid: bool,
    ) -> Argument:
        """Book depth between two prices; simulates to `(vector<u64> prices, vector<u64> quantities)`."""
        _pool, base, quote = self._config.get_pool_coins(pool_key)
        low = price_to_units(price_low, base.scalar, quote.scalar, what="price_low")
        high = price_to_units(price_high, base.scalar, quote.scalar, what="price_high")
        return await self._read_pool(
            ptb,
            pool_key,
            "get_level2_range",
            lambda b: b.pure_u64(low),
            lambda b: b.pure_u64(high),
            lambda b: b.pure_bool(is_bid),
            clock=True,
        )

    async def get_level2_ticks_from_mid(self, ptb: TransactionBuilder, pool_key: str, ticks: int) -> Argument:
        n = _order_id(ticks, "ticks")
        return await self._read_pool(ptb, pool_key, "get_level2_ticks_from_mid", lambda b: b.pure_u64(n), clock=True)

    async def get_quote_quantity_out(
        self,
        ptb: TransactionBuilder,
        pool_key: str,
        base_quantity: float,
    ) -> Argument:
        _pool, base, _quote = self._config.get_pool_coins(pool_key)
        qty = to_base_units(base_quantity, base.scalar, what="base_quantity")
        return await self._read_pool(ptb, pool_key, "get_quote_quantity_out", lambda b: b.pure_u64(qty), clock=True)

    async def get_base_quantity_out(
        self,
        ptb: TransactionBuilder,
        pool_key: str,
        quote_quantity: float,
    ) -> Argument:
        _pool, _base, quote = self._config.get_pool_coins(pool_key)
        qty = to_base_units(quote_quantity, quote.scalar, what="quote_quantity")
        return await self._read_pool(ptb, pool_key, "get_base_quantity_out", lambda b: b.pure_u64(qty), clock=True)

    async def account_open_orders(
        self,
        ptb: TransactionBuilder,
        pool_key: str,
        balance_manager_key: str,
    ) -> Argument:
        """Open order ids of a manager; simulates to a `VecSet<u128>`."""
        manager_address = self._config.get_balance_manager(balance_manager_key).address
        pool, _base, _quote, types = self._pool_types(pool_key)

        pool_obj = await self._resolver.shared(pool.address)
        manager = await self._resolver.shared(manager_address)
        with ptb.atomic():
            return self._pool_call(ptb, "account_open_orders", types, [ptb.obj(pool_obj), ptb.obj(manager)])

    async def get_pool_id_by_assets(self, ptb: TransactionBuilder, base_coin_key: str, quote_coin_key: str) -> Argument:
        base = self._config.get_coin(base_coin_key)
        quote = self._config.get_coin(quote_coin_key)

        registry = await self._resolver.shared(self._config.registry_id)
        with ptb.atomic():
            return self._pool_call(ptb, "get_pool_id_by_asset", [base.coin_type, quote.coin_type], [ptb.obj(registry)])
