"""
Administrative calls guarded by the DeepBook `DeepbookAdminCap`.

The admin cap is an owned object; its id must be configured on
`DeepBookConfig.admin_cap`, otherwise every operation raises ConfigError
before touching the network.
"""

from __future__ import annotations

import logging

from .. import address as _addr
from ..config import DeepBookConfig
from ..tx.builder import Argument, TransactionBuilder
from ..types.params import CreatePoolAdminParams
from ..units import price_to_units, to_base_units
from .deepbook import POOL_MODULE
from .objects import ObjectResolver

logger = logging.getLogger(__name__)

__all__ = ["DeepBookAdminContract", "REGISTRY_MODULE"]

REGISTRY_MODULE = "registry"


class DeepBookAdminContract:
    def __init__(self, config: DeepBookConfig, resolver: ObjectResolver) -> None:
        self._config = config
        self._resolver = resolver

    def _package(self) -> str:
        return self._config.deepbook_package_id

    async def create_pool_admin(self, ptb: TransactionBuilder, params: CreatePoolAdminParams) -> Argument:
        """
        Register a new pool for `base_coin_key`/`quote_coin_key`.

        `tick_size` is a price and scales like one; `lot_size` and `min_size`
        are base quantities.
        """
        admin_cap_id = self._config.require_admin_cap()
        base = self._config.get_coin(params.base_coin_key)
        quote = self._config.get_coin(params.quote_coin_key)
        tick_size = price_to_units(params.tick_size, base.scalar, quote.scalar, what="tick_size")
        lot_size = to_base_units(params.lot_size, base.scalar, what="lot_size")
        min_size = to_base_units(params.min_size, base.scalar, what="min_size")

        registry = await self._resolver.shared_mut(self._config.registry_id)
        admin_cap = await self._resolver.resolve(admin_cap_id)
        with ptb.atomic():
            return ptb.move_call(
                self._package(),
                POOL_MODULE,
                "create_pool_admin",
                [base.coin_type, quote.coin_type],
                [
                    ptb.obj(registry),
                    ptb.pure_u64(tick_size),
                    ptb.pure_u64(lot_size),
                    ptb.pure_u64(min_size),
                    ptb.pure_bool(params.whitelisted),
                    ptb.pure_bool(params.stable_pool),
                    ptb.obj(admin_cap),
                ],
            )

    async def _pool_admin_call(self, ptb: TransactionBuilder, function: str, pool_key: str) -> Argument:
        admin_cap_id = self._config.require_admin_cap()
        pool, base, quote = self._config.get_pool_coins(pool_key)

        pool_obj = await self._resolver.shared_mut(pool.address)
        registry = await self._resolver.shared(self._config.registry_id)
        admin_cap = await self._resolver.resolve(admin_cap_id)
        with ptb.atomic():
            return ptb.move_call(
                self._package(),
                POOL_MODULE,
                function,
                [base.coin_type, quote.coin_type],
                [ptb.obj(pool_obj), ptb.obj(registry), ptb.obj(admin_cap)],
            )

    async def unregister_pool_admin(self, ptb: TransactionBuilder, pool_key: str) -> Argument:
        """Remove the pool from the registry; the pool object itself is not passed."""
        admin_cap_id = self._config.require_admin_cap()
        _pool, base, quote = self._config.get_pool_coins(pool_key)

        registry = await self._resolver.shared_mut(self._config.registry_id)
        admin_cap = await self._resolver.resolve(admin_cap_id)
        with ptb.atomic():
            return ptb.move_call(
                self._package(),
                POOL_MODULE,
                "unregister_pool_admin",
                [base.coin_type, quote.coin_type],
                [ptb.obj(registry), ptb.obj(admin_cap)],
            )

    async def update_allowed_versions(self, ptb: TransactionBuilder, pool_key: str) -> Argument:
        return await self._pool_admin_call(ptb, "update_allowed_versions", pool_key)

    async def _registry_call(self, ptb: TransactionBuilder, function: str, encode) -> Argument:
        admin_cap_id = self._config.require_admin_cap()

        registry = await self._resolver.shared_mut(self._config.registry_id)
        admin_cap = await self._resolver.resolve(admin_cap_id)
        with ptb.atomic():
            return ptb.move_call(
                self._package(),
                REGISTRY_MODULE,
                function,
                [],
                [ptb.obj(registry), encode(ptb), ptb.obj(admin_cap)],
            )

    async def enable_version(self, ptb: TransactionBuilder, version: int) -> Argument:
        if isinstance(version, bool) or not isinstance(version, int) or version < 0:
            raise ValueError(f"version must be a non-negative integer, got {version!r}")
        return await self._registry_call(ptb, "enable_version", lambda b: b.pure_u64(version))

    async def disable_version(self, ptb: TransactionBuilder, version: int) -> Argument:
        if isinstance(version, bool) or not isinstance(version, int) or version < 0:
            raise ValueError(f"version must be a non-negative integer, got {version!r}")
        return await self._registry_call(ptb, "disable_version", lambda b: b.pure_u64(version))

    async def set_treasury_address(self, ptb: TransactionBuilder, treasury_address: str) -> Argument:
        treasury = _addr.normalize(treasury_address, "treasury_address")
        return await self._registry_call(ptb, "set_treasury_address", lambda b: b.pure_address(treasury))
