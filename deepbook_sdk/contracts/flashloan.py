"""
Flash loans against a pool's vault.

A borrow returns two values: the borrowed coin and a hot-potato `FlashLoan`
receipt that must be handed back to the matching `return_*` call in the same
transaction.
"""

from __future__ import annotations

import logging
from typing import Tuple

from ..config import DeepBookConfig
from ..tx.builder import Argument, TransactionBuilder
from ..units import to_base_units
from .deepbook import POOL_MODULE
from .objects import ObjectResolver

logger = logging.getLogger(__name__)

__all__ = ["FlashLoanContract"]


class FlashLoanContract:
    def __init__(self, config: DeepBookConfig, resolver: ObjectResolver) -> None:
        self._config = config
        self._resolver = resolver

    async def _borrow(
        self,
        ptb: TransactionBuilder,
        function: str,
        pool_key: str,
        amount: float,
        *,
        base: bool,
    ) -> Tuple[Argument, Argument]:
        pool, base_coin, quote_coin = self._config.get_pool_coins(pool_key)
        scalar = base_coin.scalar if base else quote_coin.scalar
        borrow_input = to_base_units(amount, scalar, what="borrow_amount")

        pool_obj = await self._resolver.shared_mut(pool.address)
        with ptb.atomic():
            coin, flash_loan = ptb.move_call(
                self._config.deepbook_package_id,
                POOL_MODULE,
                function,
                [base_coin.coin_type, quote_coin.coin_type],
                [ptb.obj(pool_obj), ptb.pure_u64(borrow_input)],
                results=2,
            )
        return coin, flash_loan

    async def _return(
        self,
        ptb: TransactionBuilder,
        function: str,
        pool_key: str,
        coin: Argument,
        flash_loan: Argument,
    ) -> Argument:
        pool, base_coin, quote_coin = self._config.get_pool_coins(pool_key)

        pool_obj = await self._resolver.shared_mut(pool.address)
        with ptb.atomic():
            return ptb.move_call(
                self._config.deepbook_package_id,
                POOL_MODULE,
                function,
                [base_coin.coin_type, quote_coin.coin_type],
                [ptb.obj(pool_obj), coin, flash_loan],
            )

    async def borrow_base_asset(
        self, ptb: TransactionBuilder, pool_key: str, borrow_amount: float
    ) -> Tuple[Argument, Argument]:
        """Borrow base coin. Returns `(coin, flash_loan)` handles."""
        return await self._borrow(ptb, "borrow_flashloan_base", pool_key, borrow_amount, base=True)

    async def return_base_asset(
        self, ptb: TransactionBuilder, pool_key: str, coin: Argument, flash_loan: Argument
    ) -> Argument:
        return await self._return(ptb, "return_flashloan_base", pool_key, coin, flash_loan)

    async def borrow_quote_asset(
        self, ptb: TransactionBuilder, pool_key: str, borrow_amount: float
    ) -> Tuple[Argument, Argument]:
        """Borrow quote coin. Returns `(coin, flash_loan)` handles."""
        return await self._borrow(ptb, "borrow_flashloan_quote", pool_key, borrow_amount, base=False)

    async def return_quote_asset(
        self, ptb: TransactionBuilder, pool_key: str, coin: Argument, flash_loan: Argument
    ) -> Argument:
        return await self._return(ptb, "return_flashloan_quote", pool_key, coin, flash_loan)
