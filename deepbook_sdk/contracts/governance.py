"""
Governance calls on a pool: staking DEEP, fee proposals and votes.

Stake amounts are in DEEP and scale by DEEP_SCALAR; proposal fees are
fractions and scale by FLOAT_SCALAR. Every call mints a trade proof first.
"""

from __future__ import annotations

import logging
from typing import Callable, List

from ..config import DeepBookConfig
from ..constants import DEEP_SCALAR, FLOAT_SCALAR
from ..tx.builder import Argument, TransactionBuilder
from ..types.params import ProposalParams
from ..units import to_base_units
from .. import address as _addr
from .balance_manager import BalanceManagerContract
from .deepbook import POOL_MODULE
from .objects import ObjectResolver

logger = logging.getLogger(__name__)

__all__ = ["GovernanceContract"]


class GovernanceContract:
    def __init__(
        self,
        config: DeepBookConfig,
        resolver: ObjectResolver,
        balance_manager: BalanceManagerContract,
    ) -> None:
        self._config = config
        self._resolver = resolver
        self._balance_manager = balance_manager

    async def _governance_call(
        self,
        ptb: TransactionBuilder,
        function: str,
        pool_key: str,
        balance_manager_key: str,
        extra: Callable[[TransactionBuilder], List[Argument]] = lambda b: [],
    ) -> Argument:
        pool, base, quote = self._config.get_pool_coins(pool_key)

        proof = await self._balance_manager.prepare_proof(balance_manager_key)
        pool_obj = await self._resolver.shared_mut(pool.address)
        with ptb.atomic():
            trade_proof = self._balance_manager.append_proof(ptb, proof)
            arguments = [ptb.obj(pool_obj), self._balance_manager.manager_argument(ptb, proof), trade_proof]
            arguments.extend(extra(ptb))
            return ptb.move_call(
                self._config.deepbook_package_id,
                POOL_MODULE,
                function,
                [base.coin_type, quote.coin_type],
                arguments,
            )

    async def stake(
        self,
        ptb: TransactionBuilder,
        pool_key: str,
        balance_manager_key: str,
        stake_amount: float,
    ) -> Argument:
        """Stake `stake_amount` DEEP from the manager into the pool."""
        stake_input = to_base_units(stake_amount, DEEP_SCALAR, what="stake_amount")
        return await self._governance_call(
            ptb, "stake", pool_key, balance_manager_key, lambda b: [b.pure_u64(stake_input)]
        )

    async def unstake(self, ptb: TransactionBuilder, pool_key: str, balance_manager_key: str) -> Argument:
        return await self._governance_call(ptb, "unstake", pool_key, balance_manager_key)

    async def submit_proposal(self, ptb: TransactionBuilder, params: ProposalParams) -> Argument:
        taker_fee = to_base_units(params.taker_fee, FLOAT_SCALAR, what="taker_fee")
        maker_fee = to_base_units(params.maker_fee, FLOAT_SCALAR, what="maker_fee")
        stake_required = to_base_units(params.stake_required, DEEP_SCALAR, what="stake_required")
        return await self._governance_call(
            ptb,
            "submit_proposal",
            params.pool_key,
            params.balance_manager_key,
            lambda b: [b.pure_u64(taker_fee), b.pure_u64(maker_fee), b.pure_u64(stake_required)],
        )

    async def vote(
        self,
        ptb: TransactionBuilder,
        pool_key: str,
        balance_manager_key: str,
        proposal_id: str,
    ) -> Argument:
        proposal = _addr.normalize(proposal_id, "proposal_id")
        return await self._governance_call(
            ptb, "vote", pool_key, balance_manager_key, lambda b: [b.pure_id(proposal)]
        )
