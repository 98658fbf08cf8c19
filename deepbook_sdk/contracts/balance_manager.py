"""
deepbook_sdk.contracts.balance_manager
======================================

Wrapper for the `balance_manager` Move module.

Every operation follows the same three steps:

1. resolve registry keys and scale amounts (may raise ConfigError / ValueError),
2. fetch the live objects it touches (may raise NetworkError),
3. append its calls to the builder inside `ptb.atomic()`.

Nothing is appended unless steps 1 and 2 succeed.

Trade proofs
------------
Orders, stakes and votes need a `TradeProof`. Which entry point mints it is
fixed per balance manager by its `proof` authority (see
`deepbook_sdk.types.core.BalanceManager`):

- `OwnerProof`  -> `generate_proof_as_owner(manager)`
- `TraderProof` -> `generate_proof_as_trader(manager, trade_cap)`
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .. import address as _addr
from ..config import DeepBookConfig
from ..tx.builder import Argument, ObjectArg, TransactionBuilder
from ..types.core import OwnerProof, ProofAuthority, TraderProof
from ..units import to_base_units
from .objects import ObjectResolver

logger = logging.getLogger(__name__)

__all__ = ["BalanceManagerContract", "PreparedProof", "MODULE"]

MODULE = "balance_manager"


@dataclass(frozen=True)
class PreparedProof:
    """Objects fetched for a trade proof; appending it needs no further I/O."""

    authority: ProofAuthority
    manager: ObjectArg
    trade_cap: Optional[ObjectArg] = None


class BalanceManagerContract:
    """Builds calls into `<deepbook>::balance_manager`."""

    def __init__(self, config: DeepBookConfig, resolver: ObjectResolver) -> None:
        self._config = config
        self._resolver = resolver

    @property
    def config(self) -> DeepBookConfig:
        return self._config

    def _package(self) -> str:
        return self._config.deepbook_package_id

    def _manager_address(self, manager_key: str) -> str:
        return self._config.get_balance_manager(manager_key).address

    # ------------------------------------------------------------------ lifecycle

    async def create_and_share_balance_manager(self, ptb: TransactionBuilder) -> Argument:
        """`balance_manager::new()` followed by `transfer::public_share_object`."""
        manager_type = f"{self._package()}::{MODULE}::BalanceManager"
        with ptb.atomic():
            manager = ptb.move_call(self._package(), MODULE, "new")
            return ptb.move_call(
                _addr.SUI_FRAMEWORK_ADDRESS,
                "transfer",
                "public_share_object",
                [manager_type],
                [manager],
            )

    # ------------------------------------------------------------------ funds

    async def deposit_into_manager(
        self,
        ptb: TransactionBuilder,
        manager_key: str,
        coin_key: str,
        amount_to_deposit: float,
    ) -> Argument:
        """Deposit `amount_to_deposit` (human units) of `coin_key` into the manager."""
        address = self._manager_address(manager_key)
        coin = self._config.get_coin(coin_key)
        deposit_input = to_base_units(amount_to_deposit, coin.scalar, what="amount_to_deposit")

        manager = await self._resolver.shared_mut(address)
        with ptb.atomic():
            return ptb.move_call(
                self._package(),
                MODULE,
                "deposit",
                [coin.coin_type],
                [ptb.obj(manager), ptb.pure_u64(deposit_input)],
            )

    async def withdraw_from_manager(
        self,
        ptb: TransactionBuilder,
        manager_key: str,
        coin_key: str,
        amount_to_withdraw: float,
        recipient: str,
    ) -> Argument:
        """Withdraw an amount and transfer the resulting coin to `recipient`."""
        address = self._manager_address(manager_key)
        coin = self._config.get_coin(coin_key)
        withdraw_input = to_base_units(amount_to_withdraw, coin.scalar, what="amount_to_withdraw")
        recipient = _addr.normalize(recipient, "recipient")

        manager = await self._resolver.shared_mut(address)
        with ptb.atomic():
            coin_object = ptb.move_call(
                self._package(),
                MODULE,
                "withdraw",
                [coin.coin_type],
                [ptb.obj(manager), ptb.pure_u64(withdraw_input)],
            )
            ptb.transfer_objects([coin_object], recipient)
            return coin_object

    async def withdraw_all_from_manager(
        self,
        ptb: TransactionBuilder,
        manager_key: str,
        coin_key: str,
        recipient: str,
    ) -> Argument:
        """Withdraw the whole balance of `coin_key` and transfer it to `recipient`."""
        address = self._manager_address(manager_key)
        coin = self._config.get_coin(coin_key)
        recipient = _addr.normalize(recipient, "recipient")

        manager = await self._resolver.shared_mut(address)
        with ptb.atomic():
            withdrawal_coin = ptb.move_call(
                self._package(),
                MODULE,
                "withdraw_all",
                [coin.coin_type],
                [ptb.obj(manager)],
            )
            ptb.transfer_objects([withdrawal_coin], recipient)
            return withdrawal_coin

    # ------------------------------------------------------------------ reads

    async def check_manager_balance(
        self,
        ptb: TransactionBuilder,
        manager_key: str,
        coin_key: str,
    ) -> Argument:
        """`balance_manager::balance<T>(manager)`; returns a u64 when simulated."""
        address = self._manager_address(manager_key)
        coin = self._config.get_coin(coin_key)

        manager = await self._resolver.shared(address)
        with ptb.atomic():
            return ptb.move_call(self._package(), MODULE, "balance", [coin.coin_type], [ptb.obj(manager)])

    async def owner(self, ptb: TransactionBuilder, manager_key: str) -> Argument:
        manager = await self._resolver.shared(self._manager_address(manager_key))
        with ptb.atomic():
            return ptb.move_call(self._package(), MODULE, "owner", [], [ptb.obj(manager)])

    async def id(self, ptb: TransactionBuilder, manager_key: str) -> Argument:
        manager = await self._resolver.shared(self._manager_address(manager_key))
        with ptb.atomic():
            return ptb.move_call(self._package(), MODULE, "id", [], [ptb.obj(manager)])

    # ------------------------------------------------------------------ trade proofs

    async def prepare_proof(self, manager_key: str) -> PreparedProof:
        """Fetch the objects a trade proof for `manager_key` needs."""
        authority = self._config.get_balance_manager(manager_key).proof
        manager = await self._resolver.shared_mut(authority.manager)
        if isinstance(authority, TraderProof):
            trade_cap = await self._resolver.resolve(authority.trade_cap)
            return PreparedProof(authority=authority, manager=manager, trade_cap=trade_cap)
        return PreparedProof(authority=authority, manager=manager)

    def append_proof(self, ptb: TransactionBuilder, prepared: PreparedProof) -> Argument:
        """Append the proof call for already-fetched objects. Returns the TradeProof handle."""
        if isinstance(prepared.authority, TraderProof):
            return ptb.move_call(
                self._package(),
                MODULE,
                "generate_proof_as_trader",
                [],
                [ptb.obj(prepared.manager), ptb.obj(prepared.trade_cap)],
            )
        return ptb.move_call(self._package(), MODULE, "generate_proof_as_owner", [], [ptb.obj(prepared.manager)])

    async def generate_proof(self, ptb: TransactionBuilder, manager_key: str) -> Argument:
        """Mint a TradeProof for `manager_key`, as trader if a trade cap is configured, else as owner."""
        prepared = await self.prepare_proof(manager_key)
        with ptb.atomic():
            return self.append_proof(ptb, prepared)

    async def generate_proof_as_owner(self, ptb: TransactionBuilder, manager_id: str) -> Argument:
        manager = await self._resolver.shared_mut(manager_id)
        prepared = PreparedProof(authority=OwnerProof(manager=manager.object_id), manager=manager)
        with ptb.atomic():
            return self.append_proof(ptb, prepared)

    async def generate_proof_as_trader(
        self,
        ptb: TransactionBuilder,
        manager_id: str,
        trade_cap_id: str,
    ) -> Argument:
        manager = await self._resolver.shared_mut(manager_id)
        trade_cap = await self._resolver.resolve(trade_cap_id)
        prepared = PreparedProof(
            authority=TraderProof(manager=manager.object_id, trade_cap=trade_cap.object_id),
            manager=manager,
            trade_cap=trade_cap,
        )
        with ptb.atomic():
            return self.append_proof(ptb, prepared)

    def manager_argument(self, ptb: TransactionBuilder, prepared: PreparedProof) -> Argument:
        """The manager input shared between a proof and the call that consumes it."""
        return ptb.obj(prepared.manager)
