import pytest

from conftest import (
    MANAGER_1,
    MANAGER_2,
    OWNED_DIGEST,
    PACKAGE_ID,
    SENDER,
    SUI_TYPE,
    TRADE_CAP,
    FakeRpc,
    call_inputs,
    shared_data,
    u64,
)

from deepbook_sdk import address
from deepbook_sdk.config import DeepBookConfig
from deepbook_sdk.contracts.balance_manager import BalanceManagerContract
from deepbook_sdk.contracts.objects import ObjectResolver, clock_object, object_arg_from_data
from deepbook_sdk.errors import ObjectNotFoundError, RpcError, UnknownKeyError
from deepbook_sdk.tx.builder import ImmOrOwnedObject, MoveCall, Pure, SharedObject, TransferObjects


def _targets(ptb):
    return [c.target.split("::", 1)[1] for c in ptb.commands if isinstance(c, MoveCall)]


# --- object resolution -------------------------------------------------------


def test_object_arg_from_shared_owner():
    arg = object_arg_from_data(shared_data(MANAGER_1, 21, version=99), mutable=True)
    assert arg == SharedObject(MANAGER_1, 21, True)


def test_object_arg_from_owned_object():
    data = {"objectId": TRADE_CAP, "version": "5", "digest": OWNED_DIGEST, "owner": {"AddressOwner": SENDER}}
    assert object_arg_from_data(data, mutable=False) == ImmOrOwnedObject(TRADE_CAP, 5, OWNED_DIGEST)


def test_object_arg_rejects_malformed_data():
    with pytest.raises(RpcError):
        object_arg_from_data({"objectId": TRADE_CAP, "version": "5", "owner": "Immutable"}, mutable=False)
    with pytest.raises(RpcError):
        object_arg_from_data({"objectId": TRADE_CAP, "version": "five", "digest": OWNED_DIGEST}, mutable=False)


@pytest.mark.asyncio
async def test_resolver_never_fetches_the_clock(rpc):
    resolver = ObjectResolver(rpc)
    assert await resolver.resolve("0x6", mutable=True) == clock_object()
    assert rpc.calls == []


@pytest.mark.asyncio
async def test_resolver_propagates_missing_object(rpc):
    with pytest.raises(ObjectNotFoundError):
        await ObjectResolver(rpc).shared("0x" + "99" * 32)


# --- deposit / withdraw ------------------------------------------------------


@pytest.mark.asyncio
async def test_deposit_fetches_manager_then_appends_one_call(rpc, balance_manager, ptb):
    await balance_manager.deposit_into_manager(ptb, "MANAGER_1", "SUI", 1.5)

    assert rpc.fetched() == [MANAGER_1]
    (cmd,) = ptb.commands
    assert isinstance(cmd, MoveCall)
    assert cmd.package == PACKAGE_ID
    assert (cmd.module, cmd.function) == ("balance_manager", "deposit")
    assert cmd.type_arguments == (SUI_TYPE,)
    assert ptb.inputs == (SharedObject(MANAGER_1, 21, True), u64(1_500_000_000))
    assert call_inputs(ptb, cmd) == list(ptb.inputs)


@pytest.mark.asyncio
async def test_withdraw_transfers_to_recipient(rpc, balance_manager, ptb):
    coin = await balance_manager.withdraw_from_manager(ptb, "MANAGER_1", "USDC", 2.25, "0xbeef")
    withdraw, transfer = ptb.commands
    assert withdraw.function == "withdraw"
    assert call_inputs(ptb, withdraw)[1] == u64(2_250_000)
    assert isinstance(transfer, TransferObjects)
    assert transfer.objects[0] is coin
    assert ptb.input_of(transfer.recipient) == Pure(address.to_bytes("0xbeef"))


@pytest.mark.asyncio
async def test_withdraw_all(balance_manager, ptb):
    await balance_manager.withdraw_all_from_manager(ptb, "MANAGER_1", "DEEP", SENDER)
    assert _targets(ptb) == ["balance_manager::withdraw_all"]
    assert isinstance(ptb.commands[1], TransferObjects)


@pytest.mark.asyncio
async def test_check_balance_uses_immutable_reference(balance_manager, ptb):
    await balance_manager.check_manager_balance(ptb, "MANAGER_1", "SUI")
    assert ptb.inputs == (SharedObject(MANAGER_1, 21, False),)
    assert _targets(ptb) == ["balance_manager::balance"]


@pytest.mark.asyncio
async def test_create_and_share_needs_no_fetch(rpc, balance_manager, ptb):
    await balance_manager.create_and_share_balance_manager(ptb)
    new, share = ptb.commands
    assert new.function == "new"
    assert share.target == f"{address.normalize('0x2')}::transfer::public_share_object"
    assert share.type_arguments[0] == f"{PACKAGE_ID}::balance_manager::BalanceManager"
    assert share.arguments[0] is ptb.result(0)
    assert rpc.calls == []


@pytest.mark.asyncio
async def test_owner_and_id_getters(balance_manager, ptb):
    await balance_manager.owner(ptb, "MANAGER_1")
    await balance_manager.id(ptb, "MANAGER_1")
    assert _targets(ptb) == ["balance_manager::owner", "balance_manager::id"]
    assert len(ptb.inputs) == 1


# --- failure atomicity -------------------------------------------------------


@pytest.mark.asyncio
async def test_unknown_coin_fails_before_any_fetch(rpc, balance_manager, ptb):
    with pytest.raises(UnknownKeyError):
        await balance_manager.deposit_into_manager(ptb, "MANAGER_1", "DOGE", 1.0)
    assert rpc.calls == []
    assert ptb.commands == () and ptb.inputs == ()


@pytest.mark.asyncio
async def test_negative_amount_is_rejected(balance_manager, ptb):
    with pytest.raises(ValueError):
        await balance_manager.deposit_into_manager(ptb, "MANAGER_1", "SUI", -1)
    assert ptb.commands == ()


@pytest.mark.asyncio
async def test_missing_manager_object_leaves_builder_untouched(config, ptb):
    rpc = FakeRpc()
    contract = BalanceManagerContract(config, ObjectResolver(rpc))
    ptb.pure_u64(7)
    with pytest.raises(ObjectNotFoundError):
        await contract.deposit_into_manager(ptb, "MANAGER_1", "SUI", 1.0)
    assert len(ptb.inputs) == 1
    assert ptb.commands == ()


# --- trade proofs ------------------------------------------------------------


@pytest.mark.asyncio
async def test_generate_proof_as_owner_without_trade_cap(rpc, balance_manager, ptb):
    proof = await balance_manager.generate_proof(ptb, "MANAGER_1")
    assert proof is ptb.result(0)
    assert _targets(ptb) == ["balance_manager::generate_proof_as_owner"]
    assert ptb.inputs == (SharedObject(MANAGER_1, 21, True),)
    assert rpc.fetched() == [MANAGER_1]


@pytest.mark.asyncio
async def test_generate_proof_as_trader_with_trade_cap(rpc, balance_manager, ptb):
    await balance_manager.generate_proof(ptb, "MANAGER_2")
    (cmd,) = ptb.commands
    assert cmd.function == "generate_proof_as_trader"
    assert ptb.inputs == (
        SharedObject(MANAGER_2, 22, True),
        ImmOrOwnedObject(TRADE_CAP, 5, OWNED_DIGEST),
    )
    assert call_inputs(ptb, cmd) == list(ptb.inputs)
    assert rpc.fetched() == [MANAGER_2, TRADE_CAP]


@pytest.mark.asyncio
async def test_explicit_proof_entry_points(balance_manager, ptb):
    await balance_manager.generate_proof_as_owner(ptb, MANAGER_1)
    await balance_manager.generate_proof_as_trader(ptb, MANAGER_2, TRADE_CAP)
    assert _targets(ptb) == [
        "balance_manager::generate_proof_as_owner",
        "balance_manager::generate_proof_as_trader",
    ]


@pytest.mark.asyncio
async def test_trade_cap_fetch_failure_appends_nothing(ptb):
    rpc = FakeRpc({MANAGER_2: shared_data(MANAGER_2, 22)})
    cfg = DeepBookConfig("mainnet", SENDER, balance_managers={"M": {"address": MANAGER_2, "trade_cap": TRADE_CAP}})
    contract = BalanceManagerContract(cfg, ObjectResolver(rpc))
    with pytest.raises(ObjectNotFoundError):
        await contract.generate_proof(ptb, "M")
    assert ptb.inputs == () and ptb.commands == ()
