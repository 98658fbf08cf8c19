import base64

import base58
import pytest

from deepbook_sdk import address
from deepbook_sdk.errors import ConfigError
from deepbook_sdk.tx.builder import (
    ImmOrOwnedObject,
    MoveCall,
    Pure,
    SharedObject,
    TransactionBuilder,
    TransferObjects,
    normalize_type,
)

PKG = "0x" + "ab" * 32
MANAGER = "0x" + "a1" * 32
RECIPIENT = "0x" + "5e" * 32
DIGEST = base58.b58encode(bytes(range(32))).decode("ascii")
SUI = address.normalize("0x2") + "::sui::SUI"


def u64(value):
    return Pure(value.to_bytes(8, "little"))


# --- type strings ------------------------------------------------------------


def test_normalize_type_expands_addresses():
    assert normalize_type("0x2::sui::SUI") == SUI
    assert normalize_type(" 0x2::coin::Coin<0x2::sui::SUI> ") == f"{address.normalize('0x2')}::coin::Coin<{SUI}>"
    assert normalize_type("u64") == "u64"


@pytest.mark.parametrize("bad", ["", "0x2::sui", "0x2::sui::SUI<", "sui::SUI", "0x2::sui::SUI extra", "not a type"])
def test_normalize_type_rejects_malformed(bad):
    with pytest.raises(ConfigError):
        normalize_type(bad)


# --- inputs ------------------------------------------------------------------


def test_pure_inputs_are_deduplicated():
    ptb = TransactionBuilder()
    a = ptb.pure_u64(5)
    b = ptb.pure_u64(5)
    c = ptb.pure_u64(6)
    assert a is b
    assert c is not a
    assert ptb.inputs == (u64(5), u64(6))
    assert ptb.input_of(c) == u64(6)


def test_pure_encodings():
    ptb = TransactionBuilder()
    assert ptb.input_of(ptb.pure_u8(7)) == Pure(b"\x07")
    assert ptb.input_of(ptb.pure_bool(True)) == Pure(b"\x01")
    assert ptb.input_of(ptb.pure_u128(1)) == Pure(b"\x01" + b"\x00" * 15)
    assert ptb.input_of(ptb.pure_address("0x6")) == Pure(address.to_bytes("0x6"))
    # an ID encodes like its address, so both share one input
    assert ptb.pure_id("0x6") is ptb.pure_address("0x6")


@pytest.mark.parametrize(
    "call",
    [
        lambda p: p.pure_u8(256),
        lambda p: p.pure_u64(-1),
        lambda p: p.pure_u64(2**64),
        lambda p: p.pure_u64(True),
        lambda p: p.pure_u64(1.0),
    ],
)
def test_pure_rejects_out_of_range(call):
    ptb = TransactionBuilder()
    with pytest.raises(ValueError):
        call(ptb)
    assert ptb.inputs == ()


def test_shared_object_upgrades_to_mutable():
    ptb = TransactionBuilder()
    first = ptb.obj(SharedObject(MANAGER, 7, False))
    second = ptb.obj(SharedObject("0x" + "A1" * 32, 7, True))
    assert first is second
    assert ptb.inputs == (SharedObject(MANAGER, 7, True),)
    # stays mutable once upgraded
    ptb.obj(SharedObject(MANAGER, 7, False))
    assert ptb.inputs == (SharedObject(MANAGER, 7, True),)


def test_conflicting_object_references_raise():
    ptb = TransactionBuilder()
    ptb.obj(SharedObject(MANAGER, 7, False))
    with pytest.raises(ValueError):
        ptb.obj(SharedObject(MANAGER, 8, False))
    with pytest.raises(ValueError):
        ptb.obj(ImmOrOwnedObject(MANAGER, 1, DIGEST))


def test_owned_object_digest_must_be_32_bytes():
    ptb = TransactionBuilder()
    with pytest.raises(ValueError):
        ptb.obj(ImmOrOwnedObject(MANAGER, 3, base58.b58encode(b"\x01" * 20).decode("ascii")))
    with pytest.raises(ValueError):
        ptb.obj(ImmOrOwnedObject(MANAGER, 3, "0OIl"))
    assert ptb.inputs == ()


# --- commands ----------------------------------------------------------------


def test_move_call_records_command_and_result():
    ptb = TransactionBuilder()
    manager = ptb.obj(SharedObject(MANAGER, 7, True))
    amount = ptb.pure_u64(1)
    res = ptb.move_call(PKG, "balance_manager", "deposit", ["0x2::sui::SUI"], [manager, amount])
    (cmd,) = ptb.commands
    assert isinstance(cmd, MoveCall)
    assert cmd.target == f"{PKG}::balance_manager::deposit"
    assert cmd.type_arguments == (SUI,)
    assert cmd.arguments[0] is manager and cmd.arguments[1] is amount
    assert ptb.result(0) is res
    with pytest.raises(KeyError):
        ptb.input_of(res)


def test_move_call_with_several_results():
    ptb = TransactionBuilder()
    handles = ptb.move_call(PKG, "pool", "borrow_flashloan_base", [SUI, SUI], [ptb.pure_u64(1)], results=2)
    assert len(handles) == 2
    assert ptb.commands[0].results == 2


def test_invalid_move_call_leaves_builder_untouched():
    ptb = TransactionBuilder()
    ptb.pure_u64(1)
    with pytest.raises(ConfigError):
        ptb.move_call(PKG, "balance-manager", "deposit")
    with pytest.raises(ConfigError):
        ptb.move_call(PKG, "pool", "swap", ["not a type"])
    with pytest.raises(ValueError):
        ptb.move_call(PKG, "pool", "swap", results=0)
    assert ptb.commands == ()
    assert len(ptb.inputs) == 1


def test_atomic_rolls_back_on_error():
    ptb = TransactionBuilder()
    ptb.pure_u64(1)
    with pytest.raises(RuntimeError):
        with ptb.atomic():
            ptb.pure_u64(2)
            ptb.obj(SharedObject(MANAGER, 7, True))
            ptb.move_call(PKG, "m", "f")
            raise RuntimeError("abort")
    assert ptb.inputs == (u64(1),)
    assert ptb.commands == ()
    # the rolled-back value can be added again
    handle = ptb.pure_u64(2)
    assert ptb.input_of(handle) == u64(2)
    assert len(ptb.inputs) == 2
    ptb.move_call(PKG, "m", "g", [], [handle])
    assert address.to_bytes(MANAGER) not in ptb.to_bytes()


def test_transfer_objects():
    ptb = TransactionBuilder()
    coin = ptb.move_call(PKG, "balance_manager", "withdraw_all", [SUI], [ptb.obj(SharedObject(MANAGER, 7, True))])
    ptb.transfer_objects([coin], RECIPIENT)
    transfer = ptb.commands[1]
    assert isinstance(transfer, TransferObjects)
    assert transfer.objects[0] is coin
    assert ptb.input_of(transfer.recipient) == Pure(address.to_bytes(RECIPIENT))
    with pytest.raises(ValueError):
        ptb.transfer_objects([], RECIPIENT)
    assert len(ptb.commands) == 2


# --- serialization -----------------------------------------------------------


def test_serialized_transaction_kind():
    ptb = TransactionBuilder()
    amount = ptb.pure_u64(1_500_000_000)
    manager = ptb.obj(SharedObject(MANAGER, 7, False))
    ptb.move_call(PKG, "balance_manager", "deposit", ["0x2::sui::SUI"], [manager, amount])
    ptb.obj(SharedObject(MANAGER, 7, True))

    raw = ptb.to_bytes()
    assert raw[:1] == b"\x00"  # TransactionKind::ProgrammableTransaction
    assert b"\x08" + (1_500_000_000).to_bytes(8, "little") in raw
    assert address.to_bytes(MANAGER) + (7).to_bytes(8, "little") + b"\x01" in raw
    assert address.to_bytes(PKG) + b"\x0fbalance_manager" + b"\x07deposit" in raw
    assert address.to_bytes("0x2") + b"\x03sui\x03SUI" in raw
    assert base64.b64decode(ptb.to_b64()) == raw
    # serializing does not consume the builder
    assert ptb.to_bytes() == raw


def test_serialized_owned_object_digest():
    ptb = TransactionBuilder()
    ptb.move_call(PKG, "m", "f", [], [ptb.obj(ImmOrOwnedObject(MANAGER, 3, DIGEST))])
    raw = ptb.to_bytes()
    assert address.to_bytes(MANAGER) + (3).to_bytes(8, "little") + bytes([32]) + bytes(range(32)) in raw
