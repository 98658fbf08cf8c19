"""
deepbook_sdk.tx.builder
=======================

`TransactionBuilder` appends DeepBook calls to a pysui
`ProgrammableTransactionBuilder`, which assembles the inputs and commands of
a Sui programmable transaction and serializes the `TransactionKind` sent to
dev-inspect.

The builder only records; it performs no I/O. Object references must already
carry the version information the network requires (see
`deepbook_sdk.contracts.objects.ObjectResolver`).

Example
-------
    from deepbook_sdk.tx.builder import SharedObject, TransactionBuilder

    ptb = TransactionBuilder()
    manager = ptb.obj(SharedObject(object_id="0x…", initial_shared_version=7, mutable=True))
    amount = ptb.pure_u64(1_500_000_000)
    ptb.move_call("0x…", "balance_manager", "deposit", ["0x2::sui::SUI"], [manager, amount])
    tx_b64 = ptb.to_b64()

Semantics
---------
* Handles (`Argument`) are pysui `bcs.Argument` values. The same input always
  yields the same handle object.
* Pure inputs with identical bytes are shared, as are object inputs with the
  same id. A shared object used both immutably and mutably becomes mutable.
* `atomic()` groups several appends: if the block raises, inputs and commands
  are restored to their state on entry.
"""

from __future__ import annotations

import base64
import copy
import logging
import re
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Dict, Iterator, List, Sequence, Tuple, Union

import base58
import canoser
from pysui.sui.sui_txn.transaction_builder import ProgrammableTransactionBuilder
from pysui.sui.sui_types import bcs

from .. import address as _addr
from ..errors import ConfigError

logger = logging.getLogger(__name__)

__all__ = [
    "Argument",
    "Pure",
    "ImmOrOwnedObject",
    "SharedObject",
    "ObjectArg",
    "CallArg",
    "MoveCall",
    "TransferObjects",
    "Command",
    "TransactionBuilder",
]

_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_HEX_LITERAL_RE = re.compile(r"0x[0-9a-fA-F]+")
_TYPE_RE = re.compile(r"^(bool|u8|u16|u32|u64|u128|u256|address|signer|vector<.+>|0x[0-9a-f]{64}::\w+::\w+(<.+>)?)$")
_DIGEST_LENGTH = 32

Argument = bcs.Argument


# ---- Input records -----------------------------------------------------------


@dataclass(frozen=True)
class Pure:
    data: bytes


@dataclass(frozen=True)
class ImmOrOwnedObject:
    object_id: str
    version: int
    digest: str  # base58


@dataclass(frozen=True)
class SharedObject:
    object_id: str
    initial_shared_version: int
    mutable: bool


ObjectArg = Union[ImmOrOwnedObject, SharedObject]
CallArg = Union[Pure, ImmOrOwnedObject, SharedObject]


# ---- Command records ---------------------------------------------------------


@dataclass(frozen=True)
class MoveCall:
    package: str
    module: str
    function: str
    type_arguments: Tuple[str, ...] = ()
    arguments: Tuple[Argument, ...] = ()
    results: int = 1

    @property
    def target(self) -> str:
        return f"{self.package}::{self.module}::{self.function}"


@dataclass(frozen=True)
class TransferObjects:
    objects: Tuple[Argument, ...]
    recipient: Argument


Command = Union[MoveCall, TransferObjects]


# ---- Conversions -------------------------------------------------------------


def _ident(kind: str, value: str) -> str:
    if not isinstance(value, str) or not _IDENT_RE.match(value):
        raise ConfigError(f"invalid Move {kind} identifier {value!r}", kind="identifier", key=str(value))
    return value


def normalize_type(type_str: str) -> str:
    """Expand every address in a Move type to its 66-character form."""
    if not isinstance(type_str, str):
        raise ConfigError(f"type argument must be a string, got {type(type_str).__name__}", kind="type")
    text = _HEX_LITERAL_RE.sub(lambda m: _addr.normalize(m.group(0), "type"), type_str.strip())
    if not _TYPE_RE.match(text) or text.count("<") != text.count(">"):
        raise ConfigError(f"malformed Move type {type_str!r}", kind="type", key=type_str)
    return text


def _uint(value: int, bits: int, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < (1 << bits):
        raise ValueError(f"{what} must be an integer in [0, 2**{bits}), got {value!r}")
    return value


def _sui_object_arg(arg: ObjectArg) -> bcs.ObjectArg:
    object_id = bcs.Address.from_str(arg.object_id)
    if isinstance(arg, SharedObject):
        return bcs.ObjectArg(
            "SharedObject",
            bcs.SharedObjectReference(object_id, arg.initial_shared_version, arg.mutable),
        )
    try:
        raw = base58.b58decode(arg.digest)
    except ValueError as e:
        raise ValueError(f"object {arg.object_id} has a malformed digest: {e}") from e
    if len(raw) != _DIGEST_LENGTH:
        raise ValueError(f"object {arg.object_id} digest must be {_DIGEST_LENGTH} bytes, got {len(raw)}")
    return bcs.ObjectArg("ImmOrOwnedObject", bcs.ObjectReference(object_id, arg.version, bcs.Digest.from_str(arg.digest)))


def _object_key(object_id: str) -> bcs.BuilderArg:
    return bcs.BuilderArg("Object", bcs.Address.from_str(object_id))


# ---- Builder -----------------------------------------------------------------


class TransactionBuilder:
    """Accumulates inputs and commands in a pysui builder; see module docstring."""

    def __init__(self) -> None:
        self._builder = ProgrammableTransactionBuilder()
        self._inputs: List[CallArg] = []
        self._handles: List[Argument] = []
        self._pure_index: Dict[bytes, int] = {}
        self._object_index: Dict[str, int] = {}
        self._commands: List[Command] = []
        self._results: List[Union[Argument, List[Argument]]] = []

    def __repr__(self) -> str:
        return f"TransactionBuilder(inputs={len(self._inputs)}, commands={len(self._commands)})"

    # ------------------------------------------------------------------ views

    @property
    def inputs(self) -> Tuple[CallArg, ...]:
        return tuple(self._inputs)

    @property
    def commands(self) -> Tuple[Command, ...]:
        return tuple(self._commands)

    def input_of(self, handle: Argument) -> CallArg:
        """The input record behind `handle`. Raises KeyError for command results."""
        for index, known in enumerate(self._handles):
            if known is handle:
                return self._inputs[index]
        raise KeyError(f"{handle!r} is not an input of this transaction")

    def result(self, command_index: int) -> Union[Argument, List[Argument]]:
        """The handle(s) returned when command `command_index` was appended."""
        return self._results[command_index]

    # ------------------------------------------------------------------ output

    def finish(self) -> bcs.TransactionKind:
        """`TransactionKind::ProgrammableTransaction`; the builder stays usable."""
        return copy.deepcopy(self._builder).finish_for_inspect()

    def to_bytes(self) -> bytes:
        return bytes(self.finish().serialize())

    def to_b64(self) -> str:
        return base64.b64encode(self.to_bytes()).decode("ascii")

    # ------------------------------------------------------------------ atomic groups

    @contextmanager
    def atomic(self) -> Iterator["TransactionBuilder"]:
        saved = (
            copy.deepcopy(self._builder),
            list(self._inputs),
            list(self._handles),
            dict(self._pure_index),
            dict(self._object_index),
            list(self._commands),
            list(self._results),
        )
        try:
            yield self
        except BaseException:
            (
                self._builder,
                self._inputs,
                self._handles,
                self._pure_index,
                self._object_index,
                self._commands,
                self._results,
            ) = saved
            raise

    # ------------------------------------------------------------------ inputs

    def _record_input(self, arg: CallArg, handle: Argument) -> Argument:
        self._inputs.append(arg)
        self._handles.append(handle)
        return handle

    def pure(self, data: bytes) -> Argument:
        """Add BCS-encoded bytes as a pure input (deduplicated by content)."""
        data = bytes(data)
        index = self._pure_index.get(data)
        if index is not None:
            return self._handles[index]
        handle = self._builder.input_pure(bcs.BuilderArg("Pure", list(data)))
        self._pure_index[data] = len(self._inputs)
        return self._record_input(Pure(data), handle)

    def pure_u8(self, value: int) -> Argument:
        return self.pure(canoser.Uint8.encode(_uint(value, 8, "u8")))

    def pure_u64(self, value: int) -> Argument:
        return self.pure(canoser.Uint64.encode(_uint(value, 64, "u64")))

    def pure_u128(self, value: int) -> Argument:
        return self.pure(canoser.Uint128.encode(_uint(value, 128, "u128")))

    def pure_bool(self, value: bool) -> Argument:
        return self.pure(canoser.BoolT.encode(bool(value)))

    def pure_address(self, value: str) -> Argument:
        return self.pure(bcs.Address.from_str(_addr.normalize(value, "address")).serialize())

    def pure_id(self, value: str) -> Argument:
        # `ID` wraps a single address, so both encode the same.
        return self.pure_address(value)

    def obj(self, arg: ObjectArg) -> Argument:
        """Add an object reference (deduplicated by object id)."""
        object_id = _addr.normalize(arg.object_id, "object_id")
        arg = replace(arg, object_id=object_id)
        index = self._object_index.get(object_id)
        if index is None:
            handle = self._builder.input_obj(_object_key(object_id), _sui_object_arg(arg))
            self._object_index[object_id] = len(self._inputs)
            return self._record_input(arg, handle)

        existing = self._inputs[index]
        if isinstance(existing, SharedObject) and isinstance(arg, SharedObject):
            if existing.initial_shared_version != arg.initial_shared_version:
                raise ValueError(f"conflicting initial_shared_version for {object_id}")
            if arg.mutable and not existing.mutable:
                upgraded = replace(existing, mutable=True)
                self._builder.inputs[_object_key(object_id)] = bcs.CallArg("Object", _sui_object_arg(upgraded))
                self._inputs[index] = upgraded
        elif existing != arg:
            raise ValueError(f"conflicting object references for {object_id}")
        return self._handles[index]

    # ------------------------------------------------------------------ commands

    def _record_command(self, cmd: Command, handle: Union[Argument, List[Argument]]) -> None:
        self._commands.append(cmd)
        self._results.append(handle)

    def move_call(
        self,
        package: str,
        module: str,
        function: str,
        type_arguments: Sequence[str] = (),
        arguments: Sequence[Argument] = (),
        *,
        results: int = 1,
    ) -> Union[Argument, List[Argument]]:
        """
        Append `package::module::function<type_arguments>(arguments)`.

        Returns one handle, or a list of `results` handles when the function
        returns several values.
        """
        package = _addr.normalize(package, "package")
        _ident("module", module)
        _ident("function", function)
        if results < 1:
            raise ValueError("results must be at least 1")
        types = tuple(normalize_type(t) for t in type_arguments)
        type_tags = [bcs.TypeTag.type_tag_from(t) for t in types]

        handle = self._builder.move_call(
            target=bcs.Address.from_str(package),
            arguments=list(arguments),
            type_arguments=type_tags,
            module=module,
            function=function,
            res_count=results,
        )
        cmd = MoveCall(package, module, function, types, tuple(arguments), results)
        self._record_command(cmd, handle)
        logger.debug("ptb[%d] move_call %s (%d args)", len(self._commands) - 1, cmd.target, len(cmd.arguments))
        return handle

    def transfer_objects(self, objects: Sequence[Argument], recipient: Union[str, Argument]) -> Argument:
        if not objects:
            raise ValueError("transfer_objects needs at least one object")
        with self.atomic():
            target = self.pure_address(recipient) if isinstance(recipient, str) else recipient
            handle = self._builder.command(
                bcs.Command("TransferObjects", bcs.TransferObjects(list(objects), target))
            )
            self._record_command(TransferObjects(tuple(objects), target), handle)
            return handle
