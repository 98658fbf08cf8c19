"""
Live object resolution.

Every object a Move call touches must be passed with the version information
the network requires: shared objects by `(id, initial_shared_version, mutable)`,
owned and immutable objects by `(id, version, digest)`. `ObjectResolver` fetches
the object immediately before use and picks the right form from its owner.

The clock (0x6) is created at genesis with a fixed version and is never fetched.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Protocol

from .. import address as _addr
from ..constants import CLOCK_INITIAL_SHARED_VERSION
from ..errors import JsonRpcCode, RpcError
from ..tx.builder import ImmOrOwnedObject, ObjectArg, SharedObject

logger = logging.getLogger(__name__)

__all__ = ["ObjectFetcher", "ObjectResolver", "clock_object", "object_arg_from_data"]


class ObjectFetcher(Protocol):
    async def get_object(self, object_id: str) -> Dict[str, Any]: ...


def clock_object() -> SharedObject:
    return SharedObject(
        object_id=_addr.SUI_CLOCK_OBJECT_ID,
        initial_shared_version=CLOCK_INITIAL_SHARED_VERSION,
        mutable=False,
    )


def _as_int(value: Any, what: str, object_id: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise RpcError(
            method="sui_getObject",
            code=JsonRpcCode.INTERNAL_ERROR,
            message=f"object {object_id} has malformed {what}",
            data=value,
        ) from None


def object_arg_from_data(data: Mapping[str, Any], *, mutable: bool, object_id: Optional[str] = None) -> ObjectArg:
    """Turn `sui_getObject` data into the matching ObjectArg."""
    object_id = _addr.normalize(str(data.get("objectId") or object_id), "objectId")
    version = _as_int(data.get("version"), "version", object_id)
    owner = data.get("owner")
    if isinstance(owner, Mapping) and "Shared" in owner:
        shared = owner["Shared"] or {}
        initial = shared.get("initial_shared_version", version)
        return SharedObject(
            object_id=object_id,
            initial_shared_version=_as_int(initial, "initial_shared_version", object_id),
            mutable=mutable,
        )
    digest = data.get("digest")
    if not isinstance(digest, str) or not digest:
        raise RpcError(method="sui_getObject", code=JsonRpcCode.INTERNAL_ERROR, message=f"object {object_id} has no digest", data=dict(data))
    return ImmOrOwnedObject(object_id=object_id, version=version, digest=digest)


class ObjectResolver:
    """Fetches objects through an RPC client and returns ready-to-use ObjectArgs."""

    def __init__(self, rpc: ObjectFetcher) -> None:
        self._rpc = rpc

    async def resolve(self, object_id: str, *, mutable: bool = False) -> ObjectArg:
        oid = _addr.normalize(object_id, "object_id")
        if oid == _addr.SUI_CLOCK_OBJECT_ID:
            return clock_object()
        data = await self._rpc.get_object(oid)
        arg = object_arg_from_data(data, mutable=mutable, object_id=oid)
        logger.debug("resolved %s -> %s", oid, type(arg).__name__)
        return arg

    async def shared(self, object_id: str) -> ObjectArg:
        return await self.resolve(object_id, mutable=False)

    async def shared_mut(self, object_id: str) -> ObjectArg:
        return await self.resolve(object_id, mutable=True)
