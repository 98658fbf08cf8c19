from __future__ import annotations

"""
Async HTTP JSON-RPC client for a Sui fullnode.

- Uses httpx.AsyncClient; one client may be shared by many concurrent tasks.
- No retries: transport failures, HTTP errors and JSON-RPC error objects are
  raised as `RpcError` immediately.
- Only the two endpoints the SDK needs are wrapped: `sui_getObject` and
  `sui_devInspectTransactionBlock`. Anything else goes through `request`.

Example:
    from deepbook_sdk.rpc.http import SuiRpcClient
    async with SuiRpcClient("https://fullnode.testnet.sui.io:443") as rpc:
        obj = await rpc.get_object("0x6")
        print(obj["version"])
"""

import json
import logging
import time
from dataclasses import dataclass, field
from itertools import count
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Union

import httpx

from .. import address as _addr
from ..errors import DecodeError, JsonRpcCode, ObjectNotFoundError, RpcError, SimulationError, from_jsonrpc_error
from ..tx.builder import TransactionBuilder
from ..version import user_agent

logger = logging.getLogger(__name__)

JSON = Union[dict, list, str, int, float, bool, None]
Params = Union[Sequence[Any], Mapping[str, Any], None]

_OBJECT_OPTIONS = {"showType": True, "showOwner": True, "showContent": False}


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class SuiRpcClient:
    """Asynchronous JSON-RPC 2.0 client over HTTP."""

    url: str
    timeout: float = 30.0
    headers: Optional[Mapping[str, str]] = None
    transport: Optional[httpx.AsyncBaseTransport] = None
    _id_counter: Iterator[int] = field(default_factory=lambda: count(start=_now_ms()))
    _client: Optional[httpx.AsyncClient] = field(init=False, default=None)

    def __post_init__(self) -> None:
        merged_headers: Dict[str, str] = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": user_agent(),
        }
        if self.headers:
            merged_headers.update(dict(self.headers))
        self._client = httpx.AsyncClient(timeout=self.timeout, headers=merged_headers, transport=self.transport)

    @classmethod
    def from_config(cls, cfg: Any) -> "SuiRpcClient":
        """Build from a `deepbook_sdk.config.NetworkConfig`."""
        return cls(url=cfg.rpc_url, timeout=cfg.request_timeout, headers=cfg.http_headers())

    # --- context manager -------------------------------------------------

    async def __aenter__(self) -> "SuiRpcClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()

    # --- public API ------------------------------------------------------

    async def request(self, method: str, params: Params = None) -> JSON:
        """Perform a single JSON-RPC request and return `result` or raise RpcError."""
        payload = self._make_payload(method, params)
        body = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
        logger.debug("rpc -> %s id=%s", method, payload["id"])
        try:
            r = await self._client.post(self.url, content=body)
        except httpx.HTTPError as e:
            raise RpcError(
                method=method,
                code=JsonRpcCode.TRANSPORT_ERROR,
                message="Network error",
                data=str(e),
                request_id=payload["id"],
            ) from e

        try:
            resp = r.json()
        except ValueError as e:
            raise RpcError(
                method=method,
                code=JsonRpcCode.INTERNAL_ERROR,
                message="Non-JSON response from RPC",
                data=f"HTTP {r.status_code}: {r.text[:256]}",
                request_id=payload["id"],
                http_status=r.status_code,
            ) from e

        if not isinstance(resp, dict):
            raise RpcError(
                method=method,
                code=JsonRpcCode.INTERNAL_ERROR,
                message="Invalid JSON-RPC response type",
                data=type(resp).__name__,
                http_status=r.status_code,
            )
        if resp.get("error") is not None:
            err = resp["error"] if isinstance(resp["error"], dict) else {"message": str(resp["error"])}
            raise from_jsonrpc_error(err, method=method, request_id=resp.get("id"), http_status=r.status_code)
        if r.status_code >= 400:
            raise RpcError(
                method=method,
                code=JsonRpcCode.SERVER_ERROR,
                message=f"HTTP {r.status_code}",
                data=resp,
                http_status=r.status_code,
            )
        if "result" not in resp:
            raise RpcError(method=method, code=JsonRpcCode.INTERNAL_ERROR, message="Malformed JSON-RPC response", data=resp)
        logger.debug("rpc <- %s id=%s", method, payload["id"])
        return resp["result"]

    async def get_object(self, object_id: str) -> Dict[str, Any]:
        """
        Fetch the live object data (`objectId`, `version`, `digest`, `owner`, `type`).

        Raises ObjectNotFoundError if the node reports the object missing or deleted.
        """
        oid = _addr.normalize(object_id, "object_id")
        result = await self.request("sui_getObject", [oid, dict(_OBJECT_OPTIONS)])
        if not isinstance(result, dict):
            raise RpcError(method="sui_getObject", code=JsonRpcCode.INTERNAL_ERROR, message="Malformed object response", data=result)
        data = result.get("data")
        if not data:
            err = result.get("error") or {}
            reason = err.get("code") if isinstance(err, dict) else str(err)
            raise ObjectNotFoundError(object_id=oid, reason=reason)
        return data

    async def dev_inspect_transaction(
        self,
        sender: str,
        tx: TransactionBuilder,
    ) -> Dict[str, Any]:
        """
        Simulate `tx` as `sender` without committing. Returns the raw result;
        raises SimulationError if execution aborted.
        """
        params = [_addr.normalize(sender, "sender"), tx.to_b64(), None, None]
        result = await self.request("sui_devInspectTransactionBlock", params)
        if not isinstance(result, dict):
            raise RpcError(
                method="sui_devInspectTransactionBlock",
                code=JsonRpcCode.INTERNAL_ERROR,
                message="Malformed dev-inspect response",
                data=result,
            )
        status = ((result.get("effects") or {}).get("status") or {})
        if result.get("error") or status.get("status") not in (None, "success"):
            raise SimulationError(
                message=str(result.get("error") or status.get("error") or "execution failed"),
                effects=result.get("effects"),
            )
        return result

    # --- internals -------------------------------------------------------

    def _make_payload(self, method: str, params: Params) -> Dict[str, Any]:
        if params is None:
            params = []
        elif isinstance(params, Mapping):
            params = dict(params)
        else:
            params = list(params)
        return {"jsonrpc": "2.0", "id": next(self._id_counter), "method": method, "params": params}


def return_values(result: Mapping[str, Any], command_index: int = -1) -> List[bytes]:
    """
    Extract the BCS return values of one command from a dev-inspect result.

    The node returns `results[i].returnValues` as `[[<byte list>, <type>], ...]`.
    Raises DecodeError when the command or its values are missing or malformed.
    """
    results = result.get("results")
    if not isinstance(results, list) or not results:
        raise DecodeError("dev-inspect result has no command results", what="returnValues")
    try:
        entry = results[command_index]
    except IndexError:
        raise DecodeError(f"no result for command {command_index}", what="returnValues") from None
    values = entry.get("returnValues") if isinstance(entry, dict) else None
    if not isinstance(values, list):
        raise DecodeError("command produced no return values", what="returnValues")
    out: List[bytes] = []
    for i, v in enumerate(values):
        try:
            raw, _type = v
            out.append(bytes(raw))
        except (TypeError, ValueError) as e:
            raise DecodeError(f"malformed return value #{i}: {e}", what="returnValues") from e
    return out


__all__ = ["SuiRpcClient", "return_values"]
