"""
Typed error classes for the DeepBook SDK.

Three families, all deriving from `DeepBookError` so callers can catch
everything at once:

- `ConfigError`: unknown registry key, malformed address literal, missing
  admin capability. Raised before any network I/O.
- `NetworkError`: JSON-RPC failure, object not found, failed simulation.
- `DecodeError`: BCS return values that do not match the expected layout.

None of these are retried by the SDK.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional

__all__ = [
    "DeepBookError",
    "ConfigError",
    "UnknownKeyError",
    "AddressError",
    "NetworkError",
    "RpcError",
    "ObjectNotFoundError",
    "SimulationError",
    "DecodeError",
    "JsonRpcCode",
    "from_jsonrpc_error",
]


class DeepBookError(Exception):
    """Base class for all SDK errors."""


class JsonRpcCode(IntEnum):
    # JSON-RPC 2.0 spec
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    # Server errors (implementation-defined range: -32099 to -32000)
    SERVER_ERROR = -32000

    # Client-side transport failures
    TRANSPORT_ERROR = -32098


# ---- Configuration -----------------------------------------------------------


@dataclass(slots=True)
class ConfigError(DeepBookError):
    """
    Raised for caller configuration mistakes.

    Fields:
      - message: human-readable description
      - kind: what was being looked up ("coin", "pool", "balance manager", "address", ...)
      - key: the offending key or field name
    """

    message: str
    kind: Optional[str] = None
    key: Optional[str] = None

    def __str__(self) -> str:
        where = []
        if self.kind:
            where.append(f"kind={self.kind}")
        if self.key is not None:
            where.append(f"key={self.key!r}")
        where_s = (" [" + ", ".join(where) + "]") if where else ""
        return f"{type(self).__name__}{where_s}: {self.message}"


@dataclass(slots=True)
class UnknownKeyError(ConfigError):
    """A coin / pool / balance-manager key is not present in the registry."""


@dataclass(slots=True)
class AddressError(ConfigError):
    """An address or object id literal is malformed."""


# ---- Network -----------------------------------------------------------------


class NetworkError(DeepBookError):
    """Base class for failures talking to the fullnode."""


@dataclass(slots=True)
class RpcError(NetworkError):
    """Raised when a JSON-RPC call returns an error object or the transport fails."""

    method: Optional[str]
    code: int
    message: str
    data: Optional[Any] = None
    request_id: Optional[Any] = None
    http_status: Optional[int] = None

    def __str__(self) -> str:
        parts = [f"RPC[{self.method or '-'}] code={self.code} msg={self.message!r}"]
        if self.request_id is not None:
            parts.append(f"id={self.request_id}")
        if self.http_status is not None:
            parts.append(f"http={self.http_status}")
        if self.data is not None:
            parts.append(f"data={self.data!r}")
        return " ".join(parts)

    @property
    def code_enum(self) -> Optional[JsonRpcCode]:
        try:
            return JsonRpcCode(self.code)
        except ValueError:
            return None


@dataclass(slots=True)
class ObjectNotFoundError(NetworkError):
    """The fullnode has no live object with this id (deleted, wrapped or never existed)."""

    object_id: str
    reason: Optional[str] = None

    def __str__(self) -> str:
        suffix = f" ({self.reason})" if self.reason else ""
        return f"Object {self.object_id} not found{suffix}"


@dataclass(slots=True)
class SimulationError(NetworkError):
    """A dev-inspect simulation aborted or returned no results."""

    message: str
    function: Optional[str] = None
    effects: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        fn = f" [fn={self.function}]" if self.function else ""
        return f"SimulationError{fn}: {self.message}"


# ---- Decoding ----------------------------------------------------------------


@dataclass(slots=True)
class DecodeError(DeepBookError):
    """
    Raised when BCS bytes returned by a query cannot be decoded.

    Typical causes: buffer shorter than the declared type, trailing bytes,
    truncated ULEB128 length prefix, unexpected number of return values.
    """

    message: str
    what: Optional[str] = None
    length: Optional[int] = None

    def __str__(self) -> str:
        where = []
        if self.what:
            where.append(f"what={self.what}")
        if self.length is not None:
            where.append(f"len={self.length}")
        where_s = (" [" + ", ".join(where) + "]") if where else ""
        return f"DecodeError{where_s}: {self.message}"


def from_jsonrpc_error(
    err_obj: Dict[str, Any],
    *,
    method: Optional[str] = None,
    request_id: Optional[Any] = None,
    http_status: Optional[int] = None,
) -> RpcError:
    """
    Convert a JSON-RPC error object into RpcError.

    `err_obj` should resemble: {"code": int, "message": str, "data": any?}
    """
    code = int(err_obj.get("code", JsonRpcCode.SERVER_ERROR))
    message = str(err_obj.get("message", "Unknown JSON-RPC error"))
    data = err_obj.get("data")
    return RpcError(
        method=method,
        code=code,
        message=message,
        data=data,
        request_id=request_id,
        http_status=http_status,
    )
