"""
Decoders for the BCS return values of dev-inspected Move calls.

Each helper takes the raw bytes of one return value, decodes the whole buffer
with canoser and raises DecodeError on short input, invalid booleans or
trailing bytes.
"""

from __future__ import annotations

import struct
from typing import List, Type

import canoser

from ..address import ADDRESS_LENGTH
from ..errors import DecodeError

__all__ = ["decode_u64", "decode_bool", "decode_address", "decode_vector_u64", "decode_vector_u128"]


class _U64(canoser.Struct):
    _fields = [("inner", canoser.Uint64)]


class _Bool(canoser.Struct):
    _fields = [("inner", bool)]


class _VectorU64(canoser.Struct):
    _fields = [("inner", [canoser.Uint64])]


class _VectorU128(canoser.Struct):
    _fields = [("inner", [canoser.Uint128])]


def _decode(layout: Type[canoser.Struct], raw: bytes, what: str):
    raw = bytes(raw)
    try:
        decoded = layout.deserialize(raw)
    except (OSError, TypeError, ValueError, IndexError, struct.error) as e:
        raise DecodeError(f"cannot decode {what}: {e}", what=what, length=len(raw)) from e
    if len(decoded.serialize()) != len(raw):
        raise DecodeError(f"trailing bytes after {what}", what=what, length=len(raw))
    return decoded.inner


def decode_u64(raw: bytes, *, what: str = "u64") -> int:
    return _decode(_U64, raw, what)


def decode_bool(raw: bytes, *, what: str = "bool") -> bool:
    return _decode(_Bool, raw, what)


def decode_address(raw: bytes, *, what: str = "address") -> bytes:
    if len(raw) != ADDRESS_LENGTH:
        raise DecodeError(f"{what} must be {ADDRESS_LENGTH} bytes, got {len(raw)}", what=what, length=len(raw))
    return bytes(raw)


def decode_vector_u64(raw: bytes, *, what: str = "vector<u64>") -> List[int]:
    return list(_decode(_VectorU64, raw, what))


def decode_vector_u128(raw: bytes, *, what: str = "vector<u128>") -> List[int]:
    return list(_decode(_VectorU128, raw, what))
