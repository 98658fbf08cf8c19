"""
deepbook_sdk.address
====================

Sui address and object-id helpers.

Format
------
Addresses and object ids share one representation: 32 bytes, written as a
`0x`-prefixed hex literal. Short literals such as `0x2` or `0x6` are accepted
and left-padded with zeros, matching `ObjectID::from_hex_literal`.

This module provides:
- normalize(literal, field=None) -> str    canonical 66-char lowercase form
- to_bytes(literal, field=None) -> bytes   32 raw bytes
- from_bytes(raw) -> str
- is_valid(literal) -> bool
- short(literal) -> str                    `0x2`-style form for well-known ids

Malformed literals raise `AddressError` naming the field that held them.
"""

from __future__ import annotations

import re
from typing import Optional

from .errors import AddressError

ADDRESS_LENGTH = 32

__all__ = [
    "ADDRESS_LENGTH",
    "SUI_FRAMEWORK_ADDRESS",
    "SUI_CLOCK_OBJECT_ID",
    "normalize",
    "to_bytes",
    "from_bytes",
    "is_valid",
    "short",
]

_HEX_BODY_RE = re.compile(r"^[0-9a-fA-F]+$")
_HEX_DIGITS = ADDRESS_LENGTH * 2


def normalize(literal: str, field: Optional[str] = None) -> str:
    """
    Return the canonical `0x` + 64 lowercase hex digits form of `literal`.

    Raises AddressError if the literal lacks the `0x` prefix, contains non-hex
    characters, is empty, or is longer than 32 bytes.
    """
    if not isinstance(literal, str):
        raise AddressError(
            f"address literal must be a string, got {type(literal).__name__}",
            kind="address",
            key=field,
        )
    s = literal.strip()
    if not s.startswith(("0x", "0X")):
        raise AddressError(f"address literal must start with 0x: {literal!r}", kind="address", key=field)
    body = s[2:]
    if not body or not _HEX_BODY_RE.match(body):
        raise AddressError(f"invalid hex in address literal: {literal!r}", kind="address", key=field)
    if len(body) > _HEX_DIGITS:
        raise AddressError(
            f"address literal longer than {ADDRESS_LENGTH} bytes: {literal!r}",
            kind="address",
            key=field,
        )
    return "0x" + body.lower().rjust(_HEX_DIGITS, "0")


def to_bytes(literal: str, field: Optional[str] = None) -> bytes:
    return bytes.fromhex(normalize(literal, field)[2:])


def from_bytes(raw: bytes) -> str:
    if len(raw) != ADDRESS_LENGTH:
        raise AddressError(f"address must be {ADDRESS_LENGTH} bytes, got {len(raw)}", kind="address")
    return "0x" + bytes(raw).hex()


def is_valid(literal: str) -> bool:
    try:
        normalize(literal)
    except AddressError:
        return False
    return True


def short(literal: str) -> str:
    """Strip leading zeros: '0x000…0002' -> '0x2'."""
    body = normalize(literal)[2:].lstrip("0")
    return "0x" + (body or "0")


SUI_FRAMEWORK_ADDRESS = normalize("0x2")
SUI_CLOCK_OBJECT_ID = normalize("0x6")
