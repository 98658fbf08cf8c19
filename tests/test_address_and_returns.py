import pytest

from deepbook_sdk import address
from deepbook_sdk.errors import AddressError, ConfigError, DecodeError
from deepbook_sdk.rpc import returns


def u64s(*values):
    return bytes([len(values)]) + b"".join(v.to_bytes(8, "little") for v in values)


# --- addresses ---------------------------------------------------------------


def test_normalize_pads_and_lowercases():
    assert address.normalize("0x2") == "0x" + "0" * 63 + "2"
    assert address.normalize("0XABCDEF") == "0x" + "0" * 58 + "abcdef"
    assert address.short(address.SUI_CLOCK_OBJECT_ID) == "0x6"


@pytest.mark.parametrize("bad", ["2", "0x", "0xzz", "0x" + "1" * 65, ""])
def test_normalize_rejects_malformed(bad):
    with pytest.raises(AddressError) as ei:
        address.normalize(bad, "pool")
    assert isinstance(ei.value, ConfigError)
    assert ei.value.key == "pool"
    assert not address.is_valid(bad)


def test_bytes_roundtrip_requires_32_bytes():
    raw = address.to_bytes("0x6")
    assert len(raw) == address.ADDRESS_LENGTH and raw[-1] == 6
    assert address.from_bytes(raw) == address.SUI_CLOCK_OBJECT_ID
    with pytest.raises(AddressError):
        address.from_bytes(b"\x01" * 20)


# --- return values -----------------------------------------------------------


def test_decode_scalars():
    assert returns.decode_u64((0x0102030405060708).to_bytes(8, "little")) == 0x0102030405060708
    assert returns.decode_bool(b"\x01") is True
    assert returns.decode_bool(b"\x00") is False
    assert returns.decode_address(b"\x07" * 32) == b"\x07" * 32


def test_decode_vector_u64():
    assert returns.decode_vector_u64(u64s(1, 2, 3)) == [1, 2, 3]
    assert returns.decode_vector_u64(b"\x00") == []


def test_decode_vector_u128():
    data = b"\x02" + (7).to_bytes(16, "little") + (2**100).to_bytes(16, "little")
    assert returns.decode_vector_u128(data) == [7, 2**100]


def test_decode_short_buffer_raises():
    with pytest.raises(DecodeError) as ei:
        returns.decode_u64(b"\x01\x02\x03")
    assert ei.value.length == 3
    with pytest.raises(DecodeError):
        # declares two u64 but carries one
        returns.decode_vector_u64(b"\x02" + b"\x00" * 8)
    with pytest.raises(DecodeError):
        returns.decode_address(b"\x01" * 31)


def test_decode_rejects_trailing_bytes_and_bad_bool():
    with pytest.raises(DecodeError):
        returns.decode_u64(b"\x00" * 9)
    with pytest.raises(DecodeError):
        returns.decode_vector_u64(u64s(1) + b"\x00")
    with pytest.raises(DecodeError) as ei:
        returns.decode_bool(b"\x02", what="whitelisted")
    assert ei.value.what == "whitelisted"
