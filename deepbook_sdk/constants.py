"""
Protocol constants and built-in registry defaults.

Scalars
-------
- FLOAT_SCALAR: fixed-point scale for prices and fee fractions (1e9).
- DEEP_SCALAR:  base units per DEEP, the protocol's staking token (1e6).

Defaults
--------
Package ids, coins and pools for each environment as deployed at the time of
release. Callers pointing at a redeployment pass their own maps to
`DeepBookConfig`; these tables are only the fallback.
"""

from __future__ import annotations

from typing import Dict

FLOAT_SCALAR = 1_000_000_000
DEEP_SCALAR = 1_000_000

U64_MAX = 2**64 - 1
MAX_TIMESTAMP = 1_844_674_407_370_955_161

# Clock object is created at genesis with version 1.
CLOCK_INITIAL_SHARED_VERSION = 1

SUI_TYPE = "0x0000000000000000000000000000000000000000000000000000000000000002::sui::SUI"

FULLNODE_URLS: Dict[str, str] = {
    "mainnet": "https://fullnode.mainnet.sui.io:443",
    "testnet": "https://fullnode.testnet.sui.io:443",
}

# ---- Package ids -------------------------------------------------------------

TESTNET_PACKAGE_IDS: Dict[str, str] = {
    "deepbook_package_id": "0xcbf4748a965d469ea3a36cf0ccc5743b96c2d0ae6dee0762ed3eca65fac07f7e",
    "registry_id": "0x98dace830ebebd44b7a3331c00750bf758f8a4b17a27380f5bb3fbe68cb984a7",
    "deep_treasury_id": "0x69fffdae0075f8f71f4fa793549c11079266910e8905169845af1f5d00e09dcb",
}

MAINNET_PACKAGE_IDS: Dict[str, str] = {
    "deepbook_package_id": "0x2c8d603bc51326b8c13cef9dd07031a408a48dddb541963357661df5d3204809",
    "registry_id": "0xaf16199a2dff736e9f07a845f23c5da6df6f756eddb631aed9d24a93efc4549d",
    "deep_treasury_id": "0x032abf8948dda67a271bcc18e776dbbcfb0d58c8d288a700ff0d5521e57a1ffe",
}

# ---- Coins: key -> {address, type, scalar} ---------------------------------------

TESTNET_COINS: Dict[str, Dict[str, object]] = {
    "DEEP": {
        "address": "0x36dbef866a1d62bf7328989a10fb2f07d769f4ee587c0de4a0a256e57e0a58a8",
        "type": "0x36dbef866a1d62bf7328989a10fb2f07d769f4ee587c0de4a0a256e57e0a58a8::deep::DEEP",
        "scalar": 1_000_000,
    },
    "SUI": {
        "address": "0x0000000000000000000000000000000000000000000000000000000000000002",
        "type": SUI_TYPE,
        "scalar": 1_000_000_000,
    },
    "DBUSDC": {
        "address": "0xf7152c05930480cd740d7311b5b8b45c6f488e3a53a11c3f74a6fac36a52e0d7",
        "type": "0xf7152c05930480cd740d7311b5b8b45c6f488e3a53a11c3f74a6fac36a52e0d7::DBUSDC::DBUSDC",
        "scalar": 1_000_000,
    },
    "DBUSDT": {
        "address": "0xf7152c05930480cd740d7311b5b8b45c6f488e3a53a11c3f74a6fac36a52e0d7",
        "type": "0xf7152c05930480cd740d7311b5b8b45c6f488e3a53a11c3f74a6fac36a52e0d7::DBUSDT::DBUSDT",
        "scalar": 1_000_000,
    },
}

MAINNET_COINS: Dict[str, Dict[str, object]] = {
    "DEEP": {
        "address": "0xdeeb7a4662eec9f2f3def03fb937a663dddaa2e215b8078a284d026b7946c270",
        "type": "0xdeeb7a4662eec9f2f3def03fb937a663dddaa2e215b8078a284d026b7946c270::deep::DEEP",
        "scalar": 1_000_000,
    },
    "SUI": {
        "address": "0x0000000000000000000000000000000000000000000000000000000000000002",
        "type": SUI_TYPE,
        "scalar": 1_000_000_000,
    },
    "USDC": {
        "address": "0xdba34672e30cb065b1f93e3ab55318768fd6fef66c15942c9f7cb846e2f900e7",
        "type": "0xdba34672e30cb065b1f93e3ab55318768fd6fef66c15942c9f7cb846e2f900e7::usdc::USDC",
        "scalar": 1_000_000,
    },
    "WUSDC": {
        "address": "0x5d4b302506645c37ff133b98c4b50a5ae14841659738d6d733d59d0d217a93bf",
        "type": "0x5d4b302506645c37ff133b98c4b50a5ae14841659738d6d733d59d0d217a93bf::coin::COIN",
        "scalar": 1_000_000,
    },
    "WETH": {
        "address": "0xaf8cd5edc19c4512f4259f0bee101a40d41ebed738ade5874359610ef8eeced5",
        "type": "0xaf8cd5edc19c4512f4259f0bee101a40d41ebed738ade5874359610ef8eeced5::coin::COIN",
        "scalar": 100_000_000,
    },
    "WUSDT": {
        "address": "0xc060006111016b8a020ad5b33834984a437aaa7d3c74c18e09a95d48aceab08c",
        "type": "0xc060006111016b8a020ad5b33834984a437aaa7d3c74c18e09a95d48aceab08c::coin::COIN",
        "scalar": 1_000_000,
    },
    "NS": {
        "address": "0x5145494a5f5100e645e4b0aa950fa6b68f614e8c59e17bc5ded3495123a79178",
        "type": "0x5145494a5f5100e645e4b0aa950fa6b68f614e8c59e17bc5ded3495123a79178::ns::NS",
        "scalar": 1_000_000,
    },
}

# ---- Pools: key -> {address, base_coin, quote_coin} ----------------------------

TESTNET_POOLS: Dict[str, Dict[str, str]] = {
    "DEEP_SUI": {
        "address": "0x0d1b1746d220bd5ebac5231c7685480a16f1c707a46306095a4c67dc7ce4dcae",
        "base_coin": "DEEP",
        "quote_coin": "SUI",
    },
    "SUI_DBUSDC": {
        "address": "0x520c89c6c78c566eed0ebf24f854a8c22d8fdd06a6f16ad01f108dad7f1baaea",
        "base_coin": "SUI",
        "quote_coin": "DBUSDC",
    },
    "DEEP_DBUSDC": {
        "address": "0xe86b991f8632217505fd859445f9803967ac84a9d4a1219065bf191fcb74b622",
        "base_coin": "DEEP",
        "quote_coin": "DBUSDC",
    },
    "DBUSDT_DBUSDC": {
        "address": "0x83970bb02e3636efdff8c141ab06af5e3c9a22e2f74d7f02a9c3430d0d10c1ca",
        "base_coin": "DBUSDT",
        "quote_coin": "DBUSDC",
    },
}

MAINNET_POOLS: Dict[str, Dict[str, str]] = {
    "DEEP_SUI": {
        "address": "0xb663828d6217467c8a1838a03793da896cbe745b150ebd57d82f814ca579fc22",
        "base_coin": "DEEP",
        "quote_coin": "SUI",
    },
    "SUI_USDC": {
        "address": "0xe05dafb5133bcffb8d59f4e12465dc0e9faeaa05e3e342a08fe135800e3e4407",
        "base_coin": "SUI",
        "quote_coin": "USDC",
    },
    "DEEP_USDC": {
        "address": "0xf948981b806057580f91622417534f491da5f61aeaf33d0ed8e69fd5691c95ce",
        "base_coin": "DEEP",
        "quote_coin": "USDC",
    },
    "WUSDT_USDC": {
        "address": "0x4e2ca3988246e1d50b9bf209abb9c1cbfec65bd95afdacc620a36c67bdb8452f",
        "base_coin": "WUSDT",
        "quote_coin": "USDC",
    },
    "WUSDC_USDC": {
        "address": "0xa0b9ebefb38c963fd115f52d71fa64501b79d1adcb5270563f92ce0442376545",
        "base_coin": "WUSDC",
        "quote_coin": "USDC",
    },
    "NS_USDC": {
        "address": "0x0c0fdd4008740d81a8a7d4281322aee71a1b62c449eb5b142656753d89ebc060",
        "base_coin": "NS",
        "quote_coin": "USDC",
    },
    "NS_SUI": {
        "address": "0x27c4fdb3b846aa3ae4a65ef5127a309aa3c1f466671471a806d8912a18b253e8",
        "base_coin": "NS",
        "quote_coin": "SUI",
    },
}

__all__ = [
    "FLOAT_SCALAR",
    "DEEP_SCALAR",
    "U64_MAX",
    "MAX_TIMESTAMP",
    "CLOCK_INITIAL_SHARED_VERSION",
    "SUI_TYPE",
    "FULLNODE_URLS",
    "TESTNET_PACKAGE_IDS",
    "MAINNET_PACKAGE_IDS",
    "TESTNET_COINS",
    "MAINNET_COINS",
    "TESTNET_POOLS",
    "MAINNET_POOLS",
]
