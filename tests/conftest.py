from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import base58
import pytest

from deepbook_sdk import address as _addr
from deepbook_sdk.client import DeepBookClient
from deepbook_sdk.config import DeepBookConfig
from deepbook_sdk.contracts.balance_manager import BalanceManagerContract
from deepbook_sdk.contracts.objects import ObjectResolver
from deepbook_sdk.errors import ObjectNotFoundError
from deepbook_sdk.tx.builder import Pure, TransactionBuilder

PACKAGE_ID = "0x" + "ab" * 32
REGISTRY_ID = "0x" + "12" * 32
TREASURY_ID = "0x" + "13" * 32
SENDER = "0x" + "5e" * 32

SUI_USDC_POOL = "0x" + "51" * 32
DEEP_USDC_POOL = "0x" + "52" * 32
DEEP_SUI_POOL = "0x" + "53" * 32

MANAGER_1 = "0x" + "a1" * 32
MANAGER_2 = "0x" + "a2" * 32
TRADE_CAP = "0x" + "c2" * 32
ADMIN_CAP = "0x" + "ad" * 32

USDC_ADDR = "0x" + "dc" * 32
DEEP_ADDR = "0x" + "de" * 32

OWNED_DIGEST = base58.b58encode(bytes(range(1, 33))).decode("ascii")

SUI_TYPE = _addr.normalize("0x2") + "::sui::SUI"

COINS = {
    "SUI": {"address": "0x2", "type": "0x2::sui::SUI", "scalar": 1_000_000_000},
    "USDC": {"address": USDC_ADDR, "type": f"{USDC_ADDR}::usdc::USDC", "scalar": 1_000_000},
    "DEEP": {"address": DEEP_ADDR, "type": f"{DEEP_ADDR}::deep::DEEP", "scalar": 1_000_000},
}

POOLS = {
    "SUI_USDC": {"address": SUI_USDC_POOL, "base_coin": "SUI", "quote_coin": "USDC"},
    "DEEP_USDC": {"address": DEEP_USDC_POOL, "base_coin": "DEEP", "quote_coin": "USDC"},
    "DEEP_SUI": {"address": DEEP_SUI_POOL, "base_coin": "DEEP", "quote_coin": "SUI"},
}

MANAGERS = {
    "MANAGER_1": {"address": MANAGER_1},
    "MANAGER_2": {"address": MANAGER_2, "trade_cap": TRADE_CAP},
}

PACKAGE_IDS = {
    "deepbook_package_id": PACKAGE_ID,
    "registry_id": REGISTRY_ID,
    "deep_treasury_id": TREASURY_ID,
}


def u64(value: int) -> Pure:
    return Pure(value.to_bytes(8, "little"))


def call_inputs(ptb: TransactionBuilder, cmd: Any) -> List[Any]:
    """Input records behind a command's arguments; command results stay as handles."""
    out = []
    for arg in cmd.arguments:
        try:
            out.append(ptb.input_of(arg))
        except KeyError:
            out.append(arg)
    return out


def shared_data(object_id: str, initial_shared_version: int = 7, version: int = 42) -> Dict[str, Any]:
    return {
        "objectId": _addr.normalize(object_id),
        "version": str(version),
        "digest": OWNED_DIGEST,
        "owner": {"Shared": {"initial_shared_version": initial_shared_version}},
    }


def owned_data(object_id: str, version: int = 9) -> Dict[str, Any]:
    return {
        "objectId": _addr.normalize(object_id),
        "version": str(version),
        "digest": OWNED_DIGEST,
        "owner": {"AddressOwner": SENDER},
    }


class FakeRpc:
    """
    In-memory stand-in for SuiRpcClient.

    Objects are looked up by normalized id; unknown ids raise
    ObjectNotFoundError. Dev-inspect results are returned in FIFO order and the
    simulated transactions are kept for inspection.
    """

    def __init__(self, objects: Optional[Dict[str, Dict[str, Any]]] = None) -> None:
        self.calls: List[Tuple[str, Any]] = []
        self.objects: Dict[str, Dict[str, Any]] = {}
        for oid, data in (objects or {}).items():
            self.objects[_addr.normalize(oid)] = data
        self.inspect_results: List[Dict[str, Any]] = []
        self.inspected: List[Any] = []

    def queue_return_values(self, *values: bytes) -> None:
        """Queue a successful dev-inspect whose last command returns `values`."""
        self.inspect_results.append(
            {
                "effects": {"status": {"status": "success"}},
                "results": [{"returnValues": [[list(v), "unused"] for v in values]}],
            }
        )

    async def get_object(self, object_id: str) -> Dict[str, Any]:
        oid = _addr.normalize(object_id)
        self.calls.append(("sui_getObject", oid))
        if oid not in self.objects:
            raise ObjectNotFoundError(object_id=oid, reason="notExists")
        return self.objects[oid]

    async def dev_inspect_transaction(self, sender: str, tx: Any) -> Dict[str, Any]:
        self.calls.append(("sui_devInspectTransactionBlock", sender))
        self.inspected.append(tx)
        return self.inspect_results.pop(0)

    def fetched(self) -> List[str]:
        return [arg for method, arg in self.calls if method == "sui_getObject"]


def default_objects() -> Dict[str, Dict[str, Any]]:
    return {
        SUI_USDC_POOL: shared_data(SUI_USDC_POOL, 11),
        DEEP_USDC_POOL: shared_data(DEEP_USDC_POOL, 12),
        DEEP_SUI_POOL: shared_data(DEEP_SUI_POOL, 13),
        REGISTRY_ID: shared_data(REGISTRY_ID, 3),
        MANAGER_1: shared_data(MANAGER_1, 21),
        MANAGER_2: shared_data(MANAGER_2, 22),
        TRADE_CAP: owned_data(TRADE_CAP, 5),
        ADMIN_CAP: owned_data(ADMIN_CAP, 6),
    }


@pytest.fixture
def rpc() -> FakeRpc:
    return FakeRpc(default_objects())


@pytest.fixture
def config() -> DeepBookConfig:
    return DeepBookConfig(
        "mainnet",
        SENDER,
        admin_cap=ADMIN_CAP,
        balance_managers=MANAGERS,
        coins=COINS,
        pools=POOLS,
        package_ids=PACKAGE_IDS,
    )


@pytest.fixture
def resolver(rpc: FakeRpc) -> ObjectResolver:
    return ObjectResolver(rpc)


@pytest.fixture
def balance_manager(config: DeepBookConfig, resolver: ObjectResolver) -> BalanceManagerContract:
    return BalanceManagerContract(config, resolver)


@pytest.fixture
def client(rpc: FakeRpc) -> DeepBookClient:
    return DeepBookClient(
        rpc,
        SENDER,
        "mainnet",
        balance_managers=MANAGERS,
        coins=COINS,
        pools=POOLS,
        admin_cap=ADMIN_CAP,
        package_ids=PACKAGE_IDS,
    )


@pytest.fixture
def ptb() -> TransactionBuilder:
    return TransactionBuilder()
