import base64
import json

import httpx
import pytest
import respx

from deepbook_sdk.config import NetworkConfig
from deepbook_sdk.errors import DecodeError, JsonRpcCode, ObjectNotFoundError, RpcError, SimulationError
from deepbook_sdk.rpc.http import SuiRpcClient, return_values
from deepbook_sdk.tx.builder import TransactionBuilder

URL = "http://127.0.0.1:9000"
OBJ = "0x" + "a1" * 32


def _ok(result):
    return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": result})


@pytest.mark.asyncio
@respx.mock
async def test_request_posts_jsonrpc_payload():
    route = respx.post(URL).mock(return_value=_ok({"hello": "world"}))
    async with SuiRpcClient(URL) as rpc:
        assert await rpc.request("sui_getChainIdentifier") == {"hello": "world"}

    sent = json.loads(route.calls.last.request.content)
    assert sent["jsonrpc"] == "2.0"
    assert sent["method"] == "sui_getChainIdentifier"
    assert sent["params"] == []
    assert route.calls.last.request.headers["user-agent"].startswith("deepbook-sdk-py/")


@pytest.mark.asyncio
@respx.mock
async def test_jsonrpc_error_object_becomes_rpc_error():
    respx.post(URL).mock(
        return_value=httpx.Response(
            200, json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32602, "message": "bad params"}}
        )
    )
    async with SuiRpcClient(URL) as rpc:
        with pytest.raises(RpcError) as ei:
            await rpc.request("sui_getObject", ["0x1"])
    assert ei.value.code_enum is JsonRpcCode.INVALID_PARAMS
    assert ei.value.method == "sui_getObject"


@pytest.mark.asyncio
@respx.mock
async def test_transport_failure_is_not_retried():
    route = respx.post(URL).mock(side_effect=httpx.ConnectError("refused"))
    async with SuiRpcClient(URL) as rpc:
        with pytest.raises(RpcError) as ei:
            await rpc.request("sui_getObject", [OBJ])
    assert ei.value.code == JsonRpcCode.TRANSPORT_ERROR
    assert route.call_count == 1


@pytest.mark.asyncio
@respx.mock
async def test_non_json_and_http_errors():
    respx.post(URL).mock(return_value=httpx.Response(502, text="<html>bad gateway</html>"))
    async with SuiRpcClient(URL) as rpc:
        with pytest.raises(RpcError) as ei:
            await rpc.request("sui_getObject", [OBJ])
    assert ei.value.http_status == 502


@pytest.mark.asyncio
@respx.mock
async def test_get_object_returns_data_and_requests_owner():
    data = {"objectId": OBJ, "version": "3", "digest": "x", "owner": {"Shared": {"initial_shared_version": 2}}}
    route = respx.post(URL).mock(return_value=_ok({"data": data}))
    async with SuiRpcClient(URL) as rpc:
        assert await rpc.get_object("0x" + "A1" * 32) == data
    params = json.loads(route.calls.last.request.content)["params"]
    assert params[0] == OBJ
    assert params[1]["showOwner"] is True


@pytest.mark.asyncio
@respx.mock
async def test_get_object_missing():
    respx.post(URL).mock(return_value=_ok({"error": {"code": "notExists", "object_id": OBJ}}))
    async with SuiRpcClient(URL) as rpc:
        with pytest.raises(ObjectNotFoundError) as ei:
            await rpc.get_object(OBJ)
    assert ei.value.reason == "notExists"


@pytest.mark.asyncio
@respx.mock
async def test_dev_inspect_sends_transaction_kind():
    route = respx.post(URL).mock(
        return_value=_ok({"effects": {"status": {"status": "success"}}, "results": [{"returnValues": [[[1, 0, 0, 0, 0, 0, 0, 0], "u64"]]}]})
    )
    ptb = TransactionBuilder()
    ptb.move_call("0x2", "clock", "timestamp_ms")
    async with SuiRpcClient(URL) as rpc:
        result = await rpc.dev_inspect_transaction(OBJ, ptb)
    assert return_values(result) == [b"\x01" + b"\x00" * 7]

    sender, tx_b64, gas_price, epoch = json.loads(route.calls.last.request.content)["params"]
    assert sender == OBJ
    assert base64.b64decode(tx_b64)[0] == 0
    assert gas_price is None and epoch is None


@pytest.mark.asyncio
@respx.mock
async def test_dev_inspect_abort_raises_simulation_error():
    respx.post(URL).mock(
        return_value=_ok({"effects": {"status": {"status": "failure", "error": "MoveAbort(..., 3)"}}, "results": []})
    )
    ptb = TransactionBuilder()
    ptb.move_call("0x2", "clock", "timestamp_ms")
    async with SuiRpcClient(URL) as rpc:
        with pytest.raises(SimulationError) as ei:
            await rpc.dev_inspect_transaction(OBJ, ptb)
    assert "MoveAbort" in ei.value.message


def test_return_values_rejects_malformed():
    with pytest.raises(DecodeError):
        return_values({})
    with pytest.raises(DecodeError):
        return_values({"results": [{"returnValues": [["nothex", "u64"]]}]})
    with pytest.raises(DecodeError):
        return_values({"results": [{}]})


def test_from_config_uses_network_settings():
    cfg = NetworkConfig(env="mainnet", request_timeout=3.0, user_agent="deepbook-test/1")
    rpc = SuiRpcClient.from_config(cfg)
    assert rpc.url == cfg.rpc_url
    assert rpc.timeout == 3.0
    assert rpc.headers["User-Agent"] == "deepbook-test/1"
