import json
import logging

import httpx
import pytest

from sui_stablecoin_scripts.ledger.errors import RpcError, TransactionFailedError
from sui_stablecoin_scripts.utils import config, network
from sui_stablecoin_scripts.utils.network import SuiRpcClient, check_receipt, show_tx


def rpc_client(handler) -> SuiRpcClient:
    client = SuiRpcClient("http://fullnode.test", timeout=0)
    client._http = httpx.Client(transport=httpx.MockTransport(handler))
    return client


def jsonrpc_handler(results: dict, requests: list):
    """Answer JSON-RPC requests by method name. List values are served page by page."""

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        requests.append(body)
        result = results[body["method"]]
        if isinstance(result, list):
            result = result.pop(0)
        if isinstance(result, Exception):
            return httpx.Response(
                200, json={"jsonrpc": "2.0", "id": body["id"], "error": result.args[0]}
            )
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})

    return handler


def test_get_dynamic_fields_follows_pages():
    requests = []
    client = rpc_client(
        jsonrpc_handler(
            {
                "suix_getDynamicFields": [
                    {"data": [{"name": {"value": "0x1"}}], "hasNextPage": True, "nextCursor": "c1"},
                    {"data": [{"name": {"value": "0x2"}}], "hasNextPage": False, "nextCursor": None},
                ]
            },
            requests,
        )
    )
    entries = client.get_dynamic_fields("0xtable")
    assert [e["name"]["value"] for e in entries] == ["0x1", "0x2"]
    assert [r["params"] for r in requests] == [
        ["0xtable", None, None],
        ["0xtable", "c1", None],
    ]


def test_query_events_follows_pages():
    requests = []
    client = rpc_client(
        jsonrpc_handler(
            {
                "suix_queryEvents": [
                    {"data": [{"id": 1}, {"id": 2}], "hasNextPage": True, "nextCursor": {"seq": 2}},
                    {"data": [], "hasNextPage": True, "nextCursor": {"seq": 2}},
                    {"data": [{"id": 3}], "hasNextPage": False, "nextCursor": None},
                ]
            },
            requests,
        )
    )
    events = client.query_events("0xabc::treasury::Blocklisted<0xabc::usdc::USDC>")
    assert [e["id"] for e in events] == [1, 2, 3]
    assert requests[0]["params"][0] == {
        "MoveEventType": "0xabc::treasury::Blocklisted<0xabc::usdc::USDC>"
    }
    assert requests[2]["params"][1] == {"seq": 2}


def test_rpc_error():
    client = rpc_client(
        jsonrpc_handler(
            {"sui_getObject": RuntimeError({"code": -32602, "message": "Invalid params"})},
            [],
        )
    )
    with pytest.raises(RpcError, match="sui_getObject failed: Invalid params") as e:
        client.get_object("0x1")
    assert e.value.code == -32602


def test_http_error_propagates():
    client = rpc_client(lambda request: httpx.Response(503))
    with pytest.raises(httpx.HTTPStatusError):
        client.get_coin_metadata("0x2::sui::SUI")


def test_wait_for_transaction_retries_until_indexed(monkeypatch):
    monkeypatch.setattr(network.time, "sleep", lambda seconds: None)
    client = rpc_client(
        jsonrpc_handler(
            {
                "sui_getTransactionBlock": [
                    RuntimeError({"code": -32602, "message": "Could not find the referenced transaction"}),
                    {"digest": "D1", "effects": {"status": {"status": "success"}}},
                ]
            },
            [],
        )
    )
    client.timeout = 10
    assert client.wait_for_transaction("D1")["digest"] == "D1"


def test_wait_for_transaction_times_out(monkeypatch):
    monkeypatch.setattr(network.time, "sleep", lambda seconds: None)
    client = rpc_client(
        jsonrpc_handler(
            {"sui_getTransactionBlock": RuntimeError({"message": "not found"})}, []
        )
    )
    client.timeout = -1
    with pytest.raises(RpcError):
        client.wait_for_transaction("D1")


def test_execute_transaction_block_checks_status(monkeypatch):
    requests = []
    failed = {
        "digest": "D2",
        "effects": {"status": {"status": "failure", "error": "MoveAbort in command 0"}},
    }
    client = rpc_client(
        jsonrpc_handler(
            {
                "sui_executeTransactionBlock": {"digest": "D2"},
                "sui_getTransactionBlock": failed,
            },
            requests,
        )
    )
    with pytest.raises(TransactionFailedError, match="MoveAbort") as e:
        client.execute_transaction_block("dHg=", ["c2ln"])
    assert e.value.receipt == failed
    assert requests[0]["params"][:2] == ["dHg=", ["c2ln"]]


def test_request_faucet():
    requests = []

    def handler(request):
        requests.append((str(request.url), json.loads(request.content)))
        return httpx.Response(200, json={"transferredGasObjects": []})

    client = rpc_client(handler)
    client.request_faucet("0xaa", "http://faucet.test/")
    assert requests == [
        ("http://faucet.test/gas", {"FixedAmountRequest": {"recipient": "0xaa"}})
    ]


def test_check_receipt():
    ok = {"effects": {"status": {"status": "success"}}}
    assert check_receipt(ok) is ok
    with pytest.raises(TransactionFailedError, match="Transaction failed! InsufficientGas"):
        check_receipt({"effects": {"status": {"status": "failure", "error": "InsufficientGas"}}})


def test_show_tx(monkeypatch, caplog):
    monkeypatch.setattr(config, "EXPLORER_URL", "https://explorer.test/")
    with caplog.at_level(logging.INFO):
        show_tx({"digest": "D3"})
        show_tx({})
    assert caplog.messages == [
        "Transaction digest: D3",
        "https://explorer.test/tx/D3",
    ]
