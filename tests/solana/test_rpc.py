from __future__ import annotations

import asyncio
import base64
import json
from typing import Any

import httpx
import pytest
from solders.hash import Hash
from solders.keypair import Keypair
from solders.system_program import TransferParams, transfer
from solders.transaction import Transaction

from minisol.solana.rpc import SolanaRPCClient, SolanaRPCError, status_satisfies

ENDPOINT = "https://rpc.example.com"
SIGNATURE = Keypair().sign_message(b"minisol")


def rpc_result(result: Any) -> httpx.Response:
    return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": result})


def make_client(handler, **kwargs: Any) -> SolanaRPCClient:
    return SolanaRPCClient(endpoint=ENDPOINT, transport=httpx.MockTransport(handler), poll_interval=0, **kwargs)


def make_transaction(blockhash: Hash) -> Transaction:
    sender = Keypair()
    ix = transfer(TransferParams(from_pubkey=sender.pubkey(), to_pubkey=Keypair().pubkey(), lamports=1))
    return Transaction.new_signed_with_payer([ix], sender.pubkey(), [sender], blockhash)


def test_get_balance_success() -> None:
    pubkey = Keypair().pubkey()
    seen: list[dict[str, Any]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        seen.append(payload)
        return rpc_result({"context": {"slot": 1}, "value": 2_500_000_000})

    client = make_client(handler)

    balance = asyncio.run(client.get_balance(pubkey))

    assert balance == 2_500_000_000
    assert seen[0]["method"] == "getBalance"
    assert seen[0]["params"] == [str(pubkey), {"commitment": "confirmed"}]
    assert seen[0]["jsonrpc"] == "2.0"


def test_get_balance_http_error() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": {"message": "fail"}})

    client = make_client(handler)

    with pytest.raises(SolanaRPCError):
        asyncio.run(client.get_balance(Keypair().pubkey()))


def test_rpc_error_message_is_surfaced() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"jsonrpc": "2.0", "error": {"code": -32602, "message": "Invalid param"}, "id": 1})

    client = make_client(handler)

    with pytest.raises(SolanaRPCError, match="^Invalid param$"):
        asyncio.run(client.get_balance(Keypair().pubkey()))


def test_transport_failure_is_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)

    with pytest.raises(SolanaRPCError, match="RPC request failed"):
        asyncio.run(client.get_balance(Keypair().pubkey()))


def test_non_json_body_is_rejected() -> None:
    client = make_client(lambda _request: httpx.Response(200, content=b"<html>"))

    with pytest.raises(SolanaRPCError, match="Invalid JSON"):
        asyncio.run(client.get_balance(Keypair().pubkey()))


def test_request_airdrop_sends_lamports() -> None:
    pubkey = Keypair().pubkey()
    seen: list[dict[str, Any]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return rpc_result(str(SIGNATURE))

    client = make_client(handler)

    signature = asyncio.run(client.request_airdrop(pubkey, 1_000_000_000))

    assert signature == SIGNATURE
    assert seen[0]["method"] == "requestAirdrop"
    assert seen[0]["params"][:2] == [str(pubkey), 1_000_000_000]


def test_malformed_signature_is_rejected() -> None:
    client = make_client(lambda _request: rpc_result("not-a-signature"))

    with pytest.raises(SolanaRPCError):
        asyncio.run(client.request_airdrop(Keypair().pubkey(), 1))


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (None, False),
        ({"confirmationStatus": "processed", "err": None, "confirmations": 0}, False),
        ({"confirmationStatus": "confirmed", "err": None, "confirmations": 3}, True),
        ({"confirmationStatus": "finalized", "err": None, "confirmations": None}, True),
        ({"confirmationStatus": "finalized", "err": {"InstructionError": [0, "Custom"]}}, False),
    ],
)
def test_confirm_transaction(status: dict[str, Any] | None, expected: bool) -> None:
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        calls.append(payload["method"])
        assert payload["params"] == [[str(SIGNATURE)]]
        return rpc_result({"context": {"slot": 1}, "value": [status]})

    client = make_client(handler)

    assert asyncio.run(client.confirm_transaction(SIGNATURE)) is expected
    assert calls == ["getSignatureStatuses"]


def test_status_satisfies_legacy_nodes() -> None:
    assert status_satisfies({"err": None, "confirmations": None}, "finalized") is True
    assert status_satisfies({"err": None, "confirmations": 5}, "confirmed") is False


def test_get_latest_blockhash() -> None:
    blockhash = Hash.new_unique()
    client = make_client(
        lambda _request: rpc_result(
            {"context": {"slot": 5}, "value": {"blockhash": str(blockhash), "lastValidBlockHeight": 321}}
        )
    )

    latest = asyncio.run(client.get_latest_blockhash())

    assert latest.blockhash == blockhash
    assert latest.last_valid_block_height == 321


def test_get_latest_blockhash_malformed() -> None:
    client = make_client(lambda _request: rpc_result({"context": {"slot": 5}, "value": {"blockhash": "??"}}))

    with pytest.raises(SolanaRPCError):
        asyncio.run(client.get_latest_blockhash())


def test_send_and_confirm_transaction_polls_until_confirmed() -> None:
    blockhash = Hash.new_unique()
    transaction = make_transaction(blockhash)
    statuses = [None, {"confirmationStatus": "processed", "err": None}, {"confirmationStatus": "confirmed", "err": None}]
    methods: list[str] = []
    sent: list[bytes] = []

    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        methods.append(payload["method"])
        if payload["method"] == "sendTransaction":
            assert payload["params"][1]["encoding"] == "base64"
            sent.append(base64.b64decode(payload["params"][0]))
            return rpc_result(str(transaction.signatures[0]))
        if payload["method"] == "isBlockhashValid":
            assert payload["params"][0] == str(blockhash)
            return rpc_result({"context": {"slot": 1}, "value": True})
        return rpc_result({"context": {"slot": 1}, "value": [statuses.pop(0)]})

    client = make_client(handler)

    signature = asyncio.run(client.send_and_confirm_transaction(transaction))

    assert signature == transaction.signatures[0]
    assert sent == [bytes(transaction)]
    assert methods == [
        "sendTransaction",
        "getSignatureStatuses",
        "isBlockhashValid",
        "getSignatureStatuses",
        "getSignatureStatuses",
    ]


def test_send_and_confirm_transaction_reports_failure() -> None:
    transaction = make_transaction(Hash.new_unique())

    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        if payload["method"] == "sendTransaction":
            return rpc_result(str(transaction.signatures[0]))
        return rpc_result({"context": {"slot": 1}, "value": [{"confirmationStatus": "processed", "err": "InsufficientFunds"}]})

    client = make_client(handler)

    with pytest.raises(SolanaRPCError, match="InsufficientFunds"):
        asyncio.run(client.send_and_confirm_transaction(transaction))


def test_send_and_confirm_transaction_stops_on_expired_blockhash() -> None:
    transaction = make_transaction(Hash.new_unique())
    methods: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        methods.append(payload["method"])
        if payload["method"] == "sendTransaction":
            return rpc_result(str(transaction.signatures[0]))
        if payload["method"] == "isBlockhashValid":
            return rpc_result({"context": {"slot": 1}, "value": False})
        return rpc_result({"context": {"slot": 1}, "value": [None]})

    client = make_client(handler)

    with pytest.raises(SolanaRPCError, match="expired"):
        asyncio.run(client.send_and_confirm_transaction(transaction))
    assert methods.count("sendTransaction") == 1


def test_send_and_confirm_transaction_times_out() -> None:
    transaction = make_transaction(Hash.new_unique())

    def handler(request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        if payload["method"] == "sendTransaction":
            return rpc_result(str(transaction.signatures[0]))
        return rpc_result({"context": {"slot": 1}, "value": [{"confirmationStatus": "processed", "err": None}]})

    client = make_client(handler, confirm_timeout=0.01)
    client.poll_interval = 0.005

    with pytest.raises(SolanaRPCError, match="Timed out"):
        asyncio.run(client.send_and_confirm_transaction(transaction))
