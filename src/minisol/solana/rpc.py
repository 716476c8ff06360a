"""Solana JSON-RPC helpers."""

from __future__ import annotations

import asyncio
import base64
import logging
from dataclasses import dataclass, field
from typing import Any, Literal

import httpx
from solders.hash import Hash
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction

logger = logging.getLogger(__name__)

Commitment = Literal["processed", "confirmed", "finalized"]

DEFAULT_TIMEOUT = 60.0
COMMITMENT_RANK: dict[str, int] = {"processed": 0, "confirmed": 1, "finalized": 2}


class SolanaRPCError(RuntimeError):
    """Raised when Solana RPC calls fail."""


@dataclass(frozen=True)
class LatestBlockhash:
    """A recent blockhash and the last block height at which it is accepted."""

    blockhash: Hash
    last_valid_block_height: int


def status_satisfies(status: dict[str, Any], commitment: Commitment) -> bool:
    """Return True when a signature status reached `commitment` without error."""
    if status.get("err") is not None:
        return False
    level = status.get("confirmationStatus")
    if level is None:
        # Nodes that predate confirmationStatus report rooted signatures with null confirmations
        level = "finalized" if status.get("confirmations") is None else "processed"
    return COMMITMENT_RANK.get(level, -1) >= COMMITMENT_RANK[commitment]


@dataclass
class SolanaRPCClient:
    """Thin async wrapper around Solana's JSON-RPC interface."""

    endpoint: str
    timeout: float = DEFAULT_TIMEOUT
    commitment: Commitment = "confirmed"
    poll_interval: float = 0.5
    confirm_timeout: float = 60.0
    transport: httpx.AsyncBaseTransport | None = None
    _request_id: int = field(default=0, init=False, repr=False)

    async def get_balance(self, public_key: Pubkey) -> int:
        """Return the balance of `public_key` in lamports."""
        result = await self._call("getBalance", [str(public_key), {"commitment": self.commitment}])
        lamports = self._value(result, "balance")
        if not isinstance(lamports, int):
            raise SolanaRPCError("Balance value is not an integer")
        logger.debug("Fetched balance %d lamports for %s", lamports, public_key)
        return lamports

    async def request_airdrop(self, public_key: Pubkey, lamports: int) -> Signature:
        result = await self._call(
            "requestAirdrop",
            [str(public_key), lamports, {"commitment": self.commitment}],
        )
        signature = self._signature(result)
        logger.debug("Requested airdrop of %d lamports to %s: %s", lamports, public_key, signature)
        return signature

    async def get_signature_status(self, signature: Signature) -> dict[str, Any] | None:
        result = await self._call("getSignatureStatuses", [[str(signature)]])
        statuses = self._value(result, "signature statuses")
        if not isinstance(statuses, list) or not statuses:
            raise SolanaRPCError("Malformed RPC response; missing signature status")
        status = statuses[0]
        if status is not None and not isinstance(status, dict):
            raise SolanaRPCError("Malformed RPC response; signature status is not an object")
        return status

    async def confirm_transaction(self, signature: Signature) -> bool:
        """Check once whether `signature` reached the client's commitment."""
        status = await self.get_signature_status(signature)
        confirmed = status is not None and status_satisfies(status, self.commitment)
        logger.debug("Signature %s confirmed=%s (status=%s)", signature, confirmed, status)
        return confirmed

    async def get_latest_blockhash(self) -> LatestBlockhash:
        result = await self._call("getLatestBlockhash", [{"commitment": self.commitment}])
        value = self._value(result, "blockhash")
        try:
            latest = LatestBlockhash(
                blockhash=Hash.from_string(value["blockhash"]),
                last_valid_block_height=int(value["lastValidBlockHeight"]),
            )
        except Exception as exc:  # noqa: BLE001
            raise SolanaRPCError("Malformed RPC response; invalid blockhash value") from exc
        logger.debug("Latest blockhash %s (valid until height %d)", latest.blockhash, latest.last_valid_block_height)
        return latest

    async def is_blockhash_valid(self, blockhash: Hash) -> bool:
        result = await self._call("isBlockhashValid", [str(blockhash), {"commitment": self.commitment}])
        valid = self._value(result, "blockhash validity")
        if not isinstance(valid, bool):
            raise SolanaRPCError("Blockhash validity is not a boolean")
        return valid

    async def send_transaction(self, transaction: Transaction) -> Signature:
        encoded = base64.b64encode(bytes(transaction)).decode("ascii")
        result = await self._call(
            "sendTransaction",
            [encoded, {"encoding": "base64", "preflightCommitment": self.commitment}],
        )
        signature = self._signature(result)
        logger.debug("Submitted transaction %s", signature)
        return signature

    async def send_and_confirm_transaction(self, transaction: Transaction) -> Signature:
        """Submit `transaction` and wait until it reaches the client's commitment.

        Waiting stops with `SolanaRPCError` when the transaction reports an
        error, its blockhash expires before it lands, or `confirm_timeout`
        seconds pass. The transaction is never resubmitted.
        """
        signature = await self.send_transaction(transaction)
        blockhash = transaction.message.recent_blockhash
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.confirm_timeout
        while True:
            status = await self.get_signature_status(signature)
            if status is not None:
                if status.get("err") is not None:
                    raise SolanaRPCError(f"Transaction {signature} failed: {status['err']}")
                if status_satisfies(status, self.commitment):
                    logger.debug("Transaction %s reached %s", signature, self.commitment)
                    return signature
            elif not await self.is_blockhash_valid(blockhash):
                raise SolanaRPCError(
                    f"Transaction {signature} was not confirmed before blockhash {blockhash} expired"
                )
            if loop.time() >= deadline:
                raise SolanaRPCError(f"Timed out waiting for confirmation of transaction {signature}")
            await asyncio.sleep(self.poll_interval)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    async def _call(self, method: str, params: list[Any]) -> Any:
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }
        logger.debug("RPC %s -> %s", method, self.endpoint)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.endpoint, json=payload)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise SolanaRPCError(f"RPC request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise SolanaRPCError("Invalid JSON in RPC response") from exc
        if not isinstance(data, dict):
            raise SolanaRPCError("Malformed RPC response; expected a JSON object")

        if "error" in data:
            error = data["error"]
            message = error.get("message", "Unknown RPC error") if isinstance(error, dict) else str(error)
            raise SolanaRPCError(message)

        if "result" not in data:
            raise SolanaRPCError(f"Malformed RPC response; missing result for {method}")
        return data["result"]

    @staticmethod
    def _value(result: Any, what: str) -> Any:
        try:
            return result["value"]
        except (KeyError, TypeError) as exc:
            raise SolanaRPCError(f"Malformed RPC response; missing {what} value") from exc

    @staticmethod
    def _signature(result: Any) -> Signature:
        if not isinstance(result, str):
            raise SolanaRPCError("Malformed RPC response; signature is not a string")
        try:
            return Signature.from_string(result)
        except Exception as exc:  # noqa: BLE001
            raise SolanaRPCError(f"Malformed RPC response; invalid signature {result!r}") from exc


__all__ = [
    "Commitment",
    "DEFAULT_TIMEOUT",
    "LatestBlockhash",
    "SolanaRPCClient",
    "SolanaRPCError",
    "status_satisfies",
]
