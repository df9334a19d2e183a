"""Tron ledger adapter.

Tron nodes expose an Ethereum-compatible JSON-RPC endpoint for reads
(``<node>/jsonrpc``) but no eth_sendRawTransaction. Writes go through the
node's ``/wallet/*`` HTTP API instead: the node builds the transaction,
the client signs its id, and the node broadcasts it.

Addresses are sent in hex form with the ``41`` prefix (``visible=false``),
so no base58 conversion is needed.
"""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass
from typing import Any

import httpx
import structlog
from eth_keys import keys
from eth_keys.exceptions import ValidationError as KeyValidationError
from hexbytes import HexBytes

from chaintx.constants import POLL_INTERVAL
from chaintx.errors import BadInput, BadResponse, TransactionTimeout
from chaintx.models.types import normalize_address
from chaintx.transaction.confirmation import WaitState
from chaintx.transaction.options import SendOptions

logger = structlog.get_logger()

TRON_URL_PATTERN = re.compile(r"^(.*)/jsonrpc/?(.*)$")

# Header carrying the API key, by provider base URL
API_KEY_HEADERS = {
    "https://api.trongrid.io": "TRON-PRO-API-KEY",
    "https://trx.getblock.io/mainnet/fullnode": "x-api-key",
}

TRON_ADDRESS_PREFIX = "41"


@dataclass(frozen=True)
class TronEndpoint:
    """A Tron node URL split into its HTTP API base and JSON-RPC endpoint."""

    base_url: str
    api_key: str

    @property
    def jsonrpc_url(self) -> str:
        return f"{self.base_url}/jsonrpc"

    def headers(self) -> dict[str, str]:
        """API key header for known providers; empty otherwise."""
        name = API_KEY_HEADERS.get(self.base_url)
        if name and self.api_key:
            return {name: self.api_key}
        return {}


def parse_tron_url(url: str) -> TronEndpoint | None:
    """Recognise ``<base>/jsonrpc[/<api key>]``; None for any other URL."""
    match = TRON_URL_PATTERN.match(url)
    if match is None:
        return None
    return TronEndpoint(base_url=match.group(1), api_key=match.group(2))


def to_tron_hex(address: str) -> str:
    """Hex Tron address (``41`` + 20 bytes) for an EVM address."""
    return TRON_ADDRESS_PREFIX + normalize_address(address, validate=True)[2:]


class TronHttpClient:
    """Minimal client for the Tron ``/wallet/*`` HTTP API."""

    def __init__(
        self,
        base_url: str,
        timeout: float,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.http = httpx.AsyncClient(
            base_url=base_url, timeout=timeout, headers=headers or {}, transport=transport
        )

    async def post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST a JSON payload and return the decoded JSON body.

        Raises:
            httpx.HTTPStatusError: On a non-2xx status
            BadResponse: If the node reports an error in the body
        """
        response = await self.http.post(path, json=payload)
        response.raise_for_status()
        body = response.json()
        if isinstance(body, dict) and "Error" in body:
            raise BadResponse(f"Tron {path} failed: {body['Error']}")
        return body

    async def close(self) -> None:
        await self.http.aclose()


class AlternateLedgerAdapter:
    """Tron-style submit and await.

    Only the gas limit multiplier of :class:`SendOptions` applies here: the
    fee limit is the estimated energy cost scaled by it. Tron has no account
    nonce, so :meth:`next_nonce` is always 0.

    Args:
        http: Client for the node's HTTP API
        poll_interval: Seconds between confirmation polls
    """

    def __init__(self, http: TronHttpClient, poll_interval: float = POLL_INTERVAL) -> None:
        self.http = http
        self.poll_interval = poll_interval

    async def energy_fee(self) -> int:
        """Current price of one unit of energy, in sun."""
        params = await self.http.post("/wallet/getchainparameters", {})
        for param in params.get("chainParameter", []):
            if param.get("key") == "getEnergyFee":
                return int(param.get("value", 0))
        raise BadResponse("Chain parameters do not include getEnergyFee")

    async def estimate_fee_limit(
        self, owner: str, contract: str, calldata: bytes, value: int
    ) -> int:
        """Energy a call would use times the energy price."""
        result = await self.http.post(
            "/wallet/triggerconstantcontract",
            {
                "owner_address": owner,
                "contract_address": contract,
                "data": calldata.hex(),
                "call_value": value,
                "visible": False,
            },
        )
        energy_used = int(result.get("energy_used", 0))
        return energy_used * await self.energy_fee()

    async def submit(
        self,
        destination: str,
        calldata: bytes,
        value: int,
        sender: str,
        private_key: str,
        options: SendOptions | None = None,
    ) -> str:
        options = options or SendOptions()
        owner = to_tron_hex(sender)
        contract = to_tron_hex(destination)

        estimated = await self.estimate_fee_limit(owner, contract, calldata, value)
        multiplier = options.gas_limit_multiplier or 1.0
        fee_limit = round(estimated * multiplier)

        built = await self.http.post(
            "/wallet/triggersmartcontract",
            {
                "owner_address": owner,
                "contract_address": contract,
                "data": calldata.hex(),
                "call_value": value,
                "fee_limit": fee_limit,
                "visible": False,
            },
        )
        tx = built.get("transaction")
        if not tx or "txID" not in tx:
            raise BadResponse(f"Tron node did not build a transaction: {built.get('result')}")

        tx_id = tx["txID"]
        try:
            key = keys.PrivateKey(bytes(HexBytes(private_key)))
        except (ValueError, KeyValidationError) as e:
            raise BadInput(f"Invalid private key: {e}") from e
        signature = key.sign_msg_hash(bytes.fromhex(tx_id))
        tx["signature"] = [signature.to_bytes().hex()]

        result = await self.http.post("/wallet/broadcasttransaction", tx)
        if not result.get("result"):
            raise BadResponse(f"Tron broadcast rejected: {result.get('message', result)}")

        logger.info("tron_transaction_submitted", tx_id=tx_id, fee_limit=fee_limit)
        return "0x" + tx_id

    async def wait_for_transaction(
        self, tx_id: str, timeout: float, blocks_to_wait: int | None = None
    ) -> None:
        """Poll gettransactioninfobyid until the node reports a block number.

        Tron blocks are final once produced, so ``blocks_to_wait`` is ignored.
        """
        value = tx_id.removeprefix("0x")

        async def _poll() -> None:
            while True:
                await asyncio.sleep(self.poll_interval)
                info = await self.http.post("/wallet/gettransactioninfobyid", {"value": value})
                if info.get("blockNumber") is not None:
                    logger.info(
                        "tron_transaction_confirmed", tx_id=tx_id, block=info["blockNumber"]
                    )
                    return

        try:
            async with asyncio.timeout(timeout) as deadline:
                await _poll()
        except TimeoutError:
            if not deadline.expired():
                raise
            raise TransactionTimeout(tx_id, timeout, WaitState.PENDING) from None

    async def next_nonce(self, sender: str) -> int:
        return 0

    async def close(self) -> None:
        await self.http.close()
