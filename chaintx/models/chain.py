"""Pydantic models for JSON-RPC responses.

Only the fields the engine reads are modelled; everything else the node
returns is ignored.
"""

from typing import Any

from pydantic import BaseModel, Field

from chaintx.models.types import Bytes, Hash32, HexQuantity


class Block(BaseModel):
    """A block header as returned by eth_getBlockByNumber."""

    number: HexQuantity | None = Field(default=None, description="None for a pending block.")
    hash: Hash32 | None = None
    timestamp: HexQuantity
    base_fee_per_gas: HexQuantity | None = Field(
        default=None,
        alias="baseFeePerGas",
        description="EIP-1559 base fee; absent on pre-London chains.",
    )
    gas_limit: HexQuantity | None = Field(default=None, alias="gasLimit")

    model_config = {"populate_by_name": True}

    @property
    def supports_fee_market(self) -> bool:
        return self.base_fee_per_gas is not None


class TransactionResponse(BaseModel):
    """A transaction as returned by eth_getTransactionByHash."""

    hash: Hash32
    nonce: HexQuantity | None = None
    sender: str | None = Field(default=None, alias="from")
    to: str | None = None
    value: HexQuantity = 0
    block_number: HexQuantity | None = Field(
        default=None,
        alias="blockNumber",
        description="None while the transaction is still in the mempool.",
    )
    block_hash: Hash32 | None = Field(default=None, alias="blockHash")

    model_config = {"populate_by_name": True}

    @property
    def is_included(self) -> bool:
        return self.block_number is not None


class JsonRpcError(BaseModel):
    """The error member of a failed JSON-RPC response."""

    code: int
    message: str
    data: Any = None


class Log(BaseModel):
    """An event log as returned by eth_getLogs."""

    address: str
    topics: list[Hash32] = Field(default_factory=list)
    data: Bytes = "0x"
    block_number: HexQuantity | None = Field(
        default=None,
        alias="blockNumber",
        description="None for a log from a pending block.",
    )
    transaction_hash: Hash32 | None = Field(default=None, alias="transactionHash")
    log_index: HexQuantity | None = Field(default=None, alias="logIndex")
    removed: bool = False

    model_config = {"populate_by_name": True}

    @property
    def topic0(self) -> str | None:
        """Event signature hash, or None for an anonymous event."""
        return self.topics[0] if self.topics else None
