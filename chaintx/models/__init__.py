"""Pydantic models and shared types for chain data."""

from chaintx.models.chain import Block, JsonRpcError, Log, TransactionResponse
from chaintx.models.types import (
    UINT24_MAX,
    UINT160_MAX,
    UINT256_MAX,
    ZERO_ADDRESS,
    Address,
    Bytes,
    HexQuantity,
    Uint256,
    normalize_address,
    same_address,
)

__all__ = [
    # Types
    "Address",
    "Bytes",
    "HexQuantity",
    "Uint256",
    "UINT24_MAX",
    "UINT160_MAX",
    "UINT256_MAX",
    "ZERO_ADDRESS",
    "normalize_address",
    "same_address",
    # RPC models
    "Block",
    "JsonRpcError",
    "Log",
    "TransactionResponse",
]
