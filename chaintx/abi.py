"""Calldata encoding and return-data decoding helpers.

Thin layer over eth_abi: a call is described by its Solidity signature
("transfer(address,uint256)"), from which both the 4-byte selector and the
argument types are derived.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from eth_abi import decode, encode, grammar
from eth_abi.exceptions import ParseError
from eth_utils import event_signature_to_log_topic, function_signature_to_4byte_selector

from chaintx.errors import ContractCallError
from chaintx.models.types import normalize_address

WORD_SIZE = 32


def split_signature(signature: str) -> tuple[str, list[str]]:
    """Split a function signature into its name and top-level argument types.

    The argument list is parsed with eth_abi's type grammar, so nested tuples
    and arrays are handled the same way the encoder will see them.

    Example:
        >>> split_signature("f((address,uint24),uint256)")
        ('f', ['(address,uint24)', 'uint256'])

    Raises:
        ValueError: If the signature has no name, does not parse as an argument
            list, or names an invalid type
    """
    start = signature.find("(")
    if start <= 0:
        raise ValueError(f"Malformed function signature: {signature!r}")

    try:
        arguments = grammar.parse(signature[start:])
    except ParseError as exc:
        raise ValueError(f"Malformed function signature: {signature!r}") from exc
    if not isinstance(arguments, grammar.TupleType) or arguments.arrlist is not None:
        raise ValueError(f"Malformed function signature: {signature!r}")
    arguments.validate()
    return signature[:start], [component.to_type_str() for component in arguments.components]


def selector(signature: str) -> bytes:
    """4-byte function selector for a signature."""
    return function_signature_to_4byte_selector(signature)


def event_topic(signature: str) -> str:
    """Topic 0 of an event: keccak256 of its signature, as 0x-prefixed hex."""
    return "0x" + event_signature_to_log_topic(signature).hex()


def encode_call(signature: str, args: Sequence[Any] = ()) -> bytes:
    """Encode a contract call as selector + ABI-encoded arguments.

    Args:
        signature: Canonical Solidity signature, e.g. "approve(address,uint256)"
        args: Argument values in order; tuples for struct arguments

    Returns:
        Calldata bytes
    """
    _, types = split_signature(signature)
    if len(types) != len(args):
        raise ValueError(f"{signature} takes {len(types)} arguments, got {len(args)}")
    return selector(signature) + encode(types, list(args))


def address_bytes(address: str) -> bytes:
    """Convert a hex address to the 20 raw bytes eth_abi expects."""
    return bytes.fromhex(normalize_address(address, validate=True)[2:])


def decode_uint(data: bytes, index: int = 0) -> int:
    """Decode the unsigned integer in 32-byte word ``index`` of return data.

    Raises:
        ContractCallError: If the data is too short
    """
    end = (index + 1) * WORD_SIZE
    if len(data) < end:
        raise ContractCallError(f"Return data too short: {len(data)} bytes, need {end}")
    return int.from_bytes(data[index * WORD_SIZE : end], "big")


def decode_address(data: bytes, index: int = 0) -> str:
    """Decode the address right-aligned in 32-byte word ``index`` of return data."""
    end = (index + 1) * WORD_SIZE
    if len(data) < end:
        raise ContractCallError(f"Return data too short: {len(data)} bytes, need {end}")
    return "0x" + data[end - 20 : end].hex()


def decode_return(types: Sequence[str], data: bytes) -> tuple[Any, ...]:
    """Decode return data with eth_abi, surfacing failures as ContractCallError."""
    try:
        return tuple(decode(list(types), data))
    except Exception as e:  # eth_abi raises several unrelated exception types
        raise ContractCallError(f"Could not decode {list(types)}: {e}") from e
