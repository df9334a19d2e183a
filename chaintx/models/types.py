"""Shared type definitions for chain data.

Quantities on the JSON-RPC wire are 0x-prefixed hex strings; the models
decode them into Python ints with the validators below.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

UINT24_MAX = 2**24 - 1
UINT64_MAX = 2**64 - 1
UINT128_MAX = 2**128 - 1
UINT160_MAX = 2**160 - 1
UINT256_MAX = 2**256 - 1

ZERO_ADDRESS = "0x" + "00" * 20


def parse_quantity(value: Any) -> int:
    """Parse a JSON-RPC quantity into an int.

    Args:
        value: Hex string ("0x1a"), decimal string, or int

    Returns:
        Non-negative integer

    Raises:
        ValueError: If the value is not a valid non-negative quantity
    """
    if isinstance(value, bool):
        raise ValueError(f"Quantity cannot be a bool: {value}")
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = int(value, 16) if value.startswith(("0x", "0X")) else int(value)
        except ValueError as err:
            raise ValueError(f"Invalid quantity: '{value}'") from err
    else:
        raise ValueError(f"Quantity must be string or int, got {type(value).__name__}")

    if parsed < 0:
        raise ValueError(f"Quantity cannot be negative: {value}")
    return parsed


def validate_uint256(value: Any) -> int:
    """Parse a quantity and check it fits in 256 bits."""
    parsed = parse_quantity(value)
    if parsed > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")
    return parsed


def fits_bits(value: int, bits: int) -> bool:
    """Return True if a non-negative int fits in the given number of bits."""
    return 0 <= value < (1 << bits)


# Ethereum address (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]

# JSON-RPC quantity decoded to int
HexQuantity = Annotated[int, BeforeValidator(parse_quantity)]

# 256-bit unsigned integer decoded to int
Uint256 = Annotated[
    int,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer"),
]

# Arbitrary hex bytes
Bytes = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]*$")]

# 32-byte hash
Hash32 = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{64}$")]


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize an Ethereum address to lowercase.

    Args:
        address: An Ethereum address (with or without 0x prefix)
        validate: If True, raises ValueError for invalid addresses.

    Returns:
        Lowercase address with 0x prefix

    Raises:
        ValueError: If validate=True and address is not a valid Ethereum address
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr

    if validate and not is_valid_address(addr):
        raise ValueError(f"Invalid address: {address}")

    return addr


def same_address(a: str, b: str) -> bool:
    """Compare two addresses ignoring case and checksum."""
    return normalize_address(a) == normalize_address(b)


def is_valid_address(address: str) -> bool:
    """Check if a string is a valid Ethereum address.

    Args:
        address: String to validate

    Returns:
        True if valid Ethereum address format
    """
    if not isinstance(address, str):
        return False
    if not address.startswith("0x"):
        return False
    if len(address) != 42:
        return False
    try:
        int(address, 16)
        return True
    except ValueError:
        return False
