"""Shared type definitions for API models.

Integers wider than 53 bits do not survive JSON numbers in most clients,
so amounts and prices travel as decimal strings and are range-checked
against their on-chain width on the way in.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from swapmath.safe_int import INT256_MAX, INT256_MIN


def _parse_decimal(value: Any, type_name: str) -> int:
    """Parse a decimal string (or int) into an int."""
    if isinstance(value, bool):
        raise ValueError(f"{type_name} must be string or int, got bool")
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        raise ValueError(f"{type_name} must be string or int, got {type(value).__name__}")
    try:
        return int(value)
    except ValueError as err:
        raise ValueError(f"{type_name} must be a decimal integer string: '{value}'") from err


def uint_validator(bits: int):  # type: ignore[no-untyped-def]
    """Build a validator accepting unsigned integers of the given width.

    Returns the value normalized to a decimal string.
    """
    type_name = f"Uint{bits}"
    max_value = 2**bits - 1

    def validate(value: Any) -> str:
        int_value = _parse_decimal(value, type_name)
        if int_value < 0:
            raise ValueError(f"{type_name} cannot be negative: {value}")
        if int_value > max_value:
            raise ValueError(f"{type_name} overflow: {value} > 2^{bits}-1")
        return str(int_value)

    return validate


def validate_int256(value: Any) -> str:
    """Validate a signed 256-bit integer, returned as a decimal string."""
    int_value = _parse_decimal(value, "Int256")
    if not INT256_MIN <= int_value <= INT256_MAX:
        raise ValueError(f"Int256 out of range: {value}")
    return str(int_value)


# Ethereum address (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]

Uint128 = Annotated[
    str,
    BeforeValidator(uint_validator(128)),
    Field(description="128-bit unsigned integer as decimal string"),
]

Uint160 = Annotated[
    str,
    BeforeValidator(uint_validator(160)),
    Field(description="160-bit unsigned integer as decimal string"),
]

Uint256 = Annotated[
    str,
    BeforeValidator(uint_validator(256)),
    Field(description="256-bit unsigned integer as decimal string"),
]

Int256 = Annotated[
    str,
    BeforeValidator(validate_int256),
    Field(description="256-bit signed integer as decimal string"),
]


def normalize_address(address: str) -> str:
    """Normalize an Ethereum address to lowercase with 0x prefix.

    Does not check that the input is a valid address.
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr
    return addr
