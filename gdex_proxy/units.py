"""
Wei quantity conversion

Amounts are Python ints end to end; floats never touch a wei value.
"""

import re
from decimal import Decimal
from typing import Any, Union

from web3 import Web3

MAX_UINT256 = 2 ** 256 - 1

_DECIMAL_INT_PATTERN = re.compile(r"^[0-9]+$")
_HEX_QUANTITY_PATTERN = re.compile(r"^0[xX][0-9a-fA-F]+$")


def is_decimal_integer(value: str) -> bool:
    """True for a non-negative base-10 integer string (no sign, point or exponent)"""
    return isinstance(value, str) and _DECIMAL_INT_PATTERN.match(value) is not None


def decimal_to_int(value: str) -> int:
    """
    Parse a base-10 wei amount

    Raises:
        ValueError: If value is not a non-negative base-10 integer string
    """
    if not is_decimal_integer(value):
        raise ValueError(f"Not a base-10 integer string: {value!r}")
    return int(value, 10)


def to_hex(value: int) -> str:
    """Encode a non-negative int as an 0x-prefixed hex quantity ("0x0" for zero)"""
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"Not a non-negative integer: {value!r}")
    return Web3.to_hex(value)


def parse_quantity(value: Any) -> int:
    """
    Parse a numeric field as returned by the aggregator or a node

    Accepts ints, 0x-prefixed hex strings and base-10 integer strings.

    Raises:
        ValueError: For anything else (floats, negatives, empty strings)
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a quantity: {value!r}")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Negative quantity: {value}")
        return value
    if isinstance(value, str):
        value = value.strip()
        if _HEX_QUANTITY_PATTERN.match(value):
            return Web3.to_int(hexstr=value)
        return decimal_to_int(value)
    raise ValueError(f"Not a quantity: {value!r}")


def normalize_quantity(value: Any) -> str:
    """Re-encode a hex or decimal quantity as hex"""
    return to_hex(parse_quantity(value))


def hex_to_decimal(value: str) -> str:
    """Decode an 0x hex quantity to a base-10 string"""
    return str(Web3.to_int(hexstr=value))


def gwei_to_wei(amount: Union[str, Decimal, int]) -> int:
    """Convert a gwei amount (e.g. "1.5") to wei"""
    return int(Web3.to_wei(Decimal(str(amount)), "gwei"))
