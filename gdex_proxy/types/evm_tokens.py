"""
EVM token helpers for the aggregator API

The 0x API represents the chain's native coin with a sentinel address
instead of a token contract.
"""

import re
from typing import Optional

# Native token address (use this for native ETH in the 0x API)
NATIVE_TOKEN_ADDRESS = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"

# Symbol accepted from the frontend in place of the sentinel
NATIVE_SYMBOL = "ETH"

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def is_hex_address(value: str) -> bool:
    """True if value is a 20-byte hex address (checksum not enforced)"""
    return isinstance(value, str) and ADDRESS_PATTERN.match(value) is not None


def is_native_token(address: Optional[str]) -> bool:
    """
    Check if address is the native token address

    Args:
        address: Token address

    Returns:
        True if native token (ETH)
    """
    if not isinstance(address, str):
        return False
    return address.lower() == NATIVE_TOKEN_ADDRESS.lower()


def normalize_token(token: str) -> Optional[str]:
    """
    Canonicalize a token identifier for the aggregator

    Args:
        token: Token address, native sentinel, or the symbol "ETH"

    Returns:
        Sentinel for native ETH, the address unchanged for tokens,
        None if the value is not a usable token identifier
    """
    if not isinstance(token, str):
        return None
    token = token.strip()
    if token.upper() == NATIVE_SYMBOL or is_native_token(token):
        return NATIVE_TOKEN_ADDRESS
    if is_hex_address(token):
        return token
    return None
