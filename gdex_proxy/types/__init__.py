"""
Type definitions for the swap proxy
"""

from .result import Result, ResultStatus
from .swap import SwapRequest, OutboundTransaction, FeeSuggestion, IntegratorFee
from .evm_tokens import (
    NATIVE_TOKEN_ADDRESS,
    NATIVE_SYMBOL,
    is_hex_address,
    is_native_token,
    normalize_token,
)

__all__ = [
    "Result",
    "ResultStatus",
    "SwapRequest",
    "OutboundTransaction",
    "FeeSuggestion",
    "IntegratorFee",
    "NATIVE_TOKEN_ADDRESS",
    "NATIVE_SYMBOL",
    "is_hex_address",
    "is_native_token",
    "normalize_token",
]
