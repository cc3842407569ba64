"""
G-DEX swap proxy

Backend between the G-DEX frontend and the 0x swap API:
- Hides the 0x API key
- Validates and normalizes swap parameters
- Builds wallet-ready transactions from firm quotes
- Adds a gas limit and EIP-1559 fee suggestion when a node RPC is configured
"""

__version__ = "0.1.0"

from .types import (
    SwapRequest,
    OutboundTransaction,
    FeeSuggestion,
    IntegratorFee,
    Result,
    NATIVE_TOKEN_ADDRESS,
)
from .errors import (
    GdexError,
    ValidationError,
    UpstreamError,
    MalformedUpstreamResponse,
    AugmentationFailure,
    RpcError,
    ErrorCode,
)
from .context import ServiceContext
from .modules.swap import SwapModule

__all__ = [
    "__version__",
    # Types
    "SwapRequest",
    "OutboundTransaction",
    "FeeSuggestion",
    "IntegratorFee",
    "Result",
    "NATIVE_TOKEN_ADDRESS",
    # Errors
    "GdexError",
    "ValidationError",
    "UpstreamError",
    "MalformedUpstreamResponse",
    "AugmentationFailure",
    "RpcError",
    "ErrorCode",
    # Service
    "ServiceContext",
    "SwapModule",
]
