"""
Error definitions for the swap proxy
"""

from .exceptions import (
    ErrorCode,
    GdexError,
    ValidationError,
    UpstreamError,
    MalformedUpstreamResponse,
    RpcError,
    AugmentationFailure,
    ConfigurationError,
)

__all__ = [
    "ErrorCode",
    "GdexError",
    "ValidationError",
    "UpstreamError",
    "MalformedUpstreamResponse",
    "RpcError",
    "AugmentationFailure",
    "ConfigurationError",
]
