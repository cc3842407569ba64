"""
Infrastructure layer for the swap proxy

Provides:
- RpcClient: async node JSON-RPC wrapper
"""

from .rpc import RpcClient

__all__ = [
    "RpcClient",
]
