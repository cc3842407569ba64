"""
Async JSON-RPC client for an Ethereum node

Provides:
- JSON-RPC 2.0 framing with auto-incrementing request ids
- Per-call timeout
- Typed helpers for the methods the gas/fee augmentation needs

Calls are never retried; callers decide how to degrade.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..errors import RpcError, ConfigurationError
from ..config import config as global_config

logger = logging.getLogger(__name__)


class RpcClient:
    """
    Node JSON-RPC client

    The request id counter lives on the instance; one client is shared by
    all requests of a ServiceContext. Counter updates happen between awaits
    on the event loop thread, so no lock is needed.

    Usage:
        rpc = RpcClient("https://eth.example.com")
        block = await rpc.get_block_by_number("latest")
        await rpc.aclose()
    """

    def __init__(
        self,
        endpoint: str,
        timeout_seconds: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize RPC client

        Args:
            endpoint: RPC endpoint URL
            timeout_seconds: Per-call timeout (defaults to config.rpc.timeout_seconds)
            client: Optional preconfigured httpx.AsyncClient
        """
        if not endpoint:
            raise ConfigurationError.missing("ETH_RPC_URL")

        self._endpoint = endpoint
        self._timeout = timeout_seconds or global_config.rpc.timeout_seconds
        self._client = client
        self._ids = itertools.count(1)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"Content-Type": "application/json"},
            )
        return self._client

    def next_id(self) -> int:
        return next(self._ids)

    async def call(self, method: str, params: List[Any]) -> Any:
        """
        Make JSON-RPC call

        Args:
            method: RPC method name
            params: RPC parameters

        Returns:
            The "result" member of the response

        Raises:
            RpcError: On transport failure, timeout, error response or malformed body
        """
        client = self._get_client()
        body = {
            "jsonrpc": "2.0",
            "id": self.next_id(),
            "method": method,
            "params": params,
        }
        logger.debug(f"RPC request id={body['id']} method={method}")

        try:
            response = await client.post(self._endpoint, json=body, timeout=self._timeout)
            response.raise_for_status()
            payload = response.json()
        except httpx.TimeoutException:
            raise RpcError.timeout(self._endpoint, method, self._timeout)
        except httpx.HTTPStatusError as e:
            raise RpcError.invalid_response(
                self._endpoint, method, f"HTTP {e.response.status_code}"
            )
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise RpcError.connection_failed(self._endpoint, method, e)
        except ValueError as e:
            raise RpcError.invalid_response(self._endpoint, method, f"invalid JSON: {e}")

        if not isinstance(payload, dict):
            raise RpcError.invalid_response(self._endpoint, method, "response is not an object")
        if payload.get("error") is not None:
            raise RpcError.error_response(self._endpoint, method, payload["error"])
        if "result" not in payload:
            raise RpcError.invalid_response(self._endpoint, method, "missing result")

        return payload["result"]

    async def get_block_by_number(self, block: str = "latest", full_transactions: bool = False) -> Dict[str, Any]:
        """eth_getBlockByNumber"""
        result = await self.call("eth_getBlockByNumber", [block, full_transactions])
        if not isinstance(result, dict):
            raise RpcError.invalid_response(self._endpoint, "eth_getBlockByNumber", f"block {block} not found")
        return result

    async def max_priority_fee_per_gas(self) -> Any:
        """eth_maxPriorityFeePerGas (hex quantity)"""
        return await self.call("eth_maxPriorityFeePerGas", [])

    async def estimate_gas(self, tx: Dict[str, Any]) -> Any:
        """eth_estimateGas (hex quantity)"""
        return await self.call("eth_estimateGas", [tx])

    async def aclose(self):
        """Close HTTP client"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def __repr__(self) -> str:
        return f"RpcClient(endpoint={self._endpoint!r})"
