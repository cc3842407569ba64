"""
Shared helpers for unit tests.

Upstreams are faked with httpx.MockTransport, so no test touches the network.
"""

import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from gdex_proxy.context import ServiceContext
from gdex_proxy.infra.rpc import RpcClient
from gdex_proxy.protocols.zerox import ZeroExAPI
from gdex_proxy.types import IntegratorFee

ZEROX_BASE = "https://api.0x.test"
RPC_URL = "https://rpc.test"

USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
TAKER = "0x1234567890123456789012345678901234567890"
SETTLER = "0x0000000000001fF3684f28c67538d4D072C22734"
ONE_ETH_WEI = "1000000000000000000"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served"""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


def zerox_api(handler: Callable[[httpx.Request], httpx.Response]) -> Tuple[ZeroExAPI, RecordingTransport]:
    transport = RecordingTransport(handler)
    api = ZeroExAPI(
        api_key="test-key",
        base_url=ZEROX_BASE,
        api_version="v2",
        timeout=5.0,
        client=httpx.AsyncClient(transport=transport),
    )
    return api, transport


def rpc_handler(
    results: Dict[str, Any],
    errors: Optional[Dict[str, str]] = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """
    JSON-RPC handler answering by method name

    Args:
        results: method -> result value
        errors: method -> error message (answered as a JSON-RPC error)
    """
    errors = errors or {}

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        method = body["method"]
        if method in errors or method not in results:
            message = errors.get(method, "method not found")
            return httpx.Response(200, json={
                "jsonrpc": "2.0",
                "id": body["id"],
                "error": {"code": -32000, "message": message},
            })
        return httpx.Response(200, json={
            "jsonrpc": "2.0",
            "id": body["id"],
            "result": results[method],
        })

    return handler


def rpc_client(handler: Callable[[httpx.Request], httpx.Response]) -> Tuple[RpcClient, RecordingTransport]:
    transport = RecordingTransport(handler)
    client = RpcClient(RPC_URL, timeout_seconds=5.0, client=httpx.AsyncClient(transport=transport))
    return client, transport


def make_context(
    zerox_handler: Callable[[httpx.Request], httpx.Response],
    rpc_handler_fn: Optional[Callable[[httpx.Request], httpx.Response]] = None,
    fee: Optional[IntegratorFee] = None,
):
    """ServiceContext wired to fake upstreams; returns (context, zerox_transport, rpc_transport)"""
    api, zerox_transport = zerox_api(zerox_handler)
    rpc, rpc_transport = (None, None)
    if rpc_handler_fn is not None:
        rpc, rpc_transport = rpc_client(rpc_handler_fn)
    return ServiceContext(zerox=api, rpc=rpc, fee=fee), zerox_transport, rpc_transport


def firm_quote(**tx_fields) -> Dict[str, Any]:
    """A firm-quote body shaped like the 0x allowance-holder response"""
    transaction = {"to": SETTLER, "data": "0xabcdef01"}
    transaction.update(tx_fields)
    return {
        "buyAmount": "3000000000",
        "sellAmount": ONE_ETH_WEI,
        "liquidityAvailable": True,
        "transaction": transaction,
    }
