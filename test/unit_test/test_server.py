"""
Test HTTP routes

End-to-end tests of the FastAPI app with fake 0x and node upstreams.
"""

import sys
from pathlib import Path

import httpx
from fastapi.testclient import TestClient

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from conftest import ONE_ETH_WEI, SETTLER, TAKER, USDC, firm_quote, make_context, rpc_handler
from gdex_proxy.server import create_app
from gdex_proxy.types import NATIVE_TOKEN_ADDRESS, IntegratorFee

PRICE = {"buyAmount": "3000000000", "liquidityAvailable": True, "route": {"fills": []}}

SWAP_BODY = {
    "sellToken": "ETH",
    "buyToken": USDC,
    "sellAmount": ONE_ETH_WEI,
    "taker": TAKER,
}

QUOTE_BODY = {k: v for k, v in SWAP_BODY.items() if k != "taker"}

NODE_OK = {
    "eth_estimateGas": "0x30d40",
    "eth_getBlockByNumber": {"number": "0x10", "baseFeePerGas": "0x3b9aca00"},
    "eth_maxPriorityFeePerGas": "0x77359400",
}


def _client(zerox_handler, rpc_handler_fn=None, fee=None):
    context, zerox_transport, rpc_transport = make_context(zerox_handler, rpc_handler_fn, fee)
    return TestClient(create_app(context)), zerox_transport, rpc_transport


def _json(body):
    return lambda request: httpx.Response(200, json=body)


def test_liveness():
    """GET / answers with a plain-text banner"""
    client, _, _ = _client(_json({}))
    response = client.get("/")

    assert response.status_code == 200
    assert response.text == "G-DEX backend is running."


def test_quote_returns_upstream_body_verbatim():
    """POST /quote relays the price body as-is"""
    print("Testing /quote...")

    client, zerox, _ = _client(_json(PRICE))
    response = client.post("/quote", json=QUOTE_BODY)

    assert response.status_code == 200
    assert response.json() == PRICE

    params = zerox.requests[0].url.params
    assert params["sellToken"] == NATIVE_TOKEN_ADDRESS
    assert params["slippageBps"] == "200"
    assert params["chainId"] == "1"
    assert "taker" not in params

    print("  /quote: PASSED")


def test_quote_passes_upstream_error_through():
    """Upstream 400 keeps its status, message and body"""
    body = {"name": "INPUT_INVALID", "message": "no Route matched"}
    client, _, _ = _client(lambda request: httpx.Response(400, json=body))

    response = client.post("/quote", json=QUOTE_BODY)

    assert response.status_code == 400
    assert response.json() == {"message": "no Route matched", "details": body}


def test_quote_validation_error():
    """Bad input is rejected before any upstream call"""
    client, zerox, _ = _client(_json(PRICE))

    response = client.post("/quote", json=dict(QUOTE_BODY, sellAmount="1.5"))

    assert response.status_code == 400
    assert "sellAmount" in response.json()["message"]
    assert zerox.requests == []


def test_invalid_json_body():
    client, zerox, _ = _client(_json(PRICE))

    response = client.post(
        "/quote",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert "message" in response.json()
    assert zerox.requests == []


def test_swap_requires_taker():
    """POST /swap without taker is a 400 with no network calls"""
    print("Testing /swap without taker...")

    client, zerox, rpc = _client(_json(firm_quote()), rpc_handler(NODE_OK))
    response = client.post("/swap", json=QUOTE_BODY)

    assert response.status_code == 400
    assert "taker" in response.json()["message"]
    assert zerox.requests == []
    assert rpc.requests == []

    print("  /swap without taker: PASSED")


def test_swap_without_rpc():
    """No node configured: transaction as built from the quote"""
    client, zerox, _ = _client(_json(firm_quote(gas="250000")))

    response = client.post("/swap", json=SWAP_BODY)

    assert response.status_code == 200
    assert response.json() == {
        "tx": {
            "to": SETTLER,
            "data": "0xabcdef01",
            "value": "0xde0b6b3a7640000",
            "gas": "0x3d090",
        }
    }

    params = zerox.requests[0].url.params
    assert params["taker"] == TAKER
    assert params["intentOnFilling"] == "true"


def test_swap_with_rpc_adds_gas_and_fees():
    """Reachable node: buffered gas and EIP-1559 fees are added"""
    print("Testing /swap with RPC...")

    client, _, rpc = _client(_json(firm_quote(gas="250000")), rpc_handler(NODE_OK))
    response = client.post("/swap", json=SWAP_BODY)

    assert response.status_code == 200
    assert response.json()["tx"] == {
        "to": SETTLER,
        "data": "0xabcdef01",
        "value": "0xde0b6b3a7640000",
        "gas": "0x3a980",
        "maxFeePerGas": "0xee6b2800",
        "maxPriorityFeePerGas": "0x77359400",
    }
    assert len(rpc.requests) == 3

    print("  /swap with RPC: PASSED")


def test_swap_with_failing_rpc_still_succeeds():
    """Node errors never fail the swap; fee fields are simply omitted"""
    client, _, _ = _client(_json(firm_quote()), rpc_handler({}))

    response = client.post("/swap", json=SWAP_BODY)

    assert response.status_code == 200
    tx = response.json()["tx"]
    assert tx["to"] == SETTLER
    assert tx["value"] == "0xde0b6b3a7640000"
    assert "maxFeePerGas" not in tx
    assert "maxPriorityFeePerGas" not in tx
    assert "gas" not in tx


def test_swap_token_sell_value_zero():
    """Selling a token with no upstream value sends zero ETH"""
    client, _, _ = _client(_json(firm_quote()))

    body = dict(SWAP_BODY, sellToken=USDC, buyToken="ETH", sellAmount="5000000")
    response = client.post("/swap", json=body)

    assert response.status_code == 200
    assert response.json()["tx"]["value"] == "0x0"


def test_swap_malformed_quote():
    """Quote without tx fields is a 500 carrying the raw body"""
    quote = {"buyAmount": "3000000000", "liquidityAvailable": True}
    client, _, _ = _client(_json(quote))

    response = client.post("/swap", json=SWAP_BODY)

    assert response.status_code == 500
    assert response.json() == {"message": "0x quote did not return tx fields", "raw": quote}


def test_upstream_timeout_is_500():
    def timeout(request):
        raise httpx.ReadTimeout("timed out", request=request)

    client, _, _ = _client(timeout)
    response = client.post("/swap", json=SWAP_BODY)

    assert response.status_code == 500
    assert response.json()["details"] is None


def test_unexpected_failure_is_generic_500():
    """Unexpected errors are logged, the client sees a generic message"""
    def broken(request):
        raise RuntimeError("boom")

    client, _, _ = _client(broken)

    response = client.post("/quote", json=QUOTE_BODY)
    assert response.status_code == 500
    assert response.json() == {"message": "Quote failed"}

    response = client.post("/swap", json=SWAP_BODY)
    assert response.status_code == 500
    assert response.json() == {"message": "Swap failed"}


def test_fee_params_identical_for_quote_and_swap():
    """Integrator fee is attached to both price and quote requests"""
    print("Testing integrator fee params...")

    fee = IntegratorFee.from_settings(TAKER, "0.01")

    def handler(request):
        if request.url.path.endswith("/price"):
            return httpx.Response(200, json=PRICE)
        return httpx.Response(200, json=firm_quote())

    client, zerox, _ = _client(handler, fee=fee)
    assert client.post("/quote", json=QUOTE_BODY).status_code == 200
    assert client.post("/swap", json=SWAP_BODY).status_code == 200

    price_params, quote_params = [r.url.params for r in zerox.requests]
    for params in (price_params, quote_params):
        assert params["feeRecipient"] == TAKER
        assert params["buyTokenPercentageFee"] == "0.01"
    assert price_params["slippageBps"] == quote_params["slippageBps"]

    print("  integrator fee params: PASSED")


def test_oversized_amount_is_400():
    """Huge digit strings are rejected as client input, not a server error"""
    client, zerox, _ = _client(_json(PRICE))

    response = client.post("/quote", json=dict(QUOTE_BODY, sellAmount="1" * 5000))

    assert response.status_code == 400
    assert len(response.json()["message"]) < 200
    assert zerox.requests == []


def test_fractional_chain_id_is_400():
    client, zerox, _ = _client(_json(PRICE))

    response = client.post("/quote", json=dict(QUOTE_BODY, chainId=1.9))

    assert response.status_code == 400
    assert zerox.requests == []
