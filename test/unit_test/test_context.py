"""
Test service context construction
"""

import asyncio
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from conftest import TAKER
from gdex_proxy.config import Config, RpcConfig, TradingConfig, ZeroExConfig
from gdex_proxy.context import ServiceContext, load_integrator_fee
from gdex_proxy.infra.rpc import RpcClient


def _config(rpc_url="", fee_recipient="", fee_percentage="0") -> Config:
    return Config(
        zerox=ZeroExConfig(api_key="test-key", base_url="https://api.0x.test/"),
        rpc=RpcConfig(url=rpc_url, timeout_seconds=3.0),
        trading=TradingConfig(fee_recipient=fee_recipient, fee_percentage=fee_percentage),
    )


def test_context_without_rpc():
    """No ETH_RPC_URL: augmentation disabled, proxy still starts"""
    print("Testing context without RPC...")

    context = ServiceContext.from_config(_config())
    assert context.rpc is None
    assert context.fee is None
    assert context.zerox.base_url == "https://api.0x.test"
    asyncio.run(context.aclose())

    print("  context without RPC: PASSED")


def test_context_with_rpc():
    context = ServiceContext.from_config(_config(rpc_url="https://rpc.test"))
    assert isinstance(context.rpc, RpcClient)
    assert context.rpc.endpoint == "https://rpc.test"
    asyncio.run(context.aclose())


def test_integrator_fee_loading():
    """Valid settings enable the fee, invalid ones disable it"""
    print("Testing integrator fee loading...")

    fee = load_integrator_fee(_config(fee_recipient=TAKER, fee_percentage="0.0015"))
    assert fee.recipient == TAKER
    assert fee.percentage == "0.0015"

    assert load_integrator_fee(_config(fee_recipient=TAKER, fee_percentage="0")) is None
    assert load_integrator_fee(_config(fee_recipient="nobody", fee_percentage="0.01")) is None
    assert load_integrator_fee(_config(fee_recipient=TAKER, fee_percentage="2")) is None

    print("  integrator fee loading: PASSED")


def test_context_with_malformed_rpc_url():
    """An unparseable or non-http ETH_RPC_URL disables augmentation"""
    for url in ["http://[::1", "http://exa mple.com:abc/", "ftp://rpc.test", "not a url"]:
        context = ServiceContext.from_config(_config(rpc_url=url))
        assert context.rpc is None, url
        asyncio.run(context.aclose())
