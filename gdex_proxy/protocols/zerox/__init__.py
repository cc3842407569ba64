"""
0x Swap Aggregator

Usage:
    from gdex_proxy.protocols.zerox import ZeroExAPI

    api = ZeroExAPI()
    price = await api.get_price(params)
"""

from .api import ZeroExAPI

__all__ = [
    "ZeroExAPI",
]
