"""
Upstream protocol clients
"""

from .zerox import ZeroExAPI

__all__ = [
    "ZeroExAPI",
]
