"""
Functional modules

- params: request validation and aggregator query parameters
- transaction: firm quote -> wallet-ready transaction
- gas: best-effort gas limit and fee suggestion
- swap: SwapModule, the per-request pipeline
"""

from .params import validate_swap_request, build_upstream_params, slippage_bps
from .transaction import build_transaction
from .gas import augment_with_gas_and_fees, estimate_gas, suggest_fees
from .swap import SwapModule

__all__ = [
    "validate_swap_request",
    "build_upstream_params",
    "slippage_bps",
    "build_transaction",
    "augment_with_gas_and_fees",
    "estimate_gas",
    "suggest_fees",
    "SwapModule",
]
