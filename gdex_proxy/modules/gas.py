"""
Gas limit and EIP-1559 fee augmentation

Both steps are best-effort: each returns a Result, and a failed Result
only means the corresponding field is left off the transaction.
"""

import asyncio
import logging
from typing import Any, Awaitable, Optional

from ..config import config as global_config
from ..errors import AugmentationFailure, RpcError
from ..infra.rpc import RpcClient
from ..types import FeeSuggestion, OutboundTransaction, Result, SwapRequest
from ..units import gwei_to_wei, parse_quantity, to_hex

logger = logging.getLogger(__name__)


async def _rpc_result(call: Awaitable[Any]) -> Result[Any]:
    """Await an RPC call, capturing RpcError as a failed Result"""
    try:
        return Result.ok(await call)
    except RpcError as e:
        return Result.failed(e)


def apply_gas_buffer(estimate: int, divisor: Optional[int] = None) -> int:
    """estimate + estimate // divisor (20% with the default divisor of 5)"""
    divisor = divisor or global_config.gas.gas_buffer_divisor
    return estimate + estimate // divisor


def fallback_priority_fee() -> int:
    """Tip used when the node cannot suggest one, in wei"""
    return gwei_to_wei(global_config.gas.fallback_priority_fee_gwei)


def compute_max_fee(base_fee: int, tip: int, multiplier: Optional[int] = None) -> int:
    """maxFeePerGas = baseFee * multiplier + tip; 2x absorbs one to two blocks of base-fee growth"""
    multiplier = multiplier or global_config.gas.base_fee_multiplier
    return base_fee * multiplier + tip


async def estimate_gas(rpc: RpcClient, tx: OutboundTransaction, req: SwapRequest) -> Result[int]:
    """
    Buffered gas limit for the candidate transaction

    Args:
        rpc: Node RPC client
        tx: Candidate transaction
        req: Swap request (taker becomes "from")

    Returns:
        Result with the buffered gas limit in gas units
    """
    if not req.taker:
        return Result.failed(AugmentationFailure.gas_estimate(ValueError("no taker to estimate from")))

    call = {
        "from": req.taker,
        "to": tx.to,
        "data": tx.data,
        "value": tx.value,
    }
    estimate = await _rpc_result(rpc.estimate_gas(call))
    return (
        estimate
        .map(parse_quantity)
        .map(apply_gas_buffer)
        .map_error(AugmentationFailure.gas_estimate)
    )


async def priority_fee(rpc: RpcClient) -> Result[int]:
    """Node-suggested tip, falling back to the configured fixed tip"""

    def _fallback(error: Exception) -> Result[int]:
        tip = fallback_priority_fee()
        logger.warning(f"eth_maxPriorityFeePerGas unavailable ({error}), using fallback tip {tip} wei")
        return Result.ok(tip)

    suggested = await _rpc_result(rpc.max_priority_fee_per_gas())
    return suggested.map(parse_quantity).or_else(_fallback)


async def suggest_fees(rpc: RpcClient) -> Result[FeeSuggestion]:
    """
    EIP-1559 fee suggestion from the latest block's base fee

    Returns:
        Result with the suggestion; failed when the latest block or its
        baseFeePerGas cannot be read
    """
    block = await _rpc_result(rpc.get_block_by_number("latest"))
    base_fee = block.map(lambda b: parse_quantity(b["baseFeePerGas"]))
    if base_fee.is_failed:
        return base_fee.map_error(AugmentationFailure.fee_suggestion)

    tip = await priority_fee(rpc)
    return tip.and_then(
        lambda t: Result.ok(FeeSuggestion(
            max_fee_per_gas=compute_max_fee(base_fee.value, t),
            max_priority_fee_per_gas=t,
        ))
    )


async def augment_with_gas_and_fees(
    tx: OutboundTransaction,
    req: SwapRequest,
    rpc: RpcClient,
) -> OutboundTransaction:
    """
    Add a buffered gas limit and fee suggestion to tx

    The two steps run concurrently and independently; whichever fails is
    logged and its fields are left as they were.

    Returns:
        The same transaction object, updated in place
    """
    gas, fees = await asyncio.gather(
        estimate_gas(rpc, tx, req),
        suggest_fees(rpc),
    )

    if gas.is_ok:
        tx.gas = to_hex(gas.value)
    else:
        logger.warning(f"Skipping gas limit: {gas.error}")

    if fees.is_ok:
        tx.max_fee_per_gas = to_hex(fees.value.max_fee_per_gas)
        tx.max_priority_fee_per_gas = to_hex(fees.value.max_priority_fee_per_gas)
    else:
        logger.warning(f"Skipping fee suggestion: {fees.error}")

    return tx
