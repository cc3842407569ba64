"""
Parameter normalization

Turns untrusted request bodies into upstream-ready query parameters.
Everything here runs before any network call.
"""

import logging
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional

from ..config import config as global_config
from ..errors import ValidationError
from ..types import SwapRequest, IntegratorFee, is_hex_address, normalize_token
from ..units import MAX_UINT256, is_decimal_integer

logger = logging.getLogger(__name__)

BPS_PER_UNIT = 10_000
MAX_UINT256_DIGITS = len(str(MAX_UINT256))


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_sell_amount(value: Any) -> str:
    """Canonical base-10 string for a wei amount"""
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str):
        raise ValidationError.invalid_amount("sellAmount", value)
    value = value.strip()
    if not is_decimal_integer(value):
        raise ValidationError.invalid_amount("sellAmount", value)
    # Reject before int() so oversized input never hits the int parsing limit
    if len(value.lstrip("0")) > MAX_UINT256_DIGITS:
        raise ValidationError.invalid_amount("sellAmount", value)
    amount = int(value, 10)
    if amount > MAX_UINT256:
        raise ValidationError.invalid_amount("sellAmount", value)
    return str(amount)


def _parse_slippage(value: Any, default: float) -> float:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValidationError.invalid_slippage(value)
    if isinstance(value, (int, float)):
        slippage = float(value)
    elif isinstance(value, str):
        try:
            slippage = float(value)
        except ValueError:
            raise ValidationError.invalid_slippage(value)
    else:
        raise ValidationError.invalid_slippage(value)
    if not math.isfinite(slippage):
        raise ValidationError.invalid_slippage(value)
    return slippage


def _parse_chain_id(value: Any, supported: int) -> int:
    if value is None:
        return supported
    if isinstance(value, int) and not isinstance(value, bool):
        chain_id = value
    elif isinstance(value, str) and is_decimal_integer(value.strip()) and len(value.strip()) <= 20:
        chain_id = int(value.strip(), 10)
    else:
        raise ValidationError.unsupported_chain(value, supported)
    if chain_id != supported:
        raise ValidationError.unsupported_chain(value, supported)
    return chain_id


def validate_swap_request(body: Any, require_taker: bool = False) -> SwapRequest:
    """
    Validate and canonicalize swap parameters

    Args:
        body: Decoded JSON request body
        require_taker: True for execution (/swap), False for preview (/quote)

    Returns:
        SwapRequest with "ETH" replaced by the native sentinel

    Raises:
        ValidationError: MISSING_FIELD, INVALID_ADDRESS, INVALID_AMOUNT,
            INVALID_SLIPPAGE or INVALID_CHAIN
    """
    if not isinstance(body, dict):
        raise ValidationError.invalid_body()

    required = ["sellToken", "buyToken", "sellAmount"]
    if require_taker:
        required.append("taker")
    for name in required:
        if _is_missing(body.get(name)):
            raise ValidationError.missing_field(name)

    sell_token = normalize_token(body["sellToken"])
    if sell_token is None:
        raise ValidationError.invalid_address("sellToken", body["sellToken"])
    buy_token = normalize_token(body["buyToken"])
    if buy_token is None:
        raise ValidationError.invalid_address("buyToken", body["buyToken"])

    sell_amount = _parse_sell_amount(body["sellAmount"])

    taker = body.get("taker")
    if _is_missing(taker):
        taker = None
    elif isinstance(taker, str) and is_hex_address(taker.strip()):
        taker = taker.strip()
    else:
        raise ValidationError.invalid_address("taker", taker)

    trading = global_config.trading
    return SwapRequest(
        sell_token=sell_token,
        buy_token=buy_token,
        sell_amount=sell_amount,
        taker=taker,
        slippage=_parse_slippage(body.get("slippagePercentage"), trading.default_slippage),
        chain_id=_parse_chain_id(body.get("chainId"), trading.chain_id),
    )


def slippage_bps(fraction: float, max_fraction: Optional[float] = None) -> int:
    """
    Convert a slippage fraction to basis points

    The fraction is clamped to [0, max_fraction] and rounded half-up:
    0.02 -> 200, 0.5 -> 2000 (with the default 0.2 ceiling), -1 -> 0.
    """
    if max_fraction is None:
        max_fraction = global_config.trading.max_slippage
    clamped = min(max(fraction, 0.0), max_fraction)
    bps = (Decimal(str(clamped)) * BPS_PER_UNIT).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return int(bps)


def build_upstream_params(req: SwapRequest, fee: Optional[IntegratorFee] = None) -> Dict[str, str]:
    """
    Assemble aggregator query parameters

    Shared by preview and execution so a previewed price and an executed
    quote carry the same fee and slippage.

    Args:
        req: Validated swap request
        fee: Integrator fee, None when disabled

    Returns:
        Query parameters (all values strings)
    """
    params = {
        "chainId": str(req.chain_id),
        "sellToken": req.sell_token,
        "buyToken": req.buy_token,
        "sellAmount": req.sell_amount,
        "slippageBps": str(slippage_bps(req.slippage)),
    }

    if req.taker:
        params["taker"] = req.taker

    if fee is not None:
        params["feeRecipient"] = fee.recipient
        params["buyTokenPercentageFee"] = fee.percentage

    return params
