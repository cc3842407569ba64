"""
Transaction extraction from a firm quote
"""

import logging
from typing import Any

from ..errors import MalformedUpstreamResponse
from ..types import SwapRequest, OutboundTransaction
from ..units import normalize_quantity, to_hex

logger = logging.getLogger(__name__)

ZERO_VALUE = "0x0"


def _derive_value(upstream_value: Any, req: SwapRequest) -> str:
    """
    Native ETH required by the transaction

    Selling ETH: the sell amount. Selling a token: whatever the quote
    specifies, else zero. Never defaults to a nonzero amount for a token.
    """
    if req.sells_native:
        return to_hex(req.sell_amount_wei)
    if upstream_value is None or upstream_value == "":
        return ZERO_VALUE
    try:
        return normalize_quantity(upstream_value)
    except ValueError:
        logger.warning(f"Unparseable transaction value from 0x: {upstream_value!r}, using 0")
        return ZERO_VALUE


def build_transaction(quote: Any, req: SwapRequest) -> OutboundTransaction:
    """
    Build the wallet-ready transaction from a firm quote

    Args:
        quote: Upstream firm-quote body
        req: The request the quote was fetched for

    Returns:
        OutboundTransaction with hex-encoded value (and gas when present)

    Raises:
        MalformedUpstreamResponse: If the quote has no transaction.to / transaction.data
    """
    tx_src = quote.get("transaction") if isinstance(quote, dict) else None
    if not isinstance(tx_src, dict) or not tx_src.get("to") or not tx_src.get("data"):
        logger.error(f"Missing tx fields in 0x response: {quote}")
        raise MalformedUpstreamResponse.missing_tx_fields(quote)

    tx = OutboundTransaction(
        to=tx_src["to"],
        data=tx_src["data"],
        value=_derive_value(tx_src.get("value"), req),
    )

    gas = tx_src.get("gas")
    if gas is not None and gas != "":
        try:
            tx.gas = normalize_quantity(gas)
        except ValueError:
            logger.warning(f"Unparseable gas from 0x: {gas!r}, dropping")

    return tx
