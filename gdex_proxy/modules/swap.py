"""
Swap Module

Per-request pipeline:
- preview: validate -> price
- execute: validate -> firm quote -> build transaction -> (optional) gas/fees
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from ..context import ServiceContext
from ..types import OutboundTransaction
from .gas import augment_with_gas_and_fees
from .params import build_upstream_params, validate_swap_request
from .transaction import build_transaction

logger = logging.getLogger(__name__)


def _request_id() -> str:
    """Short id tying together the log lines of one request"""
    return uuid.uuid4().hex[:12]


class SwapModule:
    """
    Price preview and transaction building over the 0x API

    Usage:
        swap = SwapModule(ServiceContext.from_config())

        price = await swap.preview({"sellToken": "ETH", "buyToken": "0x...", "sellAmount": "10"})
        tx = await swap.execute({..., "taker": "0x..."})
    """

    def __init__(self, context: ServiceContext):
        self._context = context

    @property
    def gas_augmentation_enabled(self) -> bool:
        return self._context.rpc is not None

    async def preview(self, body: Any) -> Any:
        """
        Indicative price for the UI

        Args:
            body: Decoded request body

        Returns:
            Upstream price body, verbatim

        Raises:
            ValidationError: Before any network call
            UpstreamError: If 0x rejects the request
        """
        rid = _request_id()
        req = validate_swap_request(body, require_taker=False)
        params = build_upstream_params(req, self._context.fee)
        logger.info(f"[{rid}] price {req.sell_amount} {req.sell_token} -> {req.buy_token}")
        return await self._context.zerox.get_price(params)

    async def execute(self, body: Any) -> OutboundTransaction:
        """
        Wallet-ready transaction for a firm quote

        Args:
            body: Decoded request body (taker required)

        Returns:
            OutboundTransaction, with gas and fee fields when a node RPC is
            configured and reachable

        Raises:
            ValidationError: Before any network call
            UpstreamError: If 0x rejects the request
            MalformedUpstreamResponse: If the quote lacks transaction fields
        """
        rid = _request_id()
        req = validate_swap_request(body, require_taker=True)
        params = build_upstream_params(req, self._context.fee)
        logger.info(
            f"[{rid}] quote {req.sell_amount} {req.sell_token} -> {req.buy_token} taker={req.taker}"
        )

        quote = await self._context.zerox.get_quote(params)
        tx = build_transaction(quote, req)

        if self.gas_augmentation_enabled:
            tx = await augment_with_gas_and_fees(tx, req, self._context.rpc)

        logger.info(f"[{rid}] tx to={tx.to} value={tx.value} gas={tx.gas}")
        return tx
