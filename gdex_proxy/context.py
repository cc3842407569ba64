"""
Service context

Everything that outlives a single request (HTTP clients, the RPC id
counter, the integrator fee) is built once here and handed to the handlers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from .config import Config, config as global_config
from .infra.rpc import RpcClient
from .protocols.zerox import ZeroExAPI
from .types import IntegratorFee

logger = logging.getLogger(__name__)


def is_http_url(value: str) -> bool:
    """True when value parses as an http(s) URL with a host"""
    try:
        url = httpx.URL(value)
    except httpx.InvalidURL:
        return False
    return url.scheme in ("http", "https") and bool(url.host)


def load_integrator_fee(cfg: Config) -> Optional[IntegratorFee]:
    """Integrator fee from config; invalid settings disable the fee with a warning"""
    try:
        fee = IntegratorFee.from_settings(cfg.trading.fee_recipient, cfg.trading.fee_percentage)
    except ValueError as e:
        logger.warning(f"Integrator fee disabled, invalid configuration: {e}")
        return None
    if fee is not None:
        logger.info(f"Integrator fee enabled: {fee.percentage} to {fee.recipient}")
    return fee


@dataclass
class ServiceContext:
    """
    Long-lived collaborators shared by all requests

    Attributes:
        zerox: Aggregator client
        rpc: Node RPC client, None when ETH_RPC_URL is not configured
        fee: Integrator fee, None when disabled
    """
    zerox: ZeroExAPI
    rpc: Optional[RpcClient] = None
    fee: Optional[IntegratorFee] = None

    @classmethod
    def from_config(cls, cfg: Optional[Config] = None) -> "ServiceContext":
        """
        Build the context from configuration

        Missing optional settings degrade with a warning instead of failing.
        """
        cfg = cfg or global_config

        if not cfg.zerox.api_key:
            logger.warning("ZEROX_API_KEY is not set; 0x requests will be rejected upstream")

        zerox = ZeroExAPI(
            api_key=cfg.zerox.api_key,
            base_url=cfg.zerox.base_url,
            api_version=cfg.zerox.api_version,
            timeout=cfg.zerox.timeout,
        )

        rpc = None
        if not cfg.rpc.url:
            logger.warning("ETH_RPC_URL is not set; gas estimation and fee suggestion are disabled")
        elif not is_http_url(cfg.rpc.url):
            logger.warning(
                f"ETH_RPC_URL is not a valid http(s) URL: {cfg.rpc.url!r}; "
                f"gas estimation and fee suggestion are disabled"
            )
        else:
            rpc = RpcClient(cfg.rpc.url, timeout_seconds=cfg.rpc.timeout_seconds)

        return cls(zerox=zerox, rpc=rpc, fee=load_integrator_fee(cfg))

    async def aclose(self):
        """Close upstream HTTP clients"""
        await self.zerox.aclose()
        if self.rpc is not None:
            await self.rpc.aclose()
