"""
0x API Client

Async REST client for the 0x swap API (v2, allowance-holder flow).
Only mainnet pricing and firm quotes are used by the proxy.
"""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from ...config import config as global_config
from ...errors import UpstreamError

logger = logging.getLogger(__name__)


class ZeroExAPI:
    """
    0x REST API client (v2)

    Provides:
    - Indicative prices (preview, no transaction)
    - Firm quotes (intent to fill, includes the transaction)

    Usage:
        api = ZeroExAPI(api_key="...")
        price = await api.get_price({"chainId": "1", "sellToken": ..., ...})
        quote = await api.get_quote({...})
        await api.aclose()

    Note:
        Requests are sent without an API key when none is configured; the
        upstream then answers 401 and the error is passed to the caller.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        api_version: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize 0x API client

        Args:
            api_key: 0x API key (or set ZEROX_API_KEY env var)
            base_url: API base URL
            api_version: Value of the 0x-version header
            timeout: Request timeout in seconds
            client: Optional preconfigured httpx.AsyncClient
        """
        self._api_key = api_key if api_key is not None else global_config.zerox.api_key
        self._base_url = (base_url or global_config.zerox.base_url).rstrip("/")
        self._api_version = api_version or global_config.zerox.api_version
        self._timeout = timeout or global_config.zerox.timeout
        self._client = client

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "0x-version": self._api_version,
        }
        if self._api_key:
            headers["0x-api-key"] = self._api_key
        return headers

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client with auth headers"""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    def _build_url(self, path: str) -> str:
        """Build full API URL"""
        return f"{self._base_url}{path}"

    @staticmethod
    def _parse_body(text: str) -> Any:
        """Parse a response body as JSON, wrapping non-JSON text as {"raw": text}"""
        if not text:
            return {}
        try:
            return json.loads(text)
        except ValueError:
            logger.error(f"0x response is not JSON: {text[:200]}")
            return {"raw": text}

    async def _request(self, path: str, params: Dict[str, str]) -> Any:
        """
        Make a single GET request (no retries)

        Args:
            path: Endpoint path
            params: Query parameters

        Returns:
            Parsed response body

        Raises:
            UpstreamError: On non-2xx status, timeout or transport failure
        """
        client = self._get_client()
        url = self._build_url(path)
        # The API key travels in a header, never in the logged URL
        logger.info(f"0x request: {url}?{httpx.QueryParams(params)}")

        try:
            response = await client.get(
                url,
                params=params,
                headers=self._headers(),
                timeout=self._timeout,
            )
        except httpx.TimeoutException:
            logger.warning(f"0x request timeout: {url}")
            raise UpstreamError.timeout(self._timeout)
        except httpx.RequestError as e:
            logger.warning(f"0x request error: {url}: {e}")
            raise UpstreamError.connection_failed(e)

        data = self._parse_body(response.text)

        if not response.is_success:
            logger.error(f"0x error {response.status_code}: {data}")
            raise UpstreamError.from_response(response.status_code, data)

        return data

    async def get_price(self, params: Dict[str, str]) -> Any:
        """
        Get an indicative price (preview)

        Args:
            params: Query parameters from build_upstream_params

        Returns:
            Upstream body, verbatim
        """
        return await self._request(global_config.zerox.price_path, params)

    async def get_quote(self, params: Dict[str, str]) -> Any:
        """
        Get a firm quote with an executable transaction

        Args:
            params: Query parameters from build_upstream_params

        Returns:
            Upstream body; the transaction is under "transaction"
        """
        firm_params = dict(params)
        firm_params["intentOnFilling"] = "true"
        return await self._request(global_config.zerox.quote_path, firm_params)

    async def aclose(self):
        """Close HTTP client"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def __repr__(self) -> str:
        return f"ZeroExAPI(base_url={self._base_url!r})"
