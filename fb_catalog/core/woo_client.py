"""
WooCommerce REST API client (read side) with retry logic and rate limiting.
"""

import time
import random
import asyncio
import logging
from typing import Optional, Dict, List, Any
import httpx
from urllib.parse import urljoin


logger = logging.getLogger(__name__)


class WooCommerceError(Exception):
    """Base exception for WooCommerce API errors."""
    pass


class WooClient:
    """
    Async WooCommerce REST API client.

    Only the product reads needed to build catalog items are exposed.
    """

    def __init__(
        self,
        store_url: str,
        consumer_key: str,
        consumer_secret: str,
        rate_limit_rps: float = 5.0,
        timeout: float = 30.0,
        max_retries: int = 5,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize WooCommerce client.

        Args:
            store_url: Store base URL (e.g., https://example.com)
            consumer_key: WooCommerce consumer key
            consumer_secret: WooCommerce consumer secret
            rate_limit_rps: Rate limit (requests per second)
            timeout: Request timeout in seconds
            max_retries: Retry attempts for 429/5xx/timeouts
            transport: Optional httpx transport (tests)
        """
        if not consumer_key or not consumer_secret:
            raise ValueError("Must provide consumer_key and consumer_secret")

        self.store_url = store_url.rstrip('/')
        self.consumer_key = consumer_key
        self.consumer_secret = consumer_secret
        self.rate_limit_rps = rate_limit_rps
        self.timeout = timeout
        self.max_retries = max_retries

        self._last_request_time = 0.0
        self._min_interval = 1.0 / rate_limit_rps if rate_limit_rps > 0 else 0

        self.client = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            transport=transport
        )

    async def _wait_for_rate_limit(self):
        """Wait if needed to respect rate limit."""
        now = time.time()
        elapsed = now - self._last_request_time
        if elapsed < self._min_interval:
            await asyncio.sleep(self._min_interval - elapsed)
        self._last_request_time = time.time()

    def _retry_delay(self, attempt: int, initial_delay: float, backoff_factor: float) -> float:
        delay = min(initial_delay * (backoff_factor ** attempt), 60.0)
        return delay + random.uniform(0, 0.4)

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict] = None,
        initial_delay: float = 2.0,
        backoff_factor: float = 2.0
    ) -> httpx.Response:
        """
        Make HTTP request with retry logic.

        Raises:
            WooCommerceError: If request fails or retries are exhausted
        """
        url = urljoin(self.store_url + '/', endpoint.lstrip('/'))
        auth = httpx.BasicAuth(self.consumer_key, self.consumer_secret)
        max_retries = self.max_retries

        last_error = None

        for attempt in range(max_retries + 1):
            await self._wait_for_rate_limit()

            try:
                response = await self.client.request(method=method, url=url, params=params, auth=auth)
            except httpx.TimeoutException as e:
                last_error = f"Timeout: {e}"
            except httpx.RequestError as e:
                last_error = f"Request error: {e}"
            else:
                if response.status_code in (200, 201, 204):
                    return response

                if response.status_code in (400, 401, 403, 404, 422):
                    raise WooCommerceError(f"HTTP {response.status_code}: {response.text[:200]}")

                if response.status_code not in (429, 500, 502, 503, 504):
                    raise WooCommerceError(f"Unexpected HTTP {response.status_code}: {response.text[:200]}")

                last_error = f"HTTP {response.status_code}"

            if attempt < max_retries:
                delay = self._retry_delay(attempt, initial_delay, backoff_factor)
                logger.warning(f"{method} {endpoint} failed ({last_error}), retrying in {delay:.1f}s")
                await asyncio.sleep(delay)

        raise WooCommerceError(f"Request failed after {max_retries} retries: {last_error}")

    async def get_product(self, product_id: int) -> Dict[str, Any]:
        """Get product by ID."""
        response = await self._request("GET", f"/wp-json/wc/v3/products/{product_id}")
        return response.json()

    async def get_product_variations(self, product_id: int, per_page: int = 100) -> List[Dict[str, Any]]:
        """
        Get all variations of a variable product.

        Args:
            product_id: Parent product ID
            per_page: Page size

        Returns:
            List of variation dicts
        """
        all_variations = []
        page = 1

        while True:
            response = await self._request(
                "GET",
                f"/wp-json/wc/v3/products/{product_id}/variations",
                params={"per_page": per_page, "page": page}
            )
            items = response.json()
            if not isinstance(items, list) or not items:
                break

            all_variations.extend(items)

            if len(items) < per_page:
                break
            page += 1

        return all_variations

    async def close(self):
        """Close HTTP client."""
        await self.client.aclose()
