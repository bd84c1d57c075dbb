"""
HTTP adapter for the catalog account.

Wraps a single ``httpx.AsyncClient`` carrying the static credential headers and
the per-call timeout, and exposes the two calls the pipeline needs: the
reference-code search and the price replace.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx

from pricesync import __version__
from pricesync.core.config import SyncSettings
from pricesync.core.logging import get_logger

logger = get_logger(__name__)

SEARCH_PATH = "/catalog_system/pub/products/search"
PRICE_PATH = "/pricing/prices/{item_id}"


@dataclass
class CatalogCredentials:
    """Static app key/token pair sent with every request."""

    app_key: str
    app_token: str

    def get_auth_headers(self) -> dict[str, str]:
        return {
            "X-VTEX-API-AppKey": self.app_key,
            "X-VTEX-API-AppToken": self.app_token,
        }


@dataclass
class HttpConfig:
    """Configuration for HTTP client behavior."""

    catalog_base_url: str
    pricing_base_url: str
    timeout: float = 30.0
    user_agent: str = f"pricesync/{__version__}"
    headers: dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Validate HTTP configuration."""
        if not self.catalog_base_url or not self.pricing_base_url:
            raise ValueError("base urls cannot be empty")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        self.catalog_base_url = self.catalog_base_url.rstrip("/")
        self.pricing_base_url = self.pricing_base_url.rstrip("/")


class CatalogClient:
    """Async client for the catalog search and pricing endpoints.

    Both calls raise ``httpx.HTTPError`` subclasses on transport failures and
    non-2xx responses; callers decide how to turn them into outcomes.
    """

    def __init__(
        self,
        http_config: HttpConfig,
        credentials: CatalogCredentials,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.http_config = http_config
        self.credentials = credentials
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(
        cls, settings: SyncSettings, transport: httpx.AsyncBaseTransport | None = None
    ) -> "CatalogClient":
        http_config = HttpConfig(
            catalog_base_url=settings.catalog_base_url,
            pricing_base_url=settings.pricing_base_url,
            timeout=settings.request_timeout,
        )
        credentials = CatalogCredentials(app_key=settings.app_key or "", app_token=settings.app_token or "")
        return cls(http_config, credentials, transport=transport)

    async def __aenter__(self) -> "CatalogClient":
        await self._ensure_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {
                "User-Agent": self.http_config.user_agent,
                "Content-Type": "application/json",
                "Accept": "application/json",
                **self.http_config.headers,
                **self.credentials.get_auth_headers(),
            }
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.http_config.timeout),
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client and cleanup resources."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def search_by_reference(self, reference_code: str) -> list[dict[str, Any]]:
        """Return the products whose SKUs carry ``reference_code`` as RefId."""
        client = await self._ensure_client()
        url = self.http_config.catalog_base_url + SEARCH_PATH
        response = await client.get(url, params={"fq": f"alternateIds_RefId:{reference_code}"})
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, list):
            return []
        return payload

    async def put_price(self, item_id: str, body: dict[str, Any]) -> httpx.Response:
        """Replace the price of ``item_id``."""
        client = await self._ensure_client()
        url = self.http_config.pricing_base_url + PRICE_PATH.format(item_id=item_id)
        logger.debug(f"PUT {url}")
        response = await client.put(url, json=body)
        response.raise_for_status()
        return response


def error_detail(exc: Exception) -> Any:
    """Extract the remote error payload, falling back to the error description."""
    if isinstance(exc, httpx.HTTPStatusError):
        response = exc.response
        try:
            return response.json()
        except ValueError:
            text = response.text.strip()
            if text:
                return text
    return str(exc) or type(exc).__name__


__all__ = ["CatalogClient", "CatalogCredentials", "HttpConfig", "error_detail"]
