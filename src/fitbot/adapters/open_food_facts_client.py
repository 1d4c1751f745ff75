"""Open Food Facts API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

from fitbot.domain.errors import (
    NotFoundError,
    TransportError,
    UpstreamFormatError,
    UpstreamStatusError,
)

SEARCH_FIELDS = (
    "code,product_name,brands,nutriments,categories,image_url,serving_size,quantity"
)
DETAIL_FIELDS = (
    "code,product_name,nutrition_grades,nutriments,brands,categories,image_url,"
    "serving_size,quantity,ingredients_text,labels"
)
_NOT_FOUND = 404


class FoodDatabaseClient(Protocol):
    """Interface for remote food database interactions."""

    async def search_products(
        self, query: str, page_size: int = 10
    ) -> list[dict[str, object]]:
        """Search products by free text and return raw product records."""

    async def get_product(self, code: str) -> dict[str, object]:
        """Fetch one product by barcode and return the raw record."""


@dataclass
class HttpxOpenFoodFactsClient(FoodDatabaseClient):
    """HTTPX-backed Open Food Facts client."""

    base_url: str
    user_agent: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 10

    @classmethod
    def create(
        cls, base_url: str, user_agent: str, timeout_seconds: float = 10
    ) -> "HttpxOpenFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url,
            user_agent=user_agent,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def search_products(
        self, query: str, page_size: int = 10
    ) -> list[dict[str, object]]:
        """Search products with the simple full-text search endpoint."""
        response = await self._get(
            f"{self.base_url}/cgi/search.pl",
            params={
                "search_terms": query,
                "search_simple": 1,
                "action": "process",
                "json": 1,
                "page_size": page_size,
                "fields": SEARCH_FIELDS,
            },
        )
        products = _json(response).get("products")
        if not isinstance(products, list):
            return []
        return [product for product in products if isinstance(product, dict)]

    async def get_product(self, code: str) -> dict[str, object]:
        """Fetch product details; unknown barcodes raise NotFoundError."""
        response = await self._get(
            f"{self.base_url}/api/v2/product/{code}",
            params={"fields": DETAIL_FIELDS},
            not_found_ok=True,
        )
        if response.status_code == _NOT_FOUND:
            raise NotFoundError(f"Product {code} not found")
        payload = _json(response)
        if str(payload.get("status")) == "0":
            raise NotFoundError(f"Product {code} not found")
        product = payload.get("product")
        if not isinstance(product, dict):
            raise UpstreamFormatError(f"Product {code} data not available")
        product.setdefault("code", payload.get("code") or code)
        return product

    async def _get(
        self, url: str, params: dict[str, object], *, not_found_ok: bool = False
    ) -> httpx.Response:
        try:
            response = await self.http_client.get(
                url,
                params=params,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout_seconds,
            )
        except httpx.TransportError as exc:
            raise TransportError(f"Open Food Facts unreachable: {exc}") from exc
        if response.is_success or (
            not_found_ok and response.status_code == _NOT_FOUND
        ):
            return response
        raise UpstreamStatusError("Open Food Facts", response.status_code, response.text)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _json(response: httpx.Response) -> dict[str, object]:
    try:
        payload = response.json()
    except ValueError as exc:
        raise UpstreamFormatError("Open Food Facts returned invalid JSON") from exc
    if not isinstance(payload, dict):
        raise UpstreamFormatError("Open Food Facts returned an unexpected payload")
    return payload
