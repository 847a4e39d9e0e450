"""HTTP client for the storefront backend.

One coroutine per backend operation. Transport failures, undecodable bodies
and non-success statuses are mapped onto the exceptions in
``storefront.exceptions`` so callers can apply a single policy per path.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import httpx
from pydantic import BaseModel, ValidationError

from storefront.exceptions import BackendRejected, BackendUnavailable, MalformedResponse
from storefront.schemas import Category, Order, Product, WishlistEntry
from storefront.settings import settings

logger = logging.getLogger(__name__)


def create_client(base_url: Optional[str] = None, **kwargs: Any) -> httpx.AsyncClient:
    """Get a configured async httpx client."""
    return httpx.AsyncClient(
        base_url=base_url or settings.BACKEND_URL,
        timeout=settings.REQUEST_TIMEOUT,
        **kwargs,
    )


def _handle_response(path: str, response: httpx.Response) -> Any:
    """Decode a success body or raise for an error status."""
    if response.is_success:
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponse(path, f"body is not JSON: {e}") from e

    try:
        body = response.json()
        detail = body.get("detail", response.reason_phrase) if isinstance(body, dict) else body
    except ValueError:
        detail = response.text or response.reason_phrase
    raise BackendRejected(path, response.status_code, str(detail))


def _parse_items(path: str, data: Any, model: type[BaseModel]) -> list:
    """Validate the ``items`` sequence of a collection document.

    A missing ``items`` field is an empty collection.
    """
    if not isinstance(data, dict):
        raise MalformedResponse(path, "expected a JSON object")
    items = data.get("items")
    if items is None:
        return []
    if not isinstance(items, list):
        raise MalformedResponse(path, "'items' is not a list")
    try:
        return [model.model_validate(item) for item in items]
    except ValidationError as e:
        raise MalformedResponse(path, str(e)) from e


class BackendClient:
    """Async access to the catalog, wishlist and order endpoints."""

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self._client = client if client is not None else create_client()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        logger.debug("%s %s %s", method, path, kwargs.get("params") or "")
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            raise BackendUnavailable(path, str(e) or e.__class__.__name__) from e
        return _handle_response(path, response)

    async def list_categories(self) -> list[Category]:
        path = "/api/categories"
        return _parse_items(path, await self._request("GET", path), Category)

    async def search_products(self, params: Sequence[tuple[str, str]]) -> list[Product]:
        path = "/api/products"
        data = await self._request("GET", path, params=list(params))
        return _parse_items(path, data, Product)

    async def get_wishlist(self, user_email: str) -> list[WishlistEntry]:
        path = "/api/wishlist"
        data = await self._request("GET", path, params={"user_email": user_email})
        return _parse_items(path, data, WishlistEntry)

    async def add_wishlist_entry(self, user_email: str, product_id: str) -> Any:
        payload = {"user_email": user_email, "product_id": product_id}
        return await self._request("POST", "/api/wishlist", json=payload)

    async def place_order(self, order: Order) -> Any:
        return await self._request("POST", "/api/orders", json=order.model_dump())

    async def aclose(self) -> None:
        await self._client.aclose()
