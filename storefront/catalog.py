from __future__ import annotations
import logging
from typing import Optional

import httpx

from storefront.api import BackendClient
from storefront.exceptions import StorefrontError
from storefront.schemas import Category, FilterCriteria, Product

logger = logging.getLogger(__name__)

# Canonical parameter order of a catalog query
FILTER_FIELDS = ("q", "category", "brand", "min_price", "max_price")

def build_query(criteria: FilterCriteria) -> list[tuple[str, str]]:
    values = criteria.model_dump()
    return [(name, values[name]) for name in FILTER_FIELDS if values[name]]

def query_string(criteria: FilterCriteria) -> str:
    return str(httpx.QueryParams(build_query(criteria)))

class Catalog:
    """Current product and category collections.

    Load failures keep whatever was loaded before. Every search is numbered;
    a response is dropped when a newer search has already been applied.
    """

    def __init__(self, backend: BackendClient):
        self.backend = backend
        self.products: tuple[Product, ...] = ()
        self.categories: tuple[Category, ...] = ()
        self._issued = 0
        self._applied = 0

    async def search(self, criteria: Optional[FilterCriteria] = None) -> tuple[Product, ...]:
        criteria = criteria or FilterCriteria()
        self._issued += 1
        seq = self._issued
        try:
            products = await self.backend.search_products(build_query(criteria))
        except StorefrontError as e:
            logger.warning("Catalog search #%s failed, keeping %s products: %s", seq, len(self.products), e)
            return self.products

        if seq < self._applied:
            logger.debug("Discarding stale catalog response #%s (latest applied #%s)", seq, self._applied)
            return self.products
        self._applied = seq
        self.products = tuple(products)
        return self.products

    async def load_categories(self) -> tuple[Category, ...]:
        try:
            categories = await self.backend.list_categories()
        except StorefrontError as e:
            logger.warning("Category listing failed, keeping %s categories: %s", len(self.categories), e)
            return self.categories
        self.categories = tuple(categories)
        return self.categories
