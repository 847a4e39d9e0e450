"""Application state of one storefront session.

``StorefrontSession`` owns the catalog, cart, wishlist and order submitter
and is the only mutation API a view needs: hand the session to whatever
renders, call its intent methods from event handlers, and read derived
values (totals, wished ids) back from it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from storefront.api import BackendClient
from storefront.cart import Cart
from storefront.catalog import FILTER_FIELDS, Catalog
from storefront.exceptions import OrderSubmissionError
from storefront.orders import OrderSubmitter
from storefront.schemas import CartLine, Category, FilterCriteria, Product
from storefront.settings import settings
from storefront.wishlist import Wishlist

logger = logging.getLogger(__name__)

ORDER_PLACED = "Order placed!"
ORDER_FAILED = "Failed to place order"

Notifier = Callable[[str], None]


def log_notice(message: str) -> None:
    logger.info("Notice: %s", message)


class StorefrontSession:
    def __init__(
        self,
        backend: Optional[BackendClient] = None,
        user_email: Optional[str] = None,
        notify: Optional[Notifier] = None,
    ):
        self.backend = backend if backend is not None else BackendClient()
        self.user_email = user_email or settings.USER_EMAIL
        self.notify = notify or log_notice
        self.criteria = FilterCriteria()
        self.catalog = Catalog(self.backend)
        self.cart = Cart()
        self.wishlist = Wishlist(self.backend, self.user_email)
        self.orders = OrderSubmitter(self.backend, self.cart, user_email=self.user_email)

    async def __aenter__(self) -> "StorefrontSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.backend.aclose()

    # Derived, read-only views

    @property
    def products(self) -> tuple[Product, ...]:
        return self.catalog.products

    @property
    def categories(self) -> tuple[Category, ...]:
        return self.catalog.categories

    @property
    def cart_lines(self) -> tuple[CartLine, ...]:
        return self.cart.lines

    @property
    def cart_total(self) -> float:
        return self.cart.total()

    @property
    def cart_item_count(self) -> int:
        return self.cart.item_count()

    @property
    def submitting(self) -> bool:
        return self.orders.submitting

    def is_wished(self, product_id: str) -> bool:
        return self.wishlist.is_wished(product_id)

    # Intents

    async def start(self) -> None:
        """Initial load: categories, products for the current criteria, wishlist."""
        await asyncio.gather(
            self.catalog.load_categories(),
            self.catalog.search(self.criteria),
            self.wishlist.load(),
        )

    def set_filters(self, **changes: Optional[str]) -> FilterCriteria:
        unknown = set(changes) - set(FILTER_FIELDS)
        if unknown:
            raise ValueError(f"Unknown filter fields: {', '.join(sorted(unknown))}")
        self.criteria = FilterCriteria.model_validate({**self.criteria.model_dump(), **changes})
        return self.criteria

    async def search(self, **changes: Optional[str]) -> tuple[Product, ...]:
        if changes:
            self.set_filters(**changes)
        return await self.catalog.search(self.criteria)

    def add_to_cart(self, product: Product) -> CartLine:
        return self.cart.add(product)

    async def toggle_wishlist(self, product: Product) -> None:
        await self.wishlist.toggle(product)

    async def checkout(self) -> bool:
        """Place the cart as an order and notify the user of the outcome.

        Returns True when an order was accepted. An empty cart is a silent
        no-op and returns False.
        """
        if self.cart.is_empty():
            return False
        try:
            await self.orders.place_order()
        except OrderSubmissionError:
            self.notify(ORDER_FAILED)
            return False
        self.notify(ORDER_PLACED)
        return True

    async def set_user_email(self, user_email: str) -> None:
        self.user_email = user_email
        self.wishlist.user_email = user_email
        self.orders.user_email = user_email
        await self.wishlist.load()
