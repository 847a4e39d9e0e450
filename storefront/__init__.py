from storefront.api import BackendClient, create_client
from storefront.cart import Cart
from storefront.catalog import Catalog, build_query, query_string
from storefront.exceptions import (
    BackendRejected,
    BackendUnavailable,
    MalformedResponse,
    OrderSubmissionError,
    StorefrontError,
)
from storefront.orders import OrderSubmitter
from storefront.schemas import CartLine, Category, FilterCriteria, Order, OrderItem, Product, WishlistEntry
from storefront.session import StorefrontSession
from storefront.wishlist import Wishlist

__all__ = [
    "BackendClient",
    "BackendRejected",
    "BackendUnavailable",
    "Cart",
    "CartLine",
    "Catalog",
    "Category",
    "FilterCriteria",
    "MalformedResponse",
    "Order",
    "OrderItem",
    "OrderSubmissionError",
    "OrderSubmitter",
    "Product",
    "StorefrontError",
    "StorefrontSession",
    "Wishlist",
    "WishlistEntry",
    "build_query",
    "create_client",
    "query_string",
]
