from __future__ import annotations
import logging
from typing import Any, Optional

from storefront.api import BackendClient
from storefront.cart import Cart, cart_total
from storefront.exceptions import OrderSubmissionError, StorefrontError
from storefront.schemas import CartLine, Order, OrderItem
from storefront.settings import settings

logger = logging.getLogger(__name__)

def build_order(lines: tuple[CartLine, ...], user_email: str, shipping_address: str, payment_method: str) -> Order:
    items = [
        OrderItem(product_id=line.product_id, title=line.title, price=line.price, quantity=line.quantity)
        for line in lines
    ]
    return Order(
        user_email=user_email,
        shipping_address=shipping_address,
        payment_method=payment_method,
        items=items,
        total=round(cart_total(lines), 2),
    )

class OrderSubmitter:
    """Turns the cart into an order request.

    ``submitting`` is True while a request is in flight. It is meant for the
    view to disable its checkout control; it does not block a second call.
    """

    def __init__(
        self,
        backend: BackendClient,
        cart: Cart,
        user_email: Optional[str] = None,
        shipping_address: Optional[str] = None,
        payment_method: Optional[str] = None,
    ):
        self.backend = backend
        self.cart = cart
        self.user_email = user_email or settings.USER_EMAIL
        self.shipping_address = shipping_address or settings.SHIPPING_ADDRESS
        self.payment_method = payment_method or settings.PAYMENT_METHOD
        self.submitting = False

    async def place_order(self) -> Optional[Any]:
        """Submit the cart once. Clears it on success, keeps it on failure.

        Returns the backend's response document, or None for an empty cart.

        Raises:
            OrderSubmissionError: the backend was unreachable, answered
                with garbage, or rejected the order
        """
        if self.cart.is_empty():
            return None

        self.submitting = True
        try:
            order = build_order(self.cart.lines, self.user_email, self.shipping_address, self.payment_method)
            response = await self.backend.place_order(order)
        except StorefrontError as e:
            logger.error("Order for %s failed, cart kept (%s lines): %s", self.user_email, len(self.cart), e)
            raise OrderSubmissionError(self.user_email, str(e)) from e
        else:
            logger.info("Order placed for %s: %s items, total %.2f", self.user_email, len(order.items), order.total)
            self.cart.clear()
            return response
        finally:
            self.submitting = False
