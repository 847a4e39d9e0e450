from __future__ import annotations
import logging

from storefront.api import BackendClient
from storefront.exceptions import StorefrontError
from storefront.schemas import Product, WishlistEntry

logger = logging.getLogger(__name__)

def wished_ids(entries: tuple[WishlistEntry, ...]) -> frozenset[str]:
    return frozenset(entry.product_id for entry in entries)

class Wishlist:
    """Cached snapshot of the server-side wishlist of one user.

    Membership only grows through this class: toggling a wished product does
    nothing, and there is no removal path. A load response is dropped when the
    user changed while it was in flight, or when a newer load already landed.
    """

    def __init__(self, backend: BackendClient, user_email: str):
        self.backend = backend
        self._user_email = user_email
        self._issued = 0
        self._applied = 0
        self.entries = ()

    @property
    def entries(self) -> tuple[WishlistEntry, ...]:
        return self._entries

    @entries.setter
    def entries(self, value: tuple[WishlistEntry, ...]) -> None:
        self._entries = tuple(value)
        self._ids = wished_ids(self._entries)

    @property
    def user_email(self) -> str:
        return self._user_email

    @user_email.setter
    def user_email(self, value: str) -> None:
        if value != self._user_email:
            self._user_email = value
            self.entries = ()

    @property
    def ids(self) -> frozenset[str]:
        return self._ids

    def is_wished(self, product_id: str) -> bool:
        return product_id in self._ids

    async def load(self) -> tuple[WishlistEntry, ...]:
        user_email = self._user_email
        self._issued += 1
        seq = self._issued
        try:
            entries = await self.backend.get_wishlist(user_email)
        except StorefrontError as e:
            logger.warning("Wishlist load for %s failed, keeping %s entries: %s", user_email, len(self.entries), e)
            return self.entries

        if user_email != self._user_email:
            logger.debug("Discarding wishlist of %s, current user is %s", user_email, self._user_email)
            return self.entries
        if seq < self._applied:
            logger.debug("Discarding stale wishlist response #%s (latest applied #%s)", seq, self._applied)
            return self.entries
        self._applied = seq
        self.entries = entries
        return self.entries

    async def toggle(self, product: Product) -> None:
        if self.is_wished(product.id):
            return
        try:
            await self.backend.add_wishlist_entry(self._user_email, product.id)
        except StorefrontError as e:
            logger.warning("Adding %s to wishlist of %s failed: %s", product.id, self._user_email, e)
            return
        await self.load()
