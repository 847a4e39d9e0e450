from __future__ import annotations
from functools import reduce

from storefront.schemas import CartLine, Product

# Pure cart transforms over an immutable tuple of lines

def add_line(lines: tuple[CartLine, ...], product: Product) -> tuple[CartLine, ...]:
    """One more unit of ``product``: bump its line in place, or append a new one."""
    if any(line.product_id == product.id for line in lines):
        return tuple(
            line.model_copy(update={"quantity": line.quantity + 1}) if line.product_id == product.id else line
            for line in lines
        )
    return lines + (CartLine(product_id=product.id, title=product.title, price=product.price, quantity=1),)

def cart_total(lines: tuple[CartLine, ...]) -> float:
    return reduce(lambda acc, line: acc + line.price * line.quantity, lines, 0.0)

def cart_item_count(lines: tuple[CartLine, ...]) -> int:
    return sum(line.quantity for line in lines)

class Cart:
    """Session-local cart. Lines only grow until the cart is cleared after an order."""

    def __init__(self):
        self.lines: tuple[CartLine, ...] = ()

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self):
        return iter(self.lines)

    def is_empty(self) -> bool:
        return not self.lines

    def add(self, product: Product) -> CartLine:
        self.lines = add_line(self.lines, product)
        return next(line for line in self.lines if line.product_id == product.id)

    def total(self) -> float:
        return cart_total(self.lines)

    def item_count(self) -> int:
        return cart_item_count(self.lines)

    def clear(self) -> None:
        self.lines = ()
