import asyncio
import json

import httpx
import pytest

from storefront import devserver
from storefront.cart import Cart
from storefront.exceptions import OrderSubmissionError
from storefront.orders import OrderSubmitter, build_order
from storefront.schemas import Product
from tests.conftest import fail_path

EMAIL = "demo@shop.com"


def submitter_for(backend, cart):
    return OrderSubmitter(backend, cart, user_email=EMAIL, shipping_address="Demo Address", payment_method="cod")


@pytest.mark.asyncio
async def test_empty_cart_sends_nothing(backend, transport):
    cart = Cart()
    submitter = submitter_for(backend, cart)

    assert await submitter.place_order() is None
    assert transport.requests == []
    assert submitter.submitting is False
    assert cart.lines == ()


@pytest.mark.asyncio
async def test_successful_order_clears_cart(backend, transport, seed_products):
    cart = Cart()
    cart.add(seed_products[6])
    cart.add(seed_products[6])
    cart.add(seed_products[7])
    submitter = submitter_for(backend, cart)

    response = await submitter.place_order()

    assert cart.lines == ()
    assert submitter.submitting is False
    assert transport.count("POST", "/api/orders") == 1
    assert response["id"]
    assert json.loads(transport.requests[-1].content) == {
        "user_email": EMAIL,
        "shipping_address": "Demo Address",
        "payment_method": "cod",
        "items": [
            {"product_id": "p7", "title": "Canvas Tote", "price": 10.0, "quantity": 2},
            {"product_id": "p8", "title": "Leather Weekender", "price": 5.5, "quantity": 1},
        ],
        "total": 25.5,
    }
    assert len(devserver._orders) == 1


@pytest.mark.asyncio
async def test_rejected_order_keeps_cart(backend, transport):
    cart = Cart()
    cart.add(Product(id="ghost", title="Ghost", price=3.0))
    lines = cart.lines
    submitter = submitter_for(backend, cart)

    with pytest.raises(OrderSubmissionError) as excinfo:
        await submitter.place_order()

    assert excinfo.value.__cause__.status_code == 400
    assert cart.lines == lines
    assert submitter.submitting is False
    assert transport.count("POST", "/api/orders") == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("outcome", ["connect", httpx.Response(500, text="Internal Server Error")])
async def test_failed_order_keeps_cart_and_allows_retry(backend, transport, seed_products, outcome):
    cart = Cart()
    cart.add(seed_products[0])
    submitter = submitter_for(backend, cart)

    transport.fail = fail_path("/api/orders", outcome)
    with pytest.raises(OrderSubmissionError):
        await submitter.place_order()
    assert cart.item_count() == 1
    assert submitter.submitting is False

    transport.fail = None
    await submitter.place_order()
    assert cart.lines == ()
    assert transport.count("POST", "/api/orders") == 2


@pytest.mark.asyncio
async def test_submitting_while_in_flight(seed_products):
    gate = asyncio.Event()
    seen = []

    class SlowBackend:
        async def place_order(self, order):
            seen.append(submitter.submitting)
            await gate.wait()
            return {"id": "o1"}

    cart = Cart()
    cart.add(seed_products[0])
    submitter = OrderSubmitter(SlowBackend(), cart, user_email=EMAIL)

    task = asyncio.create_task(submitter.place_order())
    await asyncio.sleep(0)
    assert submitter.submitting is True
    assert len(cart) == 1

    gate.set()
    assert await task == {"id": "o1"}
    assert seen == [True]
    assert submitter.submitting is False
    assert cart.is_empty()


def test_build_order_rounds_total():
    cart = Cart()
    tenth = Product(id="t", title="Tenth", price=0.1)
    for _ in range(3):
        cart.add(tenth)
    order = build_order(cart.lines, EMAIL, "Demo Address", "cod")
    assert order.total == 0.3
    assert [(i.product_id, i.quantity) for i in order.items] == [("t", 3)]


def test_defaults_come_from_settings(backend):
    submitter = OrderSubmitter(backend, Cart())
    assert submitter.user_email == "demo@shop.com"
    assert submitter.shipping_address == "Demo Address"
    assert submitter.payment_method == "cod"
