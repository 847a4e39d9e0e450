from __future__ import annotations
import os
import uuid
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from storefront.schemas import Category, Order, Product, WishlistEntry

# In-memory backend speaking the storefront contract, for local runs and tests

app = FastAPI(title="Storefront Dev API")

# Allow all origins for dev preview
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

SEED_CATEGORIES: list[dict] = [
    {"id": "c1", "name": "Fragrance", "slug": "fragrance"},
    {"id": "c2", "name": "Shoes", "slug": "shoes"},
    {"id": "c3", "name": "Bags", "slug": "bags"},
]

SEED_PRODUCTS: list[dict] = [
    {"id": "p1", "title": "Tom Ford Oud Wood", "brand": "Tom Ford", "category": "fragrance", "price": 290.0, "image": "/static/products/oud-wood.jpg"},
    {"id": "p2", "title": "Creed Aventus", "brand": "Creed", "category": "fragrance", "price": 365.0, "image": "/static/products/aventus.jpg"},
    {"id": "p3", "title": "Le Labo Santal 33", "brand": "Le Labo", "category": "fragrance", "price": 310.0, "image": None},
    {"id": "p4", "title": "Air Zoom Pegasus", "brand": "Nike", "category": "shoes", "price": 120.0, "image": None},
    {"id": "p5", "title": "Ultraboost Light", "brand": "Adidas", "category": "shoes", "price": 180.0, "image": None},
    {"id": "p6", "title": "Court Vision Low", "brand": "Nike", "category": "shoes", "price": 75.5, "image": None},
    {"id": "p7", "title": "Canvas Tote", "brand": "Baggu", "category": "bags", "price": 10.0, "image": None},
    {"id": "p8", "title": "Leather Weekender", "brand": "Cuyana", "category": "bags", "price": 5.5, "image": None},
]

_categories: list[Category] = []
_products: dict[str, Product] = {}
_wishlist: list[WishlistEntry] = []
_orders: list[dict] = []

def reset_store() -> None:
    """Drop wishlist entries and orders and reload the seed catalog."""
    _categories[:] = [Category(**c) for c in SEED_CATEGORIES]
    _products.clear()
    _products.update({p["id"]: Product(**p) for p in SEED_PRODUCTS})
    _wishlist.clear()
    _orders.clear()

reset_store()

@app.get("/")
async def root():
    return {"message": "Storefront Dev Backend Running"}

class SeedResponse(BaseModel):
    categories: int
    products: int

@app.post("/seed", response_model=SeedResponse)
async def seed():
    reset_store()
    return SeedResponse(categories=len(_categories), products=len(_products))

@app.get("/api/categories")
async def list_categories():
    return {"items": [c.model_dump() for c in _categories]}

@app.get("/api/products")
async def search_products(
    q: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    brand: Optional[str] = Query(None),
    min_price: Optional[float] = Query(None),
    max_price: Optional[float] = Query(None),
):
    items = list(_products.values())
    if q:
        items = [p for p in items if q.lower() in p.title.lower()]
    if category:
        items = [p for p in items if p.category == category]
    if brand:
        items = [p for p in items if (p.brand or "").lower() == brand.lower()]
    if min_price is not None:
        items = [p for p in items if p.price >= min_price]
    if max_price is not None:
        items = [p for p in items if p.price <= max_price]
    return {"items": [p.model_dump() for p in items]}

@app.get("/api/wishlist")
async def get_wishlist(user_email: str = Query(...)):
    return {"items": [w.model_dump() for w in _wishlist if w.user_email == user_email]}

class WishlistIn(BaseModel):
    user_email: str
    product_id: str

@app.post("/api/wishlist")
async def add_wishlist_entry(payload: WishlistIn):
    if payload.product_id not in _products:
        raise HTTPException(status_code=404, detail=f"Unknown product {payload.product_id}")
    entry = WishlistEntry(user_email=payload.user_email, product_id=payload.product_id)
    if entry not in _wishlist:
        _wishlist.append(entry)
    return entry.model_dump()

@app.post("/api/orders")
async def create_order(order: Order):
    for item in order.items:
        if item.product_id not in _products:
            raise HTTPException(status_code=400, detail=f"Invalid product {item.product_id}")
    order_doc = {"id": uuid.uuid4().hex, **order.model_dump()}
    _orders.append(order_doc)
    return order_doc

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", 8000)))
