"""
Top‑level router.

Aggregates the resource routers.  User routes define their own paths
(``/users``, ``/register``, ``/login``) and are included without a
prefix; product routes live under ``/products``.
"""

from fastapi import APIRouter

from .endpoints import products, users

router = APIRouter()

router.include_router(users.router, tags=["users"])
router.include_router(products.router, prefix="/products", tags=["products"])
