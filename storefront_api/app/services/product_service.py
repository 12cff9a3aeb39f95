"""Business logic for products: a plain pass‑through to the product store.

Store calls run in the thread pool so file persistence never blocks the
event loop.
"""

from typing import Any, List, Mapping, Optional

from starlette.concurrency import run_in_threadpool

from ..core.store import RecordStore
from ..schemas.product import Product


class ProductService:
    """Operations on catalogue products."""

    def __init__(self, store: RecordStore[Product]) -> None:
        self.store = store

    async def find_all(self) -> List[Product]:
        return await run_in_threadpool(self.store.find_all)

    async def find_one(self, product_id: str) -> Optional[Product]:
        return await run_in_threadpool(self.store.find_one, product_id)

    async def create(self, data: Mapping[str, Any]) -> Product:
        return await run_in_threadpool(self.store.create, data)

    async def update(self, product_id: str, data: Mapping[str, Any]) -> Optional[Product]:
        return await run_in_threadpool(self.store.update, product_id, data)

    async def remove(self, product_id: str) -> bool:
        return await run_in_threadpool(self.store.remove, product_id)
