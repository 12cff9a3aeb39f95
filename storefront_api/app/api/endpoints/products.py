"""
Product endpoints.

The same CRUD surface as users, without registration or login: every
attribute is required on create and on update, and the envelopes use
product specific keys.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from storefront_api.app.api.deps import get_product_service, read_payload, require_fields
from storefront_api.app.core.errors import ResourceNotFound
from storefront_api.app.schemas.product import PRODUCT_FIELDS
from storefront_api.app.services.product_service import ProductService


router = APIRouter()


@router.get("")
async def list_products(service: ProductService = Depends(get_product_service)) -> Dict[str, Any]:
    all_products = await service.find_all()
    if not all_products:
        raise ResourceNotFound("No products at this time..", key="msg")
    return {"total": len(all_products), "allProducts": all_products}


@router.get("/{product_id}")
async def get_product(product_id: str, service: ProductService = Depends(get_product_service)) -> Dict[str, Any]:
    product = await service.find_one(product_id)
    if product is None:
        raise ResourceNotFound("Product does not exist")
    return {"product": product}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    payload: Dict[str, Any] = Depends(read_payload),
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    require_fields(payload, PRODUCT_FIELDS)
    new_product = await service.create(payload)
    return {"newProduct": new_product}


@router.put("/{product_id}", status_code=status.HTTP_201_CREATED)
async def update_product(
    product_id: str,
    payload: Dict[str, Any] = Depends(read_payload),
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    require_fields(payload, PRODUCT_FIELDS, status_code=status.HTTP_401_UNAUTHORIZED)
    updated = await service.update(product_id, payload)
    if updated is None:
        raise ResourceNotFound(f"No product with id {product_id}")
    return {"updateProduct": updated}


@router.delete("/{product_id}")
async def delete_product(product_id: str, service: ProductService = Depends(get_product_service)) -> Dict[str, Any]:
    if not await service.remove(product_id):
        raise ResourceNotFound("Product does not exist")
    return {"msg": "Product deleted"}
