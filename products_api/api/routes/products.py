from typing import Any

from fastapi import APIRouter, Depends, Request

from products_api.errors import InvalidProductError, MissingSearchTermError
from products_api.models.product import validate_product
from products_api.services.pagination import parse_limit, parse_page
from products_api.services.product_service import ProductStore

router = APIRouter()


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


async def product_payload(request: Request) -> dict[str, Any]:
    """Parse the JSON body of a write and run it through the product validator."""
    try:
        payload = await request.json()
    except ValueError as exc:
        raise InvalidProductError() from exc
    return validate_product(payload)


@router.get("")
async def list_products(
    category: str | None = None,
    page: str | None = None,
    limit: str | None = None,
    store: ProductStore = Depends(get_store),
):
    return await store.list_products(category, parse_page(page), parse_limit(limit))


# /search and /stats are declared before /{product_id} so they are never
# captured as an id.
@router.get("/search")
async def search_products(name: str | None = None, store: ProductStore = Depends(get_store)):
    if not name:
        raise MissingSearchTermError()
    return await store.search_by_name(name)


@router.get("/stats")
async def product_stats(store: ProductStore = Depends(get_store)):
    return await store.stats_by_category()


@router.get("/{product_id}")
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    return await store.get_by_id(product_id)


@router.post("", status_code=201)
async def create_product(
    payload: dict[str, Any] = Depends(product_payload),
    store: ProductStore = Depends(get_store),
):
    return await store.create(payload)


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    payload: dict[str, Any] = Depends(product_payload),
    store: ProductStore = Depends(get_store),
):
    return await store.update_by_id(product_id, payload)


@router.delete("/{product_id}")
async def delete_product(product_id: str, store: ProductStore = Depends(get_store)):
    return await store.delete_by_id(product_id)
