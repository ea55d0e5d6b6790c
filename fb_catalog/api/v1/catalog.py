"""
Catalog item API endpoints.
"""

import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from fb_catalog.config import get_settings
from fb_catalog.core.catalog import CatalogOptions, CatalogProduct, PrepType, ProductDataError
from fb_catalog.core.catalog.service import build_catalog_items, fetch_catalog_items
from fb_catalog.core.woo_client import WooClient, WooCommerceError
from fb_catalog.deps import get_catalog_options, get_woo_client_for_store
from fb_catalog.schemas.catalog import CatalogItemsRequest, CatalogItemsResponse, CatalogProductIn

router = APIRouter()

logger = logging.getLogger(__name__)


def _to_catalog_product(item: CatalogProductIn, parent: CatalogProduct = None) -> CatalogProduct:
    data = item.model_dump(exclude={"attributes"})
    data["attributes"] = [(attr.name, attr.value) for attr in item.attributes]
    return CatalogProduct(**data, parent=parent)


def products_from_request(items: List[CatalogProductIn]) -> List[CatalogProduct]:
    """
    Build CatalogProducts in request order.

    Variations are linked to a parent sent in the same request. The returned
    list also holds the parents, keeping them alive for the build.
    """
    parents: Dict[str, CatalogProduct] = {}
    for item in items:
        if item.parent_id is None:
            parents[item.id] = _to_catalog_product(item)

    products = []
    for item in items:
        if item.parent_id is None:
            products.append(parents[item.id])
        else:
            parent = parents.get(item.parent_id)
            if parent is None:
                logger.debug(f"Variation {item.id}: parent {item.parent_id} not in request")
            products.append(_to_catalog_product(item, parent))
    return products


@router.post("/catalog/items", response_model=CatalogItemsResponse)
async def build_items(
    request: CatalogItemsRequest,
    options: CatalogOptions = Depends(get_catalog_options)
):
    """
    Build catalog item records for the posted products.
    """
    products = products_from_request(request.products)

    try:
        items = build_catalog_items(products, request.mode, options, get_settings().max_workers)
    except ProductDataError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e)
        )

    return CatalogItemsResponse(mode=request.mode, items=items)


@router.get("/stores/{store_id}/catalog/{product_id}", response_model=CatalogItemsResponse)
async def build_store_items(
    store_id: str,
    product_id: int,
    mode: PrepType = Query(PrepType.FEED),
    options: CatalogOptions = Depends(get_catalog_options),
    client: WooClient = Depends(get_woo_client_for_store)
):
    """
    Fetch a store product (and its variations) and build its catalog items.
    """
    try:
        items = await fetch_catalog_items(client, product_id, mode, options, get_settings().max_workers)
    except ProductDataError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e)
        )
    except WooCommerceError as e:
        logger.error(f"Store {store_id}: failed to fetch product {product_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Error fetching product: {e}"
        )
    finally:
        await client.close()

    return CatalogItemsResponse(mode=mode, items=items)
