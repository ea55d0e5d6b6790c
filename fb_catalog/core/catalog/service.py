"""
Catalog item service - bulk transformation and store-backed builds.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from fb_catalog.core.woo_client import WooClient
from .adapters import product_from_woo
from .builder import build_catalog_item
from .models import CatalogItemRecord, CatalogOptions, CatalogProduct, PrepType


logger = logging.getLogger(__name__)


@dataclass
class FetchedProduct:
    """
    A store product and the catalog products built from it.

    Holds the strong reference to ``parent`` that its variations only
    point at weakly.
    """
    parent: Optional[CatalogProduct] = None
    items: List[CatalogProduct] = field(default_factory=list)


def build_catalog_items(
    products: Sequence[CatalogProduct],
    mode: Union[PrepType, str] = PrepType.FEED,
    options: Optional[CatalogOptions] = None,
    max_workers: Optional[int] = None
) -> List[CatalogItemRecord]:
    """
    Build records for many products, in input order.

    Args:
        products: Products/variations to project
        mode: Output shape
        options: Engine options shared by all builds
        max_workers: Thread pool size; 1 or less builds inline

    Raises:
        ProductDataError: For the first product with malformed data
    """
    mode = PrepType(mode)
    options = options or CatalogOptions()

    if not products:
        return []

    logger.info(f"Building {len(products)} catalog items ({mode.value})")

    if max_workers is not None and max_workers <= 1:
        return [build_catalog_item(product, mode, options) for product in products]

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(lambda product: build_catalog_item(product, mode, options), products))


async def fetch_catalog_products(client: WooClient, product_id: int) -> FetchedProduct:
    """
    Load a store product as catalog products.

    Simple products yield one item. Variable products yield one item per
    variation, each pointing at the parent.
    """
    payload = await client.get_product(product_id)
    product = product_from_woo(payload)

    if payload.get('type') != 'variable':
        return FetchedProduct(parent=None, items=[product])

    variations = await client.get_product_variations(product_id)
    logger.info(f"Product {product_id}: {len(variations)} variations")

    return FetchedProduct(
        parent=product,
        items=[product_from_woo(variation, parent=product) for variation in variations],
    )


async def fetch_catalog_items(
    client: WooClient,
    product_id: int,
    mode: Union[PrepType, str] = PrepType.FEED,
    options: Optional[CatalogOptions] = None,
    max_workers: Optional[int] = None
) -> List[CatalogItemRecord]:
    """Fetch one store product and build its catalog item records."""
    fetched = await fetch_catalog_products(client, product_id)
    return build_catalog_items(fetched.items, mode, options, max_workers)
