"""
Catalog item transformation engine.
"""

from .models import (
    CatalogProduct,
    CatalogOptions,
    CatalogItemRecord,
    FeedRecord,
    BatchRecord,
    PrepType,
    DescriptionMode,
)
from .errors import ProductDataError
from .attributes import normalize_key, merge_attributes
from .pricing import resolve_price_fields
from .builder import build_catalog_item
from .adapters import product_from_woo

__all__ = [
    'CatalogProduct',
    'CatalogOptions',
    'CatalogItemRecord',
    'FeedRecord',
    'BatchRecord',
    'PrepType',
    'DescriptionMode',
    'ProductDataError',
    'normalize_key',
    'merge_attributes',
    'resolve_price_fields',
    'build_catalog_item',
    'product_from_woo',
]
