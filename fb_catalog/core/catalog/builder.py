"""
Catalog item record builder.
"""

import logging
from typing import Any, Dict, Optional, Union

from .attributes import merge_attributes
from .inheritance import resolve_category, resolve_description, resolve_gtin, resolve_quantity
from .models import BatchRecord, CatalogItemRecord, CatalogOptions, CatalogProduct, FeedRecord, PrepType
from .pricing import price_fields_for_mode, resolve_prices


logger = logging.getLogger(__name__)

# Fields computed by the engine. Attributes never supply them, even when the
# engine leaves them out of the record.
FEED_FIELDS = frozenset({
    'id', 'title', 'description', 'availability', 'item_group_id', 'link', 'image_link',
    'price', 'sale_price', 'sale_price_start_date', 'sale_price_end_date',
    'quantity_to_sell_on_facebook', 'gtin', 'google_product_category',
})
BATCH_FIELDS = frozenset({
    'retailer_id', 'name', 'description', 'availability', 'retailer_product_group_id',
    'url', 'image_url', 'price', 'currency', 'sale_price', 'sale_price_effective_date',
    'quantity_to_sell_on_facebook', 'gtin', 'category',
})


def _availability(product: CatalogProduct) -> str:
    if product.stock_status in ('instock', 'onbackorder'):
        return 'in stock'
    return 'out of stock'


def _feed_fields(product: CatalogProduct) -> Dict[str, Any]:
    fields = {
        'id': str(product.id),
        'title': product.title,
        'availability': _availability(product),
    }
    if product.is_variation:
        fields['item_group_id'] = str(product.parent_id)
    if product.url:
        fields['link'] = product.url
    if product.image_url:
        fields['image_link'] = product.image_url
    return fields


def _batch_fields(product: CatalogProduct) -> Dict[str, Any]:
    fields = {
        'retailer_id': str(product.id),
        'name': product.title,
        'availability': _availability(product),
    }
    if product.is_variation:
        fields['retailer_product_group_id'] = str(product.parent_id)
    if product.url:
        fields['url'] = product.url
    if product.image_url:
        fields['image_url'] = product.image_url
    return fields


def build_catalog_item(
    product: CatalogProduct,
    mode: Union[PrepType, str] = PrepType.FEED,
    options: Optional[CatalogOptions] = None
) -> CatalogItemRecord:
    """
    Build one catalog item record for a product or variation.

    Args:
        product: Product to project. Never modified.
        mode: PrepType.FEED for feed files, PrepType.ITEMS_BATCH for the batch API
        options: Description mode, currency and description filter

    Returns:
        FeedRecord or BatchRecord

    Raises:
        ProductDataError: If a price, date or stock value is malformed
    """
    mode = PrepType(mode)
    options = options or CatalogOptions()

    description = resolve_description(product, options.description_mode)
    prices = resolve_prices(
        product.regular_price,
        product.sale_price,
        product.sale_start,
        product.sale_end,
        product_id=product.id,
    )
    attributes = merge_attributes(product.attributes, product.enhanced_attributes)
    quantity = resolve_quantity(product)
    gtin = resolve_gtin(product)
    category = resolve_category(product)

    if mode == PrepType.ITEMS_BATCH:
        record: CatalogItemRecord = BatchRecord()
        base_fields = _batch_fields(product)
        category_field = 'category'
        engine_fields = BATCH_FIELDS
    else:
        record = FeedRecord()
        base_fields = _feed_fields(product)
        category_field = 'google_product_category'
        engine_fields = FEED_FIELDS

    record.update((key, value) for key, value in attributes.items() if key not in engine_fields)
    record.update(base_fields)
    record['description'] = description
    record.update(price_fields_for_mode(prices, mode, options.currency))

    if quantity is not None:
        record['quantity_to_sell_on_facebook'] = quantity
    if gtin is not None:
        record['gtin'] = gtin
    if category is not None:
        record[category_field] = category

    if options.description_filter is not None:
        record['description'] = options.description_filter(description, product)

    logger.debug(f"Built {mode.value} record for product {product.id} with {len(record)} fields")
    return record
