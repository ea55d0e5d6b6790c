"""
Adapters for converting WooCommerce REST payloads into CatalogProduct.
"""

from typing import Any, Dict, List, Optional, Tuple

from .errors import ProductDataError
from .models import CatalogProduct


# Post meta written by the Facebook for WooCommerce plugin
META_DESCRIPTION = 'fb_product_description'
META_GOOGLE_CATEGORY = '_wc_facebook_google_product_category'
META_ENHANCED_PREFIX = '_wc_facebook_enhanced_catalog_attributes_'


def _meta_dict(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten WooCommerce meta_data list into a dict (last key wins)."""
    meta = {}
    for entry in payload.get('meta_data', []) or []:
        if isinstance(entry, dict) and entry.get('key'):
            meta[entry['key']] = entry.get('value')
    return meta


def parse_native_attributes(payload: Dict[str, Any]) -> List[Tuple[str, str]]:
    """
    Read (name, value) attribute pairs.

    Products carry ``options`` lists, variations a single ``option``.
    """
    pairs = []
    for attr in payload.get('attributes', []) or []:
        if not isinstance(attr, dict):
            continue
        name = attr.get('name', '')
        if not name:
            continue

        if 'option' in attr:
            value = attr.get('option') or ''
        else:
            value = ', '.join(str(o) for o in attr.get('options', []) or [] if o)

        if value:
            pairs.append((name, value))
    return pairs


def parse_enhanced_attributes(meta: Dict[str, Any]) -> Dict[str, Any]:
    """Collect enhanced catalog attributes stored as prefixed meta keys."""
    enhanced = {}
    for key, value in meta.items():
        if key.startswith(META_ENHANCED_PREFIX) and value not in (None, ''):
            enhanced[key[len(META_ENHANCED_PREFIX):]] = value
    return enhanced


def _parse_manage_stock(value: Any) -> bool:
    # Variations report "parent" when the parent manages their stock
    return value is True or value in ('yes', '1', 1)


def _parse_stock_quantity(value: Any, product_id: Any) -> Optional[int]:
    if value is None or value == '':
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ProductDataError('stock_quantity', product_id, value, "not an integer")


def _first_image(payload: Dict[str, Any]) -> str:
    image = payload.get('image')
    if isinstance(image, dict) and image.get('src'):
        return image['src']
    images = payload.get('images') or []
    if images and isinstance(images[0], dict):
        return images[0].get('src', '') or ''
    return ''


def product_from_woo(
    payload: Dict[str, Any],
    parent: Optional[CatalogProduct] = None
) -> CatalogProduct:
    """
    Convert a WooCommerce product or variation payload to CatalogProduct.

    Args:
        payload: JSON dict from /wp-json/wc/v3/products[/{id}/variations]
        parent: Parent CatalogProduct for variations (kept as weak reference)

    Returns:
        CatalogProduct
    """
    product_id = payload.get('id')
    if product_id in (None, ''):
        raise ProductDataError('id', None, product_id, "missing product id")

    meta = _meta_dict(payload)

    parent_id = payload.get('parent_id') or None
    if parent is not None:
        parent_id = parent.id

    sale_price = payload.get('sale_price')
    if sale_price == '':
        sale_price = None

    # Variations have no name of their own in older stores
    title = payload.get('name') or (parent.title if parent is not None else '')

    # A variation's description field is its own catalog description
    description = meta.get(META_DESCRIPTION) or ''
    if not description and parent_id is not None:
        description = payload.get('description', '') or ''

    return CatalogProduct(
        id=str(product_id),
        title=title,
        parent_id=str(parent_id) if parent_id is not None else None,
        description=description,
        short_description=payload.get('short_description', '') or '',
        content=payload.get('description', '') or '',
        regular_price=payload.get('regular_price') or payload.get('price') or None,
        sale_price=sale_price,
        sale_start=payload.get('date_on_sale_from') or None,
        sale_end=payload.get('date_on_sale_to') or None,
        manage_stock=_parse_manage_stock(payload.get('manage_stock')),
        stock_quantity=_parse_stock_quantity(payload.get('stock_quantity'), product_id),
        stock_status=payload.get('stock_status') or 'instock',
        gtin=payload.get('global_unique_id') or None,
        category=meta.get(META_GOOGLE_CATEGORY) or None,
        attributes=parse_native_attributes(payload),
        enhanced_attributes=parse_enhanced_attributes(meta),
        url=payload.get('permalink', '') or '',
        image_url=_first_image(payload),
        parent=parent,
    )
