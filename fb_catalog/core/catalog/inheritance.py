"""
Variation -> parent fallback for description, stock and identifier fields.
"""

import html
import logging
import re
from typing import Any, Callable, Optional, Union

from .errors import ProductDataError
from .models import CatalogProduct, DescriptionFilter, DescriptionMode


logger = logging.getLogger(__name__)


def _has_value(value: Any) -> bool:
    return value is not None and value != ''


def resolve_field(
    own_value: Any,
    parent_accessor: Optional[Callable[[], Any]] = None,
    predicate: Callable[[Any], bool] = _has_value,
    default: Any = None
) -> Any:
    """
    Return own_value if it satisfies predicate, else the parent's value if
    that does, else default.

    parent_accessor is only called when the own value is rejected. It may
    return None when there is no parent.
    """
    if predicate(own_value):
        return own_value
    if parent_accessor is not None:
        parent_value = parent_accessor()
        if parent_value is not None and predicate(parent_value):
            return parent_value
    return default


def clean_text(text: Optional[str]) -> str:
    """Strip HTML tags, decode entities and collapse whitespace."""
    if not text:
        return ''
    text = re.sub(r'<[^>]+>', ' ', str(text))
    text = html.unescape(text)
    return re.sub(r'\s+', ' ', text).strip()


def _fallback_description(product: CatalogProduct, mode: DescriptionMode) -> str:
    content = clean_text(product.content)
    excerpt = clean_text(product.short_description)

    if mode == DescriptionMode.SHORT:
        candidates = (excerpt, content)
    else:
        candidates = (content, excerpt)

    for candidate in candidates:
        if candidate:
            return candidate
    return clean_text(product.title)


def resolve_description(
    product: CatalogProduct,
    mode: Union[DescriptionMode, str] = DescriptionMode.STANDARD,
    description_filter: Optional[DescriptionFilter] = None
) -> str:
    """
    Resolve the catalog description.

    Order: own description, the parent's resolved description, then the
    product's own body/excerpt/title according to mode. Values are read live
    on every call. description_filter, if given, is applied once to the
    final value; a parent's description reached through fallback is not
    filtered separately.
    """
    description = _resolve_description(product, DescriptionMode(mode))
    if description_filter is not None:
        description = description_filter(description, product)
    return description


def _resolve_description(product: CatalogProduct, mode: DescriptionMode) -> str:
    parent = product.get_parent()

    description = resolve_field(
        clean_text(product.description),
        (lambda: _resolve_description(parent, mode)) if parent is not None else None,
    )
    if description:
        return description

    logger.debug(f"Product {product.id}: no own or parent description, using {mode.value} fallback")
    return _fallback_description(product, mode)


def _stock_quantity(product: CatalogProduct) -> int:
    quantity = product.stock_quantity
    if quantity is None or quantity == '':
        return 0
    try:
        quantity = int(quantity)
    except (TypeError, ValueError):
        raise ProductDataError('stock_quantity', product.id, product.stock_quantity, "not an integer")
    return max(0, quantity)


def resolve_quantity(product: CatalogProduct) -> Optional[int]:
    """
    Resolve the sellable quantity.

    Returns None when stock is managed neither on the product nor on its
    parent; the field is then left out of the record.
    """
    source = resolve_field(
        product,
        product.get_parent,
        predicate=lambda p: bool(p.manage_stock),
    )
    if source is None:
        return None
    if source is not product:
        logger.debug(f"Product {product.id}: using stock quantity of parent {source.id}")
    return _stock_quantity(source)


def resolve_gtin(product: CatalogProduct) -> Optional[str]:
    """Own GTIN only; variations never inherit it."""
    if product.gtin is None:
        return None
    gtin = str(product.gtin).strip()
    return gtin or None


def resolve_category(product: CatalogProduct) -> Optional[Union[int, str]]:
    """Own stored category only."""
    category = product.category
    if not _has_value(category):
        return None
    return category
