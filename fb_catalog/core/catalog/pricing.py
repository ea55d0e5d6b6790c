"""
Price and sale-window resolution.

Both output shapes go through ``resolve_prices``; only the final
serialization in ``price_fields_for_mode`` differs between feed files and
items-batch requests.
"""

import logging
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Optional, Tuple

from .errors import ProductDataError
from .models import PrepType, PriceFields


logger = logging.getLogger(__name__)

# Open-ended window bounds expected by the catalog API
SALE_START_SENTINEL = '1970-01-29T00:00:00+00:00'
SALE_END_SENTINEL = '2038-01-17T23:59+00:00'

_DATE_RE = re.compile(r'^(\d{4}-\d{2}-\d{2})(?:[T ].*)?$')


def parse_price(value: Any, field: str = 'price', product_id: Any = None) -> Optional[Decimal]:
    """
    Convert a store price value to Decimal.

    Returns None for unset values (None or blank string). Zero is a price.

    Raises:
        ProductDataError: If the value is not a finite number.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ProductDataError(field, product_id, value, "not a number")
    if isinstance(value, Decimal):
        price = value
    elif isinstance(value, int):
        price = Decimal(value)
    elif isinstance(value, float):
        price = Decimal(repr(value))
    elif isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        try:
            price = Decimal(s)
        except InvalidOperation:
            raise ProductDataError(field, product_id, value, "not a number")
    else:
        raise ProductDataError(field, product_id, value, "unsupported type")

    if not price.is_finite():
        raise ProductDataError(field, product_id, value, "not a finite number")
    return price


def parse_sale_date(value: Any, field: str = 'sale_start', product_id: Any = None) -> Optional[date]:
    """
    Convert a store date value to a date (time of day is dropped).

    Raises:
        ProductDataError: If the value cannot be read as a date.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        match = _DATE_RE.match(s)
        if match:
            try:
                return date.fromisoformat(match.group(1))
            except ValueError:
                pass
        raise ProductDataError(field, product_id, value, "expected YYYY-MM-DD")
    raise ProductDataError(field, product_id, value, "unsupported type")


def format_sale_date(value: date) -> str:
    """Format a date bound as midnight UTC."""
    return f"{value.isoformat()}T00:00:00+00:00"


def resolve_sale_window(sale_start: Optional[date], sale_end: Optional[date]) -> Tuple[str, str]:
    """
    Resolve the sale window bounds.

    No dates at all means no window. A single missing bound is filled with
    the open-ended sentinel for that side.
    """
    if sale_start is None and sale_end is None:
        return '', ''

    start = format_sale_date(sale_start) if sale_start is not None else SALE_START_SENTINEL
    end = format_sale_date(sale_end) if sale_end is not None else SALE_END_SENTINEL
    return start, end


def format_amount(amount: Decimal, currency: str) -> str:
    """Format a price as "<decimal> <currency>", e.g. "11.5 USD"."""
    return f"{format(amount.normalize(), 'f')} {currency}"


def to_minor_units(amount: Decimal) -> int:
    """Convert a price to integer cents, rounding half up."""
    return int((amount * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def resolve_prices(
    regular_price: Any,
    sale_price: Any,
    sale_start: Any,
    sale_end: Any,
    product_id: Any = None
) -> PriceFields:
    """Parse raw price inputs and resolve the sale window."""
    fields = PriceFields(
        regular_price=parse_price(regular_price, 'regular_price', product_id),
        sale_price=parse_price(sale_price, 'sale_price', product_id),
    )

    # Dates without a sale price have no effect
    if fields.sale_price is None:
        return fields

    start = parse_sale_date(sale_start, 'sale_start', product_id)
    end = parse_sale_date(sale_end, 'sale_end', product_id)
    fields.sale_start, fields.sale_end = resolve_sale_window(start, end)

    if not fields.sale_start:
        logger.debug(f"Product {product_id}: sale price without dates, always on sale")
    return fields


def price_fields_for_mode(fields: PriceFields, mode: PrepType, currency: str = 'USD') -> Dict[str, Any]:
    """Serialize resolved prices in the vocabulary of the given output shape."""
    mode = PrepType(mode)

    if mode == PrepType.ITEMS_BATCH:
        return {
            'price': to_minor_units(fields.regular_price) if fields.regular_price is not None else '',
            'currency': currency,
            'sale_price': to_minor_units(fields.sale_price) if fields.sale_price is not None else '',
            'sale_price_effective_date': fields.effective_date,
        }

    return {
        'price': format_amount(fields.regular_price, currency) if fields.regular_price is not None else '',
        'sale_price': format_amount(fields.sale_price, currency) if fields.sale_price is not None else '',
        'sale_price_start_date': fields.sale_start,
        'sale_price_end_date': fields.sale_end,
    }


def resolve_price_fields(
    regular_price: Any,
    sale_price: Any,
    sale_start: Any,
    sale_end: Any,
    mode: PrepType,
    currency: str = 'USD',
    product_id: Any = None
) -> Dict[str, Any]:
    """
    Resolve price and sale-window fields for one product.

    Args:
        regular_price: Regular price (Decimal, number or numeric string)
        sale_price: Sale price, or None when not on sale
        sale_start: Sale window start (date, datetime or ISO string)
        sale_end: Sale window end
        mode: Output shape
        currency: ISO currency code used in feed mode and batch ``currency``
        product_id: Used in error messages

    Returns:
        Dict of price fields for the requested shape
    """
    fields = resolve_prices(regular_price, sale_price, sale_start, sale_end, product_id)
    return price_fields_for_mode(fields, mode, currency)
