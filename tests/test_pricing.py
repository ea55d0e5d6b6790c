from datetime import date, datetime
from decimal import Decimal

import pytest

from fb_catalog.core.catalog import PrepType, ProductDataError
from fb_catalog.core.catalog.pricing import (
    SALE_END_SENTINEL,
    SALE_START_SENTINEL,
    parse_price,
    parse_sale_date,
    resolve_price_fields,
    resolve_sale_window,
    to_minor_units,
)


@pytest.mark.parametrize(
    "sale_price, start, end, batch_price, effective_date, feed_price, feed_start, feed_end",
    [
        (11.5, None, None, 1150, "", "11.5 USD", "", ""),
        (0, None, None, 0, "", "0 USD", "", ""),
        (None, None, None, "", "", "", "", ""),
        (None, "2024-08-08", "2024-08-18", "", "", "", "", ""),
        (
            11, "2024-08-08", None, 1100,
            "2024-08-08T00:00:00+00:00/2038-01-17T23:59+00:00",
            "11 USD", "2024-08-08T00:00:00+00:00", "2038-01-17T23:59+00:00",
        ),
        (
            11, None, "2024-08-08", 1100,
            "1970-01-29T00:00:00+00:00/2024-08-08T00:00:00+00:00",
            "11 USD", "1970-01-29T00:00:00+00:00", "2024-08-08T00:00:00+00:00",
        ),
        (
            11, "2024-08-08", "2024-08-09", 1100,
            "2024-08-08T00:00:00+00:00/2024-08-09T00:00:00+00:00",
            "11 USD", "2024-08-08T00:00:00+00:00", "2024-08-09T00:00:00+00:00",
        ),
    ],
)
def test_sale_price_and_window(sale_price, start, end, batch_price, effective_date, feed_price, feed_start, feed_end):
    batch = resolve_price_fields(20, sale_price, start, end, PrepType.ITEMS_BATCH)
    assert batch["sale_price"] == batch_price
    assert batch["sale_price_effective_date"] == effective_date
    assert "sale_price_start_date" not in batch

    feed = resolve_price_fields(20, sale_price, start, end, PrepType.FEED)
    assert feed["sale_price"] == feed_price
    assert feed["sale_price_start_date"] == feed_start
    assert feed["sale_price_end_date"] == feed_end
    assert "sale_price_effective_date" not in feed


def test_regular_price_shapes():
    batch = resolve_price_fields("19.99", None, None, None, PrepType.ITEMS_BATCH, currency="EUR")
    assert batch["price"] == 1999
    assert batch["currency"] == "EUR"

    feed = resolve_price_fields("19.99", None, None, None, PrepType.FEED, currency="EUR")
    assert feed["price"] == "19.99 EUR"


def test_whole_prices_drop_trailing_zeros():
    feed = resolve_price_fields("10.00", "10.50", None, None, "feed")
    assert feed["price"] == "10 USD"
    assert feed["sale_price"] == "10.5 USD"


def test_minor_units_round_half_up():
    assert to_minor_units(Decimal("19.995")) == 2000
    assert to_minor_units(Decimal("0.004")) == 0


def test_window_defaults():
    assert resolve_sale_window(None, None) == ("", "")
    assert resolve_sale_window(date(2024, 8, 8), None) == ("2024-08-08T00:00:00+00:00", SALE_END_SENTINEL)
    assert resolve_sale_window(None, date(2024, 8, 8)) == (SALE_START_SENTINEL, "2024-08-08T00:00:00+00:00")


def test_parse_sale_date_accepts_datetimes_and_iso_strings():
    assert parse_sale_date(datetime(2024, 8, 8, 15, 30)) == date(2024, 8, 8)
    assert parse_sale_date("2024-08-08T00:00:00") == date(2024, 8, 8)
    assert parse_sale_date("  ") is None


@pytest.mark.parametrize("value", ["08/08/2024", "2024-13-01", "tomorrow"])
def test_malformed_date_names_field_and_product(value):
    with pytest.raises(ProductDataError) as exc_info:
        parse_sale_date(value, "sale_start", 42)
    assert exc_info.value.field == "sale_start"
    assert exc_info.value.product_id == 42


def test_malformed_date_ignored_without_sale_price():
    feed = resolve_price_fields(20, None, "not a date", None, PrepType.FEED)
    assert feed["sale_price_start_date"] == ""


def test_malformed_price():
    assert parse_price("") is None
    with pytest.raises(ProductDataError) as exc_info:
        resolve_price_fields(20, "abc", None, None, PrepType.FEED, product_id="7")
    assert exc_info.value.field == "sale_price"
    assert exc_info.value.product_id == "7"
