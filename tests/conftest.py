import pytest

from fb_catalog.core.catalog import CatalogProduct


@pytest.fixture
def simple_product():
    return CatalogProduct(
        id="101",
        title="Classic Tee",
        content="<p>Soft cotton tee.</p>",
        regular_price="20",
        stock_status="instock",
        url="https://shop.example.com/classic-tee",
        image_url="https://shop.example.com/tee.jpg",
    )


@pytest.fixture
def variable_parent():
    return CatalogProduct(
        id="200",
        title="Hoodie",
        content="Parent body",
        regular_price="45",
        manage_stock=True,
        stock_quantity=128,
        gtin="0000000000200",
    )
