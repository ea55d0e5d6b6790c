import gc

from fb_catalog.core.catalog import CatalogProduct, DescriptionMode, PrepType, build_catalog_item
from fb_catalog.core.catalog.inheritance import (
    clean_text,
    resolve_category,
    resolve_description,
    resolve_field,
    resolve_gtin,
    resolve_quantity,
)


def test_resolve_field_prefers_own_value():
    calls = []

    def parent_value():
        calls.append(1)
        return "parent"

    assert resolve_field("own", parent_value) == "own"
    assert calls == []
    assert resolve_field("", parent_value) == "parent"
    assert resolve_field("", None, default="fallback") == "fallback"
    assert resolve_field("", lambda: None, default="fallback") == "fallback"


def test_description_from_own_value(simple_product):
    simple_product.description = "fb description"
    assert resolve_description(simple_product) == "fb description"


def test_variation_description_falls_back_to_parent_live(variable_parent):
    variable_parent.description = "parent description"
    variation = CatalogProduct(id="201", parent=variable_parent)

    assert resolve_description(variation) == "parent description"

    variation.description = "variation description"
    assert resolve_description(variation) == "variation description"

    variation.description = ""
    variable_parent.description = "new parent description"
    assert resolve_description(variation) == "new parent description"


def test_variation_uses_parent_fallback_chain(variable_parent):
    variation = CatalogProduct(id="201", title="Hoodie - L", parent=variable_parent)
    assert resolve_description(variation) == "Parent body"


def test_description_fallback_chain():
    product = CatalogProduct(id="1", title="Plain Mug")
    assert resolve_description(product) == "Plain Mug"

    product.short_description = "short description"
    assert resolve_description(product) == "short description"

    product.content = "product description"
    assert resolve_description(product) == "product description"
    assert resolve_description(product, DescriptionMode.SHORT) == "short description"


def test_description_is_cleaned():
    product = CatalogProduct(id="1", description="<p>Hello &amp; <b>world</b></p>\n\n")
    assert resolve_description(product) == "Hello & world"
    assert clean_text(None) == ""


def test_missing_parent_is_not_an_error():
    parent = CatalogProduct(id="300", manage_stock=True, stock_quantity=5, description="gone")
    variation = CatalogProduct(id="301", title="Orphan", parent=parent)
    del parent
    gc.collect()

    assert variation.is_variation
    assert variation.get_parent() is None
    assert resolve_description(variation) == "Orphan"
    assert resolve_quantity(variation) is None


def test_quantity_for_simple_product():
    managed = CatalogProduct(id="1", manage_stock=True, stock_quantity=128)
    unmanaged = CatalogProduct(id="2", manage_stock=False, stock_quantity=128)
    assert resolve_quantity(managed) == 128
    assert resolve_quantity(unmanaged) is None


def test_quantity_variation_own_stock_wins(variable_parent):
    variation = CatalogProduct(id="201", manage_stock=True, stock_quantity=23, parent=variable_parent)
    assert resolve_quantity(variation) == 23


def test_quantity_variation_falls_back_to_parent(variable_parent):
    variation = CatalogProduct(id="201", manage_stock=False, parent=variable_parent)
    assert resolve_quantity(variation) == 128


def test_quantity_absent_when_nobody_manages_stock(variable_parent):
    variable_parent.manage_stock = False
    variation = CatalogProduct(id="201", manage_stock=False, parent=variable_parent)

    assert resolve_quantity(variation) is None
    record = build_catalog_item(variation, PrepType.ITEMS_BATCH)
    assert "quantity_to_sell_on_facebook" not in record


def test_quantity_clamps_and_defaults():
    assert resolve_quantity(CatalogProduct(id="1", manage_stock=True, stock_quantity=-3)) == 0
    assert resolve_quantity(CatalogProduct(id="2", manage_stock=True, stock_quantity=None)) == 0


def test_gtin_is_never_inherited(variable_parent):
    variation = CatalogProduct(id="201", parent=variable_parent)
    assert resolve_gtin(variation) is None

    variation.gtin = 9504000059446
    assert resolve_gtin(variation) == "9504000059446"

    variation.gtin = "   "
    assert resolve_gtin(variation) is None


def test_category_is_never_inherited(variable_parent):
    variable_parent.category = 1604
    variation = CatalogProduct(id="201", parent=variable_parent)
    assert resolve_category(variation) is None
    assert resolve_category(variable_parent) == 1604


def test_parent_is_not_kept_alive_or_mutated(variable_parent):
    before = (variable_parent.description, variable_parent.stock_quantity, variable_parent.manage_stock)
    variation = CatalogProduct(id="201", parent=variable_parent)
    build_catalog_item(variation)
    assert (variable_parent.description, variable_parent.stock_quantity, variable_parent.manage_stock) == before
    assert variation.get_parent() is variable_parent
    assert variation.parent_id == "200"


def test_description_filter_applied_once_to_final_value(variable_parent):
    variable_parent.description = "parent description"
    variation = CatalogProduct(id="201", parent=variable_parent)
    calls = []

    def description_filter(description, product):
        calls.append((description, product.id))
        return description.upper()

    assert resolve_description(variation, description_filter=description_filter) == "PARENT DESCRIPTION"
    assert calls == [("parent description", "201")]
    assert resolve_description(variation) == "parent description"
