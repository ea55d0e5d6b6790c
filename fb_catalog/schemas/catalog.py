"""
Catalog item schemas.
"""

from datetime import date
from decimal import Decimal
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any, Union

from fb_catalog.core.catalog import PrepType


class ProductAttributeIn(BaseModel):
    """Native product attribute."""
    name: str
    value: str


class CatalogProductIn(BaseModel):
    """Product or variation as sent by a caller."""
    id: str
    parent_id: Optional[str] = Field(None, description="Parent product id (must be in the same request)")
    title: str = ''
    description: str = ''
    short_description: str = ''
    content: str = ''
    regular_price: Optional[Union[Decimal, str]] = None
    sale_price: Optional[Union[Decimal, str]] = None
    sale_start: Optional[Union[date, str]] = None
    sale_end: Optional[Union[date, str]] = None
    manage_stock: bool = False
    stock_quantity: Optional[int] = None
    stock_status: str = 'instock'
    gtin: Optional[str] = None
    category: Optional[Union[int, str]] = None
    attributes: List[ProductAttributeIn] = Field(default_factory=list)
    enhanced_attributes: Dict[str, Any] = Field(default_factory=dict)
    url: str = ''
    image_url: str = ''


class CatalogItemsRequest(BaseModel):
    """Build catalog items for the given products."""
    mode: PrepType = PrepType.FEED
    products: List[CatalogProductIn]


class CatalogItemsResponse(BaseModel):
    """Built catalog item records."""
    mode: PrepType
    items: List[Dict[str, Any]]
