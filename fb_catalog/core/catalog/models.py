"""
Catalog data models.
"""

import weakref
from dataclasses import dataclass, field, InitVar
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, List, Dict, Any, Tuple, Union, Callable


Number = Union[Decimal, float, int, str]
DateLike = Union[date, str]


class PrepType(str, Enum):
    """Output shape of a catalog item record."""
    FEED = "feed"
    ITEMS_BATCH = "items_batch"


class DescriptionMode(str, Enum):
    """Which fallback text is preferred when a product has no own description."""
    STANDARD = "standard"  # body first
    SHORT = "short"  # excerpt first


@dataclass
class CatalogProduct:
    """
    Read-only view of a commerce product or variation.

    A variation may point at its parent through ``parent``. Only a weak
    reference is kept: the caller owns the parent's lifetime.
    """
    # Identifiers
    id: str
    title: str = ''
    parent_id: Optional[str] = None

    # Text
    description: str = ''  # own catalog description
    short_description: str = ''
    content: str = ''  # full body text

    # Pricing
    regular_price: Optional[Number] = None
    sale_price: Optional[Number] = None
    sale_start: Optional[DateLike] = None
    sale_end: Optional[DateLike] = None

    # Stock
    manage_stock: bool = False
    stock_quantity: Optional[int] = None
    stock_status: str = 'instock'

    # Classification / identifiers
    gtin: Optional[str] = None
    category: Optional[Union[int, str]] = None
    attributes: List[Tuple[str, str]] = field(default_factory=list)
    enhanced_attributes: Dict[str, Any] = field(default_factory=dict)

    # Links
    url: str = ''
    image_url: str = ''

    parent: InitVar[Optional["CatalogProduct"]] = None
    _parent_ref: Optional[weakref.ref] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self, parent: Optional["CatalogProduct"]):
        self._parent_ref = None
        if parent is not None:
            self._parent_ref = weakref.ref(parent)
            if self.parent_id is None:
                self.parent_id = parent.id

    def get_parent(self) -> Optional["CatalogProduct"]:
        """Return the parent product, or None if unset or already gone."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def is_variation(self) -> bool:
        return self.parent_id is not None or self._parent_ref is not None


DescriptionFilter = Callable[[str, CatalogProduct], str]


@dataclass
class CatalogOptions:
    """Per-call settings for the transformation engine."""
    description_mode: DescriptionMode = DescriptionMode.STANDARD
    currency: str = 'USD'
    description_filter: Optional[DescriptionFilter] = None

    @classmethod
    def from_settings(cls, settings, description_filter: Optional[DescriptionFilter] = None) -> "CatalogOptions":
        return cls(
            description_mode=DescriptionMode(settings.description_mode),
            currency=settings.currency,
            description_filter=description_filter,
        )


@dataclass
class PriceFields:
    """Resolved price values, independent of the output shape."""
    regular_price: Optional[Decimal] = None
    sale_price: Optional[Decimal] = None
    sale_start: str = ''
    sale_end: str = ''

    @property
    def effective_date(self) -> str:
        if not self.sale_start and not self.sale_end:
            return ''
        return f"{self.sale_start}/{self.sale_end}"


class CatalogItemRecord(dict):
    """Catalog item record: field name -> value."""
    mode: PrepType


class FeedRecord(CatalogItemRecord):
    """Record shaped for declarative feed files."""
    mode = PrepType.FEED


class BatchRecord(CatalogItemRecord):
    """Record shaped for the items-batch API."""
    mode = PrepType.ITEMS_BATCH
