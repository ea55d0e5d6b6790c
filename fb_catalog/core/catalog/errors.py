"""
Catalog engine exceptions.
"""

from typing import Any, Optional


class ProductDataError(ValueError):
    """Raised when a product field from the store cannot be interpreted."""

    def __init__(self, field: str, product_id: Optional[Any], value: Any = None, reason: str = ''):
        self.field = field
        self.product_id = product_id
        self.value = value
        message = f"Invalid value for '{field}' on product {product_id}: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
