"""
Store-related schemas.
"""

from pydantic import BaseModel


class StoreSummary(BaseModel):
    """Store summary (no secrets)."""
    id: str
    name: str
    store_url: str
    has_wc_keys: bool
    is_active: bool = False
