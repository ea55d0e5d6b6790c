"""
Dependency injection for FastAPI.
"""

import logging
from typing import Dict

from fastapi import HTTPException, status

from fb_catalog.config import get_settings, get_all_stores, generate_store_id, validate_store_config
from fb_catalog.core.catalog import CatalogOptions
from fb_catalog.core.security import sanitize_dict_for_logging
from fb_catalog.core.woo_client import WooClient


logger = logging.getLogger(__name__)


def get_catalog_options() -> CatalogOptions:
    """Engine options built from settings (no description filter)."""
    return CatalogOptions.from_settings(get_settings())


def get_store_by_id(store_id: str) -> Dict:
    """
    Get store configuration by store_id.

    Raises:
        HTTPException: If store config is missing or store not found.
    """
    try:
        stores = get_all_stores()
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Cannot load stores config: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Stores configuration unavailable"
        )

    for store_name, store_config in stores.items():
        if generate_store_id(store_name) == store_id:
            return {
                "name": store_name,
                "id": store_id,
                **store_config
            }

    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Store '{store_id}' not found"
    )


def get_woo_client_for_store(store_id: str) -> WooClient:
    """
    Create WooClient for a store.

    Raises:
        HTTPException: If store not found or missing credentials.
    """
    store = get_store_by_id(store_id)

    is_valid, error = validate_store_config(store)
    if not is_valid:
        logger.warning(f"Invalid store config {sanitize_dict_for_logging(store)}: {error}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error
        )

    settings = get_settings()
    return WooClient(
        store_url=store["store_url"],
        consumer_key=store["consumer_key"],
        consumer_secret=store["consumer_secret"],
        rate_limit_rps=settings.rate_limit_rps,
        timeout=settings.request_timeout
    )
