"""
Stores API endpoints.
"""

import logging
from fastapi import APIRouter, HTTPException, status
from typing import List

from fb_catalog.config import generate_store_id, load_stores_config
from fb_catalog.schemas.stores import StoreSummary

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get("", response_model=List[StoreSummary])
async def list_stores():
    """
    List configured stores (no secrets returned).
    """
    try:
        config = load_stores_config()
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Cannot load stores config: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Stores configuration unavailable"
        )

    active_store = config.get("active")
    result = []

    for store_name, store_config in config.get("stores", {}).items():
        result.append(StoreSummary(
            id=generate_store_id(store_name),
            name=store_name,
            store_url=store_config.get("store_url", ""),
            has_wc_keys=bool(store_config.get("consumer_key") and store_config.get("consumer_secret")),
            is_active=active_store == store_name
        ))

    return result
