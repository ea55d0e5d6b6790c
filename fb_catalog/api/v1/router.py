"""
Main API router for v1.
"""

from fastapi import APIRouter
from fb_catalog.api.v1 import stores, catalog

router = APIRouter()

router.include_router(stores.router, prefix="/stores", tags=["stores"])
router.include_router(catalog.router, tags=["catalog"])
