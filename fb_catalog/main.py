"""
FastAPI application entry point.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fb_catalog.api.v1.router import router as v1_router
from fb_catalog.config import get_settings
from fb_catalog.schemas.common import HealthResponse


logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = FastAPI(
    title="Facebook Catalog Sync API",
    description="Builds Facebook catalog items from WooCommerce products",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, specify allowed origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(v1_router, prefix="/api/v1")


@app.get("/api/v1/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Health check endpoint."""
    return HealthResponse(ok=True)


@app.get("/", tags=["root"])
async def root():
    """Root endpoint."""
    return {
        "message": "Facebook Catalog Sync API",
        "version": "1.0.0",
        "docs": "/docs"
    }
