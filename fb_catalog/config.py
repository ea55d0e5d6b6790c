"""
Configuration management for the catalog sync service.
"""

import json
import re
from pathlib import Path
from typing import Dict, Literal, Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings (env prefix FB_CATALOG_)."""

    model_config = SettingsConfigDict(
        env_prefix="FB_CATALOG_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    stores_config_path: str = Field(default="./stores_config.json")
    log_level: str = Field(default="INFO")

    # Catalog engine
    description_mode: Literal["standard", "short"] = Field(default="standard")
    currency: str = Field(default="USD", min_length=3, max_length=3)
    max_workers: int = Field(default=4, ge=1)

    # Store client
    request_timeout: float = Field(default=30.0, gt=0)
    rate_limit_rps: float = Field(default=5.0, ge=0)


_settings = Settings()


def load_stores_config(config_path: Optional[str] = None) -> Dict:
    """
    Load stores configuration from JSON file.

    Args:
        config_path: Optional path to config file. If None, uses stores_config_path.

    Returns:
        Dict with 'active' and 'stores' keys.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config is invalid.
    """
    path = Path(config_path or _settings.stores_config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError("Config must be a JSON object")

    if "stores" not in data:
        raise ValueError("Config must have 'stores' key")

    return data


def get_all_stores(config_path: Optional[str] = None) -> Dict[str, Dict]:
    """Get all stores configuration, keyed by store name."""
    config = load_stores_config(config_path)
    return config.get("stores", {})


def generate_store_id(store_name: str) -> str:
    """
    Generate a stable store_id (slug) from store name.

    Args:
        store_name: Store display name.

    Returns:
        URL-safe slug.
    """
    slug = re.sub(r'[^\w\s-]', '', store_name.lower())
    slug = re.sub(r'[-\s]+', '-', slug)
    return slug.strip('-')


def validate_store_config(config: Dict) -> tuple[bool, str]:
    """
    Validate store configuration.

    Args:
        config: Store config dict with store_url, consumer_key, consumer_secret.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not config:
        return False, "Store config is empty"

    for field in ("store_url", "consumer_key", "consumer_secret"):
        if not config.get(field) or not isinstance(config[field], str):
            return False, f"Missing or invalid field: {field}"

    store_url = config["store_url"].strip()
    if not store_url.startswith(("http://", "https://")):
        return False, "store_url must start with http:// or https://"

    return True, ""


def get_settings() -> Settings:
    """Get application settings."""
    return _settings
