"""
Attribute key normalization and merging.
"""

from typing import Any, Dict, Iterable, Mapping, Optional, Tuple


def normalize_key(raw_key: str) -> str:
    """Lower-case the key and turn spaces and hyphens into underscores."""
    if not raw_key:
        return ''
    return str(raw_key).lower().replace(' ', '_').replace('-', '_')


def merge_attributes(
    native: Iterable[Tuple[str, Any]],
    overrides: Optional[Mapping[str, Any]] = None
) -> Dict[str, Any]:
    """
    Merge native product attributes with enhanced (override) attributes.

    Args:
        native: Ordered (name, value) pairs from the store
        overrides: Enhanced attribute values keyed by attribute name

    Returns:
        Dict keyed by normalized attribute name. Overrides win on collision.
    """
    normalized_overrides = {
        normalize_key(key): value
        for key, value in (overrides or {}).items()
        if normalize_key(key)
    }

    merged: Dict[str, Any] = {}
    for name, value in native or []:
        key = normalize_key(name)
        if not key or key in normalized_overrides:
            continue
        merged[key] = value

    merged.update(normalized_overrides)
    return merged
