"""
Security utilities - never log or return secrets.
"""

from typing import Any, Dict


SENSITIVE_KEYS = (
    'consumer_key',
    'consumer_secret',
    'password',
    'secret',
    'token',
    'api_key',
)


def sanitize_dict_for_logging(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Replace sensitive values (store credentials) in a dict, recursively.

    Args:
        data: Dictionary that may contain secrets.

    Returns:
        Sanitized copy.
    """
    result = {}
    for key, value in data.items():
        if key in SENSITIVE_KEYS:
            result[key] = '***REDACTED***'
        elif isinstance(value, dict):
            result[key] = sanitize_dict_for_logging(value)
        else:
            result[key] = value
    return result
