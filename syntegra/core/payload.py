"""
Payload cleaning helpers.

Drops empty values from form data before it is sent upstream.

Dependencies: None
System role: Request payload shaping
"""

import math
from typing import Any


def _is_empty(value: Any) -> bool:
    if value is None or value == "":
        return True
    return isinstance(value, float) and math.isnan(value)


def clean_payload(data: dict[str, Any]) -> dict[str, Any]:
    """
    Remove None, empty strings, NaN, empty lists and empty nested dicts.

    Nested dicts are cleaned recursively; list items are kept as they are.

    Args:
        data: Raw form data

    Returns:
        dict: Cleaned copy of the data
    """
    cleaned: dict[str, Any] = {}

    for key, value in data.items():
        if _is_empty(value):
            continue

        if isinstance(value, list):
            if value:
                cleaned[key] = value
        elif isinstance(value, dict):
            nested = clean_payload(value)
            if nested:
                cleaned[key] = nested
        else:
            cleaned[key] = value

    return cleaned
