#!/usr/bin/env python3
"""
Utility functions for the web application.
"""

import uuid
from typing import Any, Optional


def parse_candidate_id(value: Optional[Any]) -> Optional[uuid.UUID]:
    """
    Parse a candidate id from a request body.

    Args:
        value: Raw id (string or UUID).

    Returns:
        UUID, or None if the value is not a valid UUID.
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except (ValueError, TypeError, AttributeError):
        return None
