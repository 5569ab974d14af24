from __future__ import annotations

import math
import re
from typing import Any, Dict, List, Optional

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


# PUBLIC_INTERFACE
def parse_int_param(value: Optional[str], default: int) -> int:
    """
    Leniently parse an integer query parameter.

    A leading integer is taken ("3abc" -> 3). Missing, non-numeric and zero
    values fall back to ``default``. Negative values pass through.
    """
    if value is None:
        return default
    match = _LEADING_INT.match(value)
    if not match:
        return default
    return int(match.group(1)) or default


# PUBLIC_INTERFACE
def pagination_envelope(items: List[Any], total: int, page: int, limit: int) -> Dict[str, Any]:
    """
    Build the envelope for the paginated list endpoint.

    Args:
        items: The rows of the current page.
        total: Total number of rows in the table.
        page: The requested page number.
        limit: The page size used for the query.

    Returns:
        Dict with keys: todos, currentPage, totalPages, totalCount.
    """
    return {
        "todos": items,
        "currentPage": page,
        "totalPages": math.ceil(total / limit),
        "totalCount": int(total),
    }
