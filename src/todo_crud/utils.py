from __future__ import annotations

from typing import Any, Dict

from .models import PaginatedList


# PUBLIC_INTERFACE
def pagination_envelope(page: PaginatedList) -> Dict[str, Any]:
    """
    Build the standard envelope for list endpoints.

    Args:
        page: The page returned by the data access layer.

    Returns:
        Dict with keys: items, count, nextToken. `nextToken` is None on the last page.
    """
    return {
        "items": list(page.items),
        "count": int(page.count),
        "nextToken": page.next_token or None,
    }
