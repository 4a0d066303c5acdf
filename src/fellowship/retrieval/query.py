"""Query string construction for list and lookup requests."""

from typing import Iterable, List, Optional
from urllib.parse import quote

from ..filters.filter import Filter

# Kept literal: "/" so regex literals like /ring/i stay readable, "," for In lists
QUERY_SAFE_CHARS = "/,"


def encode_component(part: str) -> str:
    """Percent-encode one field name or value for use in a query fragment."""
    return quote(part, safe=QUERY_SAFE_CHARS)


def build_query(
    limit: Optional[int] = None,
    page: Optional[int] = None,
    filters: Optional[Iterable[Filter]] = None,
    encode_values: bool = True,
) -> str:
    """
    Build the query string (without the leading "?").

    Order is fixed: limit, page, then each filter in the order given.

    Args:
        limit: Page size, omitted when None
        page: Page number, omitted when None
        filters: Filters to append
        encode_values: Percent-encode field names and values. When False,
            values are passed through raw and any "&", "=" or "#" inside
            them will corrupt the query.

    Returns:
        Fragments joined with "&", or "" when there are none
    """
    parts: List[str] = []
    if limit is not None:
        parts.append(f"limit={limit}")
    if page is not None:
        parts.append(f"page={page}")

    encode = encode_component if encode_values else None
    for f in filters or ():
        parts.append(f.render(encode))

    return "&".join(parts)


def build_url(
    path: str,
    limit: Optional[int] = None,
    page: Optional[int] = None,
    filters: Optional[Iterable[Filter]] = None,
    encode_values: bool = True,
) -> str:
    """Append the query to ``path``; the bare path is returned if there is no query."""
    query = build_query(limit, page, filters, encode_values=encode_values)
    return f"{path}?{query}" if query else path
