"""
Page arithmetic and absolute link building for paginated listings.
"""

import math
from collections.abc import Iterable, Mapping
from urllib.parse import urlencode


def total_pages(count: int, page_size: int) -> int:
    return math.ceil(count / page_size)


def build_page_link(
    base_url: str,
    query_params: Mapping[str, str] | Iterable[tuple[str, str]],
    page: int,
) -> str:
    """Rebuild ``base_url`` with the original query and ``page`` rewritten.

    Every parameter except ``page`` keeps its original position; ``page`` is
    always appended last.
    """
    items = query_params.items() if isinstance(query_params, Mapping) else query_params
    params = [(key, value) for key, value in items if key != "page"]
    params.append(("page", str(page)))
    return f"{base_url}?{urlencode(params)}"


def page_links(
    base_url: str,
    query_params: Mapping[str, str] | Iterable[tuple[str, str]],
    page: int,
    count: int,
    page_size: int,
) -> tuple[str | None, str | None]:
    """Return the ``(previous, next)`` links for ``page``; ``None`` at the edges."""
    query_params = list(
        query_params.items() if isinstance(query_params, Mapping) else query_params
    )
    previous_link = (
        None if page <= 1 else build_page_link(base_url, query_params, page - 1)
    )
    next_link = (
        None
        if page >= total_pages(count, page_size)
        else build_page_link(base_url, query_params, page + 1)
    )
    return previous_link, next_link
