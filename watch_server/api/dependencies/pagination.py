"""Pagination query parameter parsing.

Unparsable values fall back to defaults and parsed values are clamped
to the configured bounds, so pagination never fails a request.
"""

from fastapi import Request

from watch_server.api.schemas import MAX_INT64, PaginationParams
from watch_server.settings import settings


def _parse_int(raw: str | None, default: int) -> int:
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    # Out of 64-bit range counts as unparsable
    if not -MAX_INT64 - 1 <= value <= MAX_INT64:
        return default
    return value


def get_pagination(request: Request) -> PaginationParams:
    """Read page and per_page from the query string.

    The page is capped so that its offset still fits a 64-bit integer.

    Args:
        request: FastAPI request object.

    Returns:
        Clamped pagination parameters.
    """
    config = settings.pagination
    page = _parse_int(request.query_params.get(config.page_var), 1)
    per_page = _parse_int(
        request.query_params.get(config.per_page_var),
        config.default_per_page,
    )
    per_page = min(max(per_page, 1), config.max_per_page)
    return PaginationParams(
        page=min(max(page, 1), MAX_INT64 // per_page + 1),
        per_page=per_page,
    )
