"""Series endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from watch_server.api.dependencies.auth import CurrentUser
from watch_server.api.dependencies.pagination import get_pagination
from watch_server.api.dependencies.rate_limit import check_rate_limit
from watch_server.api.dependencies.services import App
from watch_server.api.schemas import (
    MAX_INT64,
    PaginationParams,
    ResponseValue,
    SeriesAuditResponse,
    SeriesResponse,
    ok,
    paginated,
)
from watch_server.services.catalog.requests import (
    InvalidationRequest,
    SeriesCreateRequest,
    SeriesUpdateRequest,
)

router = APIRouter(
    prefix="/authorized/series",
    tags=["Series"],
    dependencies=[Depends(check_rate_limit)],
)

SeriesID = Annotated[int, Path(ge=1, le=MAX_INT64)]
Pagination = Annotated[PaginationParams, Depends(get_pagination)]


@router.get("", response_model=ResponseValue[list[SeriesResponse]], summary="List serieses")
def list_serieses(
    _user: CurrentUser,
    app: App,
    pagination: Pagination,
) -> ResponseValue[list[SeriesResponse]]:
    """Get a page of serieses ordered by id."""
    serieses, total = app.serieses_get_all(pagination.offset, pagination.per_page)
    return paginated(pagination, [SeriesResponse.model_validate(s) for s in serieses], total)


@router.post("", response_model=ResponseValue[int], summary="Create series")
def create_series(
    request: SeriesCreateRequest,
    user: CurrentUser,
    app: App,
) -> ResponseValue[int]:
    """Create a series contributed by the current user and return its id."""
    return ok(app.series_create(user.user_id, request))


@router.get("/{series_id}", response_model=ResponseValue[SeriesResponse], summary="Get series")
def get_series(
    series_id: SeriesID,
    _user: CurrentUser,
    app: App,
) -> ResponseValue[SeriesResponse]:
    """Get one series."""
    return ok(SeriesResponse.model_validate(app.series_get(series_id)))


@router.patch("/{series_id}", response_model=ResponseValue[None], summary="Update series")
def update_series(
    series_id: SeriesID,
    request: SeriesUpdateRequest,
    user: CurrentUser,
    app: App,
) -> ResponseValue[None]:
    """Change only the submitted series fields."""
    app.series_update(series_id, user.user_id, request)
    return ok()


@router.delete("/{series_id}", response_model=ResponseValue[None], summary="Invalidate series")
def invalidate_series(
    series_id: SeriesID,
    request: InvalidationRequest,
    user: CurrentUser,
    app: App,
) -> ResponseValue[None]:
    """Soft-delete a series together with all of its episodes."""
    app.series_invalidate(series_id, user.user_id, request)
    return ok()


@router.get(
    "/{series_id}/audits",
    response_model=ResponseValue[list[SeriesAuditResponse]],
    summary="Series history",
)
def list_series_audits(
    series_id: SeriesID,
    _user: CurrentUser,
    app: App,
    pagination: Pagination,
) -> ResponseValue[list[SeriesAuditResponse]]:
    """Get a page of series snapshots, newest first."""
    audits, total = app.series_audits_get_all(series_id, pagination.offset, pagination.per_page)
    return paginated(pagination, [SeriesAuditResponse.model_validate(a) for a in audits], total)
