"""Episode endpoints, nested under their series."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from watch_server.api.dependencies.auth import CurrentUser
from watch_server.api.dependencies.pagination import get_pagination
from watch_server.api.dependencies.rate_limit import check_rate_limit
from watch_server.api.dependencies.services import App
from watch_server.api.schemas import (
    MAX_INT64,
    EpisodeResponse,
    FilmAuditResponse,
    PaginationParams,
    ResponseValue,
    ok,
    paginated,
)
from watch_server.services.catalog.requests import (
    EpisodePutRequest,
    EpisodesPutAllBySeasonRequest,
    EpisodeUpdateRequest,
    InvalidationRequest,
)
from watch_server.settings import settings

router = APIRouter(
    prefix="/authorized/series/{series_id}",
    tags=["Episodes"],
    dependencies=[Depends(check_rate_limit)],
)

SeriesID = Annotated[int, Path(ge=1, le=MAX_INT64)]
Season = Annotated[int, Path(ge=1, le=settings.validation.season_number_max)]
EpisodeNumber = Annotated[int, Path(ge=1, le=settings.validation.episode_number_max)]
Pagination = Annotated[PaginationParams, Depends(get_pagination)]

_SEASON = "/season/{season}/episode"
_EPISODE = "/season/{season}/episode/{episode}"


# =============================================================================
# COLLECTIONS
# =============================================================================


@router.get(
    "/episode",
    response_model=ResponseValue[list[EpisodeResponse]],
    summary="List series episodes",
)
def list_series_episodes(
    series_id: SeriesID,
    _user: CurrentUser,
    app: App,
    pagination: Pagination,
) -> ResponseValue[list[EpisodeResponse]]:
    """Get a page of a series' episodes ordered by id."""
    episodes, total = app.episodes_get_all_by_series(
        series_id, pagination.offset, pagination.per_page
    )
    return paginated(pagination, [EpisodeResponse.model_validate(e) for e in episodes], total)


@router.get(
    _SEASON,
    response_model=ResponseValue[list[EpisodeResponse]],
    summary="List season episodes",
)
def list_season_episodes(
    series_id: SeriesID,
    season: Season,
    _user: CurrentUser,
    app: App,
    pagination: Pagination,
) -> ResponseValue[list[EpisodeResponse]]:
    """Get a page of a season's episodes ordered by id."""
    episodes, total = app.episodes_get_all_by_season(
        series_id, season, pagination.offset, pagination.per_page
    )
    return paginated(pagination, [EpisodeResponse.model_validate(e) for e in episodes], total)


@router.put(
    _SEASON,
    response_model=ResponseValue[None],
    summary="Replace season",
    description="Write every episode of a season, numbered 1..N in list order.",
)
def put_season_episodes(
    series_id: SeriesID,
    season: Season,
    request: EpisodesPutAllBySeasonRequest,
    user: CurrentUser,
    app: App,
) -> ResponseValue[None]:
    """Create or replace a season's episodes."""
    app.episodes_put_all_by_season(series_id, season, user.user_id, request)
    return ok()


@router.delete(_SEASON, response_model=ResponseValue[None], summary="Invalidate season")
def invalidate_season_episodes(
    series_id: SeriesID,
    season: Season,
    request: InvalidationRequest,
    user: CurrentUser,
    app: App,
) -> ResponseValue[None]:
    """Soft-delete every episode of a season."""
    app.episodes_invalidate_all_by_season(series_id, season, user.user_id, request)
    return ok()


# =============================================================================
# SINGLE EPISODE
# =============================================================================


@router.get(_EPISODE, response_model=ResponseValue[EpisodeResponse], summary="Get episode")
def get_episode(
    series_id: SeriesID,
    season: Season,
    episode: EpisodeNumber,
    _user: CurrentUser,
    app: App,
) -> ResponseValue[EpisodeResponse]:
    """Get one episode."""
    return ok(EpisodeResponse.model_validate(app.episode_get(series_id, season, episode)))


@router.put(_EPISODE, response_model=ResponseValue[None], summary="Put episode")
def put_episode(
    series_id: SeriesID,
    season: Season,
    episode: EpisodeNumber,
    request: EpisodePutRequest,
    user: CurrentUser,
    app: App,
) -> ResponseValue[None]:
    """Create or replace one episode."""
    app.episode_put(series_id, season, episode, user.user_id, request)
    return ok()


@router.patch(_EPISODE, response_model=ResponseValue[None], summary="Update episode")
def update_episode(
    series_id: SeriesID,
    season: Season,
    episode: EpisodeNumber,
    request: EpisodeUpdateRequest,
    user: CurrentUser,
    app: App,
) -> ResponseValue[None]:
    """Change only the submitted episode fields."""
    app.episode_update(series_id, season, episode, user.user_id, request)
    return ok()


@router.delete(_EPISODE, response_model=ResponseValue[None], summary="Invalidate episode")
def invalidate_episode(
    series_id: SeriesID,
    season: Season,
    episode: EpisodeNumber,
    request: InvalidationRequest,
    user: CurrentUser,
    app: App,
) -> ResponseValue[None]:
    """Soft-delete one episode."""
    app.episode_invalidate(series_id, season, episode, user.user_id, request)
    return ok()


@router.get(
    f"{_EPISODE}/audits",
    response_model=ResponseValue[list[FilmAuditResponse]],
    summary="Episode history",
)
def list_episode_audits(
    series_id: SeriesID,
    season: Season,
    episode: EpisodeNumber,
    _user: CurrentUser,
    app: App,
    pagination: Pagination,
) -> ResponseValue[list[FilmAuditResponse]]:
    """Get a page of episode snapshots, newest first."""
    audits, total = app.episode_audits_get_all(
        series_id, season, episode, pagination.offset, pagination.per_page
    )
    return paginated(pagination, [FilmAuditResponse.model_validate(a) for a in audits], total)
