"""Movie endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from watch_server.api.dependencies.auth import CurrentUser
from watch_server.api.dependencies.pagination import get_pagination
from watch_server.api.dependencies.rate_limit import check_rate_limit
from watch_server.api.dependencies.services import App
from watch_server.api.schemas import (
    MAX_INT64,
    FilmAuditResponse,
    MovieResponse,
    PaginationParams,
    ResponseValue,
    ok,
    paginated,
)
from watch_server.services.catalog.requests import (
    InvalidationRequest,
    MovieCreateRequest,
    MovieUpdateRequest,
)

router = APIRouter(
    prefix="/authorized/movie",
    tags=["Movies"],
    dependencies=[Depends(check_rate_limit)],
)

MovieID = Annotated[int, Path(ge=1, le=MAX_INT64)]
Pagination = Annotated[PaginationParams, Depends(get_pagination)]


@router.get("", response_model=ResponseValue[list[MovieResponse]], summary="List movies")
def list_movies(
    _user: CurrentUser,
    app: App,
    pagination: Pagination,
) -> ResponseValue[list[MovieResponse]]:
    """Get a page of movies ordered by id."""
    movies, total = app.movies_get_all(pagination.offset, pagination.per_page)
    return paginated(pagination, [MovieResponse.model_validate(m) for m in movies], total)


@router.post("", response_model=ResponseValue[int], summary="Create movie")
def create_movie(
    request: MovieCreateRequest,
    user: CurrentUser,
    app: App,
) -> ResponseValue[int]:
    """Create a movie contributed by the current user and return its id."""
    return ok(app.movie_create(user.user_id, request))


@router.get("/{movie_id}", response_model=ResponseValue[MovieResponse], summary="Get movie")
def get_movie(
    movie_id: MovieID,
    _user: CurrentUser,
    app: App,
) -> ResponseValue[MovieResponse]:
    """Get one movie."""
    return ok(MovieResponse.model_validate(app.movie_get(movie_id)))


@router.patch("/{movie_id}", response_model=ResponseValue[None], summary="Update movie")
def update_movie(
    movie_id: MovieID,
    request: MovieUpdateRequest,
    user: CurrentUser,
    app: App,
) -> ResponseValue[None]:
    """Change only the submitted movie fields."""
    app.movie_update(movie_id, user.user_id, request)
    return ok()


@router.delete("/{movie_id}", response_model=ResponseValue[None], summary="Invalidate movie")
def invalidate_movie(
    movie_id: MovieID,
    request: InvalidationRequest,
    user: CurrentUser,
    app: App,
) -> ResponseValue[None]:
    """Soft-delete a movie with a reason."""
    app.movie_invalidate(movie_id, user.user_id, request)
    return ok()


@router.get(
    "/{movie_id}/audits",
    response_model=ResponseValue[list[FilmAuditResponse]],
    summary="Movie history",
)
def list_movie_audits(
    movie_id: MovieID,
    _user: CurrentUser,
    app: App,
    pagination: Pagination,
) -> ResponseValue[list[FilmAuditResponse]]:
    """Get a page of movie snapshots, newest first."""
    audits, total = app.movie_audits_get_all(movie_id, pagination.offset, pagination.per_page)
    return paginated(pagination, [FilmAuditResponse.model_validate(a) for a in audits], total)
