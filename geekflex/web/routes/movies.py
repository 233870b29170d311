"""
Routes films : categories reconciliees, recherche et fiches.

Les routes statiques sont declarees avant /{tmdb_id}.
"""

from fastapi import APIRouter, Query, Request

from geekflex.core.value_objects import MediaKind
from geekflex.web.deps import get_content_service, save_title, search_titles, show_title
from geekflex.web.schemas import ApiResponse, ContentResponse, SearchResultResponse

router = APIRouter(prefix="/api/v1/movies", tags=["movies"])


def _list_category(request: Request, category: str) -> list[ContentResponse]:
    records = get_content_service(request).list_by_category(category)
    return [ContentResponse.from_record(record) for record in records]


@router.get("/now-playing", response_model=list[ContentResponse])
def now_playing(request: Request):
    """Films a l'affiche (dernier instantane)."""
    return _list_category(request, "NOW_PLAYING")


@router.get("/popular", response_model=list[ContentResponse])
def popular(request: Request):
    return _list_category(request, "POPULAR")


@router.get("/top_rated", response_model=list[ContentResponse])
def top_rated(request: Request):
    return _list_category(request, "TOP_RATED")


@router.get("/upcoming", response_model=list[ContentResponse])
def upcoming(request: Request):
    return _list_category(request, "UPCOMING")


@router.get("/search", response_model=list[SearchResultResponse])
async def search_movies(request: Request, keyword: str = Query(default="")):
    """Recherche de films par titre."""
    return await search_titles(request, keyword, MediaKind.MOVIE)


@router.get("/{tmdb_id}", response_model=ContentResponse)
async def movie_detail(request: Request, tmdb_id: int):
    return await show_title(request, tmdb_id, MediaKind.MOVIE)


@router.post("/{tmdb_id}", response_model=ApiResponse[ContentResponse], status_code=201)
async def save_movie(request: Request, tmdb_id: int):
    return await save_title(request, tmdb_id, MediaKind.MOVIE)
