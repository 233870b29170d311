"""Routes series : recherche et fiches."""

from fastapi import APIRouter, Query, Request

from geekflex.core.value_objects import MediaKind
from geekflex.web.deps import save_title, search_titles, show_title
from geekflex.web.schemas import ApiResponse, ContentResponse, SearchResultResponse

router = APIRouter(prefix="/api/v1/tv", tags=["tv"])


@router.get("/search", response_model=list[SearchResultResponse])
async def search_tv(request: Request, keyword: str = Query(default="")):
    return await search_titles(request, keyword, MediaKind.TV)


@router.get("/{tmdb_id}", response_model=ContentResponse)
async def tv_detail(request: Request, tmdb_id: int):
    return await show_title(request, tmdb_id, MediaKind.TV)


@router.post("/{tmdb_id}", response_model=ApiResponse[ContentResponse], status_code=201)
async def save_tv(request: Request, tmdb_id: int):
    return await save_title(request, tmdb_id, MediaKind.TV)
