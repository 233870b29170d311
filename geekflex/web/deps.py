"""
Dépendances partagées de l'application web.

Les routes recuperent le Container DI depuis l'etat de l'application.
"""

from fastapi import HTTPException, Request

from geekflex.container import Container
from geekflex.core.value_objects import MediaKind
from geekflex.services.content_service import ContentService
from geekflex.web.schemas import ApiResponse, ContentResponse, SearchResultResponse


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_content_service(request: Request) -> ContentService:
    return get_container(request).content_service()


async def search_titles(
    request: Request, keyword: str, media_kind: MediaKind
) -> list[SearchResultResponse]:
    """Recherche TMDB, resultats dans l'ordre du fournisseur."""
    if not keyword or not keyword.strip():
        raise HTTPException(status_code=400, detail="Le mot-cle de recherche est obligatoire")

    container = get_container(request)
    settings = container.config()
    page = await container.tmdb_client().search(keyword.strip(), media_kind, settings.tmdb_language)
    return [SearchResultResponse.from_entry(entry) for entry in page.results]


async def show_title(request: Request, tmdb_id: int, media_kind: MediaKind) -> ContentResponse:
    """Fiche d'un titre, copiee en cache au premier acces."""
    record = await get_content_service(request).get_or_create(tmdb_id, media_kind)
    return ContentResponse.from_record(record)


async def save_title(
    request: Request, tmdb_id: int, media_kind: MediaKind
) -> ApiResponse[ContentResponse]:
    """Garantit l'existence locale d'un titre (avant un avis, un like, ...)."""
    record = await get_content_service(request).get_or_create(tmdb_id, media_kind)
    return ApiResponse[ContentResponse](
        success=True,
        message="Contenu enregistre",
        data=ContentResponse.from_record(record),
    )
