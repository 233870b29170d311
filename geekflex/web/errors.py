"""
Traduction des erreurs du cache en reponses HTTP.

- ProviderUnavailableError -> 502 (contenu temporairement indisponible)
- ContentNotFoundError -> 404
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from geekflex.core.ports.api_clients import ContentNotFoundError, ProviderUnavailableError


async def _provider_unavailable_handler(request: Request, exc: ProviderUnavailableError) -> JSONResponse:
    logger.warning(f"Fournisseur indisponible pour {request.url.path}: {exc}")
    return JSONResponse(
        status_code=502,
        content={"success": False, "message": "Contenu temporairement indisponible", "data": None},
    )


async def _content_not_found_handler(request: Request, exc: ContentNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"success": False, "message": str(exc), "data": None},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Enregistre les gestionnaires d'erreurs du cache sur l'application."""
    app.add_exception_handler(ProviderUnavailableError, _provider_unavailable_handler)
    app.add_exception_handler(ContentNotFoundError, _content_not_found_handler)
