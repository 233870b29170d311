"""Route de lecture d'un contenu par son ID interne."""

from fastapi import APIRouter, HTTPException, Request

from geekflex.web.deps import get_content_service
from geekflex.web.schemas import ContentResponse

router = APIRouter(prefix="/api/v1/contents", tags=["contents"])


@router.get("/{content_id}", response_model=ContentResponse)
def content_detail(request: Request, content_id: int):
    record = get_content_service(request).get_by_id(content_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"Contenu {content_id} introuvable")
    return ContentResponse.from_record(record)
