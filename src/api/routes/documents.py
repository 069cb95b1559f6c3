"""
Document Routes - Vector store search and status.

Both endpoints answer 500 with error "configuration_error" when no vector
store is configured.
"""
from fastapi import APIRouter, Request, Response

from src.api.dependencies import enforce_rate_limit
from src.core.logging_config import get_logger
from src.models.api import DocumentSearchRequest, DocumentSearchResponse, ErrorResponse
from src.retrieval import get_document_search

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/documents",
    tags=["Documents"],
    responses={
        500: {"model": ErrorResponse, "description": "Vector store not configured"},
        502: {"model": ErrorResponse, "description": "Vector store request failed"},
    }
)


@router.post(
    "/search",
    response_model=DocumentSearchResponse,
    summary="Search earmark documents",
)
def search_documents(payload: DocumentSearchRequest, request: Request, response: Response) -> DocumentSearchResponse:
    enforce_rate_limit(request, response)

    snippets = get_document_search().search(payload.query, max_results=payload.max_results)
    return DocumentSearchResponse(results=[s.to_dict() for s in snippets])


@router.get("/stats", summary="Vector store file counts")
def document_stats() -> dict:
    return {"stats": get_document_search().stats()}
