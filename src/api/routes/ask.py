"""
Question Routes - AI answers about earmarks.

- POST /api/askai : full answer with filters, statistics and citations
- POST /api/ask   : legacy numbered-list answer
"""
from typing import Optional

from fastapi import APIRouter, Body, Request, Response

from src.api.dependencies import enforce_rate_limit
from src.core.logging_config import get_logger
from src.models.api import AskRequest, AskResponse, ErrorResponse, SimpleAnswerResponse
from src.services.earmark_service import get_earmark_service

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Ask"],
    responses={
        400: {"model": ErrorResponse, "description": "No question provided"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        503: {"model": ErrorResponse, "description": "Database or LLM unavailable"},
    }
)


@router.post(
    "/askai",
    response_model=AskResponse,
    summary="Ask a question about earmarks",
    description="""
    Extracts member, year, agency, location, dollar range and keywords from
    the question, queries the earmark database (relaxing the filters when
    nothing matches) and asks the LLM for an answer.

    Include `sessionId` to keep conversation context across questions.
    Set `useDocuments` to false to skip the document store.
    """
)
def ask_ai(
    request: Request,
    response: Response,
    payload: Optional[AskRequest] = Body(default=None),
) -> AskResponse:
    payload = payload or AskRequest()
    enforce_rate_limit(request, response, payload.session_id)

    result = get_earmark_service().ask(
        payload.question,
        session_id=payload.session_id,
        use_documents=payload.use_documents,
    )

    return AskResponse(
        answer=result.answer,
        count=result.count,
        total_amount=result.total_amount,
        session_id=result.session_id,
        filters=result.filters,
        relaxed_filters=result.relaxed_filters,
        suggested_follow_up=result.suggested_follow_up,
        citations=result.citations,
        intent=result.intent,
    )


@router.post(
    "/ask",
    response_model=SimpleAnswerResponse,
    summary="Ask a question (simple list answer)",
)
def ask_simple(
    request: Request,
    response: Response,
    payload: Optional[AskRequest] = Body(default=None),
) -> SimpleAnswerResponse:
    payload = payload or AskRequest()
    enforce_rate_limit(request, response, payload.session_id)

    answer = get_earmark_service().ask_simple(payload.question)
    return SimpleAnswerResponse(answer=answer)
