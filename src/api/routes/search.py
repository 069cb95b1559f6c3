"""
Search Routes - Direct earmark search without the LLM.
"""
from typing import Optional

from fastapi import APIRouter, Body, Query

from src.analytics import get_sample_queries
from src.core.logging_config import get_logger
from src.database.repository import get_earmark_repository
from src.models.api import SampleQueriesResponse, SearchRequest, SearchResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Search"])


@router.post(
    "/search",
    response_model=SearchResponse,
    summary="Keyword search over earmarks",
    description="Every word of `query` must match a text column. An empty query returns no rows.",
)
def search_earmarks(payload: Optional[SearchRequest] = Body(default=None)) -> SearchResponse:
    payload = payload or SearchRequest()
    query = (payload.query or "").strip()
    if not query:
        return SearchResponse(data=[])

    filters = payload.filters
    rows = get_earmark_repository().search(
        query,
        year=filters.year if filters else None,
        member=filters.member if filters else None,
    )
    logger.info(f"Search '{query[:50]}' returned {len(rows)} rows")
    return SearchResponse(data=rows)


@router.get(
    "/sample-queries",
    response_model=SampleQueriesResponse,
    summary="Example questions for the chat box",
)
async def sample_queries(count: int = Query(default=5, ge=1, le=10)) -> SampleQueriesResponse:
    return SampleQueriesResponse(queries=get_sample_queries(count))
