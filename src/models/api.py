"""
Request and Response models for the earmark API.

The browser client sends and expects camelCase keys (sessionId,
useDocuments, totalAmount); the models accept either spelling and
serialize by alias.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class AskRequest(_ApiModel):
    """
    Request model for /api/askai and /api/ask.

    `question` is optional and unbounded here so a missing question is
    answered with the 400 "No question provided." message and an
    over-long one is truncated by the sanitizer instead of rejected.
    """
    question: Optional[str] = Field(
        default=None,
        description="The user's question about earmarks (truncated to 2000 characters)",
        examples=["Show me earmarks from the Department of Education in 2022"]
    )
    session_id: Optional[str] = Field(
        default=None,
        alias="sessionId",
        description="Session ID for multi-turn conversations"
    )
    use_documents: bool = Field(
        default=True,
        alias="useDocuments",
        description="Search the document store when it is configured"
    )


class AskResponse(_ApiModel):
    """Response model for /api/askai."""
    answer: str
    count: int = 0
    total_amount: float = Field(default=0.0, alias="totalAmount")
    session_id: str = Field(..., alias="sessionId")
    filters: Dict[str, Any] = Field(default_factory=dict)
    relaxed_filters: List[str] = Field(default_factory=list, alias="relaxedFilters")
    suggested_follow_up: Optional[str] = Field(default=None, alias="suggestedFollowUp")
    citations: List[Dict[str, Any]] = Field(default_factory=list)
    intent: str = "search"


class SimpleAnswerResponse(BaseModel):
    """Response model for the legacy /api/ask endpoint."""
    answer: str


class SearchFilters(BaseModel):
    year: Optional[int] = None
    member: Optional[str] = None


class SearchRequest(BaseModel):
    """Request model for /api/search."""
    query: Optional[str] = None
    filters: Optional[SearchFilters] = None


class SearchResponse(BaseModel):
    data: List[Dict[str, Any]] = Field(default_factory=list)


class ClearConversationRequest(_ApiModel):
    session_id: Optional[str] = Field(default=None, alias="sessionId")


class ClearConversationResponse(_ApiModel):
    success: bool
    message: str
    session_id: str = Field(..., alias="sessionId")


class DocumentSearchRequest(_ApiModel):
    """Request model for /api/documents/search."""
    query: str = Field(..., min_length=1, max_length=2000)
    max_results: Optional[int] = Field(default=None, ge=1, le=50, alias="maxResults")


class DocumentSearchResponse(BaseModel):
    results: List[Dict[str, Any]] = Field(default_factory=list)


class SampleQueriesResponse(BaseModel):
    queries: List[str]


class HealthResponse(BaseModel):
    """Response model for the /health endpoint."""
    status: str = Field(default="healthy")
    version: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str
    message: str
    details: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)
