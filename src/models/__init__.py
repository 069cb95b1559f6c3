"""
Models module - Schemas shared between layers.

This module defines:
- EarmarkFilters: structured form of a question
- Request/response models for the HTTP API
"""
from src.models.api import (
    AskRequest,
    AskResponse,
    ClearConversationRequest,
    ClearConversationResponse,
    DocumentSearchRequest,
    DocumentSearchResponse,
    ErrorResponse,
    HealthResponse,
    SampleQueriesResponse,
    SearchFilters,
    SearchRequest,
    SearchResponse,
    SimpleAnswerResponse,
)
from src.models.filters import SORT_AMOUNT_ASC, SORT_AMOUNT_DESC, EarmarkFilters

__all__ = [
    "EarmarkFilters",
    "SORT_AMOUNT_ASC",
    "SORT_AMOUNT_DESC",
    "AskRequest",
    "AskResponse",
    "SimpleAnswerResponse",
    "SearchFilters",
    "SearchRequest",
    "SearchResponse",
    "ClearConversationRequest",
    "ClearConversationResponse",
    "DocumentSearchRequest",
    "DocumentSearchResponse",
    "SampleQueriesResponse",
    "HealthResponse",
    "ErrorResponse",
]
