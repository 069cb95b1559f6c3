"""
Retrieval Package - Optional document search.
"""
from src.retrieval.document_search import (
    DocumentSearchService,
    DocumentSnippet,
    get_document_search,
    reset_document_search,
)

__all__ = [
    "DocumentSearchService",
    "DocumentSnippet",
    "get_document_search",
    "reset_document_search",
]
