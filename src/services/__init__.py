"""
Services module - Business logic and orchestration.

Services contain the core application logic:
- No HTTP concerns (those belong in api/)
- No query construction (that belongs in database/)
- Orchestrate between extraction, database, documents, LLM and memory
"""
from src.services.earmark_service import (
    AskResult,
    EarmarkService,
    get_earmark_service,
    reset_earmark_service,
)

__all__ = [
    "AskResult",
    "EarmarkService",
    "get_earmark_service",
    "reset_earmark_service",
]
