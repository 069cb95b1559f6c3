"""
API Routes module - Endpoint definitions.

Each file in this module defines routes for a specific domain:
- ask.py          : AI answers (/api/askai, /api/ask)
- search.py       : Keyword search and sample questions
- conversation.py : Clearing a conversation
- documents.py    : Vector store search and stats
- session.py      : Session inspection
- health.py       : Health check endpoints
"""
from src.api.routes.ask import router as ask_router
from src.api.routes.conversation import router as conversation_router
from src.api.routes.documents import router as documents_router
from src.api.routes.health import router as health_router
from src.api.routes.search import router as search_router
from src.api.routes.session import router as session_router

__all__ = [
    "ask_router",
    "conversation_router",
    "documents_router",
    "health_router",
    "search_router",
    "session_router",
]
