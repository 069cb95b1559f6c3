"""
Session Routes - Inspect and delete conversation sessions.

Endpoints:
- GET /session: Memory manager statistics
- GET /session/{id}: Session info
- GET /session/{id}/history: Conversation history
- DELETE /session/{id}: Delete a session
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from src.core.exceptions import SessionNotFoundError
from src.core.logging_config import get_logger
from src.memory import get_memory_manager

logger = get_logger(__name__)
router = APIRouter(prefix="/session", tags=["Session Management"])


class SessionInfoResponse(BaseModel):
    session_id: str
    message_count: int
    user_messages: int
    assistant_messages: int
    total_queries: int
    successful_queries: int
    current_focus: Dict[str, Any] = Field(default_factory=dict)
    created_at: str
    last_activity: str
    expires_at: str


class SessionHistoryResponse(BaseModel):
    session_id: str
    messages: List[Dict[str, Any]]
    message_count: int


class SessionDeleteResponse(BaseModel):
    session_id: str
    message: str
    deleted: bool


class ManagerStatsResponse(BaseModel):
    active_sessions: int
    total_messages: int
    session_ttl_minutes: int
    max_sessions: Optional[int] = None


@router.get("", response_model=ManagerStatsResponse, summary="Get Manager Stats")
async def get_manager_stats():
    return ManagerStatsResponse(**get_memory_manager().get_stats())


@router.get("/{session_id}", response_model=SessionInfoResponse, summary="Get Session Info")
async def get_session_info(session_id: str):
    """Message counts, current focus and expiry time of a session."""
    info = get_memory_manager().get_session_info(session_id)
    if not info:
        raise SessionNotFoundError(session_id)
    return SessionInfoResponse(**info)


@router.get("/{session_id}/history", response_model=SessionHistoryResponse, summary="Get Session History")
async def get_session_history(session_id: str):
    """All retained messages, oldest first."""
    session = get_memory_manager().get_session(session_id)
    if not session:
        raise SessionNotFoundError(session_id)

    messages = [msg.to_full_dict() for msg in session.get_history()]
    return SessionHistoryResponse(
        session_id=session_id,
        messages=messages,
        message_count=len(messages),
    )


@router.delete("/{session_id}", response_model=SessionDeleteResponse, summary="Delete Session")
async def delete_session(session_id: str):
    deleted = get_memory_manager().clear_session(session_id)

    if not deleted:
        return SessionDeleteResponse(
            session_id=session_id,
            message="Session not found (may have already expired)",
            deleted=False,
        )

    logger.info(f"Deleted session via API: {session_id}")
    return SessionDeleteResponse(
        session_id=session_id,
        message="Session deleted successfully",
        deleted=True,
    )
