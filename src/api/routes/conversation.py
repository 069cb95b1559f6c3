"""
Conversation Routes - Clearing a chat session from the browser.
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Body

from src.core.exceptions import ValidationError
from src.core.logging_config import get_logger
from src.core.validators import validate_session_id
from src.memory import get_memory_manager
from src.models.api import ClearConversationRequest, ClearConversationResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Conversation"])

DEFAULT_SESSION_ID = "default-session"


@router.post(
    "/clearConversation",
    response_model=ClearConversationResponse,
    summary="Clear a conversation",
    description="Forget the history of `sessionId` (or the default session). Clearing an unknown session succeeds.",
)
async def clear_conversation(
    payload: Optional[ClearConversationRequest] = Body(default=None),
) -> ClearConversationResponse:
    session_id = (payload.session_id if payload else None) or DEFAULT_SESSION_ID

    is_valid, error = validate_session_id(session_id)
    if not is_valid:
        raise ValidationError(error, field="sessionId")

    existed = get_memory_manager().clear_session(session_id)
    logger.info(f"Clearing conversation for session: {session_id} (existed={existed})")

    return ClearConversationResponse(
        success=True,
        message="Conversation cleared successfully",
        session_id=session_id,
    )


@router.get("/clearConversation", summary="Clear endpoint status")
async def clear_conversation_status() -> dict:
    return {
        "status": "Clear conversation endpoint is working",
        "timestamp": datetime.utcnow().isoformat(),
    }
