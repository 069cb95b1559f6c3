"""
Memory Manager - Session lifecycle for conversation history.

Sessions live in process memory, expire after SESSION_TTL_MINUTES of
inactivity and are evicted oldest-first once max_sessions is reached.
A restart loses every session.
"""
import threading
from datetime import datetime, timedelta
from typing import Dict, Optional

from src.core.config import get_settings
from src.core.logging_config import get_logger
from src.memory.conversation import ConversationMemory

logger = get_logger(__name__)


class MemoryManager:
    """
    Thread-safe store of ConversationMemory objects keyed by session id.

    Example:
        >>> manager = MemoryManager(session_ttl_minutes=60)
        >>> session = manager.get_or_create_session("user-123")
        >>> manager.clear_session("user-123")
        True
    """

    def __init__(
        self,
        session_ttl_minutes: int = 1440,
        max_sessions: int = 1000,
        max_messages_per_session: int = 20
    ):
        self.session_ttl = timedelta(minutes=session_ttl_minutes)
        self.max_sessions = max_sessions
        self.max_messages = max_messages_per_session

        self._sessions: Dict[str, ConversationMemory] = {}
        self._lock = threading.RLock()

        logger.info(
            f"MemoryManager initialized: TTL={session_ttl_minutes}min, "
            f"max_sessions={max_sessions}, max_messages={max_messages_per_session}"
        )

    def get_or_create_session(self, session_id: str) -> ConversationMemory:
        with self._lock:
            self._cleanup_expired()

            session = self._sessions.get(session_id)
            if session is not None:
                return session

            if len(self._sessions) >= self.max_sessions:
                self._evict_oldest_session()

            session = ConversationMemory(session_id=session_id, max_messages=self.max_messages)
            self._sessions[session_id] = session
            logger.info(f"Created new session: {session_id}")
            return session

    def get_session(self, session_id: str) -> Optional[ConversationMemory]:
        """Existing, unexpired session or None."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None and self._is_expired(session):
                self._sessions.pop(session_id, None)
                return None
            return session

    def clear_session(self, session_id: str) -> bool:
        """
        Remove a session completely.

        Returns:
            True if the session existed
        """
        with self._lock:
            if self._sessions.pop(session_id, None) is not None:
                logger.info(f"Cleared session: {session_id}")
                return True
            return False

    def session_exists(self, session_id: str) -> bool:
        return self.get_session(session_id) is not None

    def get_session_info(self, session_id: str) -> Optional[Dict]:
        session = self.get_session(session_id)
        if session is None:
            return None
        info = session.get_summary()
        info["expires_at"] = (session.last_activity + self.session_ttl).isoformat()
        return info

    def get_stats(self) -> Dict:
        with self._lock:
            return {
                "active_sessions": len(self._sessions),
                "total_messages": sum(s.message_count for s in self._sessions.values()),
                "max_sessions": self.max_sessions,
                "session_ttl_minutes": int(self.session_ttl.total_seconds() / 60),
            }

    def _is_expired(self, session: ConversationMemory) -> bool:
        return datetime.utcnow() - session.last_activity > self.session_ttl

    def _cleanup_expired(self) -> int:
        expired = [sid for sid, s in self._sessions.items() if self._is_expired(s)]
        for session_id in expired:
            del self._sessions[session_id]

        if expired:
            logger.info(f"Cleaned up {len(expired)} expired sessions")
        return len(expired)

    def _evict_oldest_session(self) -> None:
        if not self._sessions:
            return
        oldest_id = min(self._sessions, key=lambda sid: self._sessions[sid].last_activity)
        del self._sessions[oldest_id]
        logger.warning(f"Evicted oldest session: {oldest_id}")


# Singleton instance
_memory_manager: Optional[MemoryManager] = None


def get_memory_manager() -> MemoryManager:
    """Get or create the global MemoryManager, sized from settings."""
    global _memory_manager
    if _memory_manager is None:
        settings = get_settings()
        _memory_manager = MemoryManager(
            session_ttl_minutes=settings.session_ttl_minutes,
            max_messages_per_session=settings.max_messages_per_session,
        )
    return _memory_manager


def reset_memory_manager() -> None:
    """Reset the global MemoryManager (useful for testing)."""
    global _memory_manager
    _memory_manager = None
