"""
Conversation Memory - Per-session question and answer history.

Each session keeps the recent messages plus a small amount of context
about what the user has been asking: the last filters that matched and
query counters. Nothing here is persisted.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional


@dataclass
class Message:
    """
    A single message in a conversation.

    Attributes:
        role: "user" or "assistant"
        content: The message text
        timestamp: When the message was created
        metadata: Extra data (intent, match count, filters)
    """
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = field(default_factory=datetime.utcnow)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, str]:
        """Role and content only, as the LLM API expects."""
        return {"role": self.role, "content": self.content}

    def to_full_dict(self) -> Dict[str, Any]:
        return {
            "role": self.role,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
            "metadata": self.metadata,
        }


class ConversationMemory:
    """
    History for one session.

    Example:
        >>> memory = ConversationMemory(session_id="abc-123")
        >>> memory.add_user_message("Earmarks in Ohio?")
        >>> memory.add_assistant_message("Found 12.", metadata={"count": 12})
        >>> memory.get_recent_history(1)
        [{'role': 'assistant', 'content': 'Found 12.'}]
    """

    def __init__(self, session_id: str, max_messages: int = 20):
        self.session_id = session_id
        self.max_messages = max_messages
        self.messages: List[Message] = []
        self.created_at = datetime.utcnow()
        self.last_activity = self.created_at

        self.total_queries = 0
        self.successful_queries = 0
        self.current_focus: Dict[str, Any] = {}

    def add_user_message(self, content: str, metadata: Optional[Dict[str, Any]] = None) -> Message:
        message = Message(role="user", content=content, metadata=metadata or {})
        self._add_message(message)
        self.total_queries += 1
        return message

    def add_assistant_message(self, content: str, metadata: Optional[Dict[str, Any]] = None) -> Message:
        """
        Add an answer.

        When metadata carries a positive "count" the query is counted as
        successful and its "filters" become the session's current focus.
        """
        metadata = metadata or {}
        message = Message(role="assistant", content=content, metadata=metadata)
        self._add_message(message)

        if metadata.get("count"):
            self.successful_queries += 1
            focus = {
                key: value for key, value in (metadata.get("filters") or {}).items()
                if key in ("member", "year", "agencies", "location")
            }
            if focus:
                self.current_focus = focus
        return message

    def _add_message(self, message: Message) -> None:
        self.messages.append(message)
        self.last_activity = message.timestamp

        # Keep the most recent messages
        if len(self.messages) > self.max_messages:
            self.messages = self.messages[-self.max_messages:]

    def get_history(self) -> List[Message]:
        return self.messages.copy()

    def get_recent_history(self, n: int = 6) -> List[Dict[str, str]]:
        """The last n messages in LLM format."""
        if n <= 0:
            return []
        return [msg.to_dict() for msg in self.messages[-n:]]

    def clear(self) -> None:
        self.messages = []
        self.current_focus = {}
        self.last_activity = datetime.utcnow()

    @property
    def message_count(self) -> int:
        return len(self.messages)

    @property
    def is_empty(self) -> bool:
        return not self.messages

    def get_summary(self) -> Dict[str, Any]:
        """Session info for the /session endpoints."""
        return {
            "session_id": self.session_id,
            "message_count": self.message_count,
            "user_messages": sum(1 for m in self.messages if m.role == "user"),
            "assistant_messages": sum(1 for m in self.messages if m.role == "assistant"),
            "total_queries": self.total_queries,
            "successful_queries": self.successful_queries,
            "current_focus": dict(self.current_focus),
            "created_at": self.created_at.isoformat(),
            "last_activity": self.last_activity.isoformat(),
        }
