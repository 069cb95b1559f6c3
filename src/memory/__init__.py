"""
Memory Package - Transient conversation history.

Sessions are kept in process memory only. Use `get_memory_manager()` for
the shared manager.

Example:
    >>> from src.memory import get_memory_manager
    >>> session = get_memory_manager().get_or_create_session("user-123")
    >>> session.add_user_message("Earmarks for Ohio in 2023")
"""
from src.memory.conversation import ConversationMemory, Message
from src.memory.manager import MemoryManager, get_memory_manager, reset_memory_manager

__all__ = [
    "Message",
    "ConversationMemory",
    "MemoryManager",
    "get_memory_manager",
    "reset_memory_manager",
]
