"""
Input Validators - Sanitization and validation utilities.

Questions are free text that ends up inside ILIKE patterns and LLM
prompts, so they are normalised here before any parsing happens.
"""
import re
from typing import Optional, Tuple

from src.core.logging_config import get_logger

logger = get_logger(__name__)

MAX_QUESTION_LENGTH = 2000

# Session ids come from the browser: UUIDs or simple slugs like "default-session"
_SESSION_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

# Prompt-injection phrasing; logged, never blocked
SUSPICIOUS_PATTERNS = [
    r"ignore\s+(all\s+)?previous\s+instructions",
    r"disregard\s+(the\s+)?system\s+prompt",
    r"you\s+are\s+now\s+",
    r";\s*DROP\s+",
    r"UNION\s+SELECT",
]

_SUSPICIOUS_REGEX = [re.compile(p, re.IGNORECASE) for p in SUSPICIOUS_PATTERNS]


def sanitize_message(message: str, max_length: int = MAX_QUESTION_LENGTH) -> str:
    """
    Sanitize a user message.

    - Strips leading/trailing whitespace
    - Removes null bytes
    - Limits length
    - Normalizes whitespace

    Args:
        message: Raw user message
        max_length: Maximum allowed length

    Returns:
        Sanitized message
    """
    if not message:
        return ""

    cleaned = message.replace("\x00", "")
    cleaned = cleaned.strip()
    cleaned = re.sub(r"\s+", " ", cleaned)

    if len(cleaned) > max_length:
        cleaned = cleaned[:max_length]

    return cleaned


def validate_session_id(session_id: Optional[str]) -> Tuple[bool, Optional[str]]:
    """
    Validate a session ID.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not session_id:
        return True, None  # Empty is OK (will be generated)

    if not _SESSION_ID_PATTERN.match(session_id):
        return False, "Invalid sessionId format (letters, digits, '-' and '_' only, max 64)"

    return True, None


def detect_suspicious_patterns(message: str) -> Tuple[bool, Optional[str]]:
    """
    Check if a message contains suspicious patterns.

    This is a heuristic check, not a security guarantee.

    Returns:
        Tuple of (is_suspicious, matched_pattern)
    """
    for pattern in _SUSPICIOUS_REGEX:
        match = pattern.search(message)
        if match:
            return True, match.group()

    return False, None


def validate_question(question: Optional[str]) -> Tuple[bool, str, Optional[str]]:
    """
    Full validation and sanitization of a question.

    Args:
        question: Raw user question (may be None when the field is missing)

    Returns:
        Tuple of (is_valid, sanitized_question, error_message)
    """
    if not question or not question.strip():
        return False, "", "No question provided."

    sanitized = sanitize_message(question)

    if not sanitized:
        return False, "", "No question provided."

    is_suspicious, pattern = detect_suspicious_patterns(sanitized)
    if is_suspicious:
        logger.warning(f"Suspicious question detected but allowed: {pattern}")

    return True, sanitized, None
