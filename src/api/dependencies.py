"""
Shared request helpers for the route modules.
"""
from typing import Optional

from fastapi import Request, Response

from src.core.exceptions import ValidationError
from src.core.rate_limiter import get_rate_limiter
from src.core.validators import validate_session_id


def client_identifier(request: Request, session_id: Optional[str] = None) -> str:
    """Session id when the client sent one, otherwise its address."""
    if session_id:
        return session_id
    return request.client.host if request.client else "anonymous"


def enforce_rate_limit(request: Request, response: Response, session_id: Optional[str] = None) -> None:
    """
    Count the request against the caller's window.

    The session id is validated first so malformed ids never become
    limiter keys. Adds X-RateLimit-* headers to the response.

    Raises:
        ValidationError: Malformed session id
        RateLimitExceeded: When the caller is over the limit
    """
    is_valid, error = validate_session_id(session_id)
    if not is_valid:
        raise ValidationError(error, field="sessionId")

    limiter = get_rate_limiter()
    remaining = limiter.check(client_identifier(request, session_id))

    response.headers["X-RateLimit-Limit"] = str(limiter.limit)
    response.headers["X-RateLimit-Remaining"] = str(remaining)
