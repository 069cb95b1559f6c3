"""
Core module - Configuration and cross-cutting concerns.

- config.py         : Environment-based configuration management
- logging_config.py : Centralized logging setup
- exceptions.py     : Error hierarchy rendered by the API layer
- rate_limiter.py   : Per-client request limits
- validators.py     : Question and session id sanitisation
- audit.py          : Request logging and security header middleware
"""
from src.core.config import get_settings, Settings
from src.core.logging_config import setup_logging, get_logger, LoggerMixin

__all__ = [
    "get_settings",
    "Settings",
    "setup_logging",
    "get_logger",
    "LoggerMixin",
]
