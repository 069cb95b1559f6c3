"""
Database module - read-only access to the hosted earmark database.

This module handles:
- Database connection management
- The earmark table mapping
- Building filtered queries from extracted entities
- Query execution with a relax-and-retry fallback
"""
from src.database.connection import DatabaseConnection, get_database, reset_database
from src.database.models import Base, Earmark
from src.database.query_builder import build_earmark_query, relax_filters
from src.database.repository import (
    EarmarkRepository,
    EarmarkSearchResult,
    get_earmark_repository,
    reset_earmark_repository,
)

__all__ = [
    # Connection
    "DatabaseConnection",
    "get_database",
    "reset_database",
    # Models
    "Base",
    "Earmark",
    # Queries
    "build_earmark_query",
    "relax_filters",
    "EarmarkRepository",
    "EarmarkSearchResult",
    "get_earmark_repository",
    "reset_earmark_repository",
]
