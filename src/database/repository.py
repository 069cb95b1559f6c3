"""
Earmark Repository - Read-only access to the earmarks table.

This module provides:
- Filtered lookups with a "relax and re-query" fallback
- Plain keyword search for the search endpoint
- Query timing and logging
"""
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sqlalchemy import Select
from sqlalchemy.exc import SQLAlchemyError

from src.core.exceptions import DatabaseError
from src.core.logging_config import get_logger
from src.database.connection import DatabaseConnection, get_database
from src.database.query_builder import DEFAULT_LIMIT, build_earmark_query, relax_filters
from src.models.filters import EarmarkFilters

logger = get_logger(__name__)


@dataclass
class EarmarkSearchResult:
    """
    Rows returned for a set of filters.

    Attributes:
        rows: Earmarks as dictionaries
        filters: The filters that produced `rows` (after any relaxation)
        relaxed: Names of filters dropped to get a match, empty if none
        execution_time_ms: Total time spent querying
    """
    rows: List[Dict[str, Any]]
    filters: EarmarkFilters
    relaxed: List[str] = field(default_factory=list)
    execution_time_ms: float = 0.0

    @property
    def count(self) -> int:
        return len(self.rows)

    @property
    def total_amount(self) -> float:
        return sum(row.get("amount") or 0 for row in self.rows)


class EarmarkRepository:
    """
    Runs earmark queries against the hosted database.

    Example:
        >>> repo = EarmarkRepository()
        >>> result = repo.find(extract_entities("Sen. Menendez 2022"))
        >>> result.count, result.relaxed
        (12, [])
    """

    def __init__(self, db: Optional[DatabaseConnection] = None, row_limit: int = DEFAULT_LIMIT):
        self.db = db or get_database()
        self.row_limit = row_limit

    def find(self, filters: EarmarkFilters, limit: Optional[int] = None) -> EarmarkSearchResult:
        """
        Fetch earmarks for the filters, relaxing them if nothing matches.

        Raises:
            DatabaseError: If the database rejects the query
        """
        limit = limit or self.row_limit
        start_time = time.perf_counter()

        rows = self._fetch(build_earmark_query(filters, limit))
        used, relaxed = filters, []

        if not rows and filters.has_filters():
            for dropped, broader in relax_filters(filters):
                logger.info(f"No matches, retrying without: {', '.join(dropped)}")
                rows = self._fetch(build_earmark_query(broader, limit))
                if rows:
                    used, relaxed = broader, dropped
                    break

        execution_time = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"Earmark query: {len(rows)} rows in {execution_time:.2f}ms "
            f"filters={used.to_dict()} relaxed={relaxed}"
        )

        return EarmarkSearchResult(
            rows=rows,
            filters=used,
            relaxed=relaxed,
            execution_time_ms=execution_time,
        )

    def search(
        self,
        query: str,
        year: Optional[int] = None,
        member: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Keyword search with optional year/member filters.

        Every word of `query` (longer than two characters) must appear in
        one of the searchable text columns.
        """
        words = [w for w in query.lower().split() if len(w) > 2]
        filters = EarmarkFilters(member=member, year=year, keywords=words)
        return self._fetch(build_earmark_query(filters, limit or self.row_limit))

    def check(self) -> bool:
        """True if the earmarks table can be read."""
        try:
            self._fetch(build_earmark_query(EarmarkFilters(), limit=1))
            return True
        except DatabaseError:
            return False

    def _fetch(self, stmt: Select) -> List[Dict[str, Any]]:
        try:
            with self.db.get_session() as session:
                return [earmark.to_dict() for earmark in session.execute(stmt).scalars()]
        except SQLAlchemyError as e:
            logger.error(f"Earmark query failed: {e}")
            raise DatabaseError(f"Earmark query failed: {e.__class__.__name__}") from e


_repository: Optional[EarmarkRepository] = None


def get_earmark_repository() -> EarmarkRepository:
    """Get or create the shared repository."""
    global _repository
    if _repository is None:
        from src.core.config import get_settings
        _repository = EarmarkRepository(row_limit=get_settings().query_row_limit)
    return _repository


def reset_earmark_repository() -> None:
    """Reset the shared repository (useful for testing)."""
    global _repository
    _repository = None
