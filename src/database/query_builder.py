"""
Query Builder - Translate EarmarkFilters into a SQLAlchemy SELECT.

Only parameterised expressions are built here; user text never reaches
the database as raw SQL. `ilike` renders as ILIKE on Postgres and as
lower(...) LIKE lower(...) elsewhere.
"""
from dataclasses import replace
from typing import Iterator, List, Optional, Tuple

from sqlalchemy import Select, and_, or_, select

from src.database.models import Earmark
from src.models.filters import EarmarkFilters, SORT_AMOUNT_ASC, SORT_AMOUNT_DESC

DEFAULT_LIMIT = 1000


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so user text is matched literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _contains(column, value: str):
    return column.ilike(f"%{_escape_like(value)}%", escape="\\")


def _keyword_clause(keyword: str):
    """A keyword matches if any searchable text column contains it."""
    return or_(*[
        _contains(getattr(Earmark, name), keyword)
        for name in Earmark.KEYWORD_COLUMNS
    ])


def build_earmark_query(filters: EarmarkFilters, limit: Optional[int] = DEFAULT_LIMIT) -> Select:
    """
    Build the SELECT for a set of filters.

    Args:
        filters: Extracted filters
        limit: Row cap (None for no cap)

    Returns:
        SQLAlchemy Select over Earmark
    """
    conditions = []

    if filters.member:
        conditions.append(_contains(Earmark.member, filters.member))

    if filters.year:
        conditions.append(Earmark.year == filters.year)

    if filters.agencies:
        conditions.append(or_(*[_contains(Earmark.agency, a) for a in filters.agencies]))

    if filters.location:
        location_terms = [_contains(Earmark.location, filters.location)]
        if filters.location_code:
            location_terms.append(_contains(Earmark.location, f", {filters.location_code}"))
        conditions.append(or_(*location_terms))

    if filters.min_amount is not None:
        conditions.append(Earmark.amount >= filters.min_amount)

    if filters.max_amount is not None:
        conditions.append(Earmark.amount <= filters.max_amount)

    if filters.keywords:
        keyword_clauses = [_keyword_clause(k) for k in filters.keywords]
        if filters.match_any_keyword:
            conditions.append(or_(*keyword_clauses))
        else:
            conditions.append(and_(*keyword_clauses))

    stmt = select(Earmark)
    if conditions:
        stmt = stmt.where(and_(*conditions))

    if filters.sort == SORT_AMOUNT_DESC:
        stmt = stmt.order_by(Earmark.amount.desc(), Earmark.id)
    elif filters.sort == SORT_AMOUNT_ASC:
        stmt = stmt.order_by(Earmark.amount.asc(), Earmark.id)
    else:
        stmt = stmt.order_by(Earmark.year.desc(), Earmark.amount.desc(), Earmark.id)

    if limit:
        stmt = stmt.limit(limit)

    return stmt


def relax_filters(filters: EarmarkFilters) -> Iterator[Tuple[List[str], EarmarkFilters]]:
    """
    Yield progressively broader filter sets to retry with after zero matches.

    Each item is (dropped filter names, relaxed filters). Steps that would
    not change anything are skipped, and so are steps that leave nothing
    to filter on, since their "answer" would be the whole table.

    1. any keyword instead of all keywords
    2. no keywords
    3. no keywords, agency or location
    """
    if len(filters.keywords) > 1 and not filters.match_any_keyword:
        yield ["keywords:all"], replace(filters, match_any_keyword=True)

    relaxed = filters.without("keywords")
    if not relaxed.has_filters():
        return

    if filters.keywords:
        yield ["keywords"], relaxed

    if relaxed.agencies or relaxed.location:
        dropped = ["keywords"] if filters.keywords else []
        if relaxed.agencies:
            dropped.append("agency")
        if relaxed.location:
            dropped.append("location")
        broader = relaxed.without("agencies", "location")
        if broader.has_filters():
            yield dropped, broader
