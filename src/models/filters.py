"""
Earmark filters - the structured form of a natural-language question.

Produced by the entity extractor, consumed by the query builder, echoed
back to the client so it can show what was understood.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

SORT_AMOUNT_DESC = "amount_desc"
SORT_AMOUNT_ASC = "amount_asc"


@dataclass(frozen=True)
class EarmarkFilters:
    """
    Filters extracted from a question.

    Attributes:
        member: Surname of the requesting member of Congress
        year: Fiscal year
        agencies: Agency search terms ("Labor", "Housing and Urban Development")
        location: U.S. state name
        location_code: Two-letter postal code for `location`
        min_amount: Lower dollar bound (inclusive)
        max_amount: Upper dollar bound (inclusive)
        keywords: Free words matched against recipient/account/etc.
        match_any_keyword: OR the keywords instead of AND (used when relaxing)
        sort: SORT_AMOUNT_DESC, SORT_AMOUNT_ASC or None
        intent: Coarse question type (search, list, compare, ...)
    """
    member: Optional[str] = None
    year: Optional[int] = None
    agencies: List[str] = field(default_factory=list)
    location: Optional[str] = None
    location_code: Optional[str] = None
    min_amount: Optional[float] = None
    max_amount: Optional[float] = None
    keywords: List[str] = field(default_factory=list)
    match_any_keyword: bool = False
    sort: Optional[str] = None
    intent: str = "search"

    @property
    def agency(self) -> Optional[str]:
        """First agency mentioned, if any."""
        return self.agencies[0] if self.agencies else None

    def has_filters(self) -> bool:
        """True if anything narrows the query."""
        return any([
            self.member,
            self.year,
            self.agencies,
            self.location,
            self.min_amount is not None,
            self.max_amount is not None,
            self.keywords,
        ])

    def without(self, *names: str) -> "EarmarkFilters":
        """Copy with the named filters cleared."""
        cleared: Dict[str, Any] = {}
        for name in names:
            if name in ("agencies", "agency"):
                cleared["agencies"] = []
            elif name == "keywords":
                cleared["keywords"] = []
                cleared["match_any_keyword"] = False
            elif name == "location":
                cleared["location"] = None
                cleared["location_code"] = None
            else:
                cleared[name] = None
        return replace(self, **cleared)

    def to_dict(self) -> Dict[str, Any]:
        """Only the filters that are set, for API responses and memory."""
        data: Dict[str, Any] = {}
        if self.member:
            data["member"] = self.member
        if self.year:
            data["year"] = self.year
        if self.agencies:
            data["agencies"] = list(self.agencies)
        if self.location:
            data["location"] = self.location
        if self.min_amount is not None:
            data["min_amount"] = self.min_amount
        if self.max_amount is not None:
            data["max_amount"] = self.max_amount
        if self.keywords:
            data["keywords"] = list(self.keywords)
        if self.sort:
            data["sort"] = self.sort
        return data
