"""
Follow-up suggestions and sample questions.
"""
import random
from typing import List, Optional

from src.models.filters import EarmarkFilters

SAMPLE_QUERIES: List[str] = [
    "Show me earmarks from the Department of Education in 2022",
    "What are the largest earmarks over $1 million?",
    "Which agencies received the most funding in 2023?",
    "Show me earmarks for healthcare projects",
    "Who requested the most earmarks in California?",
    "Compare funding between Department of Labor and Department of Transportation",
    "Find earmarks related to climate change initiatives",
    "What was the total amount allocated to rural development?",
    "Show me the smallest earmarks under $100,000",
    "Which representatives secured the most funding for their districts?",
]


def get_sample_queries(count: int = 5, rng: Optional[random.Random] = None) -> List[str]:
    """Random selection of sample questions without repeats."""
    count = max(0, min(count, len(SAMPLE_QUERIES)))
    return (rng or random).sample(SAMPLE_QUERIES, count)


def suggest_follow_up(
    filters: EarmarkFilters,
    match_count: int,
    rng: Optional[random.Random] = None,
) -> str:
    """
    One next question based on what was just asked.

    Zero matches steer toward a broader search; otherwise the suggestion
    builds on the agency, member, location or year in the filters.
    """
    if match_count == 0:
        if filters.has_filters():
            return "Try a broader search with fewer filters, for example without a year or dollar range."
        return (rng or random).choice(SAMPLE_QUERIES)

    if filters.intent != "trend" and filters.agency:
        return f"How has {filters.agency} earmark funding changed over time?"

    if filters.member:
        if filters.year:
            return f"What earmarks did {filters.member} secure in other years?"
        return f"Which agencies funded the earmarks requested by {filters.member}?"

    if filters.location:
        return f"Which members requested the most earmarks in {filters.location}?"

    if filters.year:
        return f"Which agencies received the most earmark funding in {filters.year}?"

    if filters.min_amount is None and match_count > 10:
        return "Which of these earmarks are over $1 million?"

    candidates = [q for q in SAMPLE_QUERIES if "largest" not in q] or SAMPLE_QUERIES
    return (rng or random).choice(candidates)
