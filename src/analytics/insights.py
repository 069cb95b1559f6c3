"""
Insights Generator - Aggregate statistics over matched earmarks.

The context table only shows ten rows, so totals by agency, member and
year are computed here over every matched row and handed to the LLM as
plain text.
"""
from collections import defaultdict
from statistics import mean, median
from typing import Any, Dict, List, Optional

from src.analytics.formatter import format_currency
from src.core.logging_config import get_logger

logger = get_logger(__name__)


class InsightsGenerator:
    """
    Summarizes a list of earmark rows.

    Example:
        >>> generator = InsightsGenerator(top_n=3)
        >>> insights = generator.generate_insights(rows)
        >>> insights["total_amount"], insights["top_agencies"][0]
        (4500000.0, {'name': 'Labor', 'total': 3000000.0, 'count': 2})
    """

    def __init__(self, top_n: int = 5):
        self.top_n = top_n

    def generate_insights(self, rows: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Compute counts, totals and top groups.

        Returns:
            Dict with count, total_amount, average_amount, median_amount,
            largest, top_agencies, top_members, by_year and insights_text
        """
        if not rows:
            return {
                "count": 0,
                "total_amount": 0.0,
                "insights_text": "No data returned.",
            }

        amounts = [float(row.get("amount") or 0) for row in rows]
        largest = max(rows, key=lambda r: r.get("amount") or 0)

        insights: Dict[str, Any] = {
            "count": len(rows),
            "total_amount": sum(amounts),
            "average_amount": mean(amounts),
            "median_amount": median(amounts),
            "largest": {
                "recipient": largest.get("recipient"),
                "amount": largest.get("amount"),
                "year": largest.get("year"),
                "member": largest.get("member"),
            },
            "top_agencies": self._top_groups(rows, "agency"),
            "top_members": self._top_groups(rows, "member"),
            "by_year": self._top_groups(rows, "year", limit=None),
        }
        insights["insights_text"] = self._generate_text(insights)
        return insights

    def _top_groups(
        self,
        rows: List[Dict[str, Any]],
        key: str,
        limit: Optional[int] = -1,
    ) -> List[Dict[str, Any]]:
        """Group by `key`, sorted by total dollars descending."""
        totals: Dict[Any, float] = defaultdict(float)
        counts: Dict[Any, int] = defaultdict(int)
        for row in rows:
            name = row.get(key)
            if name in (None, ""):
                continue
            totals[name] += float(row.get("amount") or 0)
            counts[name] += 1

        groups = [
            {"name": name, "total": total, "count": counts[name]}
            for name, total in sorted(totals.items(), key=lambda item: item[1], reverse=True)
        ]
        if limit == -1:
            limit = self.top_n
        return groups[:limit] if limit else groups

    def _generate_text(self, insights: Dict[str, Any]) -> str:
        """Plain-text lines for the prompt."""
        lines = [
            f"Total: {format_currency(insights['total_amount'])} across {insights['count']} earmarks",
            f"Average: {format_currency(insights['average_amount'])}, "
            f"median: {format_currency(insights['median_amount'])}",
        ]

        largest = insights["largest"]
        lines.append(
            f"Largest: {largest['recipient']} ({format_currency(largest['amount'])}, {largest['year']})"
        )

        for label, key in (("agencies", "top_agencies"), ("members", "top_members")):
            groups = insights.get(key) or []
            if len(groups) > 1:
                parts = [f"{g['name']} {format_currency(g['total'])} ({g['count']})" for g in groups]
                lines.append(f"Top {label}: " + "; ".join(parts))

        years = insights.get("by_year") or []
        if len(years) > 1:
            parts = [f"FY{g['name']} {format_currency(g['total'])}" for g in sorted(years, key=lambda g: g["name"])]
            lines.append("By year: " + "; ".join(parts))

        return "\n".join(lines)
