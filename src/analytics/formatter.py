"""
Result Formatter - Turn earmark rows into prompt context.

The LLM never sees raw rows; it gets a one-line headline plus a short
markdown table it is told to reference instead of repeating.
"""
from typing import Any, Dict, List, Optional, Sequence, Tuple

from src.core.logging_config import get_logger

logger = get_logger(__name__)

# (header, row key) pairs for the context table
CONTEXT_COLUMNS: Tuple[Tuple[str, str], ...] = (
    ("Year", "year"),
    ("Recipient", "recipient"),
    ("Amount", "amount"),
    ("Agency", "agency"),
    ("Subcommittee", "subcommittee"),
)


def format_currency(amount: Optional[float]) -> str:
    """
    Dollar figure with cents.

    >>> format_currency(1234.5)
    '$1,234.50'
    """
    return f"${(amount or 0):,.2f}"


class ResultFormatter:
    """
    Formats earmark rows as markdown.

    Example:
        >>> formatter = ResultFormatter(max_rows=10)
        >>> print(formatter.build_context(rows))
        Matched 2 earmarks worth $1,500,000.00.
        <BLANKLINE>
        | Year | Recipient | Amount | Agency | Subcommittee |
        ...
    """

    def __init__(self, max_rows: int = 10, max_col_width: int = 60):
        """
        Args:
            max_rows: Rows included in tables
            max_col_width: Cell width before truncation
        """
        self.max_rows = max_rows
        self.max_col_width = max_col_width

    def headline(self, rows: List[Dict[str, Any]]) -> str:
        """One-sentence count and total."""
        if not rows:
            return "No matching earmarks found."
        total = sum(row.get("amount") or 0 for row in rows)
        plural = "s" if len(rows) > 1 else ""
        return f"Matched {len(rows)} earmark{plural} worth {format_currency(total)}."

    def format_as_table(
        self,
        rows: List[Dict[str, Any]],
        columns: Sequence[Tuple[str, str]] = CONTEXT_COLUMNS,
    ) -> str:
        """
        Markdown table of the first `max_rows` rows.

        Returns an empty string for no rows.
        """
        if not rows:
            return ""

        header_row = "| " + " | ".join(header for header, _ in columns) + " |"
        separator = "|" + "|".join("-" * (len(header) + 2) for header, _ in columns) + "|"

        lines = [header_row, separator]
        for row in rows[:self.max_rows]:
            cells = [self._format_value(key, row.get(key)) for _, key in columns]
            lines.append("| " + " | ".join(cells) + " |")

        if len(rows) > self.max_rows:
            lines.append("")
            lines.append(f"_Showing {self.max_rows} of {len(rows)} earmarks_")

        return "\n".join(lines)

    def build_context(self, rows: List[Dict[str, Any]]) -> str:
        """Headline followed by the table, when there is one."""
        table = self.format_as_table(rows)
        if not table:
            return self.headline(rows)
        return f"{self.headline(rows)}\n\n{table}"

    def format_as_list(self, rows: List[Dict[str, Any]]) -> str:
        """
        Numbered plain-text list, used where markdown is not rendered.

        "1. Year: 2022, Member: Menendez, Recipient: X, Amount: $1,000.00, Location: Newark, NJ"
        """
        lines = []
        for i, row in enumerate(rows[:self.max_rows], start=1):
            lines.append(
                f"{i}. Year: {row.get('year')}, Member: {row.get('member') or ''}, "
                f"Recipient: {row.get('recipient') or ''}, "
                f"Amount: {format_currency(row.get('amount'))}, "
                f"Location: {row.get('location') or ''}"
            )
        return "\n".join(lines)

    def _format_value(self, key: str, value: Any) -> str:
        """Format a single cell."""
        if value is None:
            return ""

        if key == "amount":
            return format_currency(value)

        str_value = str(value)

        if len(str_value) > self.max_col_width:
            str_value = str_value[:self.max_col_width - 3] + "..."

        # Escape pipe characters for markdown
        return str_value.replace("|", "\\|")
