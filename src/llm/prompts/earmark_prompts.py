"""
Earmark Prompts - Prompts for answering questions from earmark data.

The database context (headline, markdown table, aggregate lines) and any
document snippets are assembled into one user prompt; the system prompt
fixes the assistant's role and answer style.
"""
from typing import Dict, List, Optional, Sequence

ANSWER_SYSTEM_PROMPT = """You are an assistant who answers questions about U.S. congressional earmarks (Community Project Funding).

When you answer:
- Start with a brief summary.
- If the context includes a markdown table, reference it instead of repeating all rows.
- Use only the figures in the context. Do not invent recipients, members or amounts.
- If no earmarks matched, say so plainly and suggest how the question could be broadened.
- When you use a document excerpt, cite it by its bracketed number, e.g. [1].
- Amounts are U.S. dollars; fiscal years are written FY2023."""

INTENT_GUIDANCE: Dict[str, str] = {
    "compare": "The user wants a comparison. Contrast the groups with specific totals.",
    "trend": "The user asks about change over time. Describe the year-by-year totals.",
    "analyze": "The user wants an analysis. Point out the largest groups and notable outliers.",
    "summarize": "The user wants totals. Lead with the total dollar figure and count.",
    "guidance": (
        "The user asks how the earmark process works. Answer from the document excerpts "
        "when available and keep database figures as examples."
    ),
}


def format_history(history: Optional[Sequence[Dict[str, str]]], max_chars: int = 300) -> str:
    """
    Recent conversation as "User:/Assistant:" lines.

    Long messages are truncated so old answers do not crowd out the data.
    """
    if not history:
        return ""

    lines = []
    for msg in history:
        role_label = "User" if msg["role"] == "user" else "Assistant"
        content = msg["content"]
        if len(content) > max_chars:
            content = content[:max_chars] + "..."
        lines.append(f"{role_label}: {content}")
    return "\n".join(lines)


def format_documents(documents: Optional[Sequence[dict]]) -> str:
    """Numbered document excerpts with their source file names."""
    if not documents:
        return ""

    parts = []
    for i, doc in enumerate(documents, start=1):
        parts.append(f"[{i}] ({doc.get('filename') or 'document'})\n{doc.get('text', '').strip()}")
    return "\n\n".join(parts)


def build_answer_prompt(
    question: str,
    context: str,
    insights_text: str = "",
    history: Optional[Sequence[Dict[str, str]]] = None,
    documents: Optional[Sequence[dict]] = None,
    intent: str = "search",
    relaxed: Optional[List[str]] = None,
) -> str:
    """
    Build the user prompt for the answer.

    Args:
        question: The user's question
        context: Headline and markdown table from ResultFormatter
        insights_text: Aggregate lines from InsightsGenerator
        history: Recent conversation messages (role/content dicts)
        documents: Snippets from the document search (text/filename dicts)
        intent: Question type from the entity extractor
        relaxed: Filters dropped to find matches

    Returns:
        The user prompt
    """
    sections = []

    history_text = format_history(history)
    if history_text:
        sections.append(f"Previous conversation:\n{history_text}")

    sections.append(f"Context:\n{context}")

    if insights_text:
        sections.append(f"Statistics over all matched earmarks:\n{insights_text}")

    if relaxed:
        sections.append(
            "Note: nothing matched every detail of the question, so these filters were dropped: "
            + ", ".join(relaxed)
            + ". Tell the user the results are broader than asked."
        )

    documents_text = format_documents(documents)
    if documents_text:
        sections.append(f"Document excerpts:\n{documents_text}")

    guidance = INTENT_GUIDANCE.get(intent)
    if guidance:
        sections.append(guidance)

    sections.append(f"Question: {question}")

    return "\n\n".join(sections)


def get_answer_system_prompt() -> str:
    """System prompt for earmark answers."""
    return ANSWER_SYSTEM_PROMPT
