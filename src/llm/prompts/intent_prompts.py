"""
Intent Prompts - Keyword extraction for the simple /api/ask flow.

The simple flow lets the model restate the question as a short search
intent, then runs the year/member regexes over that restatement.
"""

INTENT_SYSTEM_PROMPT = """You extract search intent from questions about U.S. congressional earmarks.

Reply with one short line containing only the facts useful for a database search:
the fiscal year (four digits), the member of Congress written as "Sen. Surname" or
"Rep. Surname", the agency, and any topic keywords. No explanations."""


def get_intent_system_prompt() -> str:
    """System prompt for intent extraction."""
    return INTENT_SYSTEM_PROMPT


def build_intent_prompt(question: str) -> str:
    """
    User prompt for intent extraction.

    >>> build_intent_prompt("What did Menendez get in 2022?")
    'Extract the main intent and keywords from this question: What did Menendez get in 2022?'
    """
    return f"Extract the main intent and keywords from this question: {question}"
