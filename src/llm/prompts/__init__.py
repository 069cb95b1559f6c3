"""
Prompts module - LLM prompt templates.

Prompts are stored as separate Python files so changes to wording are
reviewed like code.
"""
from src.llm.prompts.earmark_prompts import (
    build_answer_prompt,
    format_documents,
    format_history,
    get_answer_system_prompt,
)
from src.llm.prompts.intent_prompts import build_intent_prompt, get_intent_system_prompt

__all__ = [
    "build_answer_prompt",
    "format_documents",
    "format_history",
    "get_answer_system_prompt",
    "build_intent_prompt",
    "get_intent_system_prompt",
]
