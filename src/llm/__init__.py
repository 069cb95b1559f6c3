"""
LLM module - Language model integration.

This module handles all LLM interactions:
- Prompt construction for earmark answers and intent extraction
- API calls to Groq with Gemini fallback
"""
from src.core.exceptions import LLMError
from src.llm.client import LLMClient, get_llm_client, reset_llm_client

__all__ = [
    "LLMClient",
    "LLMError",
    "get_llm_client",
    "reset_llm_client",
]
