"""
Analytics Package - Question parsing and result presentation.

This package provides:
- extract_entities: regex extraction of filters from a question
- ResultFormatter: headline + markdown table context for the LLM
- InsightsGenerator: totals and top groups over matched rows
- suggest_follow_up / get_sample_queries: next-question hints

Example:
    >>> from src.analytics import extract_entities, ResultFormatter
    >>> filters = extract_entities("Sen. Menendez earmarks in 2022")
    >>> ResultFormatter().headline([])
    'No matching earmarks found.'
"""
from src.analytics.entity_extractor import classify_intent, extract_entities, parse_dollars
from src.analytics.formatter import ResultFormatter, format_currency
from src.analytics.insights import InsightsGenerator
from src.analytics.suggestions import SAMPLE_QUERIES, get_sample_queries, suggest_follow_up

__all__ = [
    "classify_intent",
    "extract_entities",
    "parse_dollars",
    "ResultFormatter",
    "format_currency",
    "InsightsGenerator",
    "SAMPLE_QUERIES",
    "get_sample_queries",
    "suggest_follow_up",
]
