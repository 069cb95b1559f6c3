"""
Source code root package.

This package contains all application source code organized by responsibility:
- api/       : FastAPI routes and HTTP handling
- core/      : Configuration, logging, and cross-cutting utilities
- services/  : Question answering orchestration
- analytics/ : Entity extraction, formatting, statistics, suggestions
- llm/       : LLM integration and prompt management
- retrieval/ : Vector store document search
- database/  : Earmark model, query building and access
- memory/    : Transient conversation history
- models/    : Filters and Pydantic request/response schemas
"""
__version__ = "1.0.0"
