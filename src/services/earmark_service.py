"""
Earmark Service - Answers questions about earmarks.

The main flow (ask):
1. Validate the question and session id
2. Extract filters from the question with regexes
3. Fetch matching earmarks, relaxing the filters if nothing matches
4. Build the context table and aggregate statistics
5. Optionally search the document store
6. Ask the LLM for an answer
7. Store the exchange in session memory

The legacy flow (ask_simple) lets the LLM restate the question, pulls the
year and member out of the restatement and lists up to ten earmarks.
"""
import re
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from src.analytics import InsightsGenerator, ResultFormatter, extract_entities, suggest_follow_up
from src.core.config import get_settings
from src.core.exceptions import ConfigurationError, DocumentSearchError, LLMError, ValidationError
from src.core.logging_config import get_logger
from src.core.validators import validate_question, validate_session_id
from src.database.repository import EarmarkRepository, get_earmark_repository
from src.llm.client import LLMClient, get_llm_client
from src.llm.prompts import (
    build_answer_prompt,
    build_intent_prompt,
    get_answer_system_prompt,
    get_intent_system_prompt,
)
from src.memory import MemoryManager, get_memory_manager
from src.retrieval import DocumentSearchService, DocumentSnippet, get_document_search

logger = get_logger(__name__)

HISTORY_MESSAGES = 6
SIMPLE_RESULT_LIMIT = 10
NO_MATCH_ANSWER = "I couldn't find any earmarks matching your request."

_SIMPLE_YEAR_RE = re.compile(r"\b(20\d{2})\b")
_SIMPLE_MEMBER_RE = re.compile(r"\b(?:Sen|Rep)\.?\s+([A-Za-z'-]+)", re.IGNORECASE)


@dataclass
class AskResult:
    """
    Answer to one question.

    Attributes:
        answer: LLM answer text
        count: Number of matched earmarks
        total_amount: Sum of matched amounts
        session_id: Session the exchange was stored under
        filters: Filters used for the final query
        relaxed_filters: Filters dropped to get a match
        suggested_follow_up: A next question to offer the user
        citations: Document snippets the answer could cite
        intent: Question type from the extractor
    """
    answer: str
    count: int
    total_amount: float
    session_id: str
    filters: Dict[str, Any] = field(default_factory=dict)
    relaxed_filters: List[str] = field(default_factory=list)
    suggested_follow_up: Optional[str] = None
    citations: List[Dict[str, Any]] = field(default_factory=list)
    intent: str = "search"


class EarmarkService:
    """
    Question answering over the earmark database.

    Dependencies default to the shared singletons and can be injected
    for tests.

    Example:
        >>> service = EarmarkService()
        >>> result = service.ask("Department of Education earmarks in 2022")
        >>> result.count, result.filters["year"]
        (42, 2022)
    """

    def __init__(
        self,
        repository: Optional[EarmarkRepository] = None,
        llm_client: Optional[LLMClient] = None,
        memory_manager: Optional[MemoryManager] = None,
        document_search: Optional[DocumentSearchService] = None,
        formatter: Optional[ResultFormatter] = None,
        insights: Optional[InsightsGenerator] = None,
    ):
        self.settings = get_settings()
        self.repository = repository or get_earmark_repository()
        self.llm_client = llm_client or get_llm_client()
        self.memory_manager = memory_manager or get_memory_manager()
        self._document_search = document_search
        self.formatter = formatter or ResultFormatter()
        self.insights = insights or InsightsGenerator()

        logger.info("EarmarkService initialized")

    @property
    def document_search(self) -> DocumentSearchService:
        if self._document_search is None:
            self._document_search = get_document_search()
        return self._document_search

    def ask(
        self,
        question: Optional[str],
        session_id: Optional[str] = None,
        use_documents: bool = True,
    ) -> AskResult:
        """
        Answer a question from the database and, optionally, documents.

        Args:
            question: Natural-language question
            session_id: Conversation to continue (generated when omitted)
            use_documents: Search the document store when it is configured

        Returns:
            AskResult

        Raises:
            ValidationError: Empty question or malformed session id
            DatabaseError: Earmark query failed
            LLMError: Every LLM provider failed
        """
        question = self._validated_question(question)
        session_id = self._resolve_session_id(session_id)

        logger.info(f"Ask: session={session_id}, question_length={len(question)}")

        memory = self.memory_manager.get_or_create_session(session_id)
        history = memory.get_recent_history(HISTORY_MESSAGES)

        filters = extract_entities(question)
        result = self.repository.find(filters)

        stats = self.insights.generate_insights(result.rows)
        context = self.formatter.build_context(result.rows)

        snippets = self._search_documents(question) if use_documents else []

        user_prompt = build_answer_prompt(
            question=question,
            context=context,
            insights_text=stats.get("insights_text", "") if result.rows else "",
            history=history,
            documents=[s.to_dict() for s in snippets],
            intent=filters.intent,
            relaxed=result.relaxed,
        )
        answer = self.llm_client.generate(
            user_message=user_prompt,
            system_prompt=get_answer_system_prompt(),
        )

        used_filters = result.filters.to_dict()
        memory.add_user_message(question, metadata={"intent": filters.intent})
        memory.add_assistant_message(answer, metadata={
            "count": result.count,
            "filters": used_filters,
            "relaxed": result.relaxed,
        })

        logger.info(
            f"Answered: session={session_id}, count={result.count}, "
            f"relaxed={result.relaxed}, documents={len(snippets)}"
        )

        return AskResult(
            answer=answer,
            count=result.count,
            total_amount=result.total_amount,
            session_id=session_id,
            filters=used_filters,
            relaxed_filters=result.relaxed,
            suggested_follow_up=suggest_follow_up(filters, result.count),
            citations=[s.to_dict() for s in snippets],
            intent=filters.intent,
        )

    def ask_simple(self, question: Optional[str]) -> str:
        """
        Legacy answer: a numbered list of up to ten earmarks.

        The LLM restates the question as a search intent; year and member
        are read from that restatement. If the LLM is unavailable the
        question itself is used.
        """
        question = self._validated_question(question)

        try:
            intent_text = self.llm_client.generate(
                user_message=build_intent_prompt(question),
                system_prompt=get_intent_system_prompt(),
                model=self.settings.llm_model_fast,
            )
        except LLMError as e:
            logger.warning(f"Intent extraction failed, using the question as is: {e}")
            intent_text = question

        year_match = _SIMPLE_YEAR_RE.search(intent_text)
        member_match = _SIMPLE_MEMBER_RE.search(intent_text)

        rows = self.repository.search(
            "",
            year=int(year_match.group(1)) if year_match else None,
            member=member_match.group(1) if member_match else None,
            limit=SIMPLE_RESULT_LIMIT,
        )

        if not rows:
            return NO_MATCH_ANSWER
        return "Here are some matching earmarks:\n" + self.formatter.format_as_list(rows)

    def clear_session(self, session_id: str) -> bool:
        return self.memory_manager.clear_session(session_id)

    def _validated_question(self, question: Optional[str]) -> str:
        is_valid, sanitized, error = validate_question(question)
        if not is_valid:
            raise ValidationError(error, field="question")
        return sanitized

    def _resolve_session_id(self, session_id: Optional[str]) -> str:
        is_valid, error = validate_session_id(session_id)
        if not is_valid:
            raise ValidationError(error, field="sessionId")
        return session_id or str(uuid.uuid4())

    def _search_documents(self, question: str) -> List[DocumentSnippet]:
        """Document snippets, or nothing when search is unset or failing."""
        if not self.settings.has_vector_store():
            return []
        try:
            return self.document_search.search(question)
        except (ConfigurationError, DocumentSearchError) as e:
            logger.warning(f"Document search skipped: {e.message}")
            return []


# Singleton instance
_earmark_service: Optional[EarmarkService] = None


def get_earmark_service() -> EarmarkService:
    """Get or create the global EarmarkService instance."""
    global _earmark_service
    if _earmark_service is None:
        _earmark_service = EarmarkService()
    return _earmark_service


def reset_earmark_service() -> None:
    """Reset the global EarmarkService (useful for testing)."""
    global _earmark_service
    _earmark_service = None
