"""
Document Search - Retrieval over an OpenAI vector store.

Earmark guidance documents (appropriations reports, agency guidance) are
uploaded to a hosted vector store outside this service. At question time
the store is searched and the matching passages are handed to the answer
prompt with their file names so the model can cite them.
"""
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from openai import OpenAI, OpenAIError

from src.core.config import Settings, get_settings
from src.core.exceptions import ConfigurationError, DocumentSearchError
from src.core.logging_config import LoggerMixin


@dataclass
class DocumentSnippet:
    """A passage returned by the vector store."""
    text: str
    filename: str
    file_id: str
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class DocumentSearchService(LoggerMixin):
    """
    Search and inspect the configured vector store.

    Example:
        >>> service = DocumentSearchService()
        >>> snippets = service.search("How are earmarks vetted?")
        >>> snippets[0].filename
        'fy2024_guidance.pdf'
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[OpenAI] = None):
        self.settings = settings or get_settings()
        self._client = client

    @property
    def vector_store_id(self) -> str:
        """The configured store id; raises when document search is not set up."""
        if not self.settings.openai_vector_store_id:
            raise ConfigurationError("Vector store not configured", setting="OPENAI_VECTOR_STORE_ID")
        return self.settings.openai_vector_store_id

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not self.settings.openai_api_key:
                raise ConfigurationError("OpenAI API key not configured", setting="OPENAI_API_KEY")
            self._client = OpenAI(api_key=self.settings.openai_api_key)
        return self._client

    def search(self, query: str, max_results: Optional[int] = None) -> List[DocumentSnippet]:
        """
        Find passages relevant to a question.

        Args:
            query: Free-text question
            max_results: Passage cap (defaults to DOCUMENT_MAX_RESULTS)

        Returns:
            Snippets ordered by relevance, empty text chunks skipped

        Raises:
            ConfigurationError: If the vector store is not configured
            DocumentSearchError: If the vector store request fails
        """
        vector_store_id = self.vector_store_id
        max_results = max_results or self.settings.document_max_results

        try:
            page = self.client.vector_stores.search(
                vector_store_id,
                query=query,
                max_num_results=max_results,
            )
        except OpenAIError as e:
            self.logger.error(f"Vector store search failed: {e}")
            raise DocumentSearchError(f"Document search failed: {e}")

        snippets = []
        for item in page.data:
            text = "\n".join(
                part.text for part in item.content
                if getattr(part, "type", "text") == "text" and part.text
            ).strip()
            if not text:
                continue
            snippets.append(DocumentSnippet(
                text=text,
                filename=item.filename or "",
                file_id=item.file_id,
                score=float(item.score or 0.0),
            ))

        self.logger.info(f"Document search returned {len(snippets)} snippet(s)")
        return snippets

    def stats(self) -> Dict[str, int]:
        """File counts by processing status."""
        vector_store_id = self.vector_store_id

        try:
            files = list(self.client.vector_stores.files.list(vector_store_id=vector_store_id))
        except OpenAIError as e:
            self.logger.error(f"Failed to fetch vector store stats: {e}")
            raise DocumentSearchError(f"Failed to fetch stats: {e}")

        return {
            "totalFiles": len(files),
            "completedFiles": sum(1 for f in files if f.status == "completed"),
            "processingFiles": sum(1 for f in files if f.status == "in_progress"),
            "failedFiles": sum(1 for f in files if f.status == "failed"),
        }


# Singleton instance
_document_search: Optional[DocumentSearchService] = None


def get_document_search() -> DocumentSearchService:
    """Get or create the global DocumentSearchService instance."""
    global _document_search
    if _document_search is None:
        _document_search = DocumentSearchService()
    return _document_search


def reset_document_search() -> None:
    """Reset the global DocumentSearchService (useful for testing)."""
    global _document_search
    _document_search = None
