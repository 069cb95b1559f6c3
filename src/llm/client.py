"""
LLM Client for Groq and Google Gemini.

The client hides provider details from the service layer:
- Groq chat completions for the primary and fast models
- Gemini as a fallback with a separate quota
- A fallback cascade with linear backoff between attempts
- Every failure surfaced as a single LLMError
"""
import time
from typing import Dict, List, Optional

import google.generativeai as genai
from groq import Groq

from src.core.config import get_settings
from src.core.exceptions import LLMError
from src.core.logging_config import get_logger

logger = get_logger(__name__)


class LLMClient:
    """
    Hybrid client for Groq and Google Gemini.

    Cascade order: primary Groq model, Gemini fallback, fast Groq model.
    A model passed to generate() is tried before the cascade.
    """

    def __init__(self, backoff_seconds: float = 1.0):
        """Initialize clients for both providers."""
        self.settings = get_settings()

        self.groq_client = Groq(api_key=self.settings.groq_api_key)

        self.google_enabled = bool(self.settings.google_api_key)
        if self.google_enabled:
            genai.configure(api_key=self.settings.google_api_key)

        self.temperature = self.settings.llm_temperature
        self.max_tokens = self.settings.llm_max_tokens
        self.backoff_seconds = backoff_seconds

        logger.info(
            f"LLM client initialized: primary={self.settings.llm_model}, "
            f"google={'on' if self.google_enabled else 'off'}"
        )

    def _cascade(self, model: Optional[str] = None) -> List[Dict[str, str]]:
        """Provider/model attempts in priority order."""
        cascade = [{"provider": "groq", "model": self.settings.llm_model}]
        if self.google_enabled:
            cascade.append({"provider": "google", "model": self.settings.llm_model_fallback})
        cascade.append({"provider": "groq", "model": self.settings.llm_model_fast})

        if model:
            provider = "google" if "gemini" in model.lower() else "groq"
            cascade.insert(0, {"provider": provider, "model": model})

        # Drop repeats while keeping order
        seen = set()
        unique = []
        for attempt in cascade:
            key = (attempt["provider"], attempt["model"])
            if key not in seen:
                seen.add(key)
                unique.append(attempt)
        return unique

    def generate(
        self,
        user_message: str,
        system_prompt: Optional[str] = None,
        history: Optional[List[Dict[str, str]]] = None,
        model: Optional[str] = None,
    ) -> str:
        """
        Generate a completion, falling back through the cascade.

        Args:
            user_message: The prompt for this turn
            system_prompt: Instructions for the model
            history: Earlier messages as role/content dicts
            model: Model to try before the cascade

        Returns:
            The completion text

        Raises:
            LLMError: If every provider fails
        """
        if system_prompt is None:
            system_prompt = "You are a helpful assistant."

        last_error = None

        for i, attempt in enumerate(self._cascade(model)):
            provider = attempt["provider"]
            target_model = attempt["model"]

            try:
                if i > 0:
                    logger.info(f"Attempt {i + 1}: falling back to {provider.title()} ({target_model})")
                    time.sleep(self.backoff_seconds * i)

                if provider == "google":
                    text = self._generate_google(user_message, system_prompt, history, target_model)
                else:
                    text = self._generate_groq(user_message, system_prompt, history, target_model)

                if not text:
                    raise ValueError("Empty completion")
                return text.strip()

            except Exception as e:
                error_msg = str(e).lower()
                is_rate_limit = "429" in error_msg or "quota" in error_msg or "rate limit" in error_msg

                log = logger.warning if is_rate_limit else logger.error
                log(f"Provider failed ({provider}/{target_model}): {e}")

                last_error = e

        logger.critical("All LLM providers failed")
        raise LLMError(f"All LLM providers failed. Last error: {last_error}")

    def _generate_groq(self, user_message, system_prompt, history, model):
        """Execute request using Groq."""
        messages = [{"role": "system", "content": system_prompt}]
        if history:
            messages.extend(history)
        messages.append({"role": "user", "content": user_message})

        response = self.groq_client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        return response.choices[0].message.content

    def _generate_google(self, user_message, system_prompt, history, model):
        """Execute request using Google Gemini."""
        model_instance = genai.GenerativeModel(
            model_name=model,
            system_instruction=system_prompt
        )

        # OpenAI-style history -> Gemini roles
        chat_history = []
        if history:
            for msg in history:
                role = "user" if msg["role"] == "user" else "model"
                chat_history.append({"role": role, "parts": [msg["content"]]})

        generation_config = genai.types.GenerationConfig(
            temperature=self.temperature,
            max_output_tokens=self.max_tokens,
        )

        chat = model_instance.start_chat(history=chat_history)
        response = chat.send_message(user_message, generation_config=generation_config)
        return response.text


# Singleton instance
_llm_client: Optional[LLMClient] = None


def get_llm_client() -> LLMClient:
    """Get or create the global LLMClient instance."""
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient()
    return _llm_client


def reset_llm_client() -> None:
    """Reset the global LLMClient (useful for testing)."""
    global _llm_client
    _llm_client = None
