# services/completion_client.py
"""
Thin wrapper over the OpenAI chat completions API.

Unlike a UI-facing client, errors are not turned into friendly text here:
every upstream failure is raised as CompletionError so the proxy endpoint
can answer with a 500.
"""
import logging
from typing import Dict, List, Optional

from openai import OpenAI, OpenAIError

from healthbuddy.core.config import settings

logger = logging.getLogger(__name__)


class CompletionError(Exception):
    """Raised when the completion API call fails for any reason."""
    pass


class CompletionClient:
    """Blocking chat-completion client with fixed sampling parameters."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ):
        self.api_key = api_key or settings.OPENAI_API_KEY
        self.model = model or settings.OPENAI_MODEL
        self.temperature = settings.CHAT_TEMPERATURE if temperature is None else temperature
        self.max_tokens = max_tokens or settings.CHAT_MAX_TOKENS
        self._client: Optional[OpenAI] = None

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            if not self.api_key:
                raise CompletionError("OPENAI_API_KEY is not configured")
            self._client = OpenAI(api_key=self.api_key)
            logger.info(f"OpenAI client initialised (model: {self.model})")
        return self._client

    def complete(self, messages: List[Dict[str, str]]) -> str:
        """
        Run one chat completion.

        Args:
            messages: [{"role": "system" | "user" | "assistant", "content": "..."}]

        Returns:
            The generated text, verbatim

        Raises:
            CompletionError: On any API, transport or response-shape failure
        """
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except OpenAIError as e:
            logger.error(f"Completion API error: {e}")
            raise CompletionError(str(e)) from e

        if not response.choices or response.choices[0].message.content is None:
            raise CompletionError("Completion API returned no content")

        if response.usage is not None:
            logger.debug(f"Completion succeeded (tokens: {response.usage.total_tokens})")
        return response.choices[0].message.content


_default_client: Optional[CompletionClient] = None


def get_completion_client() -> CompletionClient:
    """FastAPI dependency returning the process-wide completion client."""
    global _default_client
    if _default_client is None:
        _default_client = CompletionClient()
    return _default_client
