"""
LLM client abstraction.

Provides a unified interface for chat completions. The production client
talks to an OpenRouter-compatible chat-completions endpoint over HTTP; the
mock client returns canned replies so the whole interview can run offline.
"""

import logging
import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

import httpx
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DEFAULT_OPENROUTER_ENDPOINT = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_MODEL = "openai/gpt-3.5-turbo"
DEFAULT_MAX_TOKENS = 100


class Message(BaseModel):
    """A message in a conversation."""

    role: str = Field(..., description="Role of the speaker (system, user, assistant)")
    content: str = Field(..., description="Message content")


class PromptKind(str, Enum):
    """What a completion request is for."""

    SUMMARY = "summary"
    OPENING = "opening"
    FOLLOW_UP = "follow_up"
    FEEDBACK = "feedback"


class CompletionConfig(BaseModel):
    """Explicit configuration handed to a completion client."""

    mock_completions: bool = Field(default=False, description="Use canned offline replies")
    api_key: str = Field(default="", description="Bearer token for the endpoint")
    endpoint: str = Field(default=DEFAULT_OPENROUTER_ENDPOINT, description="Chat completions URL")
    model: str = Field(default=DEFAULT_MODEL, description="Default model name")
    timeout: float = Field(default=120, description="Request timeout in seconds")
    mock_turns_before_end: int = Field(
        default=3,
        description="Candidate answers after which the mock interviewer ends the interview",
    )


class UpstreamError(Exception):
    """Exception raised when the model backend fails or returns nothing usable."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class CompletionClientBase(ABC):
    """Abstract base class for completion clients."""

    @abstractmethod
    async def complete(
        self,
        messages: list[Message],
        *,
        model: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        purpose: PromptKind | None = None,
    ) -> str:
        """
        Generate the assistant reply for a conversation.

        Args:
            messages: Role-tagged conversation.
            model: Model name (client default if None).
            max_tokens: Maximum tokens to generate.
            purpose: What the request is for; used for logging and by mocks.

        Returns:
            The assistant text, stripped of surrounding whitespace.

        Raises:
            UpstreamError: If the backend fails or returns no usable message.
        """
        ...

    async def close(self) -> None:
        """Close the client and release resources."""


class OpenRouterClient(CompletionClientBase):
    """
    HTTP client for OpenRouter-style chat completions.

    Each call is a single attempt; callers substitute fallback text on
    failure rather than retrying.
    """

    def __init__(
        self,
        config: CompletionConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Endpoint, credentials, default model and timeout.
            http_client: Pre-built HTTP client (created lazily if None).
        """
        self._config = config
        self._client = http_client
        self._owns_client = http_client is None

        logger.info(f"Initialized completion client with model: {config.model}")

    @property
    def model(self) -> str:
        """Get the default model name."""
        return self._config.model

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._config.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def complete(
        self,
        messages: list[Message],
        *,
        model: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        purpose: PromptKind | None = None,
    ) -> str:
        if not self._config.api_key:
            raise UpstreamError("Completion API key is not configured")

        payload = {
            "model": model or self._config.model,
            "messages": [m.model_dump() for m in messages],
            "max_tokens": max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        label = purpose.value if purpose else "unspecified"
        logger.debug(f"Sending {len(messages)} messages for {label} (max_tokens={max_tokens})")

        try:
            response = await self._get_client().post(
                self._config.endpoint,
                json=payload,
                headers=headers,
            )
        except httpx.TimeoutException as e:
            logger.warning(f"Completion request timed out after {self._config.timeout}s ({label})")
            raise UpstreamError(f"Completion request timed out after {self._config.timeout} seconds") from e
        except httpx.HTTPError as e:
            logger.warning(f"Completion request failed ({label}): {e}")
            raise UpstreamError(f"Completion request failed: {e}") from e

        if response.status_code < 200 or response.status_code >= 300:
            logger.warning(f"Completion endpoint returned {response.status_code} ({label})")
            raise UpstreamError(
                f"Completion endpoint returned HTTP {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError(
                "Completion response is not valid JSON",
                status_code=response.status_code,
                body=response.text,
            ) from e

        content = self._extract_content(data)
        if not content:
            logger.warning(f"Completion response had no usable assistant message ({label})")
            raise UpstreamError(
                "Completion response lacks a usable assistant message",
                status_code=response.status_code,
                body=response.text,
            )

        logger.debug(f"Completion response length: {len(content)} chars")
        return content

    @staticmethod
    def _extract_content(data: Any) -> str:
        """Pull the first choice's assistant text out of a response body."""
        if not isinstance(data, dict):
            return ""
        choices = data.get("choices")
        if not isinstance(choices, list) or not choices:
            return ""
        first = choices[0]
        if not isinstance(first, dict):
            return ""
        message = first.get("message")
        if not isinstance(message, dict):
            return ""
        content = message.get("content")
        if not isinstance(content, str):
            return ""
        return content.strip()


# Canned replies for offline runs
MOCK_SUMMARY_FALLBACK = "(Mock Summary)"
MOCK_SUMMARY_CHARS_PER_TOKEN = 2
MOCK_OPENING_QUESTION = "(Mock AI) Tell me about your experience with a relevant skill from the JD?"
MOCK_FOLLOW_UP = "(Mock AI) That's interesting. Can you give an example?"
MOCK_CLOSING = "[END_INTERVIEW] (Mock AI) Thank you, that covers everything I wanted to ask."
MOCK_FEEDBACK = (
    "(Mock AI) Overall, a good interview. "
    "Consider elaborating more on your project experiences next time."
)

# Pulls purpose, target size and source text back out of a summary prompt
_SUMMARY_REQUEST = re.compile(
    r"will be used for (?P<purpose>.+?)\. .*?around (?P<target>\d+) tokens"
    r".*?\n---\n(?P<text>.*)\n---\nSummary:",
    re.DOTALL,
)


class MockCompletionClient(CompletionClientBase):
    """
    Deterministic offline client.

    Replies depend only on the request purpose and, for follow-ups, on how
    many candidate answers the conversation already holds. Summaries echo
    the head of the source text.
    """

    def __init__(self, turns_before_end: int = 3) -> None:
        self._turns_before_end = turns_before_end
        logger.warning("Mock completions enabled. No model calls will be made.")

    async def complete(
        self,
        messages: list[Message],
        *,
        model: str | None = None,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        purpose: PromptKind | None = None,
    ) -> str:
        if purpose == PromptKind.SUMMARY:
            return self._summarize(messages)
        if purpose == PromptKind.OPENING:
            return MOCK_OPENING_QUESTION
        if purpose == PromptKind.FEEDBACK:
            return MOCK_FEEDBACK

        answers = sum(1 for m in messages if m.role == "user")
        if answers >= self._turns_before_end:
            return MOCK_CLOSING
        return MOCK_FOLLOW_UP

    @staticmethod
    def _summarize(messages: list[Message]) -> str:
        """Echo the head of the text being summarized, tagged with its purpose."""
        prompt = messages[-1].content if messages else ""
        match = _SUMMARY_REQUEST.search(prompt)
        if match is None:
            return MOCK_SUMMARY_FALLBACK

        limit = int(match.group("target")) * MOCK_SUMMARY_CHARS_PER_TOKEN
        return f"(Mock Summary for {match.group('purpose')}) {match.group('text')[:limit]}"


def build_completion_client(config: CompletionConfig) -> CompletionClientBase:
    """
    Create the completion client selected by configuration.

    Args:
        config: Completion configuration.

    Returns:
        A mock client when mock mode is on, otherwise an HTTP client.
    """
    if config.mock_completions:
        return MockCompletionClient(turns_before_end=config.mock_turns_before_end)
    return OpenRouterClient(config)
