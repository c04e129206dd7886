"""
Models module for LLM client abstraction.

Provides a unified interface for chat completions.
"""

from ai_interviewer.models.llm_client import (
    DEFAULT_MODEL,
    CompletionClientBase,
    CompletionConfig,
    Message,
    MockCompletionClient,
    OpenRouterClient,
    PromptKind,
    UpstreamError,
    build_completion_client,
)

__all__ = [
    "CompletionClientBase",
    "CompletionConfig",
    "DEFAULT_MODEL",
    "Message",
    "MockCompletionClient",
    "OpenRouterClient",
    "PromptKind",
    "UpstreamError",
    "build_completion_client",
]
