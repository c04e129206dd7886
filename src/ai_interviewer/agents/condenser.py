"""
Text condenser.

Shrinks long resumes and job descriptions to a bounded size before they are
embedded in prompts.
"""

import logging

from ai_interviewer.agents.prompt_builder import PromptBuilder
from ai_interviewer.models.llm_client import CompletionClientBase, PromptKind, UpstreamError

logger = logging.getLogger(__name__)

# Rough characters-per-token estimate used instead of a tokenizer
CHARS_PER_TOKEN = 4
SHORT_TEXT_FACTOR = 1.5
TRUNCATION_CHARS_PER_TOKEN = 3
SUMMARY_TOKEN_HEADROOM = 200


class TextCondenser:
    """
    Summarizes text that is too long to embed in a prompt as-is.

    Short text passes through unchanged. Long text is summarized with a
    single model call; when that call fails the original is truncated, so
    condensing never raises.
    """

    def __init__(
        self,
        llm_client: CompletionClientBase,
        prompt_builder: PromptBuilder | None = None,
    ) -> None:
        """
        Initialize the condenser.

        Args:
            llm_client: Completion client used for summaries.
            prompt_builder: Prompt builder (creates default if None).
        """
        self._llm_client = llm_client
        self._prompts = prompt_builder or PromptBuilder()

    @staticmethod
    def needs_condensing(text: str, target_length: int) -> bool:
        """Check whether text is long enough to be worth summarizing."""
        return len(text) >= target_length * CHARS_PER_TOKEN * SHORT_TEXT_FACTOR

    @staticmethod
    def truncate(text: str, target_length: int) -> str:
        """Deterministic fallback used when summarization is unavailable."""
        return text[: target_length * TRUNCATION_CHARS_PER_TOKEN]

    async def condense(self, text: str, purpose: str, target_length: int) -> str:
        """
        Reduce text to roughly target_length tokens.

        Args:
            text: Text to condense.
            purpose: What the result will be used for; steers what to keep.
            target_length: Target size in tokens.

        Returns:
            The original text if already short, the model's summary, or a
            truncated copy of the original if summarization failed.
        """
        if not isinstance(text, str) or not text.strip():
            return ""

        if not self.needs_condensing(text, target_length):
            return text

        logger.info(f"Summarizing {len(text)} chars for: {purpose}")
        messages = self._prompts.summary(text, purpose, target_length)

        try:
            summary = await self._llm_client.complete(
                messages,
                max_tokens=target_length + SUMMARY_TOKEN_HEADROOM,
                purpose=PromptKind.SUMMARY,
            )
        except UpstreamError as e:
            logger.warning(f"Summarization failed for {purpose}, truncating instead: {e}")
            return self.truncate(text, target_length)

        summary = (summary or "").strip()
        if not summary or len(summary) > len(text):
            logger.warning(f"Summarization for {purpose} returned no usable text, truncating instead")
            return self.truncate(text, target_length)

        logger.debug(f"Summarized {purpose}: {len(text)} -> {len(summary)} chars")
        return summary
