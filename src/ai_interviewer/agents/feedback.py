"""
Feedback synthesizer.

Produces the final assessment of a candidate from the resume, the job
description and the full interview transcript.
"""

import logging

from ai_interviewer.agents.condenser import TextCondenser
from ai_interviewer.agents.prompt_builder import PromptBuilder
from ai_interviewer.models.llm_client import CompletionClientBase, PromptKind, UpstreamError
from ai_interviewer.orchestrator.schemas import Turn
from ai_interviewer.orchestrator.transcript import to_chat_messages

logger = logging.getLogger(__name__)

FEEDBACK_FAILED = "Thank you for your time. (AI feedback generation failed)"
FEEDBACK_EMPTY = "Thank you for your time. (Feedback generation failed or was empty)"

DEFAULT_SUMMARY_TARGET = 700
DEFAULT_FEEDBACK_MAX_TOKENS = 500


class FeedbackSynthesizer:
    """
    Generates end-of-interview feedback.

    Always returns text: model failures become a fixed fallback string so a
    session can still complete.
    """

    def __init__(
        self,
        llm_client: CompletionClientBase,
        condenser: TextCondenser | None = None,
        prompt_builder: PromptBuilder | None = None,
        summary_target: int = DEFAULT_SUMMARY_TARGET,
        max_tokens: int = DEFAULT_FEEDBACK_MAX_TOKENS,
    ) -> None:
        self._llm_client = llm_client
        self._prompts = prompt_builder or PromptBuilder()
        self._condenser = condenser or TextCondenser(llm_client, self._prompts)
        self._summary_target = summary_target
        self._max_tokens = max_tokens

    async def synthesize(
        self,
        resume_text: str,
        job_description_text: str,
        transcript: list[Turn],
    ) -> str:
        """
        Generate feedback for a finished interview.

        Args:
            resume_text: Full resume text.
            job_description_text: Full job description text.
            transcript: Every turn of the interview.

        Returns:
            Feedback text, or a fallback string if generation failed.
        """
        resume = await self._condenser.condense(
            resume_text,
            "candidate experience evaluation for final interview feedback",
            self._summary_target,
        )
        job_description = await self._condenser.condense(
            job_description_text,
            "job requirements analysis for final interview feedback",
            self._summary_target,
        )

        messages = self._prompts.feedback(resume, job_description, to_chat_messages(transcript))

        try:
            feedback = await self._llm_client.complete(
                messages,
                max_tokens=self._max_tokens,
                purpose=PromptKind.FEEDBACK,
            )
        except UpstreamError as e:
            logger.error(f"Feedback generation failed: {e}")
            return FEEDBACK_FAILED

        feedback = (feedback or "").strip()
        if not feedback:
            logger.warning("Feedback generation returned empty text")
            return FEEDBACK_EMPTY
        return feedback
