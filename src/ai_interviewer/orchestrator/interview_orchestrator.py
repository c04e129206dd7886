"""
Interview orchestrator.

Coordinates the interview session lifecycle: opening question, follow-up
turns, detection of the interviewer's termination signal, and one-time
feedback synthesis.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from ai_interviewer.agents import FeedbackSynthesizer, PromptBuilder, TextCondenser
from ai_interviewer.db.repository import SessionStore
from ai_interviewer.errors import InterviewClosedError, NotReadyError, ValidationError
from ai_interviewer.models.llm_client import CompletionClientBase, PromptKind, UpstreamError
from ai_interviewer.orchestrator.response_parser import ModelReply, ReplyKind, parse_reply
from ai_interviewer.orchestrator.schemas import (
    AnswerResult,
    EndResult,
    FeedbackResult,
    Sender,
    Session,
    SessionStatus,
    SessionUpdate,
    StartResult,
    Turn,
)
from ai_interviewer.orchestrator.transcript import append_turn, count_answers, to_chat_messages

OPENING_FALLBACK = "Tell me about yourself."
OPENING_FAILED = "Tell me about yourself. (AI question generation failed)"
FOLLOW_UP_FAILED = "Can you elaborate on that? (AI question generation failed)"

DEFAULT_SUMMARY_TARGET = 700
DEFAULT_QUESTION_MAX_TOKENS = 100
DEFAULT_FEEDBACK_MAX_TOKENS = 500


def _strip_nulls(text: str) -> str:
    return text.replace("\x00", "")


class InterviewOrchestrator:
    """
    Drives interview sessions through STARTED -> IN_PROGRESS -> COMPLETED.

    Session state lives in the store; every operation reads the session,
    computes the complete new field values, and writes them in one update.
    Model failures never fail an operation: fixed fallback text is used and
    the conversation moves on. Store failures propagate unchanged.
    """

    def __init__(
        self,
        llm_client: CompletionClientBase,
        store: SessionStore,
        prompt_builder: PromptBuilder | None = None,
        condenser: TextCondenser | None = None,
        feedback_synthesizer: FeedbackSynthesizer | None = None,
        summary_target: int = DEFAULT_SUMMARY_TARGET,
        question_max_tokens: int = DEFAULT_QUESTION_MAX_TOKENS,
        feedback_max_tokens: int = DEFAULT_FEEDBACK_MAX_TOKENS,
    ) -> None:
        """
        Initialize the interview orchestrator.

        Args:
            llm_client: Completion client shared by all helpers.
            store: Session store holding interview state.
            prompt_builder: Prompt builder (creates default if None).
            condenser: Text condenser (creates default if None).
            feedback_synthesizer: Feedback synthesizer (creates default if None).
            summary_target: Target token size of resume/JD summaries.
            question_max_tokens: Token budget for interviewer questions.
            feedback_max_tokens: Token budget for the final feedback.
        """
        self._logger = logging.getLogger(__name__)
        self._llm_client = llm_client
        self._store = store
        self._prompts = prompt_builder or PromptBuilder()
        self._condenser = condenser or TextCondenser(llm_client, self._prompts)
        self._feedback = feedback_synthesizer or FeedbackSynthesizer(
            llm_client,
            condenser=self._condenser,
            prompt_builder=self._prompts,
            summary_target=summary_target,
            max_tokens=feedback_max_tokens,
        )
        self._summary_target = summary_target
        self._question_max_tokens = question_max_tokens

        # Serializes operations on the same interview within this process
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    @property
    def store(self) -> SessionStore:
        """Get the session store."""
        return self._store

    @asynccontextmanager
    async def _session_lock(self, interview_id: str) -> AsyncIterator[None]:
        # Entries live only while some operation holds or waits on the lock
        lock = self._locks.setdefault(interview_id, asyncio.Lock())
        self._lock_users[interview_id] = self._lock_users.get(interview_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[interview_id] -= 1
            if not self._lock_users[interview_id]:
                del self._lock_users[interview_id]
                del self._locks[interview_id]

    async def start_interview(
        self,
        resume_text: str,
        job_description_text: str,
        *,
        caller_id: str | None = None,
    ) -> StartResult:
        """
        Start a new interview session.

        Args:
            resume_text: Candidate resume text.
            job_description_text: Job description text.
            caller_id: Identity of the caller, recorded on the session.

        Returns:
            The new interview id and the opening question.

        Raises:
            ValidationError: If either text is missing or empty.
            StoreError: If the session cannot be created.
        """
        resume_text = _strip_nulls(resume_text) if isinstance(resume_text, str) else ""
        job_description_text = (
            _strip_nulls(job_description_text) if isinstance(job_description_text, str) else ""
        )
        if not resume_text.strip() or not job_description_text.strip():
            raise ValidationError("Resume text and Job Description text are required.")

        self._logger.info(
            f"Starting interview (resume: {len(resume_text)} chars, "
            f"job description: {len(job_description_text)} chars)"
        )

        resume = await self._condenser.condense(
            resume_text,
            "candidate experience evaluation for an interview",
            self._summary_target,
        )
        job_description = await self._condenser.condense(
            job_description_text,
            "job requirements analysis for an interview",
            self._summary_target,
        )

        first_question = await self._ask_opening_question(resume, job_description)

        session = Session(
            resume_text=resume_text,
            job_description_text=job_description_text,
            transcript=append_turn([], Sender.AI, first_question),
            status=SessionStatus.STARTED,
            owner_id=caller_id,
        )
        interview_id = await self._store.create(session)
        self._logger.info(f"Interview {interview_id} started")

        return StartResult(interview_id=interview_id, first_question=first_question)

    async def submit_answer(
        self,
        interview_id: str,
        user_answer: str,
        *,
        caller_id: str | None = None,
    ) -> AnswerResult:
        """
        Record a candidate answer and produce the next interviewer turn.

        If the interviewer ends the interview, feedback is synthesized and
        stored together with the final transcript and the COMPLETED status.

        Args:
            interview_id: Session identifier.
            user_answer: Candidate's answer.
            caller_id: Identity of the caller (not enforced).

        Returns:
            The interviewer's reply and whether the interview ended.

        Raises:
            ValidationError: If the answer is empty.
            NotFoundError: If no session has this id.
            InterviewClosedError: If the interview is already completed.
            StoreError: If the session cannot be read or written.
        """
        user_answer = _strip_nulls(user_answer) if isinstance(user_answer, str) else ""
        if not user_answer.strip():
            raise ValidationError("Interview ID and user answer are required.")

        async with self._session_lock(interview_id):
            session = await self._store.get(interview_id)
            if session.is_complete:
                raise InterviewClosedError(interview_id)

            self._logger.debug(f"Answer for {interview_id} from caller {caller_id or 'anonymous'}")

            transcript = append_turn(session.transcript, Sender.USER, user_answer)
            reply = await self._next_interviewer_reply(transcript)
            transcript = append_turn(transcript, Sender.AI, reply.text)

            update = SessionUpdate(transcript=transcript, status=SessionStatus.IN_PROGRESS)
            if reply.ends_interview:
                self._logger.info(
                    f"Interviewer ended interview {interview_id} after "
                    f"{count_answers(transcript)} answers, generating feedback"
                )
                update.feedback = await self._feedback.synthesize(
                    session.resume_text,
                    session.job_description_text,
                    transcript,
                )
                update.status = SessionStatus.COMPLETED

            await self._store.update(interview_id, update)

        if reply.ends_interview:
            self._logger.info(f"Interview {interview_id} completed")
        return AnswerResult(next_question=reply.text, should_end=reply.ends_interview)

    async def end_interview(
        self,
        interview_id: str,
        *,
        caller_id: str | None = None,
    ) -> EndResult:
        """
        Complete an interview and store its feedback.

        Idempotent: a completed session that already has feedback is left
        untouched and no model call is made.

        Args:
            interview_id: Session identifier.
            caller_id: Identity of the caller (not enforced).

        Returns:
            The interview id; feedback is read through get_feedback.

        Raises:
            NotFoundError: If no session has this id.
            StoreError: If the session cannot be read or written.
        """
        async with self._session_lock(interview_id):
            session = await self._store.get(interview_id)

            if session.is_complete and session.has_feedback:
                self._logger.info(f"Interview {interview_id} already completed, keeping feedback")
                return EndResult(interview_id=interview_id)

            self._logger.info(
                f"Ending interview {interview_id} for caller {caller_id or 'anonymous'}, generating feedback"
            )
            feedback = await self._feedback.synthesize(
                session.resume_text,
                session.job_description_text,
                session.transcript,
            )
            await self._store.update(
                interview_id,
                SessionUpdate(feedback=feedback, status=SessionStatus.COMPLETED),
            )

        self._logger.info(f"Interview {interview_id} completed")
        return EndResult(interview_id=interview_id)

    async def get_feedback(self, interview_id: str) -> FeedbackResult:
        """
        Read the stored feedback of a completed interview.

        Args:
            interview_id: Session identifier.

        Returns:
            The stored feedback.

        Raises:
            NotFoundError: If no session has this id.
            NotReadyError: If the session is not completed or has no feedback.
            StoreError: If the session cannot be read.
        """
        session = await self._store.get(interview_id)
        if not session.is_complete or not session.has_feedback:
            self._logger.warning(
                f"Feedback requested for interview {interview_id} in status {session.status.value}"
            )
            raise NotReadyError(interview_id)
        return FeedbackResult(interview_id=interview_id, feedback=session.feedback)

    async def get_session(self, interview_id: str) -> Session:
        """Load a session (transcript included) from the store."""
        return await self._store.get(interview_id)

    async def _ask_opening_question(self, resume: str, job_description: str) -> str:
        """
        Generate the first interviewer question.

        Returns:
            Question text, or fixed fallback text if the model failed.
        """
        messages = self._prompts.opening_question(resume, job_description)
        try:
            question = await self._llm_client.complete(
                messages,
                max_tokens=self._question_max_tokens,
                purpose=PromptKind.OPENING,
            )
        except UpstreamError as e:
            self._logger.warning(f"Opening question generation failed: {e}")
            return OPENING_FAILED

        return _strip_nulls(question or "").strip() or OPENING_FALLBACK

    async def _next_interviewer_reply(self, transcript: list[Turn]) -> ModelReply:
        """
        Ask the model for the next interviewer turn.

        Args:
            transcript: Full transcript ending with the candidate's answer.

        Returns:
            The parsed reply; a question with fallback text if the model failed.
        """
        messages = self._prompts.follow_up(to_chat_messages(transcript))
        try:
            raw = await self._llm_client.complete(
                messages,
                max_tokens=self._question_max_tokens,
                purpose=PromptKind.FOLLOW_UP,
            )
        except UpstreamError as e:
            self._logger.warning(f"Follow-up generation failed: {e}")
            return ModelReply(kind=ReplyKind.QUESTION, text=FOLLOW_UP_FAILED)

        return parse_reply(_strip_nulls(raw or ""))
