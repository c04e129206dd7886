"""
Session store implementations.

A session store keeps interview sessions by id. Updates replace whole
fields (transcript, status, feedback) in one write; the store never merges
turns.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from ai_interviewer.db.models import Base, InterviewModel
from ai_interviewer.errors import NotFoundError, StoreError
from ai_interviewer.orchestrator.schemas import Session, SessionStatus, SessionUpdate, Turn

logger = logging.getLogger(__name__)


class SessionStore(ABC):
    """Abstract key-value store for interview sessions."""

    @abstractmethod
    async def get(self, interview_id: str) -> Session:
        """
        Get a session by id.

        Args:
            interview_id: The session identifier.

        Returns:
            The stored session.

        Raises:
            NotFoundError: If no session has this id.
            StoreError: If the store cannot be read.
        """
        ...

    @abstractmethod
    async def create(self, session: Session) -> str:
        """
        Store a new session and assign it an id.

        Args:
            session: Session to store; its interview_id is ignored.

        Returns:
            The generated interview id.

        Raises:
            StoreError: If the session cannot be written.
        """
        ...

    @abstractmethod
    async def update(self, interview_id: str, update: SessionUpdate) -> None:
        """
        Replace the fields set on the update, atomically.

        Args:
            interview_id: The session identifier.
            update: Fields to replace.

        Raises:
            NotFoundError: If no session has this id.
            StoreError: If the session cannot be written.
        """
        ...

    async def close(self) -> None:
        """Release any resources held by the store."""


class InMemorySessionStore(SessionStore):
    """Process-local store backed by a dict. Sessions are copied in and out."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    async def get(self, interview_id: str) -> Session:
        session = self._sessions.get(interview_id)
        if session is None:
            raise NotFoundError(interview_id)
        return session.model_copy(deep=True)

    async def create(self, session: Session) -> str:
        interview_id = str(uuid4())
        self._sessions[interview_id] = session.model_copy(
            update={"interview_id": interview_id},
            deep=True,
        )
        return interview_id

    async def update(self, interview_id: str, update: SessionUpdate) -> None:
        current = self._sessions.get(interview_id)
        if current is None:
            raise NotFoundError(interview_id)

        changes = update.model_dump(exclude_none=True)
        if update.transcript is not None:
            changes["transcript"] = [turn.model_copy() for turn in update.transcript]
        changes["updated_at"] = datetime.now(timezone.utc)
        self._sessions[interview_id] = current.model_copy(update=changes, deep=True)


class SqlSessionStore(SessionStore):
    """
    SQLAlchemy-backed store.

    Every call runs in its own transaction, so a failed update leaves the
    previous row untouched.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        """
        Initialize the store.

        Args:
            engine: Async SQLAlchemy engine.
        """
        self._engine = engine
        self._session_factory = async_sessionmaker(engine, expire_on_commit=False)

    @classmethod
    def from_url(cls, database_url: str, **engine_kwargs) -> "SqlSessionStore":
        """Create a store with a new engine for the given URL."""
        return cls(create_async_engine(database_url, **engine_kwargs))

    async def create_schema(self) -> None:
        """Create the interviews table if it does not exist."""
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to create schema: {e}") from e

    async def close(self) -> None:
        """Dispose of the engine's connection pool."""
        await self._engine.dispose()

    async def get(self, interview_id: str) -> Session:
        try:
            async with self._session_factory() as db_session:
                row = await db_session.get(InterviewModel, interview_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load interview {interview_id}: {e}")
            raise StoreError(f"Failed to load interview {interview_id}") from e

        if row is None:
            raise NotFoundError(interview_id)
        return self._to_session(row)

    async def create(self, session: Session) -> str:
        interview_id = str(uuid4())
        row = InterviewModel(
            id=interview_id,
            resume_text=session.resume_text,
            job_description_text=session.job_description_text,
            transcript=self._dump_transcript(session.transcript),
            status=session.status.value,
            feedback=session.feedback,
            user_id=session.owner_id,
            created_at=session.created_at,
            updated_at=session.updated_at,
        )
        try:
            async with self._session_factory() as db_session, db_session.begin():
                db_session.add(row)
        except SQLAlchemyError as e:
            logger.error(f"Failed to create interview: {e}")
            raise StoreError("Failed to create interview session") from e

        logger.debug(f"Created interview row {interview_id}")
        return interview_id

    async def update(self, interview_id: str, update: SessionUpdate) -> None:
        try:
            async with self._session_factory() as db_session, db_session.begin():
                row = await db_session.get(InterviewModel, interview_id)
                if row is None:
                    raise NotFoundError(interview_id)
                if update.transcript is not None:
                    row.transcript = self._dump_transcript(update.transcript)
                if update.status is not None:
                    row.status = update.status.value
                if update.feedback is not None:
                    row.feedback = update.feedback
        except SQLAlchemyError as e:
            logger.error(f"Failed to update interview {interview_id}: {e}")
            raise StoreError(f"Failed to update interview {interview_id}") from e

    @staticmethod
    def _dump_transcript(transcript: list[Turn]) -> list[dict]:
        return [turn.model_dump(mode="json") for turn in transcript]

    @staticmethod
    def _to_session(row: InterviewModel) -> Session:
        """Convert a database row to a Session schema."""
        return Session(
            interview_id=row.id,
            resume_text=row.resume_text,
            job_description_text=row.job_description_text,
            transcript=[Turn.model_validate(item) for item in row.transcript or []],
            status=SessionStatus(row.status),
            feedback=row.feedback,
            owner_id=row.user_id,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
