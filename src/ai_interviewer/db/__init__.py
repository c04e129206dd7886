"""
Database module for persistence.

Provides the SQLAlchemy model and the session stores used by the
orchestrator.
"""

from ai_interviewer.db.models import Base, InterviewModel
from ai_interviewer.db.repository import (
    InMemorySessionStore,
    SessionStore,
    SqlSessionStore,
)

__all__ = [
    "Base",
    "InterviewModel",
    "InMemorySessionStore",
    "SessionStore",
    "SqlSessionStore",
]
