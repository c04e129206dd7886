"""Pydantic schemas for the interview HTTP API."""

from typing import Optional

from pydantic import BaseModel


class StartReq(BaseModel):
    resumeText: Optional[str] = None
    jobDescriptionText: Optional[str] = None


class StartResp(BaseModel):
    interviewId: str
    firstQuestion: str


class ChatReq(BaseModel):
    interviewId: Optional[str] = None
    userAnswer: Optional[str] = None


class ChatResp(BaseModel):
    nextQuestion: str
    shouldEnd: bool
    interviewId: str


class EndReq(BaseModel):
    interviewId: Optional[str] = None


class EndResp(BaseModel):
    interviewId: str


class FeedbackResp(BaseModel):
    feedback: str
    interviewId: str
