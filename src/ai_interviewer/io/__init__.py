"""
IO module for interview interfaces.

Provides the terminal interface for conducting interviews.
"""

from ai_interviewer.io.documents import read_document
from ai_interviewer.io.text_interface import InterviewInterface, TextInterface

__all__ = ["InterviewInterface", "TextInterface", "read_document"]
