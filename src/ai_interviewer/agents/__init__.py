"""
Agents module containing the model-facing interview helpers.

Each agent handles a specific aspect of the interview process.
"""

from ai_interviewer.agents.condenser import TextCondenser
from ai_interviewer.agents.feedback import FeedbackSynthesizer
from ai_interviewer.agents.prompt_builder import PromptBuilder

__all__ = [
    "FeedbackSynthesizer",
    "PromptBuilder",
    "TextCondenser",
]
