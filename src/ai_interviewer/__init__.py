"""
AI Interviewer.

Runs a multi-turn, model-driven interview from a resume and a job
description, and produces structured feedback once the interview ends.
"""

__version__ = "0.1.0"
