"""
HTTP API module.

Exposes the interview operations as JSON endpoints.
"""

from ai_interviewer.api.routes import create_app, router

__all__ = ["create_app", "router"]
