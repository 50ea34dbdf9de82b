"""Web API modules for AI Notes."""

from ai_notes.web.app import create_app

__all__ = ["create_app"]
