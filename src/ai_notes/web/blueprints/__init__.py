"""
Flask blueprints for the AI Notes API.
"""

from ai_notes.web.blueprints.ai import AIBlueprint

__all__ = ["AIBlueprint"]
