"""
AI Notes - note summarization backend.

This package provides multi-provider AI summarization for notes, with a local
extractive fallback and a small Flask API for the note-facing operations.
"""

__version__ = "0.1.0"
