"""
Serializer functions for converting models to dictionaries.
"""

from datetime import datetime
from typing import Any, Optional


def serialize_datetime(dt: Optional[datetime]) -> Optional[str]:
    """Convert datetime to ISO format string.

    Args:
        dt: Datetime object or None

    Returns:
        ISO format string or None
    """
    return dt.isoformat() if dt else None


def note_to_dict(note) -> dict:
    """Convert the summary-facing fields of a Note model to a dictionary.

    Args:
        note: NoteModel instance

    Returns:
        Dictionary representation
    """
    from ai_notes.models.note import NoteSummaryResponse

    data = NoteSummaryResponse.model_validate(note).model_dump()
    data["summarized_at"] = serialize_datetime(data["summarized_at"])
    return data


def api_response(
    success: bool = True,
    data: Any = None,
    message: Optional[str] = None,
    error: Optional[str] = None,
    status: int = 200,
    code: Optional[str] = None,
) -> tuple:
    """Standard API response format.

    Args:
        success: Whether the request was successful
        data: Response data
        message: Success message
        error: Error message
        status: HTTP status code
        code: Machine-readable error code

    Returns:
        Flask response with JSON data
    """
    from flask import jsonify

    response_data = {
        "success": success,
        "data": data,
        "message": message,
        "error": error,
    }
    if code:
        response_data["code"] = code
    return jsonify(response_data), status
