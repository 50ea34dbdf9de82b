"""
AI summarization API blueprint.

This module contains the note summarization endpoints and the admin
health/stats endpoints for the summarizer.
"""

import hmac
from datetime import timedelta
from typing import Optional

from flask import Blueprint, request
from pydantic import ValidationError

from ai_notes.config import WebConfig
from ai_notes.core.errors import InvalidInputError, SummarizationError
from ai_notes.core.services import SummarizerService
from ai_notes.logger import get_logger
from ai_notes.models.note import BatchSummarizeRequest, SummarizeRequest
from ai_notes.storage.database import DatabaseManager
from ai_notes.storage.repositories.note_repo import NoteRepository
from ai_notes.web.rate_limiter import SlidingWindowRateLimiter
from ai_notes.web.serializers import api_response, note_to_dict

logger = get_logger(__name__)

USER_HEADER = "X-User-Id"
ADMIN_HEADER = "X-Admin-Token"


def _validation_message(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first['msg']}" if location else first["msg"]


class AIBlueprint:
    """Blueprint for AI summarization operations."""

    def __init__(
        self,
        db_manager: DatabaseManager,
        service: SummarizerService,
        rate_limiter: SlidingWindowRateLimiter,
        web_config: WebConfig,
    ):
        """Initialize the AI blueprint.

        Args:
            db_manager: Shared database manager
            service: Summarizer facade
            rate_limiter: Per-user quota
            web_config: Web configuration
        """
        self.db_manager = db_manager
        self.service = service
        self.rate_limiter = rate_limiter
        self.web_config = web_config
        self.cache_age = timedelta(minutes=web_config.summary_cache_minutes)
        self.blueprint = Blueprint("ai", __name__, url_prefix="/api")
        self._register_routes()

    def _register_routes(self):
        """Register all AI routes."""
        self.blueprint.add_url_rule(
            "/notes/<int:note_id>/summarize",
            view_func=self._summarize_note,
            methods=["POST"],
        )
        self.blueprint.add_url_rule(
            "/ai/batch-summarize",
            view_func=self._batch_summarize,
            methods=["POST"],
        )
        self.blueprint.add_url_rule(
            "/ai/health",
            view_func=self._health,
            methods=["GET"],
        )
        self.blueprint.add_url_rule(
            "/ai/stats",
            view_func=self._stats,
            methods=["GET"],
        )

    # ------------------------------------------------------------------
    # Access control
    # ------------------------------------------------------------------

    @staticmethod
    def _current_user() -> Optional[str]:
        user_id = request.headers.get(USER_HEADER, "").strip()
        return user_id or None

    def _is_admin(self) -> bool:
        expected = self.web_config.admin_token
        supplied = request.headers.get(ADMIN_HEADER, "")
        if not expected or not supplied:
            return False
        return hmac.compare_digest(supplied.encode(), expected.encode())

    def _admin_guard(self):
        """Return an error response when the caller is not an admin, else None."""
        if not self._current_user():
            return api_response(
                success=False, error="Authentication required", code="UNAUTHORIZED", status=401
            )
        if not self._is_admin():
            return api_response(
                success=False, error="Admin access required", code="FORBIDDEN", status=403
            )
        return None

    def _rate_limited(self, error: Optional[str] = None):
        return api_response(
            success=False,
            error=error or "Too many AI requests. Please try again later.",
            code="RATE_LIMIT_EXCEEDED",
            status=429,
        )

    def _service_unavailable(self, error: SummarizationError):
        details = str(error) if self.web_config.debug else None
        return api_response(
            success=False,
            data={"details": details} if details else None,
            error="AI summarization service temporarily unavailable",
            code="AI_SERVICE_UNAVAILABLE",
            status=502,
        )

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def _summarize_note(self, note_id: int):
        """Generate and store a summary for one note.

        Returns:
            API response with the note's summary
        """
        user_id = self._current_user()
        if not user_id:
            return api_response(
                success=False, error="Authentication required", code="UNAUTHORIZED", status=401
            )

        if not self.rate_limiter.check(user_id):
            logger.warning(f"Summarization rate limit exceeded for user {user_id}")
            return self._rate_limited()

        try:
            params = SummarizeRequest(**(request.get_json(silent=True) or {}))
        except ValidationError as e:
            return api_response(
                success=False, error=_validation_message(e), code="VALIDATION_ERROR", status=400
            )

        with self.db_manager.session() as session:
            repo = NoteRepository(session)
            note = repo.get_for_user(note_id, user_id)

            if not note:
                return api_response(
                    success=False, error="Note not found", code="NOTE_NOT_FOUND", status=404
                )

            if repo.has_fresh_summary(note, self.cache_age):
                return api_response(
                    success=True,
                    data={"note": note_to_dict(note), "cached": True},
                    message="Summary retrieved from cache",
                )

            if len(note.content.strip()) < self.service.min_input_length:
                return api_response(
                    success=False,
                    error=(
                        f"Note content too short for summarization "
                        f"(minimum {self.service.min_input_length} characters)"
                    ),
                    code="CONTENT_TOO_SHORT",
                    status=400,
                )

            self.rate_limiter.record(user_id)

            try:
                result = self.service.summarize(
                    note.content,
                    max_length=self.web_config.summary_max_length,
                    style=params.style,
                    requester_id=user_id,
                )
            except InvalidInputError as e:
                return api_response(
                    success=False, error=str(e), code="VALIDATION_ERROR", status=400
                )
            except SummarizationError as e:
                logger.error(f"Summarization failed for note {note_id}: {e}")
                return self._service_unavailable(e)

            note = repo.update_summary(note, result.summary)
            logger.info(
                f"Summarized note {note_id} for user {user_id} via {result.provider}"
            )

            return api_response(
                success=True,
                data={
                    "note": note_to_dict(note),
                    "provider": result.provider,
                    "word_count": result.word_count,
                    "cached": False,
                },
                message="Summary generated successfully",
            )

    def _batch_summarize(self):
        """Summarize several notes in one request.

        Per-note failures are reported in ``errors`` without failing the batch.

        Returns:
            API response with per-note results and errors
        """
        user_id = self._current_user()
        if not user_id:
            return api_response(
                success=False, error="Authentication required", code="UNAUTHORIZED", status=401
            )

        try:
            params = BatchSummarizeRequest(**(request.get_json(silent=True) or {}))
        except ValidationError as e:
            return api_response(
                success=False, error=_validation_message(e), code="VALIDATION_ERROR", status=400
            )

        max_notes = self.web_config.batch_max_notes
        if len(params.note_ids) > max_notes:
            return api_response(
                success=False,
                error=f"Maximum {max_notes} notes can be summarized at once",
                code="VALIDATION_ERROR",
                status=400,
            )

        cost = self.web_config.batch_request_cost
        needed = len(params.note_ids) * cost
        if not self.rate_limiter.check(user_id, cost=needed):
            remaining = self.rate_limiter.remaining(user_id)
            logger.warning(f"Batch summarization rate limit exceeded for user {user_id}")
            return self._rate_limited(
                f"Batch of {len(params.note_ids)} notes needs {needed} requests "
                f"but only {remaining} remain in the current window"
            )

        results = []
        errors = []

        with self.db_manager.session() as session:
            repo = NoteRepository(session)
            notes = repo.list_for_user_by_ids(params.note_ids, user_id)

            if not notes:
                return api_response(
                    success=False, error="No notes found", code="NOTES_NOT_FOUND", status=404
                )

            for note in notes:
                if repo.has_fresh_summary(note, self.cache_age):
                    results.append({**note_to_dict(note), "cached": True})
                    continue

                if len(note.content.strip()) < self.service.min_input_length:
                    errors.append({"id": note.id, "error": "Content too short for summarization"})
                    continue

                try:
                    result = self.service.summarize(
                        note.content,
                        max_length=self.web_config.summary_max_length,
                        style=params.style,
                        requester_id=user_id,
                    )
                except SummarizationError as e:
                    logger.error(f"Batch summarization failed for note {note.id}: {e}")
                    errors.append({"id": note.id, "error": str(e)})
                    continue

                note = repo.update_summary(note, result.summary)
                self.rate_limiter.record(user_id, cost=cost)
                results.append(
                    {**note_to_dict(note), "provider": result.provider, "cached": False}
                )

        logger.info(
            f"Batch summarization for user {user_id}: "
            f"{len(results)} succeeded, {len(errors)} failed"
        )

        return api_response(
            success=True,
            data={
                "results": results,
                "errors": errors,
                "summary": {
                    "total": len(params.note_ids),
                    "successful": len(results),
                    "failed": len(errors),
                },
            },
            message=f"Batch summarization completed: {len(results)}/{len(params.note_ids)} successful",
        )

    def _health(self):
        """Summarizer health check (admin only).

        Returns:
            API response with health, stats and rate limit settings
        """
        denied = self._admin_guard()
        if denied:
            return denied

        health = self.service.health_check()

        return api_response(
            success=True,
            data={
                "health": health,
                "stats": self.service.get_stats(),
                "rate_limits": {
                    "max_requests": self.rate_limiter.max_requests,
                    "window_seconds": self.rate_limiter.window_seconds,
                },
            },
        )

    def _stats(self):
        """Summarizer usage statistics (admin only).

        Returns:
            API response with service counters and rate limiter usage
        """
        denied = self._admin_guard()
        if denied:
            return denied

        return api_response(
            success=True,
            data={
                "service": self.service.get_stats(),
                "usage": {
                    **self.rate_limiter.usage(),
                    "max_requests": self.rate_limiter.max_requests,
                    "window_seconds": self.rate_limiter.window_seconds,
                },
            },
        )
