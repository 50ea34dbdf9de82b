"""Tests for the AI summarization API."""

from datetime import datetime, timedelta

import pytest

from ai_notes.config import get_config
from ai_notes.core.errors import InvalidInputError, ProviderUnavailableError
from ai_notes.core.types import SummarizationResult
from ai_notes.models.note import NoteCreate
from ai_notes.storage.repositories.note_repo import NoteRepository
from ai_notes.web import create_app
from ai_notes.web.rate_limiter import SlidingWindowRateLimiter

ADMIN_TOKEN = "admin-secret"

LONG_CONTENT = (
    "The product team reviewed customer feedback from the last release. "
    "Most requests asked for faster search and better offline support. "
    "The team agreed to prioritize search performance in the next sprint."
)


class FakeService:
    """Summarizer service double that records calls."""

    min_input_length = 100

    def __init__(self, summary: str = "Search performance comes first next sprint.", error=None):
        self.summary = summary
        self.error = error
        self.calls = []

    def summarize(self, text, max_length=None, style=None, requester_id=None):
        self.calls.append({"text": text, "max_length": max_length, "style": style, "requester_id": requester_id})
        if self.error:
            raise self.error
        return SummarizationResult.build(self.summary, "fallback", text)

    def get_stats(self) -> dict:
        return {
            "request_count": len(self.calls),
            "error_count": 0,
            "success_rate": 100.0,
            "current_provider": "fallback",
        }

    def health_check(self) -> dict:
        return {"status": "healthy", "provider": "fallback"}


@pytest.fixture
def service() -> FakeService:
    return FakeService()


@pytest.fixture
def make_app(service):
    """Build an app on an in-memory database with a chosen quota."""
    get_config().web.admin_token = ADMIN_TOKEN

    def _make(max_requests: int = 20):
        limiter = SlidingWindowRateLimiter(max_requests=max_requests, window_seconds=3600)
        app = create_app(db_path=":memory:", service=service, rate_limiter=limiter)
        app.config["TESTING"] = True
        return app

    return _make


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()


def add_note(app, user_id: str = "user-1", content: str = LONG_CONTENT, **fields) -> int:
    with app.extensions["db_manager"].session() as session:
        repo = NoteRepository(session)
        note = repo.create(NoteCreate(user_id=user_id, title="Feedback review", content=content))
        if fields.get("summary"):
            repo.update_summary(note, fields["summary"], summarized_at=fields.get("summarized_at"))
        return note.id


def user_headers(user_id: str = "user-1") -> dict:
    return {"X-User-Id": user_id}


def admin_headers() -> dict:
    return {"X-User-Id": "admin", "X-Admin-Token": ADMIN_TOKEN}


class TestSummarizeNote:
    """Tests for POST /api/notes/<id>/summarize."""

    def test_requires_user(self, client):
        """Test that anonymous requests are rejected."""
        response = client.post("/api/notes/1/summarize", json={})

        assert response.status_code == 401
        assert response.get_json()["code"] == "UNAUTHORIZED"

    def test_summarize_success(self, app, client, service):
        """Test summarizing and storing a note's summary."""
        note_id = add_note(app)

        response = client.post(
            f"/api/notes/{note_id}/summarize", json={"style": "bullet"}, headers=user_headers()
        )

        assert response.status_code == 200
        body = response.get_json()
        assert body["success"] is True
        assert body["data"]["cached"] is False
        assert body["data"]["provider"] == "fallback"
        assert body["data"]["note"]["summary"] == service.summary
        assert body["data"]["note"]["summarized_at"] is not None
        assert service.calls[0]["style"] == "bullet"
        assert service.calls[0]["max_length"] == 150
        assert service.calls[0]["requester_id"] == "user-1"

    def test_second_request_is_cached(self, app, client, service):
        """Test that a recent summary is reused without a new call."""
        note_id = add_note(app)
        client.post(f"/api/notes/{note_id}/summarize", headers=user_headers())

        response = client.post(f"/api/notes/{note_id}/summarize", headers=user_headers())

        assert response.status_code == 200
        assert response.get_json()["data"]["cached"] is True
        assert len(service.calls) == 1

    def test_stale_summary_regenerated(self, app, client, service):
        """Test that summaries older than the cache window are regenerated."""
        note_id = add_note(
            app,
            summary="Old summary text.",
            summarized_at=datetime.utcnow() - timedelta(hours=2),
        )

        response = client.post(f"/api/notes/{note_id}/summarize", headers=user_headers())

        assert response.get_json()["data"]["cached"] is False
        assert len(service.calls) == 1

    def test_other_users_note(self, app, client):
        """Test that another user's note is not found."""
        note_id = add_note(app, user_id="someone-else")

        response = client.post(f"/api/notes/{note_id}/summarize", headers=user_headers())

        assert response.status_code == 404
        assert response.get_json()["code"] == "NOTE_NOT_FOUND"

    def test_content_too_short(self, app, client, service):
        """Test that short notes are rejected without using quota."""
        note_id = add_note(app, content="Too short to summarize.")
        limiter = app.extensions["rate_limiter"]

        response = client.post(f"/api/notes/{note_id}/summarize", headers=user_headers())

        assert response.status_code == 400
        assert response.get_json()["code"] == "CONTENT_TOO_SHORT"
        assert service.calls == []
        assert limiter.remaining("user-1") == 20

    def test_invalid_body(self, app, client):
        """Test that a malformed body is a validation error."""
        note_id = add_note(app)

        response = client.post(
            f"/api/notes/{note_id}/summarize", json={"style": 5}, headers=user_headers()
        )

        assert response.status_code == 400
        assert response.get_json()["code"] == "VALIDATION_ERROR"

    def test_rate_limited(self, make_app):
        """Test that the per-user quota is enforced."""
        app = make_app(max_requests=1)
        client = app.test_client()
        first = add_note(app)
        second = add_note(app)

        assert client.post(f"/api/notes/{first}/summarize", headers=user_headers()).status_code == 200
        response = client.post(f"/api/notes/{second}/summarize", headers=user_headers())

        assert response.status_code == 429
        assert response.get_json()["code"] == "RATE_LIMIT_EXCEEDED"

    def test_invalid_input_from_service(self, app, client, service):
        """Test that service validation errors map to 400."""
        service.error = InvalidInputError("Invalid style")
        note_id = add_note(app)

        response = client.post(f"/api/notes/{note_id}/summarize", headers=user_headers())

        assert response.status_code == 400
        assert response.get_json()["code"] == "VALIDATION_ERROR"

    def test_service_unavailable(self, app, client, service):
        """Test that summarization failures map to 502."""
        service.error = ProviderUnavailableError("nothing worked")
        note_id = add_note(app)

        response = client.post(f"/api/notes/{note_id}/summarize", headers=user_headers())

        assert response.status_code == 502
        body = response.get_json()
        assert body["success"] is False
        assert body["code"] == "AI_SERVICE_UNAVAILABLE"


class TestBatchSummarize:
    """Tests for POST /api/ai/batch-summarize."""

    def test_batch_success(self, app, client, service):
        """Test that each note is summarized or reported."""
        good = [add_note(app), add_note(app)]
        short = add_note(app, content="Too short.")

        response = client.post(
            "/api/ai/batch-summarize",
            json={"note_ids": good + [short]},
            headers=user_headers(),
        )

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert [r["id"] for r in data["results"]] == good
        assert data["errors"] == [{"id": short, "error": "Content too short for summarization"}]
        assert data["summary"] == {"total": 3, "successful": 2, "failed": 1}
        assert len(service.calls) == 2
        assert app.extensions["rate_limiter"].remaining("user-1") == 20 - 4

    def test_batch_reuses_cached(self, app, client, service):
        """Test that fresh summaries are returned without new calls."""
        note_id = add_note(app, summary="Cached summary text.", summarized_at=datetime.utcnow())

        response = client.post(
            "/api/ai/batch-summarize", json={"note_ids": [note_id]}, headers=user_headers()
        )

        result = response.get_json()["data"]["results"][0]
        assert result["cached"] is True
        assert result["summary"] == "Cached summary text."
        assert service.calls == []

    def test_batch_service_errors_reported(self, app, client, service):
        """Test that per-note failures do not fail the batch."""
        service.error = ProviderUnavailableError("nothing worked")
        note_id = add_note(app)

        response = client.post(
            "/api/ai/batch-summarize", json={"note_ids": [note_id]}, headers=user_headers()
        )

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert data["results"] == []
        assert data["errors"][0]["id"] == note_id

    @pytest.mark.parametrize("body", [{}, {"note_ids": []}, {"note_ids": "1,2"}])
    def test_batch_invalid_body(self, client, body):
        """Test that note_ids must be a non-empty list."""
        response = client.post("/api/ai/batch-summarize", json=body, headers=user_headers())

        assert response.status_code == 400

    def test_batch_too_many(self, client):
        """Test the per-batch note limit."""
        response = client.post(
            "/api/ai/batch-summarize", json={"note_ids": list(range(1, 12))}, headers=user_headers()
        )

        assert response.status_code == 400
        assert "Maximum 10" in response.get_json()["error"]

    def test_batch_not_found(self, client):
        """Test that a batch with no owned notes is 404."""
        response = client.post(
            "/api/ai/batch-summarize", json={"note_ids": [41, 42]}, headers=user_headers()
        )

        assert response.status_code == 404

    def test_batch_rate_limited(self, make_app):
        """Test that the whole batch cost must fit in the quota."""
        app = make_app(max_requests=3)
        client = app.test_client()
        ids = [add_note(app), add_note(app)]

        response = client.post("/api/ai/batch-summarize", json={"note_ids": ids}, headers=user_headers())

        assert response.status_code == 429
        body = response.get_json()
        assert body["code"] == "RATE_LIMIT_EXCEEDED"
        assert body["error"] == (
            "Batch of 2 notes needs 4 requests but only 3 remain in the current window"
        )


class TestAdminEndpoints:
    """Tests for the admin health and stats endpoints."""

    @pytest.mark.parametrize("path", ["/api/ai/health", "/api/ai/stats"])
    def test_requires_user(self, client, path):
        """Test that anonymous callers are rejected."""
        assert client.get(path).status_code == 401

    @pytest.mark.parametrize("path", ["/api/ai/health", "/api/ai/stats"])
    def test_requires_admin_token(self, client, path):
        """Test that non-admin callers are forbidden."""
        response = client.get(path, headers={"X-User-Id": "user-1", "X-Admin-Token": "wrong"})

        assert response.status_code == 403
        assert response.get_json()["code"] == "FORBIDDEN"

    def test_health(self, client):
        """Test the health report."""
        response = client.get("/api/ai/health", headers=admin_headers())

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert data["health"] == {"status": "healthy", "provider": "fallback"}
        assert data["stats"]["current_provider"] == "fallback"
        assert data["rate_limits"] == {"max_requests": 20, "window_seconds": 3600}

    def test_stats(self, app, client):
        """Test the usage report."""
        note_id = add_note(app)
        client.post(f"/api/notes/{note_id}/summarize", headers=user_headers())

        response = client.get("/api/ai/stats", headers=admin_headers())

        data = response.get_json()["data"]
        assert data["service"]["request_count"] == 1
        assert data["usage"]["active_users"] == 1
        assert data["usage"]["total_active_requests"] == 1


class TestErrorHandlers:
    """Tests for JSON error handlers."""

    def test_unknown_route(self, client):
        """Test that unknown routes return a JSON 404."""
        response = client.get("/api/missing")

        assert response.status_code == 404
        assert response.get_json()["code"] == "NOT_FOUND"

    def test_wrong_method(self, client):
        """Test that wrong methods return a JSON 405."""
        response = client.get("/api/ai/batch-summarize")

        assert response.status_code == 405
