"""
Flask application for the AI Notes API.
"""

from typing import Optional

from flask import Flask

from ai_notes.config import get_config
from ai_notes.core.services import SummarizerService
from ai_notes.logger import get_logger
from ai_notes.storage.database import DatabaseManager
from ai_notes.web.rate_limiter import SlidingWindowRateLimiter
from ai_notes.web.serializers import api_response

logger = get_logger(__name__)


def create_app(
    db_path: Optional[str] = None,
    service: Optional[SummarizerService] = None,
    rate_limiter: Optional[SlidingWindowRateLimiter] = None,
    debug: bool = False,
) -> Flask:
    """Create and configure Flask application.

    Args:
        db_path: Path to database file
        service: Summarizer facade (built from config when omitted)
        rate_limiter: Per-user quota (built from config when omitted)
        debug: Enable debug mode

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)

    config = get_config()
    app.config["SECRET_KEY"] = config.web.secret_key
    app.config["DEBUG"] = debug or config.web.debug

    # Database path
    if db_path is None:
        db_path = config.database.path

    app.config["DB_PATH"] = db_path

    db_manager = DatabaseManager(db_path, echo=config.database.echo)
    db_manager.init_db()

    if service is None:
        service = SummarizerService()
    if rate_limiter is None:
        rate_limiter = SlidingWindowRateLimiter(
            max_requests=config.web.rate_limit_max_requests,
            window_seconds=config.web.rate_limit_window_seconds,
        )

    app.extensions["db_manager"] = db_manager
    app.extensions["summarizer_service"] = service
    app.extensions["rate_limiter"] = rate_limiter

    # ========================================================================
    # Register API Blueprints
    # ========================================================================

    from ai_notes.web.blueprints import AIBlueprint

    web_config = config.web
    if app.config["DEBUG"] and not web_config.debug:
        web_config = web_config.model_copy(update={"debug": True})

    ai_bp = AIBlueprint(db_manager, service, rate_limiter, web_config).blueprint
    app.register_blueprint(ai_bp)

    # ========================================================================
    # Error Handlers
    # ========================================================================

    @app.errorhandler(404)
    def not_found(e):
        """Handle 404 errors."""
        return api_response(success=False, error="Not found", code="NOT_FOUND", status=404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        """Handle 405 errors."""
        return api_response(
            success=False, error="Method not allowed", code="METHOD_NOT_ALLOWED", status=405
        )

    @app.errorhandler(500)
    def server_error(e):
        """Handle 500 errors."""
        logger.error(f"Server error: {e}")
        return api_response(
            success=False, error="Internal server error", code="INTERNAL_ERROR", status=500
        )

    logger.info(f"Web app created with database: {db_path}")

    return app
