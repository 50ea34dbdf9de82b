#!/usr/bin/env python3
"""
Run the ai-notes web API with Flask's development server.
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ai_notes.config import get_config
from ai_notes.logger import setup_logger
from ai_notes.web import create_app


def main() -> None:
    """Start the web server."""
    import argparse

    config = get_config()

    parser = argparse.ArgumentParser(description="Run the ai-notes web API")
    parser.add_argument("--host", default=config.web.host, help="Bind host")
    parser.add_argument("--port", type=int, default=config.web.port, help="Bind port")
    parser.add_argument("--db", default=None, help="Database path")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    args = parser.parse_args()

    setup_logger()
    app = create_app(db_path=args.db, debug=args.debug)
    app.run(host=args.host, port=args.port, debug=app.config["DEBUG"])


if __name__ == "__main__":
    main()
