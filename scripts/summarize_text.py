#!/usr/bin/env python3
"""
Summarize a text file (or stdin) from the command line.
"""

import json
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ai_notes.core.errors import InvalidInputError, SummarizationError
from ai_notes.core.services import create_summarizer_service
from ai_notes.core.truncation import DEFAULT_MAX_LENGTH
from ai_notes.logger import setup_logger


def main() -> None:
    """Summarize input text and print the result with service stats."""
    import argparse

    parser = argparse.ArgumentParser(description="Summarize text with the configured provider")
    parser.add_argument("file", nargs="?", help="Text file to summarize (reads stdin when omitted)")
    parser.add_argument(
        "--max-length", type=int, default=DEFAULT_MAX_LENGTH, help="Approximate summary length"
    )
    parser.add_argument(
        "--style", default="concise", choices=["concise", "bullet", "detailed"], help="Summary style"
    )
    parser.add_argument("--attempts", type=int, default=None, help="Retry attempt budget")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--log-level", default="WARNING", help="Log level for stderr output")
    args = parser.parse_args()

    setup_logger(level=args.log_level)

    if args.file:
        text = Path(args.file).read_text(encoding="utf-8")
    else:
        text = sys.stdin.read()

    service = create_summarizer_service(max_attempts=args.attempts)

    try:
        result = service.summarize(text, max_length=args.max_length, style=args.style)
    except InvalidInputError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        sys.exit(2)
    except SummarizationError as e:
        print(f"Summarization failed: {e}", file=sys.stderr)
        sys.exit(1)

    stats = service.get_stats()

    if args.json:
        print(json.dumps({"result": result.to_dict(), "stats": stats}, indent=2))
        return

    print(result.summary)
    print()
    print(f"Provider: {result.provider}")
    print(f"Words: {result.word_count} (original {result.original_length} chars)")
    print(f"Success rate: {stats['success_rate']}%")


if __name__ == "__main__":
    main()
