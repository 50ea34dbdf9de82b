#!/usr/bin/env python3
"""
Seed the database with sample notes for trying out summarization.
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ai_notes.models import NoteModel
from ai_notes.models.note import NoteCreate
from ai_notes.storage.database import get_db
from ai_notes.storage.repositories import NoteRepository


SAMPLE_NOTES = [
    {
        "title": "Quarterly planning",
        "content": (
            "The team met to review the roadmap for the next quarter. "
            "The most important decision was to move the search rewrite ahead of the billing work. "
            "Three engineers will focus on indexing while two continue on reporting. "
            "We agreed to revisit the plan after the first 6 weeks and adjust staffing if needed. "
            "Action items were assigned to each lead before the meeting ended."
        ),
    },
    {
        "title": "Reading notes: distributed systems",
        "content": (
            "Consensus protocols let a group of machines agree on a single value despite failures. "
            "The key insight is that a majority quorum always overlaps with any other majority. "
            "Leader election reduces message overhead but introduces a single point of coordination. "
            "Timeouts must be tuned carefully, because aggressive values cause needless elections. "
            "In summary, correctness comes from quorums and liveness comes from good timing assumptions."
        ),
    },
    {
        "title": "Garden log",
        "content": (
            "Planted 12 tomato seedlings along the south fence this morning. "
            "The soil was still damp from the weekend rain so no extra watering was needed. "
            "Next week the beans should go in once the nights stay above 10 degrees. "
            "Remember to order more mulch and check the drip line for leaks before summer."
        ),
    },
]


def main() -> None:
    """Seed the database with sample notes."""
    import argparse

    parser = argparse.ArgumentParser(description="Seed database with sample notes")
    parser.add_argument("--user", default="demo-user", help="Owner of the sample notes")
    parser.add_argument("--clear", action="store_true", help="Clear the user's notes before seeding")
    args = parser.parse_args()

    with get_db() as session:
        if args.clear:
            print(f"Clearing existing notes for {args.user}...")
            session.query(NoteModel).filter_by(user_id=args.user).delete()
            session.commit()

        repo = NoteRepository(session)

        for note_data in SAMPLE_NOTES:
            existing = (
                session.query(NoteModel)
                .filter_by(user_id=args.user, title=note_data["title"])
                .first()
            )

            if existing:
                print(f"Note already exists: {note_data['title']}")
                continue

            note = repo.create(NoteCreate(user_id=args.user, **note_data))
            print(f"Added note #{note.id}: {note.title}")

        session.commit()

        total = session.query(NoteModel).filter_by(user_id=args.user).count()
        print(f"\nTotal notes for {args.user}: {total}")


if __name__ == "__main__":
    main()
