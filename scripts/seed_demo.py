#!/usr/bin/env python3
"""Seed a demo database with peer evaluations.

Usage:
    python scripts/seed_demo.py

This script:
1. Initializes the demo database
2. Seeds users, a course, a batch and two exams
3. Seeds completed and pending evaluations for the demo student
4. Prints the demo student's aggregated results
"""

from __future__ import annotations

import json
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from peereval.aggregation.results import compute_results  # noqa: E402
from peereval.db.schema import Batch, Course, Evaluation, Exam, User  # noqa: E402
from peereval.db.session import get_session, init_db  # noqa: E402
from peereval.models.domain import CallerIdentity  # noqa: E402

# Constants
DEMO_DB_PATH = PROJECT_ROOT / "demo.db"

# Demo identifiers
DEMO_STUDENT_ID = "student-demo"
DEMO_PEER_IDS = ["peer-1", "peer-2", "peer-3"]
DEMO_COURSE_ID = "course-demo"
DEMO_BATCH_ID = "batch-demo"
DEMO_EXAM_IDS = ["exam-midterm", "exam-final"]


def seed_database() -> None:
    """Seed the demo database with evaluation data."""
    init_db(DEMO_DB_PATH)
    session = get_session(DEMO_DB_PATH)

    try:
        # Check if already seeded
        existing = session.query(User).filter(User.user_id == DEMO_STUDENT_ID).first()

        if existing:
            print(f"Demo student already exists: {DEMO_STUDENT_ID}")
            return

        print("Creating users...")
        session.add(User(user_id=DEMO_STUDENT_ID, name="Demo Student", role="student"))
        for i, peer_id in enumerate(DEMO_PEER_IDS, start=1):
            session.add(User(user_id=peer_id, name=f"Peer {i}", role="student"))

        print("Creating course and batch...")
        session.add(Course(course_id=DEMO_COURSE_ID, name="Introduction to Algorithms"))
        session.add(Batch(batch_id=DEMO_BATCH_ID, name="Spring Cohort", course_id=DEMO_COURSE_ID))

        print("Creating exams...")
        start = datetime(2026, 3, 2, 9, 0)
        for i, exam_id in enumerate(DEMO_EXAM_IDS):
            session.add(
                Exam(
                    exam_id=exam_id,
                    title=exam_id.split("-", 1)[1].title(),
                    start_time=start + timedelta(weeks=6 * i),
                    course_id=DEMO_COURSE_ID,
                    batch_id=DEMO_BATCH_ID,
                )
            )

        print("Creating evaluations...")
        created = datetime(2026, 4, 1, tzinfo=timezone.utc)
        n = 0
        for exam_id in DEMO_EXAM_IDS:
            for peer_id in DEMO_PEER_IDS:
                n += 1
                session.add(
                    Evaluation(
                        evaluation_id=f"eval-{n:03d}",
                        exam_id=exam_id,
                        evaluatee_id=DEMO_STUDENT_ID,
                        evaluator_id=peer_id,
                        marks_json=json.dumps([n % 5 + 3, 4, 5]),
                        feedback_json=json.dumps({"comment": f"Feedback from {peer_id}"}),
                        # Last peer has not finished grading the final
                        status="pending" if n == 6 else "completed",
                        created_at=created + timedelta(minutes=n),
                    )
                )

        session.commit()
        print("Database seeded successfully!")

    finally:
        session.close()


def print_results() -> None:
    """Print the demo student's aggregated results."""
    session = get_session(DEMO_DB_PATH)

    try:
        results = compute_results(session, CallerIdentity(id=DEMO_STUDENT_ID, role="student"))
        print(json.dumps(results.model_dump(mode="json", by_alias=True), indent=2))
    finally:
        session.close()


def main() -> int:
    """Main entry point."""
    print("=" * 60)
    print("PeerEval Demo Seeding Script")
    print("=" * 60)

    print("\n[1/2] Seeding database...")
    seed_database()

    print("\n[2/2] Aggregating results...")
    print_results()

    print("\n" + "=" * 60)
    print("Demo seeding complete!")
    print(f"Database: {DEMO_DB_PATH}")
    print("=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
