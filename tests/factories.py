"""Row builders shared by repository and API tests."""

import json
from datetime import datetime, timedelta

from peereval.db.schema import Batch, Course, Evaluation, Exam, User

BASE_TIME = datetime(2026, 1, 1, 12, 0, 0)


def seed_reference_data(db_session) -> None:
    """Add users, a course, a batch and two exams."""
    db_session.add_all(
        [
            User(user_id="stu-1", name="Asha", role="student"),
            User(user_id="stu-2", name="Bilal", role="student"),
            User(user_id="peer-1", name="Chen", role="student"),
            User(user_id="peer-2", name="Dana", role="student"),
            Course(course_id="course-1", name="Databases"),
            Batch(batch_id="batch-1", name="Batch A", course_id="course-1"),
            Exam(
                exam_id="exam-1",
                title="Midterm",
                start_time=datetime(2026, 2, 1, 9, 0),
                course_id="course-1",
                batch_id="batch-1",
            ),
            Exam(
                exam_id="exam-2",
                title="Final",
                start_time=datetime(2026, 5, 1, 9, 0),
                course_id=None,
                batch_id=None,
            ),
        ]
    )
    db_session.commit()


def add_evaluation(
    db_session,
    evaluation_id: str,
    *,
    exam_id: str | None = "exam-1",
    evaluatee_id: str = "stu-1",
    evaluator_id: str | None = "peer-1",
    marks: list | None = None,
    feedback=None,
    status: str = "completed",
    order: int = 0,
) -> None:
    """Add one evaluation row; `order` sets created_at relative to BASE_TIME."""
    db_session.add(
        Evaluation(
            evaluation_id=evaluation_id,
            exam_id=exam_id,
            evaluatee_id=evaluatee_id,
            evaluator_id=evaluator_id,
            marks_json=json.dumps(marks if marks is not None else []),
            feedback_json=json.dumps(feedback) if feedback is not None else None,
            status=status,
            created_at=BASE_TIME + timedelta(minutes=order),
        )
    )
    db_session.commit()
