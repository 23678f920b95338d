"""Repository pattern for database operations.

Encapsulates all SQLAlchemy queries, keeping domain logic pure.
Returns domain models (not SQLAlchemy entities) to external callers.
References are resolved here, once: evaluators become a
ResolvedEvaluator or UnresolvedEvaluator, exams an ExamSummaryEntity
or None.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from sqlalchemy.orm import Session

from peereval.db.schema import Batch, Course, Evaluation, Exam, User
from peereval.models.domain import (
    EvaluationEntity,
    Evaluator,
    ExamSummaryEntity,
    NamedRef,
    ResolvedEvaluator,
    UnresolvedEvaluator,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession"]


# ============================================================================
# Converters: SQLAlchemy -> Domain
# ============================================================================


def _resolve_evaluator(evaluator_id: str | None, users: dict[str, User]) -> Evaluator:
    """Resolve an evaluator reference against loaded users."""
    user = users.get(evaluator_id) if evaluator_id else None
    if user is not None:
        return ResolvedEvaluator(id=user.user_id, name=user.name)
    return UnresolvedEvaluator(id=evaluator_id or None)


def _exam_to_summary(
    exam: Exam,
    courses: dict[str, Course],
    batches: dict[str, Batch],
) -> ExamSummaryEntity:
    """Convert SQLAlchemy Exam to a resolved exam summary."""
    course = courses.get(exam.course_id) if exam.course_id else None
    batch = batches.get(exam.batch_id) if exam.batch_id else None
    return ExamSummaryEntity(
        exam_id=exam.exam_id,
        title=exam.title,
        start_time=exam.start_time,
        course=NamedRef(id=course.course_id, name=course.name) if course else None,
        batch=NamedRef(id=batch.batch_id, name=batch.name) if batch else None,
    )


def _load_json(raw: str | None, default: Any) -> Any:
    """Decode a JSON column. Empty columns and JSON null give default."""
    if raw is None or raw == "":
        return default
    value = json.loads(raw)
    return default if value is None else value


def _evaluation_to_entity(
    evaluation: Evaluation,
    exams: dict[str, ExamSummaryEntity],
    users: dict[str, User],
) -> EvaluationEntity:
    """Convert SQLAlchemy Evaluation to domain entity with resolved references."""
    return EvaluationEntity(
        evaluation_id=evaluation.evaluation_id,
        evaluatee_id=evaluation.evaluatee_id,
        evaluator=_resolve_evaluator(evaluation.evaluator_id, users),
        exam=exams.get(evaluation.exam_id) if evaluation.exam_id else None,
        marks=_load_json(evaluation.marks_json, []),
        feedback=_load_json(evaluation.feedback_json, None),
        status=evaluation.status,
    )


# ============================================================================
# Evaluation Repository
# ============================================================================


def find_completed_evaluations(session: DbSession, student_id: str) -> list[EvaluationEntity]:
    """Get completed evaluations of a student with references resolved.

    Records come back in stored order (created_at, then evaluation_id).
    Exam course/batch and evaluator references are resolved where the
    referenced rows exist; otherwise the raw reference is kept.
    """
    evaluations = (
        session.query(Evaluation)
        .filter(
            Evaluation.evaluatee_id == student_id,
            Evaluation.status == "completed",
        )
        .order_by(Evaluation.created_at, Evaluation.evaluation_id)
        .all()
    )
    if not evaluations:
        return []

    exam_ids = {e.exam_id for e in evaluations if e.exam_id}
    exam_rows = session.query(Exam).filter(Exam.exam_id.in_(exam_ids)).all() if exam_ids else []

    course_ids = {x.course_id for x in exam_rows if x.course_id}
    batch_ids = {x.batch_id for x in exam_rows if x.batch_id}
    courses = (
        {c.course_id: c for c in session.query(Course).filter(Course.course_id.in_(course_ids))}
        if course_ids
        else {}
    )
    batches = (
        {b.batch_id: b for b in session.query(Batch).filter(Batch.batch_id.in_(batch_ids))}
        if batch_ids
        else {}
    )
    exams = {x.exam_id: _exam_to_summary(x, courses, batches) for x in exam_rows}

    evaluator_ids = {e.evaluator_id for e in evaluations if e.evaluator_id}
    users = (
        {u.user_id: u for u in session.query(User).filter(User.user_id.in_(evaluator_ids))}
        if evaluator_ids
        else {}
    )

    return [_evaluation_to_entity(e, exams, users) for e in evaluations]