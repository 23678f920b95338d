"""Student evaluation results aggregation.

Groups a student's completed evaluations by exam and computes the
average of per-evaluator totals.
Domain logic is pure - database operations go through repo.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from peereval.core.errors import Unauthorized
from peereval.db import repo
from peereval.db.repo import DbSession
from peereval.models.domain import (
    CallerIdentity,
    EvaluationEntity,
    Evaluator,
    ExamSummaryEntity,
)
from peereval.models.types import (
    EvaluationResults,
    EvaluatorView,
    ExamResultView,
    ExamView,
    NoEvaluations,
)

logger = logging.getLogger(__name__)

UNKNOWN_EXAM_KEY = "unknown"
UNKNOWN_COURSE_NAME = "Unknown Course"
UNKNOWN_BATCH_NAME = "Unknown Batch"
TWO_PLACES = Decimal("0.01")


@dataclass
class ExamResultGroup:
    """Evaluations of one exam, kept index-aligned.

    marks_list[i], feedback_list[i] and evaluators[i] all belong to the
    i-th contributing evaluation.
    """

    exam: ExamSummaryEntity | None
    marks_list: list[list[float]] = field(default_factory=list)
    feedback_list: list[Any] = field(default_factory=list)
    evaluators: list[Evaluator] = field(default_factory=list)

    def add(self, evaluation: EvaluationEntity) -> None:
        self.marks_list.append(list(evaluation.marks))
        self.feedback_list.append(evaluation.feedback)
        self.evaluators.append(evaluation.evaluator)


def compute_results(
    session: DbSession,
    caller: CallerIdentity | None,
) -> EvaluationResults | NoEvaluations:
    """Compute the calling student's results grouped by exam.

    Args:
        session: Database session.
        caller: Authenticated caller; its id is the student id.

    Returns:
        EvaluationResults with one entry per exam, or NoEvaluations
        when the student has no completed evaluations.

    Raises:
        Unauthorized: If the caller or its id is missing.
    """
    student_id = caller.id if caller is not None else None
    if not student_id:
        raise Unauthorized()

    evaluations = repo.find_completed_evaluations(session, student_id)

    if not evaluations:
        return NoEvaluations()

    groups = group_by_exam(evaluations)
    return EvaluationResults(results=[_build_result_view(key, g) for key, g in groups.items()])


def group_by_exam(evaluations: list[EvaluationEntity]) -> dict[str, ExamResultGroup]:
    """Group evaluations by exam id in first-seen order.

    Pure function - no database access. Evaluations whose exam did not
    resolve share the "unknown" group.
    """
    groups: dict[str, ExamResultGroup] = {}
    for evaluation in evaluations:
        key = evaluation.exam.exam_id if evaluation.exam is not None else UNKNOWN_EXAM_KEY
        if key == UNKNOWN_EXAM_KEY:
            logger.warning(
                "Evaluation %s has an unresolved exam; grouping under %r",
                evaluation.evaluation_id,
                UNKNOWN_EXAM_KEY,
            )

        if key not in groups:
            groups[key] = ExamResultGroup(exam=evaluation.exam)
        groups[key].add(evaluation)
    return groups


def average_of_totals(marks_list: list[list[float]]) -> str | None:
    """Mean of per-evaluator mark sums, as a two-decimal string.

    Ties round half up on the exact binary value of the mean.
    Returns None when there are no evaluators.
    """
    if not marks_list:
        return None
    totals = [sum(marks) for marks in marks_list]
    mean = Decimal(sum(totals) / len(totals))
    return str(mean.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def _build_exam_view(key: str, exam: ExamSummaryEntity | None) -> ExamView:
    if exam is None:
        return ExamView(
            id=key,
            title=None,
            start_time=None,
            course_name=UNKNOWN_COURSE_NAME,
            batch_id=None,
            batch_name=UNKNOWN_BATCH_NAME,
        )
    return ExamView(
        id=exam.exam_id,
        title=exam.title,
        start_time=exam.start_time,
        course_name=exam.course.name if exam.course and exam.course.name else UNKNOWN_COURSE_NAME,
        batch_id=exam.batch.id if exam.batch else None,
        batch_name=exam.batch.name if exam.batch and exam.batch.name else UNKNOWN_BATCH_NAME,
    )


def _build_result_view(key: str, group: ExamResultGroup) -> ExamResultView:
    return ExamResultView(
        exam=_build_exam_view(key, group.exam),
        average_marks=average_of_totals(group.marks_list),
        marks=group.marks_list,
        feedback=group.feedback_list,
        evaluators=[EvaluatorView(**e.as_view()) for e in group.evaluators],
    )
