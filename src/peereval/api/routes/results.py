"""Student results API endpoint.

GET /api/student/results - Completed evaluation results grouped by exam
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from peereval.aggregation.results import compute_results
from peereval.api.deps import get_current_caller, get_db_session
from peereval.api.roles import authorize_roles
from peereval.db.repo import DbSession
from peereval.models.domain import CallerIdentity
from peereval.models.types import (
    ErrorResponse,
    EvaluationResults,
    MessageResponse,
    NoEvaluations,
)

router = APIRouter()


@router.get(
    "/student/results",
    response_model=EvaluationResults | NoEvaluations,
    dependencies=[Depends(authorize_roles("student"))],
    responses={401: {"model": ErrorResponse}, 403: {"model": MessageResponse}},
)
def get_student_results(
    caller: CallerIdentity | None = Depends(get_current_caller),
    session: DbSession = Depends(get_db_session),
) -> EvaluationResults | NoEvaluations:
    """Get the calling student's evaluation results.

    Args:
        caller: Authenticated caller (injected).
        session: Database session (injected).

    Returns:
        EvaluationResults grouped by exam, or NoEvaluations.

    Raises:
        Unauthorized: 401 if the caller has no id.
        Forbidden: 403 if the caller is not a student.
    """
    return compute_results(session, caller)
