"""Domain models for peereval.

Pure Python dataclasses representing domain entities.
These models are independent of SQLAlchemy and used throughout
the application for clean separation from the database layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal, Union


# ============================================================================
# Identity Domain
# ============================================================================

Role = Literal["student", "teacher", "ta", "admin"]


@dataclass(frozen=True)
class CallerIdentity:
    """Authenticated actor attached to a request by the auth layer."""

    id: str | None
    role: str | None


# ============================================================================
# Exam Domain
# ============================================================================


@dataclass(frozen=True)
class NamedRef:
    """Resolved reference carrying only id and display name."""

    id: str
    name: str


@dataclass(frozen=True)
class ExamSummaryEntity:
    """Resolved exam metadata with course and batch references."""

    exam_id: str
    title: str
    start_time: datetime | None = None
    course: NamedRef | None = None
    batch: NamedRef | None = None


# ============================================================================
# Evaluation Domain
# ============================================================================

EvaluationStatus = Literal["pending", "in_progress", "completed", "flagged"]

UNKNOWN_EVALUATOR_NAME = "Unknown"


@dataclass(frozen=True)
class ResolvedEvaluator:
    """Evaluator reference that resolved to a user."""

    id: str
    name: str

    def as_view(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class UnresolvedEvaluator:
    """Evaluator reference that could not be resolved.

    `id` holds the raw stored reference, or None when it was empty.
    """

    id: str | None = None

    def as_view(self) -> dict[str, str]:
        return {"id": self.id or "unknown", "name": UNKNOWN_EVALUATOR_NAME}


Evaluator = Union[ResolvedEvaluator, UnresolvedEvaluator]


@dataclass
class EvaluationEntity:
    """Domain model for one evaluator's graded pass over a submission."""

    evaluation_id: str
    evaluatee_id: str
    evaluator: Evaluator
    exam: ExamSummaryEntity | None
    marks: list[float] = field(default_factory=list)
    feedback: Any = None
    status: EvaluationStatus = "pending"
