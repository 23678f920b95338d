"""Database schema for peereval.

Tables backing the evaluation results fetch. Evaluation references to
exams and evaluators are plain string columns so that dangling
references stay representable and resolve to fallbacks on read.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    DateTime,
    ForeignKey,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class User(Base):
    """Platform user (student, teacher, ta, admin)."""

    __tablename__ = "users"

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default="student")


class Course(Base):
    """Course offering exams."""

    __tablename__ = "courses"

    course_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)


class Batch(Base):
    """Cohort of students enrolled in a course."""

    __tablename__ = "batches"

    batch_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    course_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("courses.course_id"), nullable=True
    )


class Exam(Base):
    """Exam sat by a batch."""

    __tablename__ = "exams"

    exam_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    start_time: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    course_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    batch_id: Mapped[str | None] = mapped_column(String(64), nullable=True)


class Evaluation(Base):
    """One evaluator's graded pass over one student's submission.

    marks_json holds an ordered list of numbers, one per criterion.
    feedback_json holds free-form JSON.
    """

    __tablename__ = "evaluations"

    evaluation_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    exam_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    evaluatee_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    evaluator_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    marks_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    feedback_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )
