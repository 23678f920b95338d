"""Pydantic models for the peereval API.

Field aliases keep the camelCase wire format the UI consumes.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EvaluatorView(BaseModel):
    """Evaluator as shown to the student."""

    id: str
    name: str


class ExamView(BaseModel):
    """Exam header of one result group."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str | None
    start_time: datetime | None = Field(alias="startTime")
    course_name: str = Field(alias="courseName")
    batch_id: str | None = Field(alias="batchId")
    batch_name: str = Field(alias="batchName")


class ExamResultView(BaseModel):
    """Aggregated results of one exam for the calling student."""

    model_config = ConfigDict(populate_by_name=True)

    exam: ExamView
    average_marks: str | None = Field(alias="averageMarks")
    marks: list[list[int | float]]
    feedback: list[Any]
    evaluators: list[EvaluatorView]


class EvaluationResults(BaseModel):
    """Non-empty results response."""

    model_config = ConfigDict(extra="forbid")

    results: list[ExamResultView]


class NoEvaluations(BaseModel):
    """Empty results response. A success variant, not an error."""

    model_config = ConfigDict(extra="forbid")

    message: str = "No evaluations found"


class ErrorResponse(BaseModel):
    """Body of 401 and 500 responses."""

    error: str


class MessageResponse(BaseModel):
    """Body of 403 responses."""

    message: str
