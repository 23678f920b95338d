"""Tests for the evaluation repository."""

from datetime import datetime

from factories import add_evaluation, seed_reference_data

from peereval.db import repo
from peereval.db.schema import Evaluation, User
from peereval.models.domain import NamedRef, ResolvedEvaluator, UnresolvedEvaluator


class TestFindCompletedEvaluations:
    """Test repo.find_completed_evaluations."""

    def test_empty_when_no_rows(self, session):
        """Returns an empty list for a student with no evaluations."""
        assert repo.find_completed_evaluations(session, "stu-1") == []

    def test_filters_status_and_evaluatee(self, session):
        """Only completed evaluations of the given student are returned."""
        seed_reference_data(session)
        add_evaluation(session, "ev-1", marks=[1])
        add_evaluation(session, "ev-2", status="pending", order=1)
        add_evaluation(session, "ev-3", evaluatee_id="stu-2", order=2)

        found = repo.find_completed_evaluations(session, "stu-1")

        assert [e.evaluation_id for e in found] == ["ev-1"]
        assert found[0].status == "completed"
        assert found[0].evaluatee_id == "stu-1"

    def test_stored_order(self, session):
        """Evaluations come back in created_at order."""
        seed_reference_data(session)
        add_evaluation(session, "ev-b", order=2)
        add_evaluation(session, "ev-a", order=1)
        add_evaluation(session, "ev-c", order=3)

        found = repo.find_completed_evaluations(session, "stu-1")

        assert [e.evaluation_id for e in found] == ["ev-a", "ev-b", "ev-c"]

    def test_resolves_exam_course_and_batch(self, session):
        """Exam is resolved with course and batch references."""
        seed_reference_data(session)
        add_evaluation(session, "ev-1")

        exam = repo.find_completed_evaluations(session, "stu-1")[0].exam

        assert exam is not None
        assert exam.exam_id == "exam-1"
        assert exam.title == "Midterm"
        assert exam.start_time == datetime(2026, 2, 1, 9, 0)
        assert exam.course == NamedRef(id="course-1", name="Databases")
        assert exam.batch == NamedRef(id="batch-1", name="Batch A")

    def test_exam_without_course_or_batch(self, session):
        """Missing course and batch resolve to None."""
        seed_reference_data(session)
        add_evaluation(session, "ev-1", exam_id="exam-2")

        exam = repo.find_completed_evaluations(session, "stu-1")[0].exam

        assert exam.course is None
        assert exam.batch is None

    def test_dangling_exam_is_none(self, session):
        """An exam reference with no exam row resolves to None."""
        seed_reference_data(session)
        add_evaluation(session, "ev-1", exam_id="gone")
        add_evaluation(session, "ev-2", exam_id=None, order=1)

        found = repo.find_completed_evaluations(session, "stu-1")

        assert [e.exam for e in found] == [None, None]

    def test_evaluator_resolution(self, session):
        """Known evaluators resolve; dangling or empty ones do not."""
        seed_reference_data(session)
        add_evaluation(session, "ev-1", evaluator_id="peer-2")
        add_evaluation(session, "ev-2", evaluator_id="u-9", order=1)
        add_evaluation(session, "ev-3", evaluator_id=None, order=2)

        found = repo.find_completed_evaluations(session, "stu-1")

        assert found[0].evaluator == ResolvedEvaluator(id="peer-2", name="Dana")
        assert found[1].evaluator == UnresolvedEvaluator(id="u-9")
        assert found[2].evaluator == UnresolvedEvaluator(id=None)

    def test_decodes_marks_and_feedback(self, session):
        """Marks and feedback are decoded from JSON."""
        seed_reference_data(session)
        add_evaluation(session, "ev-1", marks=[3, 4.5], feedback={"q1": "good"})
        add_evaluation(session, "ev-2", order=1)

        found = repo.find_completed_evaluations(session, "stu-1")

        assert found[0].marks == [3, 4.5]
        assert found[0].feedback == {"q1": "good"}
        assert found[1].marks == []
        assert found[1].feedback is None

    def test_user_with_empty_name_still_resolves(self, session):
        """A populated user keeps its own empty name instead of "Unknown"."""
        seed_reference_data(session)
        session.add(User(user_id="blank", name="", role="student"))
        session.commit()
        add_evaluation(session, "ev-1", evaluator_id="blank")

        evaluator = repo.find_completed_evaluations(session, "stu-1")[0].evaluator

        assert evaluator == ResolvedEvaluator(id="blank", name="")
        assert evaluator.as_view() == {"id": "blank", "name": ""}

    def test_json_null_marks_decode_to_empty_list(self, session):
        """Marks stored as JSON null come back as an empty list."""
        seed_reference_data(session)
        session.add(
            Evaluation(
                evaluation_id="ev-1",
                exam_id="exam-1",
                evaluatee_id="stu-1",
                evaluator_id="peer-1",
                marks_json="null",
                feedback_json="null",
                status="completed",
            )
        )
        session.commit()

        found = repo.find_completed_evaluations(session, "stu-1")

        assert found[0].marks == []
        assert found[0].feedback is None
