"""test_submission.py: Unit tests for loading and submitting candidate sessions."""

from talenthub.schemas.assessment import Assessment
from talenthub.schemas.candidate import Candidate
from talenthub.services.data_service import DataService
from talenthub.services.submission import load_assessment_session, submit_assessment


def test_load_assessment_session(service: DataService, gated_assessment: Assessment) -> None:
    service.save_assessment(gated_assessment)

    session = load_assessment_session(service, gated_assessment.id)

    assert session is not None
    assert session.document.id == gated_assessment.id
    assert load_assessment_session(service, "missing") is None


def test_inactive_assessment_is_not_served(service: DataService, gated_assessment: Assessment) -> None:
    service.save_assessment(gated_assessment.model_copy(update={"is_active": False}))
    assert load_assessment_session(service, gated_assessment.id) is None


def test_submit_stores_score_and_timeline(
    service: DataService, gated_assessment: Assessment, candidate: Candidate, now
) -> None:
    """Test a full submission for a known candidate."""
    # Setup
    service.save_assessment(gated_assessment)
    service.create_candidate(candidate)
    session = load_assessment_session(service, gated_assessment.id)
    session.set_answer("q1", "A")

    # Action
    score = submit_assessment(service, session, candidate.id, now=now)

    # Assertions
    assert service.list_scores(gated_assessment.id) == [score]
    event = service.get_candidate(candidate.id).timeline[-1]
    assert event.type == "assessment_completed"
    assert event.created_at == now
    assert event.metadata == {"assessmentId": gated_assessment.id, "scoreId": score.id}


def test_submit_for_unknown_candidate_still_stores_score(
    service: DataService, gated_assessment: Assessment, now
) -> None:
    service.save_assessment(gated_assessment)
    session = load_assessment_session(service, gated_assessment.id)
    session.set_answer("q1", "B")

    score = submit_assessment(service, session, "candidate-404", now=now)

    assert score.percentage == 0.0
    assert [s.id for s in service.list_scores(gated_assessment.id)] == [score.id]
