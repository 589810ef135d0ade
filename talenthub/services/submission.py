# talenthub/services/submission.py

import logging
from datetime import datetime
from typing import Optional

from talenthub.engine.renderer import AssessmentSession
from talenthub.schemas.assessment import new_id
from talenthub.schemas.candidate import TimelineEvent
from talenthub.schemas.score import AssessmentScore
from talenthub.services.data_service import DataService

logger = logging.getLogger(__name__)


def load_assessment_session(service: DataService, assessment_id: str) -> Optional[AssessmentSession]:
    """
    Open a candidate session for a stored assessment.
    Unknown and inactive assessments both come back as None.
    """
    document = service.get_assessment(assessment_id)
    if document is None:
        logger.info(f"Assessment {assessment_id} not found")
        return None
    if not document.is_active:
        logger.info(f"Assessment {assessment_id} is not active")
        return None
    return AssessmentSession(document)


def submit_assessment(
    service: DataService,
    session: AssessmentSession,
    candidate_id: Optional[str],
    now: Optional[datetime] = None,
) -> AssessmentScore:
    """
    Score the session, store the result and note it on the candidate's
    timeline. The score is stored even when the candidate is unknown.
    """
    score = session.submit(candidate_id=candidate_id, now=now)
    stored = service.record_score(score)

    if candidate_id is None:
        return stored

    event = TimelineEvent(
        id=new_id("timeline"),
        type="assessment_completed",
        description=f"Completed {session.document.title} ({stored.percentage}%)",
        created_at=stored.completed_at,
        metadata={"assessmentId": stored.assessment_id, "scoreId": stored.id},
    )
    if service.record_timeline_event(candidate_id, event) is None:
        logger.warning(
            f"Candidate {candidate_id} not found; score {stored.id} stored without a timeline entry"
        )
    return stored
