# talenthub/schemas/candidate.py

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import EmailStr, Field

from talenthub.schemas.assessment import CamelModel, utcnow
from talenthub.schemas.score import AssessmentScore

CandidateStage = Literal[
    "applied", "screening", "interview", "assessment", "offer", "hired", "rejected"
]

CANDIDATE_STAGES = (
    "applied", "screening", "interview", "assessment", "offer", "hired", "rejected"
)


# =========================
# Notes & timeline
# =========================
class Note(CamelModel):
    id: str
    content: str
    mentions: List[str] = Field(default_factory=list)
    author_id: str
    created_at: datetime = Field(default_factory=utcnow)


class TimelineEvent(CamelModel):
    id: str
    type: Literal["stage_change", "note_added", "assessment_completed"]
    description: str
    created_at: datetime = Field(default_factory=utcnow)
    metadata: Optional[Dict[str, Any]] = None


# =========================
# Candidate
# =========================
class Candidate(CamelModel):
    id: str
    name: str
    email: EmailStr
    phone: Optional[str] = None
    resume: Optional[str] = None
    current_stage: CandidateStage = "applied"
    job_id: str
    notes: List[Note] = Field(default_factory=list)
    assessment_scores: List[AssessmentScore] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    timeline: List[TimelineEvent] = Field(default_factory=list)
