# talenthub/schemas/score.py

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from talenthub.schemas.assessment import AnswerValue, CamelModel


class AssessmentResponse(CamelModel):
    """Per-question outcome of one submission."""
    question_id: str
    answer: Optional[AnswerValue] = None
    # None means manual review: nothing to compare the answer against
    is_correct: Optional[bool] = None
    points_earned: float = 0.0
    max_points: float = 0.0


class SectionScore(CamelModel):
    section_id: str
    score: float = 0.0
    max_score: float = 0.0
    percentage: float = 0.0


class AssessmentScore(CamelModel):
    """
    Result of one (assessment, candidate) submission. Created once, never
    updated. `id`, `candidate_id` and `completed_at` are stamped on submit.
    """
    id: Optional[str] = None
    assessment_id: str
    candidate_id: Optional[str] = None
    responses: List[AssessmentResponse] = Field(default_factory=list)
    score: float = 0.0
    max_score: float = 0.0
    percentage: float = 0.0
    section_scores: List[SectionScore] = Field(default_factory=list)
    completed_at: Optional[datetime] = None
