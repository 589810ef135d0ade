from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List

from talenthub.schemas.assessment import Assessment
from talenthub.schemas.score import AssessmentScore

PASS_PERCENTAGE = 70


def build_results_summary(
    assessment: Assessment,
    scores: Iterable[AssessmentScore],
) -> Dict[str, Any]:

    scores = [s for s in scores if s.assessment_id == assessment.id]
    percentages = [s.percentage for s in scores]

    # -------------------------
    # TOTALS
    # -------------------------
    total = len(scores)
    average = round(sum(percentages) / total) if total else 0
    top = max(percentages) if percentages else 0.0
    passed = sum(1 for p in percentages if p >= PASS_PERCENTAGE)

    # -------------------------
    # SUBMISSIONS (NEWEST FIRST)
    # -------------------------
    oldest = datetime.min.replace(tzinfo=timezone.utc)
    ordered = sorted(scores, key=lambda s: s.completed_at or oldest, reverse=True)

    rows: List[Dict[str, Any]] = []
    for s in ordered:
        rows.append({
            "score_id": s.id,
            "candidate_id": s.candidate_id,
            "score": s.score,
            "max_score": s.max_score,
            "percentage": s.percentage,
            "passed": s.percentage >= PASS_PERCENTAGE,
            "completed_at": s.completed_at.isoformat() if s.completed_at else None,
        })

    # -------------------------
    # FINAL SUMMARY OBJECT
    # -------------------------
    return {
        "assessment": {
            "id": assessment.id,
            "title": assessment.title,
            "total_questions": assessment.total_questions,
        },
        "total_submissions": total,
        "average_percentage": average,
        "top_percentage": top,
        "passed": passed,
        "pass_threshold": PASS_PERCENTAGE,
        "submissions": rows,
    }
