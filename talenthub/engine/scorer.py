# talenthub/engine/scorer.py

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from talenthub.engine.validator import coerce_number
from talenthub.schemas.assessment import (
    TEXT_TYPES,
    AnswerValue,
    Assessment,
    Question,
    QuestionType,
    is_answered,
)
from talenthub.schemas.score import AssessmentResponse, AssessmentScore, SectionScore

logger = logging.getLogger(__name__)


class AssessmentScorer:
    """
    PURE RULE-BASED SCORING ENGINE.

    Deterministic and idempotent: the same (document, answers) pair always
    produces the same AssessmentScore. Every question counts, visible or not:
    - Correct answer = full points, anything else = zero (no partial credit)
    - No declared correct answer = manual review, zero earned, full weight
    - File uploads are always manual review
    """

    def score(self, document: Assessment, answers: Mapping[str, AnswerValue]) -> AssessmentScore:
        """
        Score a submission against its assessment document.

        Args:
            document: Assessment with declared correct answers and points
            answers: Submitted answers keyed by question id

        Returns:
            AssessmentScore with per-question responses and section subtotals
        """
        responses: List[AssessmentResponse] = []
        section_scores: List[SectionScore] = []

        for section in document.ordered_sections():
            earned = 0.0
            possible = 0.0

            for question in section.ordered_questions():
                answer = answers.get(question.id)
                is_correct = self.judge(question, answer)
                points = float(question.points)
                points_earned = points if is_correct else 0.0

                logger.debug(
                    f"Scored {question.type}: {question.id} "
                    f"correct={is_correct} points={points_earned}/{points}"
                )

                responses.append(AssessmentResponse(
                    question_id=question.id,
                    answer=answer,
                    is_correct=is_correct,
                    points_earned=points_earned,
                    max_points=points,
                ))
                earned += points_earned
                possible += points

            section_scores.append(SectionScore(
                section_id=section.id,
                score=round(earned, 2),
                max_score=round(possible, 2),
                percentage=percentage(earned, possible),
            ))

        total = sum(r.points_earned for r in responses)
        max_total = sum(r.max_points for r in responses)

        logger.info(
            f"Scored assessment {document.id}: {total:.2f}/{max_total:.2f} "
            f"across {len(responses)} questions"
        )

        return AssessmentScore(
            assessment_id=document.id,
            responses=responses,
            score=round(total, 2),
            max_score=round(max_total, 2),
            percentage=percentage(total, max_total),
            section_scores=section_scores,
        )

    # ------------------------------------------------------------
    # Per-type correctness
    # ------------------------------------------------------------

    def judge(self, question: Question, answer: Any) -> Optional[bool]:
        """
        Returns True/False for auto-scored questions, None for manual review.
        """
        if question.type == QuestionType.FILE_UPLOAD.value or question.is_manual_review:
            return None

        if not is_answered(answer):
            return False

        if question.type == QuestionType.SINGLE_CHOICE.value:
            return self.score_single_choice(answer, question.correct_answers, question.options)

        if question.type == QuestionType.MULTI_CHOICE.value:
            return self.score_multi_choice(answer, question.correct_answers, question.options)

        if question.type in TEXT_TYPES:
            return self.score_text(answer, question.correct_answers)

        if question.type == QuestionType.NUMERIC.value:
            return self.score_numeric(answer, question.correct_answers)

        return None

    def score_single_choice(self, answer: Any, correct: Any, options: Sequence[str]) -> bool:
        submitted = submitted_choice(answer, options)
        return submitted is not None and submitted == canonical_choice(correct, options)

    def score_multi_choice(self, answer: Any, correct: Iterable[Any], options: Sequence[str]) -> bool:
        """
        Exact set match, order irrelevant. A subset or superset earns nothing.
        """
        selection = answer if isinstance(answer, (list, tuple, set, frozenset)) else [answer]
        submitted = {submitted_choice(value, options) for value in selection}
        if None in submitted:
            return False
        expected = {canonical_choice(value, options) for value in correct}
        return submitted == expected

    def score_text(self, answer: Any, correct: str) -> bool:
        # Case-sensitive exact match, no fuzzy matching
        return isinstance(answer, str) and answer == correct

    def score_numeric(self, answer: Any, correct: float) -> bool:
        number = coerce_number(answer)
        return number is not None and number == float(correct)


# -------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------

def canonical_choice(value: Any, options: Sequence[str]) -> Optional[str]:
    """
    Map a declared correct answer to its option index as a string.

    The builder stores indices ("0", "1", ...), so an index reading wins;
    option text is accepted for hand-written documents. None when the value
    names no option.
    """
    index = _option_index(value, options)
    if index is None:
        index = _option_text_index(value, options)
    return index


def submitted_choice(value: Any, options: Sequence[str]) -> Optional[str]:
    """
    Map a candidate's selection to its option index as a string.

    The renderer submits option text, so text wins over an index reading
    (options "1", "2", "3" must not be read as indices). None when the
    value names no option.
    """
    index = _option_text_index(value, options)
    if index is None:
        index = _option_index(value, options)
    return index


def _option_index(value: Any, options: Sequence[str]) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
    else:
        return None
    return str(number) if 0 <= number < len(options) else None


def _option_text_index(value: Any, options: Sequence[str]) -> Optional[str]:
    if not isinstance(value, str):
        return None
    options = list(options)
    if value in options:
        return str(options.index(value))
    return None


def percentage(score: float, max_score: float) -> float:
    return round((score / max_score) * 100, 2) if max_score else 0.0


_default_scorer = AssessmentScorer()


def score_assessment(document: Assessment, answers: Mapping[str, AnswerValue]) -> AssessmentScore:
    """Score a submission with the default rule-based scorer."""
    return _default_scorer.score(document, answers)
