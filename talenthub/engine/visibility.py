# talenthub/engine/visibility.py

from typing import List, Mapping

from talenthub.schemas.assessment import AnswerValue, AssessmentSection, Condition, FileReference, Question


def is_visible(question: Question, answers: Mapping[str, AnswerValue]) -> bool:
    """
    Decide whether a question is shown for the current answers.

    Rules:
    1. No conditional rule -> always visible
    2. equals / not_equals -> strict comparison against the raw answer
       (a multi-choice selection is a list and never equals a string)
    3. contains -> case-insensitive substring test on the answer's text
    4. Unknown condition kinds fail open
    """
    rule = question.conditional_logic
    if rule is None:
        return True

    dependent_answer = answers.get(rule.depends_on)
    condition = rule.condition

    if condition == Condition.EQUALS.value:
        return dependent_answer == rule.value
    if condition == Condition.NOT_EQUALS.value:
        return dependent_answer != rule.value
    if condition == Condition.CONTAINS.value:
        return rule.value.lower() in _as_text(dependent_answer).lower()

    return True


def _as_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    if isinstance(value, FileReference):
        return value.name
    return str(value)


def visible_questions(section: AssessmentSection, answers: Mapping[str, AnswerValue]) -> List[Question]:
    return [q for q in section.ordered_questions() if is_visible(q, answers)]
