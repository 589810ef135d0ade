# talenthub/engine/validator.py

"""
ANSWER VALIDATOR
Per-answer checks shown inline while a candidate fills in an assessment.

Violations are values, never exceptions: malformed input (a word in a
numeric field, a broken pattern authored in the builder) becomes a
violation instead of an error.
"""

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from talenthub.schemas.assessment import (
    TEXT_TYPES,
    Question,
    QuestionType,
    ValidationRule,
    is_answered,
)

logger = logging.getLogger(__name__)


class ViolationCode(str, Enum):
    REQUIRED = "required"
    BELOW_MINIMUM = "below_minimum"
    ABOVE_MAXIMUM = "above_maximum"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    INVALID_FORMAT = "invalid_format"
    NOT_A_NUMBER = "not_a_number"


@dataclass(frozen=True)
class Violation:
    """Why an answer is not acceptable for a question."""
    code: ViolationCode
    message: str
    bound: Optional[float] = None


def validate(question: Question, answer: Any) -> Optional[Violation]:
    """
    Validate one answer against its question.

    Order of checks (first violation wins):
    1. Required question left empty
    2. Nothing more to check without a validation rule or an answer
    3. Numeric: must be a number, then min / max
    4. Short / long text: minLength, maxLength, then pattern
    5. Other types have no extra rules

    Args:
        question: Question being answered
        answer: Current answer value (None when unanswered)

    Returns:
        The first violation found, or None when the answer is acceptable
    """
    if question.required and not is_answered(answer):
        return Violation(ViolationCode.REQUIRED, "This question is required")

    rule = question.validation
    if rule is None or not is_answered(answer):
        return None

    if question.type == QuestionType.NUMERIC.value:
        return _validate_numeric(rule, answer)

    if question.type in TEXT_TYPES:
        return _validate_text(rule, answer)

    return None


# ------------------------------------------------------------
# Type-specific rules
# ------------------------------------------------------------

def _validate_numeric(rule: ValidationRule, answer: Any) -> Optional[Violation]:
    number = coerce_number(answer)
    if number is None:
        return Violation(ViolationCode.NOT_A_NUMBER, "Value must be a number")

    if rule.min is not None and number < rule.min:
        return Violation(
            ViolationCode.BELOW_MINIMUM,
            f"Value must be at least {_fmt(rule.min)}",
            bound=rule.min,
        )
    if rule.max is not None and number > rule.max:
        return Violation(
            ViolationCode.ABOVE_MAXIMUM,
            f"Value must be at most {_fmt(rule.max)}",
            bound=rule.max,
        )
    return None


def _validate_text(rule: ValidationRule, answer: Any) -> Optional[Violation]:
    text = answer if isinstance(answer, str) else str(answer)

    if rule.min_length is not None and len(text) < rule.min_length:
        return Violation(
            ViolationCode.TOO_SHORT,
            f"Must be at least {rule.min_length} characters",
            bound=rule.min_length,
        )
    if rule.max_length is not None and len(text) > rule.max_length:
        return Violation(
            ViolationCode.TOO_LONG,
            f"Must be at most {rule.max_length} characters",
            bound=rule.max_length,
        )
    if rule.pattern:
        try:
            matched = re.search(rule.pattern, text) is not None
        except re.error as e:
            logger.warning(f"Invalid validation pattern {rule.pattern!r}: {e}")
            matched = False
        if not matched:
            return Violation(ViolationCode.INVALID_FORMAT, "Invalid format")
    return None


def coerce_number(value: Any) -> Optional[float]:
    """
    Read a numeric answer. Returns None for anything that is not a finite
    or infinite number (NaN, booleans, words, selections).
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return None if math.isnan(number) else number


def _fmt(bound: float) -> str:
    return str(int(bound)) if float(bound).is_integer() else str(bound)
