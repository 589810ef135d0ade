"""test_validator.py: Unit tests for inline answer validation."""

import math

import pytest

from talenthub.engine.validator import ViolationCode, coerce_number, validate
from talenthub.schemas.assessment import (
    FileUploadQuestion,
    LongTextQuestion,
    MultiChoiceQuestion,
    NumericQuestion,
    ShortTextQuestion,
    ValidationRule,
)


@pytest.fixture
def numeric_question() -> NumericQuestion:
    return NumericQuestion(id="n1", question="Years of experience", validation=ValidationRule(min=10, max=20))


def test_numeric_below_minimum(numeric_question: NumericQuestion) -> None:
    """Test that 5 violates a minimum of 10 and cites it."""
    violation = validate(numeric_question, 5)
    assert violation.code == ViolationCode.BELOW_MINIMUM
    assert violation.message == "Value must be at least 10"
    assert violation.bound == 10


def test_numeric_above_maximum(numeric_question: NumericQuestion) -> None:
    """Test that 25 violates a maximum of 20 and cites it."""
    violation = validate(numeric_question, 25)
    assert violation.code == ViolationCode.ABOVE_MAXIMUM
    assert violation.message == "Value must be at most 20"
    assert violation.bound == 20


@pytest.mark.parametrize("answer", [15, 10, 20, "15", 12.5])
def test_numeric_within_bounds(numeric_question: NumericQuestion, answer) -> None:
    """Test that values within the inclusive bounds pass."""
    assert validate(numeric_question, answer) is None


@pytest.mark.parametrize("answer", ["fifteen", "nan", True])
def test_non_numeric_input_is_a_violation(numeric_question: NumericQuestion, answer) -> None:
    """Test that words, NaN and booleans in a numeric field never pass min/max."""
    violation = validate(numeric_question, answer)
    assert violation.code == ViolationCode.NOT_A_NUMBER


def test_short_text_min_length() -> None:
    """Test minLength on a short-text answer."""
    question = ShortTextQuestion(id="t1", question="Nickname", validation=ValidationRule(min_length=5))

    violation = validate(question, "hi")
    assert violation.code == ViolationCode.TOO_SHORT
    assert violation.message == "Must be at least 5 characters"
    assert validate(question, "hello") is None


def test_long_text_max_length() -> None:
    """Test maxLength on a long-text answer."""
    question = LongTextQuestion(id="t2", question="Bio", validation=ValidationRule(max_length=10))

    violation = validate(question, "x" * 11)
    assert violation.code == ViolationCode.TOO_LONG
    assert violation.message == "Must be at most 10 characters"
    assert validate(question, "x" * 10) is None


def test_pattern_mismatch() -> None:
    """Test that a text answer must match the pattern when one is set."""
    question = ShortTextQuestion(id="t3", question="Postcode", validation=ValidationRule(pattern=r"^\d{5}$"))

    assert validate(question, "12345") is None
    violation = validate(question, "12a45")
    assert violation.code == ViolationCode.INVALID_FORMAT
    assert violation.message == "Invalid format"


def test_invalid_pattern_is_a_violation_not_an_error() -> None:
    """Test that a broken pattern authored in the builder flags the answer instead of raising."""
    question = ShortTextQuestion(id="t4", question="Code", validation=ValidationRule(pattern="[unclosed"))
    assert validate(question, "anything").code == ViolationCode.INVALID_FORMAT


def test_length_checked_before_pattern() -> None:
    """Test that the first failing rule wins."""
    question = ShortTextQuestion(
        id="t5", question="Code", validation=ValidationRule(min_length=4, pattern=r"^\d+$")
    )
    assert validate(question, "ab").code == ViolationCode.TOO_SHORT


@pytest.mark.parametrize("answer", [None, "", []])
def test_required_question_left_empty(answer) -> None:
    """Test that missing, empty and empty-selection answers fail a required question."""
    question = MultiChoiceQuestion(id="m1", question="Pick", required=True, options=["a", "b"])
    violation = validate(question, answer)
    assert violation.code == ViolationCode.REQUIRED
    assert violation.message == "This question is required"


def test_zero_satisfies_required() -> None:
    """Test that zero is a real numeric answer."""
    question = NumericQuestion(id="n2", question="Count", required=True)
    assert validate(question, 0) is None


def test_optional_empty_answer_skips_rules() -> None:
    """Test that an unanswered optional question is never flagged."""
    question = ShortTextQuestion(id="t6", question="Optional", validation=ValidationRule(min_length=5))
    assert validate(question, "") is None
    assert validate(question, None) is None


def test_rules_ignored_for_other_types() -> None:
    """Test that text rules do not apply to file uploads."""
    question = FileUploadQuestion(id="f1", question="CV", validation=ValidationRule(min_length=100))
    assert validate(question, {"name": "cv.pdf"}) is None


def test_coerce_number() -> None:
    """Test numeric coercion of raw input."""
    assert coerce_number("  42 ") == 42.0
    assert coerce_number(3) == 3.0
    assert coerce_number("inf") == math.inf
    assert coerce_number(float("nan")) is None
    assert coerce_number(False) is None
    assert coerce_number(["1"]) is None
