"""
Tests for bank authoring validation.
"""

import pytest

from skillassess.common.exceptions import ValidationError
from skillassess.domain.assessments import Difficulty, QuestionBank

from .conftest import make_question_payload


def create(questions, **overrides):
    kwargs = dict(
        title="Python Basics",
        skill="python",
        questions=questions,
        duration=30,
        passing_score=3,
        subset_size=3,
        created_by="company-1",
    )
    kwargs.update(overrides)
    return QuestionBank().create(**kwargs)


def test_create_trims_text_and_defaults_difficulty(question_payloads):
    question_payloads[0] = make_question_payload(
        0, text="  What is a list?  ", options=[" mutable ", "immutable "], correct_answer_index=0
    )
    del question_payloads[0]["difficulty"]

    bank = create(question_payloads, title="  Python Basics ")

    assert bank.title == "Python Basics"
    assert bank.questions[0].text == "What is a list?"
    assert bank.questions[0].options == ["mutable", "immutable"]
    assert bank.questions[0].difficulty is Difficulty.MEDIUM
    assert bank.total_questions == 6
    assert bank.subset_size == 3
    assert bank.created_by == "company-1"


def test_summary_excludes_question_content(question_payloads):
    summary = create(question_payloads).summary()

    assert set(summary) == {
        "id", "title", "skill", "totalQuestions", "subsetSize",
        "duration", "passingScore", "createdAt", "createdBy",
    }
    assert summary["totalQuestions"] == 6


@pytest.mark.parametrize("title", ["", "   ", None])
def test_blank_title_is_rejected(question_payloads, title):
    with pytest.raises(ValidationError, match="Title is required"):
        create(question_payloads, title=title)


def test_blank_skill_is_rejected(question_payloads):
    with pytest.raises(ValidationError, match="Skill is required"):
        create(question_payloads, skill=" ")


@pytest.mark.parametrize("questions", [[], None, "not a list"])
def test_missing_questions_are_rejected(questions):
    with pytest.raises(ValidationError, match="Questions array"):
        create(questions)


@pytest.mark.parametrize("subset_size", [0, -1, 6, 7, 2.5, True])
def test_subset_size_must_be_smaller_than_bank(question_payloads, subset_size):
    with pytest.raises(ValidationError, match="Subset size"):
        create(question_payloads, subset_size=subset_size)


@pytest.mark.parametrize("subset_size", [1, 5])
def test_subset_size_bounds_are_inclusive(question_payloads, subset_size):
    assert create(question_payloads, subset_size=subset_size).subset_size == subset_size


def test_omitted_subset_size_uses_default(question_payloads):
    bank = QuestionBank(default_subset_size=20).create(
        title="Small", skill="sql", questions=question_payloads, duration=10, passing_score=1
    )

    assert bank.subset_size == 20
    assert bank.delivered_count == 6


@pytest.mark.parametrize("duration", [0, -5, None, "30", False])
def test_duration_must_be_positive_number(question_payloads, duration):
    with pytest.raises(ValidationError, match="Duration"):
        create(question_payloads, duration=duration)


@pytest.mark.parametrize("passing_score", [-1, None, 1.5])
def test_passing_score_must_be_non_negative_integer(question_payloads, passing_score):
    with pytest.raises(ValidationError, match="Passing score"):
        create(question_payloads, passing_score=passing_score)


def test_zero_passing_score_is_allowed(question_payloads):
    assert create(question_payloads, passing_score=0).passing_score == 0


@pytest.mark.parametrize("overrides, message", [
    ({"text": "  "}, "Question 2: Question text is required"),
    ({"options": ["only one"]}, "Question 2: At least 2 options"),
    ({"options": ["a", 3]}, "Question 2: Options must be strings"),
    ({"correct_answer_index": 4}, "Question 2: Correct answer"),
    ({"correct_answer_index": -1}, "Question 2: Correct answer"),
    ({"correct_answer_index": None}, "Question 2: Correct answer"),
    ({"difficulty": "extreme"}, "Question 2: Difficulty"),
])
def test_invalid_question_is_rejected_with_position(question_payloads, overrides, message):
    question_payloads[1] = make_question_payload(1, **overrides)

    with pytest.raises(ValidationError) as excinfo:
        create(question_payloads)

    assert excinfo.value.message.startswith(message)
