"""
Tests for submission scoring and leveling.
"""

from datetime import datetime

import pytest

from skillassess.common.exceptions import ValidationError
from skillassess.domain.assessments import (
    AssessmentBank,
    CompetencyLevel,
    LevelingPolicy,
    Question,
    Scorer,
    parse_answers,
)

from .conftest import make_bank


@pytest.fixture
def scorer():
    return Scorer()


@pytest.fixture
def two_question_bank():
    return AssessmentBank(
        assessment_id="pair",
        title="Pair",
        skill="logic",
        questions=[
            Question(text="First?", options=["A", "B"], correct_answer_index=0),
            Question(text="Second?", options=["A", "B"], correct_answer_index=1),
        ],
        subset_size=20,
        duration=5,
        passing_score=1,
        created_at=datetime(2026, 1, 1),
    )


def test_scores_against_original_indices(scorer, two_question_bank):
    result = scorer.score(two_question_bank, {0: 0, 1: 0})

    assert result.score == 1
    assert result.total_answered == 2
    assert result.max_score == 2
    assert result.percentage == 50.0
    assert result.passed is True


def test_string_keys_are_accepted(scorer, two_question_bank):
    result = scorer.score(two_question_bank, {"0": 0, "1": "1"})

    assert result.score == 2
    assert result.level is CompetencyLevel.ADVANCED


def test_empty_answers_score_zero(scorer):
    bank = make_bank(total=10, subset_size=5, passing_score=0)

    result = scorer.score(bank, {})

    assert result.score == 0
    assert result.total_answered == 0
    assert result.percentage == 0
    assert result.level is CompetencyLevel.BEGINNER
    assert result.passed is True


def test_empty_answers_fail_positive_passing_score(scorer):
    assert scorer.score(make_bank(passing_score=1), {}).passed is False


def test_out_of_range_keys_are_ignored(scorer):
    bank = make_bank(total=10, subset_size=5)

    result = scorer.score(bank, {99: 0, -1: 0, "10": 2, 0: 0})

    assert result.total_answered == 1
    assert result.score == 1


def test_max_score_is_delivered_count_not_answered_count(scorer):
    bank = make_bank(total=10, subset_size=4)

    result = scorer.score(bank, {1: 1, 2: 2})

    assert result.max_score == 4
    assert result.percentage == 50.0


def test_blank_answers_count_as_unanswered(scorer):
    bank = make_bank(total=10, subset_size=4)

    result = scorer.score(bank, {1: 1, 2: None})

    assert result.total_answered == 1


@pytest.mark.parametrize("answers", [None, [0, 1], "0:1", 3])
def test_non_mapping_answers_are_rejected(scorer, answers):
    with pytest.raises(ValidationError):
        scorer.score(make_bank(), answers)


@pytest.mark.parametrize("answers", [
    {"first": 0}, {"1.5": 0}, {0: "A"}, {0: True}, {0: [1]},
    {"1_0": 0}, {"\u0661": 0}, {0: "1_0"},
])
def test_malformed_entries_are_rejected(answers):
    with pytest.raises(ValidationError):
        parse_answers(answers)


@pytest.mark.parametrize("score, level", [
    (10, CompetencyLevel.ADVANCED),
    (9, CompetencyLevel.ADVANCED),
    (8, CompetencyLevel.INTERMEDIATE),
    (7, CompetencyLevel.INTERMEDIATE),
    (6, CompetencyLevel.BEGINNER),
    (0, CompetencyLevel.BEGINNER),
])
def test_level_thresholds(score, level):
    assert LevelingPolicy().level_for(score, 10) is level


def test_level_thresholds_are_exact_for_awkward_ratios():
    policy = LevelingPolicy()

    assert policy.level_for(2, 3) is CompetencyLevel.BEGINNER
    assert policy.level_for(3, 3) is CompetencyLevel.ADVANCED
    assert policy.level_for(7, 10) is CompetencyLevel.INTERMEDIATE


def test_custom_policy_changes_levels():
    scorer = Scorer(LevelingPolicy(advanced_percent=80, intermediate_percent=60))
    bank = make_bank(total=10, subset_size=5)

    # Questions 0-3 answered correctly out of 5 delivered
    result = scorer.score(bank, {i: i % 4 for i in range(4)})

    assert result.score == 4
    assert result.level is CompetencyLevel.ADVANCED


def test_result_serializes_with_wire_names(scorer, two_question_bank):
    assert scorer.score(two_question_bank, {0: 0}).to_dict() == {
        "score": 1,
        "maxScore": 2,
        "totalAnswered": 1,
        "percentage": 50.0,
        "level": "Beginner",
        "passed": True,
    }


def test_overlong_index_key_is_ignored(scorer):
    bank = make_bank(total=10, subset_size=5)

    result = scorer.score(bank, {"9" * 5000: 0, "-" + "9" * 5000: 0, "0": 0})

    assert result.total_answered == 1
    assert result.score == 1


def test_overlong_option_value_is_answered_but_wrong(scorer):
    bank = make_bank(total=10, subset_size=5)

    result = scorer.score(bank, {"0": "1" * 5000})

    assert result.total_answered == 1
    assert result.score == 0


def test_padded_and_signed_integer_strings_are_accepted():
    assert parse_answers({" 3 ": "+1", "007": "-0"}) == {3: 1, 7: 0}
