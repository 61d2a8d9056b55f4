"""
Shared fixtures for the assessment engine tests.
"""

import random
from datetime import datetime

import pytest

from skillassess.domain.assessments import (
    AssessmentBank,
    Difficulty,
    MemoryAssessmentRepository,
    Question,
    QuestionSelector,
)
from skillassess.domain.competency import MemoryProfileRepository, StudentProfile
from skillassess.services import AssessmentDeliveryService


def make_question_payload(index: int, correct: int = 0, option_count: int = 4, **overrides):
    """Authoring payload for one question, as the bank validator expects it."""
    data = {
        "text": f"Question {index}?",
        "options": [f"Option {index}.{n}" for n in range(option_count)],
        "correct_answer_index": correct,
        "difficulty": "medium",
    }
    data.update(overrides)
    return data


def make_bank(total: int = 10, subset_size: int = 5, passing_score: int = 3,
              assessment_id: str = "bank-1", skill: str = "python") -> AssessmentBank:
    """A stored-shape bank whose question ``i`` has correct answer ``i % 4``."""
    return AssessmentBank(
        assessment_id=assessment_id,
        title="Python Basics",
        skill=skill,
        questions=[
            Question(
                text=f"Question {i}?",
                options=["A", "B", "C", "D"],
                correct_answer_index=i % 4,
                difficulty=Difficulty.MEDIUM,
            )
            for i in range(total)
        ],
        subset_size=subset_size,
        duration=30,
        passing_score=passing_score,
        created_by="company-1",
        created_at=datetime(2026, 1, 1, 12, 0, 0),
    )


@pytest.fixture
def question_payloads():
    return [make_question_payload(i, correct=i % 4) for i in range(6)]


@pytest.fixture
def bank():
    return make_bank()


@pytest.fixture
def assessment_repository(bank):
    return MemoryAssessmentRepository([bank])


@pytest.fixture
def profile_repository():
    return MemoryProfileRepository([StudentProfile(user_id="student-1")])


@pytest.fixture
def service(assessment_repository, profile_repository):
    return AssessmentDeliveryService(
        assessments=assessment_repository,
        profiles=profile_repository,
        selector=QuestionSelector(random.Random(1234)),
    )
