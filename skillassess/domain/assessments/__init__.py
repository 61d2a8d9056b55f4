"""
Assessment domain module.

This module contains the bank model, authoring validation, delivery-time
selection and scoring for skill assessments.
"""

from .model import AssessmentBank, Difficulty, Question
from .bank import QuestionBank
from .selector import DeliveredQuestion, DeliveredTest, QuestionSelector
from .scorer import CompetencyLevel, LevelingPolicy, Scorer, ScoreResult, parse_answers
from .repository import AssessmentRepository
from .memory_repository import MemoryAssessmentRepository

__all__ = [
    'AssessmentBank',
    'Difficulty',
    'Question',
    'QuestionBank',
    'DeliveredQuestion',
    'DeliveredTest',
    'QuestionSelector',
    'CompetencyLevel',
    'LevelingPolicy',
    'Scorer',
    'ScoreResult',
    'parse_answers',
    'AssessmentRepository',
    'MemoryAssessmentRepository',
]
