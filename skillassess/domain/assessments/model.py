"""
Assessment Domain Model Module

This module defines the core domain entities for the assessment subsystem:
the multiple-choice question and the author-owned bank that holds them.
"""

import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


class Difficulty(enum.Enum):
    """Authoring difficulty label of a question."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class Question:
    """
    A single-correct-answer multiple choice question.

    Attributes:
        text: The question text
        options: Ordered answer options
        correct_answer_index: Index into ``options`` of the correct answer
        difficulty: Authoring difficulty label
    """
    text: str
    options: List[str]
    correct_answer_index: int
    difficulty: Difficulty = Difficulty.MEDIUM

    def is_correct(self, selected_index: int) -> bool:
        return selected_index == self.correct_answer_index

    def to_dict(self) -> Dict[str, Any]:
        return {
            'text': self.text,
            'options': list(self.options),
            'correct_answer_index': self.correct_answer_index,
            'difficulty': self.difficulty.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Question':
        return cls(
            text=data['text'],
            options=list(data['options']),
            correct_answer_index=data['correct_answer_index'],
            difficulty=Difficulty(data.get('difficulty') or Difficulty.MEDIUM.value),
        )


@dataclass
class AssessmentBank:
    """
    The full set of questions for one skill assessment, answers included.

    A bank is read-only once stored; delivery and scoring never mutate it.

    Attributes:
        assessment_id: Unique identifier for the bank
        title: Display title
        skill: Skill tag, the join key to competency records
        questions: Ordered questions; a question's position is its original index
        subset_size: Number of questions dealt out per attempt
        duration: Time allowed in minutes
        passing_score: Raw score needed to pass, relative to the delivered subset
        created_by: Owner reference
        created_at: When the bank was created
    """
    assessment_id: str
    title: str
    skill: str
    questions: List[Question]
    subset_size: int
    duration: float
    passing_score: int
    created_by: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def delivered_count(self) -> int:
        """Number of questions one attempt actually receives."""
        return min(self.subset_size, self.total_questions)

    @staticmethod
    def new_id() -> str:
        return str(uuid.uuid4())

    def summary(self) -> Dict[str, Any]:
        """
        Authoring-facing description of the bank.

        Raw question content and answers are never part of a summary.
        """
        return {
            'id': self.assessment_id,
            'title': self.title,
            'skill': self.skill,
            'totalQuestions': self.total_questions,
            'subsetSize': self.subset_size,
            'duration': self.duration,
            'passingScore': self.passing_score,
            'createdAt': self.created_at.isoformat(),
            'createdBy': self.created_by,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            'assessment_id': self.assessment_id,
            'title': self.title,
            'skill': self.skill,
            'questions': [q.to_dict() for q in self.questions],
            'subset_size': self.subset_size,
            'duration': self.duration,
            'passing_score': self.passing_score,
            'created_by': self.created_by,
            'created_at': self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AssessmentBank':
        created_at = data.get('created_at')
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        return cls(
            assessment_id=data['assessment_id'],
            title=data['title'],
            skill=data['skill'],
            questions=[Question.from_dict(q) for q in data.get('questions', [])],
            subset_size=data['subset_size'],
            duration=data['duration'],
            passing_score=data['passing_score'],
            created_by=data.get('created_by'),
            created_at=created_at or datetime.utcnow(),
        )
