"""
Question Selection for Test Delivery

Deals out an answer-stripped subset of a bank. Selection is sampling
without replacement over original indices, so every question has the
same chance of being included and none repeats within one delivery.
"""

import random
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from skillassess.common.logger import app_logger
from .model import AssessmentBank

logger = app_logger.getChild("domain.selector")


@dataclass(frozen=True)
class DeliveredQuestion:
    """A question as shown to a test-taker. Carries no answer."""
    display_index: int
    original_index: int
    question_text: str
    options: List[str]
    difficulty: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'displayIndex': self.display_index,
            'originalIndex': self.original_index,
            'question': self.question_text,
            'options': list(self.options),
            'difficulty': self.difficulty,
        }


@dataclass(frozen=True)
class DeliveredTest:
    """
    One delivery of a bank. Ephemeral, never persisted.

    ``subset_size`` is the number of questions actually delivered, which
    equals the bank size when the whole bank is dealt out.
    """
    assessment_id: str
    title: str
    skill: str
    duration: float
    passing_score: int
    subset_size: int
    questions: List[DeliveredQuestion]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'assessmentId': self.assessment_id,
            'title': self.title,
            'skill': self.skill,
            'duration': self.duration,
            'passingScore': self.passing_score,
            'subsetSize': self.subset_size,
            'questions': [q.to_dict() for q in self.questions],
        }


class QuestionSelector:
    """
    Builds ``DeliveredTest`` instances from banks.

    The random source is injectable so tests can seed it.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.SystemRandom()

    def sample_indices(self, population: int, count: int) -> List[int]:
        """
        Draw ``count`` distinct indices from ``range(population)``.

        The pool shrinks by one per draw: a uniformly chosen slot is taken
        and the last slot moved into its place.
        """
        if not 0 <= count <= population:
            raise ValueError(f"Cannot draw {count} indices from {population}")

        pool = list(range(population))
        drawn = []
        for _ in range(count):
            slot = self._rng.randrange(len(pool))
            drawn.append(pool[slot])
            pool[slot] = pool[-1]
            pool.pop()
        return drawn

    def select(self, bank: AssessmentBank) -> DeliveredTest:
        """
        Pick the questions for one attempt at ``bank``.

        A bank no larger than its subset size is delivered whole in original
        order; otherwise exactly ``subset_size`` questions are drawn and
        numbered in draw order.
        """
        total = bank.total_questions
        if total <= bank.subset_size:
            indices = list(range(total))
        else:
            indices = self.sample_indices(total, bank.subset_size)

        delivered = []
        for display_index, original_index in enumerate(indices):
            question = bank.questions[original_index]
            delivered.append(DeliveredQuestion(
                display_index=display_index,
                original_index=original_index,
                question_text=question.text,
                options=list(question.options),
                difficulty=question.difficulty.value,
            ))

        logger.debug(f"Selected {len(delivered)} of {total} questions for {bank.assessment_id}")
        return DeliveredTest(
            assessment_id=bank.assessment_id,
            title=bank.title,
            skill=bank.skill,
            duration=bank.duration,
            passing_score=bank.passing_score,
            subset_size=len(delivered),
            questions=delivered,
        )
