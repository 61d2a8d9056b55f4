"""
Submission Scoring

Scores a sparse answer map against a stored bank. Answers are keyed by
original question index; display order never matters here.
"""

import enum
import numbers
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from skillassess.common.exceptions import ValidationError
from skillassess.common.logger import app_logger
from .model import AssessmentBank

logger = app_logger.getChild("domain.scorer")


class CompetencyLevel(enum.Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


@dataclass(frozen=True)
class LevelingPolicy:
    """
    Score-ratio thresholds, in whole percent of the maximum score.

    Comparisons are done in integers so a threshold is met exactly when
    ``score * 100 >= percent * max_score``.
    """
    advanced_percent: int = 90
    intermediate_percent: int = 70

    def level_for(self, score: int, max_score: int) -> CompetencyLevel:
        if score * 100 >= self.advanced_percent * max_score:
            return CompetencyLevel.ADVANCED
        if score * 100 >= self.intermediate_percent * max_score:
            return CompetencyLevel.INTERMEDIATE
        return CompetencyLevel.BEGINNER


@dataclass(frozen=True)
class ScoreResult:
    score: int
    max_score: int
    total_answered: int
    percentage: float
    level: CompetencyLevel
    passed: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'score': self.score,
            'maxScore': self.max_score,
            'totalAnswered': self.total_answered,
            'percentage': self.percentage,
            'level': self.level.value,
            'passed': self.passed,
        }


# Integer strings longer than this cannot name a question or an option
_MAX_INDEX_DIGITS = 18
_INDEX_PATTERN = re.compile(r"[+-]?[0-9]+")


def _parse_int(value: Any) -> Optional[int]:
    """
    Parse an index given as an integer or a plain decimal string.

    Returns None for integer strings too long to be any index.
    """
    if isinstance(value, bool):
        raise ValueError(value)
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if not _INDEX_PATTERN.fullmatch(text):
            raise ValueError(value)
        if len(text.lstrip("+-")) > _MAX_INDEX_DIGITS:
            return None
        return int(text)
    raise ValueError(value)


def parse_answers(answers: Any) -> Dict[int, int]:
    """
    Turn a submitted answer map into ``{original_index: selected_option}``.

    Keys and values may be integers or plain decimal strings (JSON object
    keys are always strings). ``None`` values mean the question was left
    blank and are dropped. Range checks are left to the scorer, except that
    keys too long to be an index are dropped here and such values are
    recorded as ``-1``, which matches no option.

    Raises:
        ValidationError: If ``answers`` is absent, not a mapping, or holds
            a key or value that is not an integer
    """
    if answers is None:
        raise ValidationError("Answers are required", {"answers": "required"})
    if not isinstance(answers, Mapping):
        raise ValidationError("Answers must be an object keyed by question index", {"answers": "invalid"})

    parsed: Dict[int, int] = {}
    for key, value in answers.items():
        try:
            index = _parse_int(key)
        except ValueError:
            raise ValidationError(f"Answer key '{key}' is not a question index", {"answers": "invalid_key"})
        if value is None:
            continue
        try:
            selected = _parse_int(value)
        except ValueError:
            raise ValidationError(
                f"Answer for question {key} must be an option index", {"answers": "invalid_value"}
            )
        if index is None:
            continue
        parsed[index] = -1 if selected is None else selected
    return parsed


class Scorer:
    """Evaluates submissions against a bank under a leveling policy."""

    def __init__(self, policy: LevelingPolicy = LevelingPolicy()):
        self.policy = policy

    def score(self, bank: AssessmentBank, answers: Any) -> ScoreResult:
        """
        Score ``answers`` against ``bank``.

        Entries whose key falls outside the bank are ignored and count
        neither as answered nor as correct. The maximum score is the number
        of questions a delivery contains, so unanswered questions count as
        wrong.
        """
        parsed = parse_answers(answers)

        score = 0
        total_answered = 0
        for index, selected in parsed.items():
            if not 0 <= index < bank.total_questions:
                continue
            total_answered += 1
            if bank.questions[index].is_correct(selected):
                score += 1

        max_score = bank.delivered_count
        result = ScoreResult(
            score=score,
            max_score=max_score,
            total_answered=total_answered,
            percentage=score / max_score * 100,
            level=self.policy.level_for(score, max_score),
            passed=score >= bank.passing_score,
        )
        skipped = len(parsed) - total_answered
        if skipped:
            logger.info(f"Ignored {skipped} out-of-range answers for {bank.assessment_id}")
        return result
