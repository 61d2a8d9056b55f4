"""
Question Bank Authoring

Validation and construction of assessment banks. Every rule is checked
before anything is built, so a rejected bank never reaches storage.
"""

import numbers
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

from skillassess.common.exceptions import ValidationError
from skillassess.common.logger import app_logger
from .model import AssessmentBank, Difficulty, Question

logger = app_logger.getChild("domain.bank")

DEFAULT_SUBSET_SIZE = 20

_DIFFICULTIES = {d.value: d for d in Difficulty}


def _is_int(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or value.strip() == ""


class QuestionBank:
    """
    Authoring entry point for assessment banks.

    ``create`` validates authored content and returns a new, unsaved
    ``AssessmentBank`` with trimmed text.
    """

    def __init__(self, default_subset_size: int = DEFAULT_SUBSET_SIZE):
        self.default_subset_size = default_subset_size

    def create(
        self,
        title: Any,
        skill: Any,
        questions: Any,
        duration: Any,
        passing_score: Any,
        subset_size: Any = None,
        created_by: Optional[str] = None,
    ) -> AssessmentBank:
        """
        Validate authored content and build a bank.

        Args:
            title: Bank title, must not be blank
            skill: Skill tag, must not be blank
            questions: Sequence of question mappings with keys ``text``,
                ``options``, ``correct_answer_index`` and optional ``difficulty``
            duration: Minutes allowed, a positive number
            passing_score: Non-negative integer raw score
            subset_size: Questions per delivery; when given it must satisfy
                ``1 <= subset_size < len(questions)``. When omitted the
                configured default is stored and a bank no larger than it is
                delivered whole.
            created_by: Owner reference

        Returns:
            The new bank

        Raises:
            ValidationError: If any rule is violated
        """
        if _is_blank(title):
            raise ValidationError("Title is required", {"title": "required"})

        if _is_blank(skill):
            raise ValidationError("Skill is required", {"skill": "required"})

        if not isinstance(questions, Sequence) or isinstance(questions, (str, bytes)) or len(questions) == 0:
            raise ValidationError(
                "Questions array is required and cannot be empty", {"questions": "required"}
            )

        if subset_size is None:
            subset_size = self.default_subset_size
        elif not _is_int(subset_size) or not 1 <= subset_size < len(questions):
            raise ValidationError(
                f"Subset size must be an integer between 1 and {len(questions) - 1}",
                {"subsetSize": "out_of_range"}
            )

        if not _is_number(duration) or duration <= 0:
            raise ValidationError(
                "Duration must be a positive number (in minutes)", {"duration": "invalid"}
            )

        if not _is_int(passing_score) or passing_score < 0:
            raise ValidationError(
                "Passing score must be a non-negative integer", {"passingScore": "invalid"}
            )

        built = [self._build_question(i, q) for i, q in enumerate(questions)]

        bank = AssessmentBank(
            assessment_id=AssessmentBank.new_id(),
            title=title.strip(),
            skill=skill.strip(),
            questions=built,
            subset_size=int(subset_size),
            duration=duration,
            passing_score=int(passing_score),
            created_by=created_by,
            created_at=datetime.utcnow(),
        )
        logger.debug(
            f"Validated bank '{bank.title}' with {bank.total_questions} questions "
            f"(subset {bank.subset_size})"
        )
        return bank

    @staticmethod
    def _build_question(index: int, data: Any) -> Question:
        position = index + 1
        if not isinstance(data, Mapping):
            raise ValidationError(f"Question {position}: Question must be an object")

        text = data.get("text")
        if _is_blank(text):
            raise ValidationError(f"Question {position}: Question text is required")

        options = data.get("options")
        if not isinstance(options, Sequence) or isinstance(options, (str, bytes)) or len(options) < 2:
            raise ValidationError(f"Question {position}: At least 2 options are required")
        if not all(isinstance(opt, str) for opt in options):
            raise ValidationError(f"Question {position}: Options must be strings")

        correct = data.get("correct_answer_index")
        if not _is_int(correct) or not 0 <= correct < len(options):
            raise ValidationError(f"Question {position}: Correct answer must be a valid option index")

        raw_difficulty = data.get("difficulty")
        if raw_difficulty is None:
            difficulty = Difficulty.MEDIUM
        elif isinstance(raw_difficulty, str) and raw_difficulty in _DIFFICULTIES:
            difficulty = _DIFFICULTIES[raw_difficulty]
        else:
            raise ValidationError(
                f"Question {position}: Difficulty must be 'easy', 'medium', or 'hard'"
            )

        return Question(
            text=text.strip(),
            options=[opt.strip() for opt in options],
            correct_answer_index=int(correct),
            difficulty=difficulty,
        )
