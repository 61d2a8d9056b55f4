"""
Assessment Delivery Service

Orchestrates authoring, test delivery and submission scoring over the
bank and profile stores.

An assessment moves Created -> Started -> Submitted, but none of this is
persisted. ``start`` may be called any number of times and each call may
deal a different subset. ``submit`` is not bound to a particular ``start``:
answers are keyed by original question index, so scoring only needs the
keys to name real bank positions.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

from skillassess.common.exceptions import NotFoundError
from skillassess.common.logger import app_logger, log_execution_time, with_context
from skillassess.domain.assessments import (
    AssessmentBank,
    AssessmentRepository,
    DeliveredTest,
    QuestionBank,
    QuestionSelector,
    Scorer,
    ScoreResult,
)
from skillassess.domain.competency import (
    CompetencyResult,
    ProfileRepository,
    merge_result,
)

logger = app_logger.getChild("services.delivery")


class AssessmentDeliveryService:
    """
    Facade over the assessment engine.

    Args:
        assessments: Bank store
        profiles: Test-taker profile store
        question_bank: Authoring validator
        selector: Subset selector used by ``start``
        scorer: Scorer used by ``submit``
    """

    def __init__(
        self,
        assessments: AssessmentRepository,
        profiles: ProfileRepository,
        question_bank: Optional[QuestionBank] = None,
        selector: Optional[QuestionSelector] = None,
        scorer: Optional[Scorer] = None,
    ):
        self.assessments = assessments
        self.profiles = profiles
        self.question_bank = question_bank or QuestionBank()
        self.selector = selector or QuestionSelector()
        self.scorer = scorer or Scorer()

    async def _get_bank(self, assessment_id: str) -> AssessmentBank:
        bank = await self.assessments.get_by_id(assessment_id)
        if bank is None:
            raise NotFoundError("Assessment", assessment_id)
        return bank

    async def list_assessments(self) -> List[Dict[str, Any]]:
        """Summaries of every bank, without questions."""
        return [bank.summary() for bank in await self.assessments.list_all()]

    async def get_assessment(self, assessment_id: str) -> Dict[str, Any]:
        """Summary of one bank, without questions."""
        return (await self._get_bank(assessment_id)).summary()

    @log_execution_time(logger)
    async def create_assessment(
        self,
        created_by: str,
        title: Any,
        skill: Any,
        questions: Sequence[Mapping[str, Any]],
        duration: Any,
        passing_score: Any,
        subset_size: Any = None,
    ) -> Dict[str, Any]:
        """
        Validate and store a new bank.

        Returns:
            The authoring summary; question content is never echoed back
        """
        bank = self.question_bank.create(
            title=title,
            skill=skill,
            questions=questions,
            duration=duration,
            passing_score=passing_score,
            subset_size=subset_size,
            created_by=created_by,
        )
        await self.assessments.save(bank)
        logger.info(
            f"Created assessment {bank.assessment_id} for skill '{bank.skill}' "
            f"with {bank.total_questions} questions (subset {bank.subset_size})"
        )
        return bank.summary()

    @log_execution_time(logger)
    async def start_assessment(self, assessment_id: str) -> DeliveredTest:
        """Deal an answer-stripped subset of the bank. Writes nothing."""
        bank = await self._get_bank(assessment_id)
        delivered = self.selector.select(bank)
        logger.info(f"Started assessment {assessment_id} with {delivered.subset_size} questions")
        return delivered

    @log_execution_time(logger)
    async def submit_assessment(self, user_id: str, assessment_id: str, answers: Any) -> ScoreResult:
        """
        Score a submission and fold it into the caller's competency records.

        Every check (bank exists, answers well-formed, profile exists) runs
        before the single profile write.
        """
        log = with_context(logger.name, assessment_id=assessment_id, user_id=user_id)

        bank = await self._get_bank(assessment_id)
        result = self.scorer.score(bank, answers)

        profile = await self.profiles.get_by_user_id(user_id)
        if profile is None:
            raise NotFoundError("Student profile", user_id)

        replaced = merge_result(profile, bank.skill, CompetencyResult.from_score(bank.skill, result))
        await self.profiles.save(profile)

        log.info(
            f"Scored {result.score}/{result.max_score} ({result.level.value}) on '{bank.skill}', "
            f"{'replaced' if replaced else 'added'} competency record"
        )
        return result

    async def get_competencies(self, user_id: str) -> List[CompetencyResult]:
        """The caller's competency records, one per skill."""
        profile = await self.profiles.get_by_user_id(user_id)
        if profile is None:
            raise NotFoundError("Student profile", user_id)
        return list(profile.skill_assessments)
