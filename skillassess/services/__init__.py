"""
Service layer for the skill assessment engine.
"""

from fastapi import Request

from skillassess.config import Settings
from skillassess.domain.assessments import (
    AssessmentRepository,
    LevelingPolicy,
    QuestionBank,
    QuestionSelector,
    Scorer,
)
from skillassess.domain.competency import ProfileRepository
from .delivery import AssessmentDeliveryService


def build_delivery_service(
    settings: Settings,
    assessments: AssessmentRepository,
    profiles: ProfileRepository,
) -> AssessmentDeliveryService:
    """Wire the delivery facade from settings and the two stores."""
    return AssessmentDeliveryService(
        assessments=assessments,
        profiles=profiles,
        question_bank=QuestionBank(default_subset_size=settings.DEFAULT_SUBSET_SIZE),
        selector=QuestionSelector(),
        scorer=Scorer(LevelingPolicy(
            advanced_percent=settings.LEVEL_ADVANCED_PERCENT,
            intermediate_percent=settings.LEVEL_INTERMEDIATE_PERCENT,
        )),
    )


def get_delivery_service(request: Request) -> AssessmentDeliveryService:
    """
    FastAPI dependency returning the facade created during application startup.

    Usage:
        @router.get("/endpoint")
        async def endpoint(service: AssessmentDeliveryService = Depends(get_delivery_service)):
            ...
    """
    return request.app.state.delivery_service


__all__ = [
    'AssessmentDeliveryService',
    'build_delivery_service',
    'get_delivery_service',
]
