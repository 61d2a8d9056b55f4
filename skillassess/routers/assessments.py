"""
Assessment API endpoints.

Listing is public; authoring is limited to admins and companies; taking
an assessment is limited to students.
"""

from datetime import datetime
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import AliasChoices, BaseModel, Field

from skillassess.common.auth import Identity, UserRole, require_roles
from skillassess.services import AssessmentDeliveryService, get_delivery_service

router = APIRouter()

AUTHOR_ROLES = (UserRole.ADMIN.value, UserRole.COMPANY.value)
TAKER_ROLES = (UserRole.STUDENT.value,)


class QuestionIn(BaseModel):
    """Authored question. Rules are enforced by the bank validator, not here."""
    text: Optional[str] = Field(None, validation_alias=AliasChoices("question", "text"))
    options: Optional[List[Any]] = None
    correct_answer_index: Optional[Any] = Field(
        None, validation_alias=AliasChoices("correctAnswerIndex", "correctAnswer")
    )
    difficulty: Optional[str] = None


class CreateAssessmentRequest(BaseModel):
    """Numeric fields stay untyped so the bank validator sees what was sent."""
    title: Optional[str] = None
    skill: Optional[str] = None
    questions: Optional[List[QuestionIn]] = None
    duration: Any = None
    passing_score: Any = Field(None, alias="passingScore")
    subset_size: Any = Field(None, alias="subsetSize")


class SubmitAssessmentRequest(BaseModel):
    answers: Any = None


class AssessmentSummary(BaseModel):
    id: str
    title: str
    skill: str
    duration: float
    passingScore: int
    subsetSize: int
    totalQuestions: int
    createdAt: datetime
    createdBy: Optional[str] = None


class CreatedAssessment(BaseModel):
    id: str
    title: str
    skill: str
    totalQuestions: int
    subsetSize: int
    duration: float
    passingScore: int
    createdAt: datetime


class CreateAssessmentResponse(BaseModel):
    message: str
    assessment: CreatedAssessment


class DeliveredQuestionOut(BaseModel):
    displayIndex: int
    originalIndex: int
    question: str
    options: List[str]
    difficulty: str


class StartAssessmentResponse(BaseModel):
    assessmentId: str
    title: str
    skill: str
    duration: float
    passingScore: int
    subsetSize: int
    questions: List[DeliveredQuestionOut]


class SubmitAssessmentResponse(BaseModel):
    score: int
    maxScore: int
    totalAnswered: int
    percentage: float
    level: str
    passed: bool


class CompetencyOut(BaseModel):
    skill: str
    score: int
    maxScore: int
    completedDate: datetime
    level: str


class CompetencyListResponse(BaseModel):
    results: List[CompetencyOut]
    count: int


@router.get("", response_model=List[AssessmentSummary])
async def list_assessments(service: AssessmentDeliveryService = Depends(get_delivery_service)):
    """List every assessment without its questions."""
    return await service.list_assessments()


@router.post("/create", response_model=CreateAssessmentResponse, status_code=status.HTTP_201_CREATED)
async def create_assessment(
    payload: CreateAssessmentRequest,
    identity: Identity = Depends(require_roles(*AUTHOR_ROLES)),
    service: AssessmentDeliveryService = Depends(get_delivery_service),
):
    questions = None
    if payload.questions is not None:
        questions = [q.model_dump() for q in payload.questions]

    summary = await service.create_assessment(
        created_by=identity.user_id,
        title=payload.title,
        skill=payload.skill,
        questions=questions,
        duration=payload.duration,
        passing_score=payload.passing_score,
        subset_size=payload.subset_size,
    )
    return {"message": "Assessment created successfully", "assessment": summary}


@router.get("/results", response_model=CompetencyListResponse)
async def list_my_results(
    identity: Identity = Depends(require_roles(*TAKER_ROLES)),
    service: AssessmentDeliveryService = Depends(get_delivery_service),
):
    """The calling student's competency records."""
    results = await service.get_competencies(identity.user_id)
    return {"results": [r.to_dict() for r in results], "count": len(results)}


@router.get("/{assessment_id}", response_model=AssessmentSummary)
async def get_assessment(
    assessment_id: str,
    service: AssessmentDeliveryService = Depends(get_delivery_service),
):
    return await service.get_assessment(assessment_id)


@router.get("/{assessment_id}/start", response_model=StartAssessmentResponse)
async def start_assessment(
    assessment_id: str,
    identity: Identity = Depends(require_roles(*TAKER_ROLES)),
    service: AssessmentDeliveryService = Depends(get_delivery_service),
):
    """Deal a fresh random subset. Repeat calls are independent."""
    delivered = await service.start_assessment(assessment_id)
    return delivered.to_dict()


@router.post("/{assessment_id}/submit", response_model=SubmitAssessmentResponse)
async def submit_assessment(
    assessment_id: str,
    payload: Optional[SubmitAssessmentRequest] = None,
    identity: Identity = Depends(require_roles(*TAKER_ROLES)),
    service: AssessmentDeliveryService = Depends(get_delivery_service),
):
    answers = payload.answers if payload is not None else None
    result = await service.submit_assessment(identity.user_id, assessment_id, answers)
    return result.to_dict()
