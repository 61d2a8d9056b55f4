"""
SQL Repositories

SQLAlchemy-backed implementations of the bank and profile stores. Each
public method runs in its own ``session_scope`` so a write is a single
transaction.
"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from skillassess.common.logger import app_logger
from skillassess.domain.assessments.model import AssessmentBank, Question
from skillassess.domain.assessments.repository import AssessmentRepository
from skillassess.domain.competency.model import CompetencyResult, StudentProfile
from skillassess.domain.competency.repository import ProfileRepository
from .init_db import session_scope
from .models import AssessmentRecord, StudentProfileRecord

logger = app_logger.getChild("database.repositories")


def _bank_from_record(record: AssessmentRecord) -> AssessmentBank:
    return AssessmentBank(
        assessment_id=record.id,
        title=record.title,
        skill=record.skill,
        questions=[Question.from_dict(q) for q in record.questions],
        subset_size=record.subset_size,
        duration=record.duration,
        passing_score=record.passing_score,
        created_by=record.created_by,
        created_at=record.created_at,
    )


class SQLAssessmentRepository(AssessmentRepository):
    """Assessment banks stored in the ``assessments`` table."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self._session_factory = session_factory

    async def get_by_id(self, assessment_id: str) -> Optional[AssessmentBank]:
        async with session_scope(self._session_factory) as session:
            record = await session.get(AssessmentRecord, assessment_id)
            return _bank_from_record(record) if record else None

    async def save(self, bank: AssessmentBank) -> AssessmentBank:
        async with session_scope(self._session_factory) as session:
            await session.merge(AssessmentRecord(
                id=bank.assessment_id,
                title=bank.title,
                skill=bank.skill,
                questions=[q.to_dict() for q in bank.questions],
                total_questions=bank.total_questions,
                subset_size=bank.subset_size,
                duration=bank.duration,
                passing_score=bank.passing_score,
                created_by=bank.created_by,
                created_at=bank.created_at,
            ))
        logger.debug(f"Stored assessment {bank.assessment_id}")
        return bank

    async def list_all(self) -> List[AssessmentBank]:
        async with session_scope(self._session_factory) as session:
            result = await session.execute(
                select(AssessmentRecord).order_by(AssessmentRecord.created_at.desc())
            )
            return [_bank_from_record(r) for r in result.scalars().all()]


class SQLProfileRepository(ProfileRepository):
    """Competency sections stored in the ``student_profiles`` table."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self._session_factory = session_factory

    @staticmethod
    async def _find(session, user_id: str) -> Optional[StudentProfileRecord]:
        result = await session.execute(
            select(StudentProfileRecord).where(StudentProfileRecord.user_id == user_id)
        )
        return result.scalars().first()

    async def get_by_user_id(self, user_id: str) -> Optional[StudentProfile]:
        async with session_scope(self._session_factory) as session:
            record = await self._find(session, user_id)
            if record is None:
                return None
            return StudentProfile(
                user_id=record.user_id,
                skill_assessments=[CompetencyResult.from_dict(r) for r in record.skill_assessments or []],
                updated_at=record.updated_at,
            )

    async def save(self, profile: StudentProfile) -> StudentProfile:
        results = [r.to_dict() for r in profile.skill_assessments]
        async with session_scope(self._session_factory) as session:
            record = await self._find(session, profile.user_id)
            if record is None:
                session.add(StudentProfileRecord(
                    user_id=profile.user_id,
                    skill_assessments=results,
                    updated_at=profile.updated_at,
                ))
            else:
                # Assign a fresh list so the JSON column is flagged dirty
                record.skill_assessments = results
                record.updated_at = profile.updated_at
        return profile
