"""
Persistence models for assessment banks and student competency records.
"""

from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Float, Integer, String

from .base import Base


class AssessmentRecord(Base):
    """Stored assessment bank. Questions, answers included, live in one JSON column."""
    __tablename__ = 'assessments'

    id = Column(String(36), primary_key=True)
    title = Column(String(255), nullable=False)
    skill = Column(String(128), nullable=False, index=True)
    questions = Column(JSON, nullable=False)
    total_questions = Column(Integer, nullable=False)
    subset_size = Column(Integer, nullable=False, default=20)
    duration = Column(Float, nullable=False)
    passing_score = Column(Integer, nullable=False)
    created_by = Column(String(64), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class StudentProfileRecord(Base):
    """Competency section of a student profile."""
    __tablename__ = 'student_profiles'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, unique=True, index=True)
    skill_assessments = Column(JSON, nullable=False, default=list)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
