"""
Competency Record Model

A test-taker's profile holds at most one competency result per skill.
Resubmitting a skill replaces its result in place; no history is kept.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from skillassess.domain.assessments.scorer import CompetencyLevel, ScoreResult


@dataclass(frozen=True)
class CompetencyResult:
    skill: str
    score: int
    max_score: int
    level: CompetencyLevel
    completed_date: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def from_score(cls, skill: str, result: ScoreResult,
                   completed_date: Optional[datetime] = None) -> 'CompetencyResult':
        return cls(
            skill=skill,
            score=result.score,
            max_score=result.max_score,
            level=result.level,
            completed_date=completed_date or datetime.utcnow(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'skill': self.skill,
            'score': self.score,
            'maxScore': self.max_score,
            'completedDate': self.completed_date.isoformat(),
            'level': self.level.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CompetencyResult':
        return cls(
            skill=data['skill'],
            score=data['score'],
            max_score=data['maxScore'],
            level=CompetencyLevel(data['level']),
            completed_date=datetime.fromisoformat(data['completedDate']),
        )


@dataclass
class StudentProfile:
    """
    The slice of a test-taker's profile the assessment engine reads and writes.

    Attributes:
        user_id: Identity of the test-taker
        skill_assessments: One result per skill, in first-taken order
        updated_at: Last time the results list changed
    """
    user_id: str
    skill_assessments: List[CompetencyResult] = field(default_factory=list)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def result_for(self, skill: str) -> Optional[CompetencyResult]:
        return next((r for r in self.skill_assessments if r.skill == skill), None)


def merge_result(profile: StudentProfile, skill: str, result: CompetencyResult) -> bool:
    """
    Upsert ``result`` into the profile's results under ``skill``.

    An existing entry for the skill is replaced at its current position,
    otherwise the result is appended.

    Returns:
        True if an existing entry was replaced, False if appended
    """
    if result.skill != skill:
        raise ValueError(f"Result for '{result.skill}' cannot be merged under '{skill}'")

    profile.updated_at = datetime.utcnow()
    for position, existing in enumerate(profile.skill_assessments):
        if existing.skill == skill:
            profile.skill_assessments[position] = result
            return True
    profile.skill_assessments.append(result)
    return False
