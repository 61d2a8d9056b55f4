"""
Memory Profile Repository Module

In-memory implementation of the ProfileRepository interface for
development and testing purposes.
"""

import copy
from typing import Dict, List, Optional

from .model import StudentProfile
from .repository import ProfileRepository


class MemoryProfileRepository(ProfileRepository):
    """In-memory implementation of the ProfileRepository."""

    def __init__(self, initial_data: Optional[List[StudentProfile]] = None):
        self._profiles: Dict[str, StudentProfile] = {}
        for profile in initial_data or []:
            self._profiles[profile.user_id] = copy.deepcopy(profile)

    async def get_by_user_id(self, user_id: str) -> Optional[StudentProfile]:
        profile = self._profiles.get(user_id)
        return copy.deepcopy(profile) if profile else None

    async def save(self, profile: StudentProfile) -> StudentProfile:
        self._profiles[profile.user_id] = copy.deepcopy(profile)
        return profile
