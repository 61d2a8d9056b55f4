"""
Profile Repository Module

Interface to the test-taker profile store. The engine only touches the
competency results section of a profile.
"""

import abc
from typing import Optional

from .model import StudentProfile


class ProfileRepository(abc.ABC):
    """Abstract base class for profile repositories."""

    @abc.abstractmethod
    async def get_by_user_id(self, user_id: str) -> Optional[StudentProfile]:
        """
        Get a test-taker's profile.

        Args:
            user_id: Identity of the test-taker

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abc.abstractmethod
    async def save(self, profile: StudentProfile) -> StudentProfile:
        """
        Persist the profile's competency results in one atomic write.

        Concurrent saves for the same profile are last-write-wins.

        Args:
            profile: The profile to store

        Returns:
            The stored profile
        """
        pass
