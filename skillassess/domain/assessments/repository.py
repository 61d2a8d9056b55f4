"""
Assessment Repository Module

This module defines the repository interface for storing and retrieving
assessment banks.
"""

import abc
from typing import List, Optional

from .model import AssessmentBank


class AssessmentRepository(abc.ABC):
    """
    Abstract base class for assessment bank repositories.

    Banks are written once at creation; readers never modify them.
    """

    @abc.abstractmethod
    async def get_by_id(self, assessment_id: str) -> Optional[AssessmentBank]:
        """
        Get a bank by its ID.

        Args:
            assessment_id: The ID of the bank to retrieve

        Returns:
            The bank if found, None otherwise
        """
        pass

    @abc.abstractmethod
    async def save(self, bank: AssessmentBank) -> AssessmentBank:
        """
        Store a bank in a single atomic write.

        Args:
            bank: The bank to store

        Returns:
            The stored bank
        """
        pass

    @abc.abstractmethod
    async def list_all(self) -> List[AssessmentBank]:
        """
        List every stored bank, newest first.

        Returns:
            List of banks
        """
        pass
