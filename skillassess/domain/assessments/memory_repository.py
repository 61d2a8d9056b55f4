"""
Memory Assessment Repository Module

This module provides an in-memory implementation of the AssessmentRepository
interface for development and testing purposes.
"""

import copy
from typing import Dict, List, Optional

from .model import AssessmentBank
from .repository import AssessmentRepository


class MemoryAssessmentRepository(AssessmentRepository):
    """
    In-memory implementation of the AssessmentRepository.

    Banks are deep-copied on the way in and out so callers cannot reach
    stored state through a returned object.
    """

    def __init__(self, initial_data: Optional[List[AssessmentBank]] = None):
        self._banks: Dict[str, AssessmentBank] = {}
        for bank in initial_data or []:
            self._banks[bank.assessment_id] = copy.deepcopy(bank)

    async def get_by_id(self, assessment_id: str) -> Optional[AssessmentBank]:
        bank = self._banks.get(assessment_id)
        return copy.deepcopy(bank) if bank else None

    async def save(self, bank: AssessmentBank) -> AssessmentBank:
        self._banks[bank.assessment_id] = copy.deepcopy(bank)
        return bank

    async def list_all(self) -> List[AssessmentBank]:
        banks = sorted(self._banks.values(), key=lambda b: b.created_at, reverse=True)
        return [copy.deepcopy(b) for b in banks]

    def clear(self) -> None:
        """
        Clear all banks.

        This method is specific to the memory implementation and not part of
        the AssessmentRepository interface.
        """
        self._banks.clear()
