"""
Competency domain module.

Per-skill competency records on a test-taker's profile and the store they
live in.
"""

from .model import CompetencyResult, StudentProfile, merge_result
from .repository import ProfileRepository
from .memory_repository import MemoryProfileRepository

__all__ = [
    'CompetencyResult',
    'StudentProfile',
    'merge_result',
    'ProfileRepository',
    'MemoryProfileRepository',
]
