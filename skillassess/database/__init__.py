"""
Database Module

Async SQLAlchemy engine management and the SQL-backed stores.
"""

from .base import Base, metadata
from .init_db import (
    close_database,
    create_schema,
    get_engine,
    get_session_factory,
    initialize_database,
    session_scope,
)
from .repositories import SQLAssessmentRepository, SQLProfileRepository

__all__ = [
    'Base',
    'metadata',
    'close_database',
    'create_schema',
    'get_engine',
    'get_session_factory',
    'initialize_database',
    'session_scope',
    'SQLAssessmentRepository',
    'SQLProfileRepository',
]
