"""
Declarative base shared by the persistence models and migrations.
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import declarative_base

# Constraint names must match the ones used in the alembic revisions
metadata = MetaData(naming_convention={
    "pk": "pk_%(table_name)s",
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
})

Base = declarative_base(metadata=metadata)
