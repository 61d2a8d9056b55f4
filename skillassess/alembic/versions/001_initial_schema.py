"""Initial assessment schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Banks, with questions and answers in one JSON document
    op.create_table(
        'assessments',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('skill', sa.String(128), nullable=False),
        sa.Column('questions', sa.JSON(), nullable=False),
        sa.Column('total_questions', sa.Integer(), nullable=False),
        sa.Column('subset_size', sa.Integer(), nullable=False, server_default='20'),
        sa.Column('duration', sa.Float(), nullable=False),
        sa.Column('passing_score', sa.Integer(), nullable=False),
        sa.Column('created_by', sa.String(64), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id', name='pk_assessments'),
    )
    op.create_index('ix_assessments_skill', 'assessments', ['skill'])

    # Competency section of student profiles
    op.create_table(
        'student_profiles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.String(64), nullable=False),
        sa.Column('skill_assessments', sa.JSON(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id', name='pk_student_profiles'),
    )
    op.create_index('ix_student_profiles_user_id', 'student_profiles', ['user_id'], unique=True)


def downgrade():
    op.drop_index('ix_student_profiles_user_id', table_name='student_profiles')
    op.drop_table('student_profiles')
    op.drop_index('ix_assessments_skill', table_name='assessments')
    op.drop_table('assessments')
