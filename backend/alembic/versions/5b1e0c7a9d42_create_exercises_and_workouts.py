"""create exercises, workouts, exercise_logs, workout_sets

Revision ID: 5b1e0c7a9d42
Revises:
Create Date: 2026-10-18 09:12:40.118204

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# enum types are created by their first table and dropped explicitly
body_part = sa.Enum('chest', 'back', 'shoulders', 'legs', 'arms', 'core', 'full-body', name='body_part')
difficulty = sa.Enum('beginner', 'intermediate', 'advanced', name='difficulty')
workout_status = sa.Enum('in-progress', 'completed', name='workout_status')


# revision identifiers, used by Alembic.
revision: str = '5b1e0c7a9d42'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 1) exercise catalog
    op.create_table(
        'exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('body_part', body_part, nullable=False),
        sa.Column('difficulty', difficulty, nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('recommended_sets', sa.Integer(), nullable=False, server_default='3'),
        sa.Column('recommended_reps', sa.Integer(), nullable=False, server_default='12'),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_index('ix_exercises_id', 'exercises', ['id'])
    op.create_index('ix_exercises_name', 'exercises', ['name'], unique=True)
    op.create_index('ix_exercises_body_part', 'exercises', ['body_part'])
    op.create_index('ix_exercises_difficulty', 'exercises', ['difficulty'])

    # 2) workouts
    op.create_table(
        'workouts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('intensity', sa.Float(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=False, server_default=''),
        sa.Column('status', workout_status, nullable=False, server_default='in-progress'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.text('CURRENT_TIMESTAMP')),
    )
    op.create_index('ix_workouts_username', 'workouts', ['username'])
    op.create_index('ix_workouts_date', 'workouts', ['date'])

    # 3) exercise_logs
    op.create_table(
        'exercise_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('workout_id', sa.Integer(), sa.ForeignKey('workouts.id', ondelete='CASCADE'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercises.id', ondelete='SET NULL'), nullable=True),
        sa.Column('notes', sa.Text(), nullable=False, server_default=''),
    )
    op.create_index('ix_exercise_logs_workout_id', 'exercise_logs', ['workout_id'])
    op.create_index('ix_exercise_logs_exercise_id', 'exercise_logs', ['exercise_id'])

    # 4) workout_sets
    op.create_table(
        'workout_sets',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('exercise_log_id', sa.Integer(), sa.ForeignKey('exercise_logs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('set_number', sa.Integer(), nullable=False),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=False),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_workout_sets_exercise_log_id', 'workout_sets', ['exercise_log_id'])


def downgrade() -> None:
    # drop child tables in reverse order
    op.drop_table('workout_sets')
    op.drop_table('exercise_logs')
    op.drop_table('workouts')
    op.drop_table('exercises')

    # finally drop enum types
    bind = op.get_bind()
    workout_status.drop(bind, checkfirst=True)
    difficulty.drop(bind, checkfirst=True)
    body_part.drop(bind, checkfirst=True)
