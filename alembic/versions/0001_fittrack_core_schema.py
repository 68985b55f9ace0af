"""core schema: users, exercises, plans, sessions, logs, weight

Revision ID: 0001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 1) users
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('username', sa.String(length=64), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('height_feet', sa.Integer(), nullable=True),
        sa.Column('height_inches', sa.Integer(), nullable=True),
        sa.Column('current_weight', sa.Float(), nullable=True),
        sa.Column('goal_weight', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # 2) exercises
    op.create_table(
        'exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('muscle_groups', sa.JSON(), nullable=False),
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('video_url', sa.String(length=500), nullable=True),
        sa.Column('is_custom', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_by', sa.Integer(), sa.ForeignKey('users.id', ondelete='RESTRICT'), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )
    op.create_index('ix_exercises_id', 'exercises', ['id'])
    op.create_index('ix_exercises_name', 'exercises', ['name'])
    op.create_index('ix_exercises_created_by', 'exercises', ['created_by'])

    # 3) workout_plans
    op.create_table(
        'workout_plans',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('muscle_groups', sa.JSON(), nullable=False),
        sa.Column('estimated_duration', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )
    op.create_index('ix_workout_plans_id', 'workout_plans', ['id'])
    op.create_index('ix_workout_plans_user_id', 'workout_plans', ['user_id'])

    # 4) workout_plan_exercises
    op.create_table(
        'workout_plan_exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('workout_plan_id', sa.Integer(), sa.ForeignKey('workout_plans.id', ondelete='CASCADE'), nullable=False),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercises.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('sets', sa.Integer(), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=False),
        sa.Column('weight', sa.Float(), nullable=True),
        sa.Column('rest_time', sa.Integer(), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.UniqueConstraint('workout_plan_id', 'order', name='uq_plan_exercise_order'),
    )
    op.create_index('ix_workout_plan_exercises_workout_plan_id', 'workout_plan_exercises', ['workout_plan_id'])
    op.create_index('ix_workout_plan_exercises_exercise_id', 'workout_plan_exercises', ['exercise_id'])

    # 5) workout_sessions
    op.create_table(
        'workout_sessions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('workout_plan_id', sa.Integer(), sa.ForeignKey('workout_plans.id', ondelete='RESTRICT'), nullable=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('notes', sa.Text(), nullable=True),
    )
    op.create_index('ix_workout_sessions_user_id', 'workout_sessions', ['user_id'])
    op.create_index('ix_workout_sessions_workout_plan_id', 'workout_sessions', ['workout_plan_id'])
    op.create_index('ix_workout_sessions_start_time', 'workout_sessions', ['start_time'])

    # 6) exercise_logs
    op.create_table(
        'exercise_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('workout_session_id', sa.Integer(), sa.ForeignKey('workout_sessions.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercises.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('sets', sa.Integer(), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=False),
        sa.Column('weight', sa.Float(), nullable=True),
        sa.Column('is_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.UniqueConstraint('workout_session_id', 'order', name='uq_exercise_log_order'),
    )
    op.create_index('ix_exercise_logs_workout_session_id', 'exercise_logs', ['workout_session_id'])
    op.create_index('ix_exercise_logs_exercise_id', 'exercise_logs', ['exercise_id'])

    # 7) weight_logs
    op.create_table(
        'weight_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
    )
    op.create_index('ix_weight_logs_user_id', 'weight_logs', ['user_id'])
    op.create_index('ix_weight_logs_date', 'weight_logs', ['date'])


def downgrade() -> None:
    # drop child tables in reverse order
    op.drop_table('weight_logs')
    op.drop_table('exercise_logs')
    op.drop_table('workout_sessions')
    op.drop_table('workout_plan_exercises')
    op.drop_table('workout_plans')
    op.drop_table('exercises')
    op.drop_table('users')
