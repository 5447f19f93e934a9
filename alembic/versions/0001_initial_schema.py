"""initial_schema

Revision ID: 0001a2b3c4d5
Revises:
Create Date: 2026-10-19 09:00:00.000000

ShiftMate 초기 스키마: 회사, 사용자, 리프레시 토큰, 근무, 요율, 공휴일,
알림, 직원 초대, 휴가 신청.
Initial ShiftMate schema.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = '0001a2b3c4d5'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True) -> list[sa.Column]:
    columns: list[sa.Column] = [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]
    if updated:
        columns.append(sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()))
    return columns


def upgrade() -> None:
    # companies — 회사 (tenant)
    op.create_table(
        'companies',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('owner_name', sa.String(255), nullable=False),
        sa.Column('industry', sa.String(100), nullable=True),
        sa.Column('size', sa.String(50), nullable=True),
        sa.Column('timezone', sa.String(64), server_default='Australia/Sydney', nullable=False),
        sa.Column('currency', sa.String(3), server_default='AUD', nullable=False),
        *_timestamps(),
    )

    # users — 개인 사용자, 회사 대표, 직원
    op.create_table(
        'users',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=True),
        sa.Column('user_type', sa.String(20), server_default='individual', nullable=False),
        sa.Column('company_id', UUID(as_uuid=True), sa.ForeignKey('companies.id', ondelete='SET NULL'), nullable=True),
        sa.Column('role', sa.String(20), nullable=True),
        sa.Column('hourly_rate', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_users_company_id', 'users', ['company_id'])

    # refresh_tokens — selector.verifier 리프레시 자격 증명 (verifier는 해시만 저장)
    op.create_table(
        'refresh_tokens',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('selector', sa.String(64), nullable=False, unique=True),
        sa.Column('salt', sa.String(64), nullable=False),
        sa.Column('verifier_hash', sa.String(64), nullable=False),
        sa.Column('remember_me', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('revoked_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(updated=False),
    )
    op.create_index('ix_refresh_tokens_user_id', 'refresh_tokens', ['user_id'])

    # shifts — 근무 기록 (end_time < start_time 이면 다음 날 종료)
    op.create_table(
        'shifts',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('company_id', UUID(as_uuid=True), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=True),
        sa.Column('work_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('shift_type', sa.String(20), server_default='custom', nullable=False),
        sa.Column('status', sa.String(20), server_default='completed', nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('created_by', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('approved_by', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('approved_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_shifts_user_date', 'shifts', ['user_id', 'work_date'])
    op.create_index('ix_shifts_company_date', 'shifts', ['company_id', 'work_date'])

    # rate_tiers — 회사 청구 요율 구간 (day_type 그룹 내 1..N)
    op.create_table(
        'rate_tiers',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('company_id', UUID(as_uuid=True), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=False),
        sa.Column('shift_type', sa.String(20), server_default='day', nullable=False),
        sa.Column('tier_order', sa.Integer(), nullable=False),
        sa.Column('hours_in_tier', sa.Numeric(5, 2), nullable=True),
        sa.Column('rate_per_hour', sa.Integer(), nullable=False),
        sa.Column('day_type', sa.String(20), nullable=False),
        sa.Column('currency', sa.String(3), server_default='AUD', nullable=False),
        sa.Column('valid_from', sa.Date(), nullable=True),
        sa.Column('valid_to', sa.Date(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_rate_tiers_company_day_type', 'rate_tiers', ['company_id', 'day_type', 'tier_order'])

    # employee_rates — 직원별 카테고리 정액 요율 (센트)
    op.create_table(
        'employee_rates',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('company_id', UUID(as_uuid=True), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=False),
        sa.Column('weekday_rate', sa.Integer(), nullable=False),
        sa.Column('weeknight_rate', sa.Integer(), nullable=False),
        sa.Column('saturday_rate', sa.Integer(), nullable=False),
        sa.Column('sunday_rate', sa.Integer(), nullable=False),
        sa.Column('public_holiday_rate', sa.Integer(), nullable=False),
        sa.Column('currency', sa.String(3), server_default='AUD', nullable=False),
        sa.Column('valid_from', sa.Date(), nullable=True),
        sa.Column('valid_to', sa.Date(), nullable=True),
        *_timestamps(),
    )
    op.create_unique_constraint(
        'uq_employee_rate_user_company_from', 'employee_rates', ['user_id', 'company_id', 'valid_from']
    )
    op.create_index('ix_employee_rates_user_id', 'employee_rates', ['user_id'])

    # public_holidays — 공휴일 등록부 (날짜당 1건)
    op.create_table(
        'public_holidays',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('holiday_date', sa.Date(), nullable=False, unique=True),
        sa.Column('description', sa.String(255), nullable=False),
        *_timestamps(updated=False),
    )

    # notifications — 사용자 알림
    op.create_table(
        'notifications',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('message', sa.String(1000), nullable=False),
        sa.Column('is_read', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        *_timestamps(updated=False),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])

    # employee_invitations — 직원 초대 링크
    op.create_table(
        'employee_invitations',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('company_id', UUID(as_uuid=True), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('role', sa.String(20), server_default='employee', nullable=False),
        sa.Column('token', sa.String(128), nullable=False, unique=True),
        sa.Column('invited_by', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('accepted_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(updated=False),
    )
    op.create_index('ix_employee_invitations_company_email', 'employee_invitations', ['company_id', 'email'])

    # time_off_requests — 휴가 신청
    op.create_table(
        'time_off_requests',
        sa.Column('id', UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('company_id', UUID(as_uuid=True), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=True),
        sa.Column('end_time', sa.Time(), nullable=True),
        sa.Column('is_full_day', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), server_default='pending', nullable=False),
        sa.Column('reviewed_by', UUID(as_uuid=True), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_time_off_company_dates', 'time_off_requests', ['company_id', 'start_date', 'end_date'])
    op.create_index('ix_time_off_user_id', 'time_off_requests', ['user_id'])


def downgrade() -> None:
    op.drop_table('time_off_requests')
    op.drop_table('employee_invitations')
    op.drop_table('notifications')
    op.drop_table('public_holidays')
    op.drop_table('employee_rates')
    op.drop_table('rate_tiers')
    op.drop_table('shifts')
    op.drop_table('refresh_tokens')
    op.drop_table('users')
    op.drop_table('companies')
