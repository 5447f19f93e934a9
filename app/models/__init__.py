"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package registers every model with the SQLAlchemy
metadata, which Alembic and relationship resolution rely on.

Modules:
    company: 회사 (Company)
    user: 사용자 (User)
    token: 리프레시 토큰 (Refresh tokens)
    shift: 근무 (Shifts)
    rate: 요율 구간 및 직원 요율 (Rate tiers and employee rates)
    holiday: 공휴일 (Public holidays)
    notification: 알림 (User notifications)
    invitation: 직원 초대 (Employee invitations)
    time_off: 휴가 신청 (Time-off requests)
"""

from app.models.company import Company
from app.models.user import User
from app.models.token import RefreshToken
from app.models.shift import Shift
from app.models.rate import RateTier, EmployeeRate
from app.models.holiday import PublicHoliday
from app.models.notification import Notification
from app.models.invitation import EmployeeInvitation
from app.models.time_off import TimeOffRequest

__all__ = [
    "Company",
    "User",
    "RefreshToken",
    "Shift",
    "RateTier", "EmployeeRate",
    "PublicHoliday",
    "Notification",
    "EmployeeInvitation",
    "TimeOffRequest",
]
