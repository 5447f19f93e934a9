"""공통 Pydantic 요청/응답 스키마 정의.

Common Pydantic request/response schema definitions shared by several
API domains: pagination wrappers, confirmations and shared field patterns.
"""

from typing import Any
from pydantic import BaseModel

# HH:MM 24시간제 패턴 — 24-hour wall clock time pattern
TIME_PATTERN: str = r"^([01]?\d|2[0-3]):[0-5]\d$"
# 요일 유형 패턴 — Day type pattern
DAY_TYPE_PATTERN: str = r"^(weekday|saturday|sunday|holiday)$"
# 회사 내 역할 패턴 — Company role pattern
ROLE_PATTERN: str = r"^(manager|supervisor|employee)$"
# 통화 코드 패턴 — ISO 4217 currency code
CURRENCY_PATTERN: str = r"^[A-Z]{3}$"


class PaginatedResponse(BaseModel):
    """페이지네이션 응답 스키마.

    Paginated response wrapper schema.

    Attributes:
        items: 항목 목록 (List of result items)
        total: 전체 항목 수 (Total count across all pages)
        page: 현재 페이지 번호 (Current page number, 1-based)
        per_page: 페이지당 항목 수 (Items per page)
    """

    items: list[Any]  # 결과 항목 목록 (List of items for the current page)
    total: int  # 전체 항목 수 (Total item count)
    page: int  # 현재 페이지 — 1부터 시작 (Current page, 1-indexed)
    per_page: int  # 페이지당 항목 수 (Items per page)


class MessageResponse(BaseModel):
    """범용 메시지 응답 스키마.

    Generic confirmation for deletes, status changes and similar actions.
    """

    message: str  # 응답 메시지 (Human-readable confirmation message)
