"""FastAPI 의존성 주입 모듈 — 인증 및 권한 검사.

FastAPI dependency injection module — Authentication and authorization.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. decode_token()이 서명, 만료, 발급자, 대상을 검증
       (decode_token verifies signature, expiry, issuer and audience)
    3. 페이로드의 "sub" 필드로 DB에서 사용자를 조회
       (User is fetched from DB using payload "sub" field)
    4. 사용자 활성 상태를 확인 (User active status is verified)

Authorization (require_company_manager):
    회사 대표 또는 manager 역할만 관리 API 사용 가능
    (Only the business owner or a company manager reaches admin routes)
"""

from typing import Annotated
from uuid import UUID

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.models.user import User
from app.utils.exceptions import ForbiddenError, UnauthorizedError
from app.utils.jwt import decode_token

# HTTP Bearer 토큰 추출기 — 헤더가 없으면 None (Missing header yields None, answered with 401)
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """JWT 액세스 토큰에서 현재 인증된 사용자를 추출합니다.

    Args:
        request: 현재 요청 (Used to expose the user id to request logging)
        credentials: HTTP Bearer 토큰 자격 증명 (Bearer token credentials from header)
        db: 비동기 DB 세션 (Async database session)

    Returns:
        User: 인증된 사용자 ORM 인스턴스 (Authenticated user ORM instance)

    Raises:
        UnauthorizedError: 토큰 없음, 유효하지 않음, 만료, 사용자 없음/비활성
    """
    if credentials is None:
        raise UnauthorizedError("Not authenticated")
    try:
        payload: dict = decode_token(credentials.credentials)
        user_id: UUID = UUID(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, ValueError, TypeError):
        raise UnauthorizedError("Invalid or expired token")

    # 토큰 타입 검증 — Only access tokens authenticate API calls
    if payload.get("type") != "access":
        raise UnauthorizedError("Invalid token type")

    result = await db.execute(select(User).where(User.id == user_id))
    user: User | None = result.scalar_one_or_none()
    if user is None or not user.is_active:
        raise UnauthorizedError("User not found or inactive")

    request.state.user_id = str(user.id)
    return user


async def require_company_manager(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """회사 관리 권한 검사 의존성.

    Raises:
        ForbiddenError: 회사 대표나 manager가 아님 (Not privileged)
    """
    if not current_user.is_privileged:
        raise ForbiddenError("Company manager permissions required")
    return current_user


def company_id_of(user: User) -> UUID:
    """권한 검사를 통과한 사용자의 회사 ID."""
    if user.company_id is None:
        raise ForbiddenError("No company associated with this account")
    return user.company_id

