"""인증 서비스 — 회원가입, 로그인, 토큰 회전 비즈니스 로직.

Auth Service — Business logic for signup, login and refresh rotation.

Token lifecycle:
    - 로그인 시 짧은 액세스 JWT와 불투명 리프레시 자격 증명을 발급
      (Login issues a 15 minute access JWT plus an opaque refresh credential)
    - 갱신 시 기존 자격 증명을 폐기하고 새 쌍을 발급, remember_me 정책 유지
      (Refresh revokes the presented credential and issues a new pair)
    - 이미 폐기된 자격 증명이 다시 제시되면 해당 사용자의 모든 토큰 폐기
      (Presenting a revoked credential revokes every credential of the user)
"""

import logging
from datetime import datetime, timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import settings
from app.database import as_utc, utcnow
from app.models.token import RefreshToken
from app.models.user import User
from app.repositories.auth_repository import auth_repository
from app.schemas.auth import (
    LoginRequest,
    RefreshRequest,
    SignupRequest,
    TokenResponse,
    UserMeResponse,
)
from app.utils.exceptions import DuplicateError, UnauthorizedError
from app.utils.jwt import create_access_token
from app.utils.password import hash_password, verify_password
from app.utils.refresh_token import IssuedCredential, issue_credential, split_credential, verify_credential

logger = logging.getLogger(__name__)


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling signup, login, refresh rotation and logout.
    """

    def _refresh_lifetime(self, remember_me: bool) -> timedelta:
        if remember_me:
            return timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
        return timedelta(hours=settings.REFRESH_TOKEN_SHORT_EXPIRE_HOURS)

    def _build_jwt_payload(self, user: User) -> dict[str, str]:
        """JWT 페이로드를 생성합니다 (sub + 회사 정보)."""
        payload: dict[str, str] = {"sub": str(user.id), "user_type": user.user_type}
        if user.company_id is not None:
            payload["company_id"] = str(user.company_id)
        return payload

    async def issue_tokens(
        self,
        db: AsyncSession,
        user: User,
        remember_me: bool,
    ) -> TokenResponse:
        """액세스 토큰과 리프레시 자격 증명을 발급합니다.

        Issue an access JWT and persist a fresh refresh credential.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 사용자 모델 (User model instance)
            remember_me: 장기 로그인 여부 (30 days when True, 24 hours otherwise)

        Returns:
            TokenResponse: 토큰 응답 (Access token, refresh credential, expiry)
        """
        access_token: str = create_access_token(self._build_jwt_payload(user))
        credential: IssuedCredential = issue_credential()

        expires_at: datetime = utcnow() + self._refresh_lifetime(remember_me)
        await auth_repository.create_refresh_token(
            db,
            user_id=user.id,
            selector=credential.selector,
            salt=credential.salt,
            verifier_hash=credential.verifier_hash,
            remember_me=remember_me,
            expires_at=expires_at,
        )

        return TokenResponse(
            access_token=access_token,
            refresh_token=credential.token,
            expires_in=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        )

    async def signup(
        self,
        db: AsyncSession,
        data: SignupRequest,
    ) -> TokenResponse:
        """개인 사용자 회원가입 후 바로 로그인 상태로 토큰을 발급합니다.

        Raises:
            DuplicateError: 이미 등록된 이메일 (Email already registered)
        """
        email: str = data.email.strip().lower()
        if await auth_repository.get_user_by_email(db, email) is not None:
            raise DuplicateError("Email is already registered")

        user: User = User(
            email=email,
            name=data.name.strip(),
            password_hash=hash_password(data.password),
            user_type="individual",
        )
        db.add(user)
        await db.flush()
        logger.info("New individual account %s", user.id)
        return await self.issue_tokens(db, user, remember_me=False)

    async def login(
        self,
        db: AsyncSession,
        data: LoginRequest,
    ) -> TokenResponse:
        """이메일/비밀번호 로그인을 처리합니다.

        Unknown emails and wrong passwords produce the same error.

        Raises:
            UnauthorizedError: 잘못된 인증 정보 또는 비활성 계정
                               (Invalid credentials or deactivated account)
        """
        user: User | None = await auth_repository.get_user_by_email(db, data.email)
        password_ok: bool = verify_password(
            data.password, user.password_hash if user is not None else None
        )
        if user is None or not password_ok:
            raise UnauthorizedError("Invalid email or password")

        if not user.is_active:
            raise UnauthorizedError("Account is deactivated")

        return await self.issue_tokens(db, user, data.remember_me)

    async def _resolve_credential(
        self,
        db: AsyncSession,
        token: str,
    ) -> RefreshToken:
        """제시된 자격 증명을 저장된 레코드와 대조합니다.

        Raises:
            UnauthorizedError: 형식 오류, 미존재, 검증 실패, 폐기, 만료
        """
        parts: tuple[str, str] | None = split_credential(token)
        if parts is None:
            raise UnauthorizedError("Invalid refresh token")
        selector, verifier = parts

        stored: RefreshToken | None = await auth_repository.get_by_selector(db, selector)
        if stored is None or not verify_credential(verifier, stored.salt, stored.verifier_hash):
            raise UnauthorizedError("Invalid refresh token")

        now: datetime = utcnow()
        if stored.revoked_at is not None:
            # 재사용 감지 — Reuse of a rotated credential
            revoked: int = await auth_repository.revoke_user_tokens(db, stored.user_id, now)
            logger.warning(
                "Revoked refresh token reused for user %s; revoked %d live tokens",
                stored.user_id,
                revoked,
            )
            # 401 응답 전에 폐기를 확정 — The router never commits on error
            await db.commit()
            raise UnauthorizedError("Refresh token has been revoked")

        if as_utc(stored.expires_at) <= now:
            raise UnauthorizedError("Refresh token expired")
        return stored

    async def refresh(
        self,
        db: AsyncSession,
        data: RefreshRequest,
    ) -> TokenResponse:
        """리프레시 자격 증명을 회전합니다.

        Rotate a refresh credential: revoke the presented one and issue a new
        pair that keeps the original remember-me policy.

        Raises:
            UnauthorizedError: 유효하지 않은 자격 증명 또는 비활성 사용자
        """
        stored: RefreshToken = await self._resolve_credential(db, data.refresh_token)

        user: User | None = await db.get(User, stored.user_id)
        if user is None or not user.is_active:
            raise UnauthorizedError("User not found or inactive")

        await auth_repository.revoke(db, stored, utcnow())
        return await self.issue_tokens(db, user, stored.remember_me)

    async def logout(
        self,
        db: AsyncSession,
        data: RefreshRequest,
    ) -> None:
        """로그아웃 — 제시된 리프레시 자격 증명을 폐기합니다.

        Unknown or malformed credentials are ignored so logout is idempotent.
        """
        parts: tuple[str, str] | None = split_credential(data.refresh_token)
        if parts is None:
            return
        selector, verifier = parts
        stored: RefreshToken | None = await auth_repository.get_by_selector(db, selector)
        if stored is None or stored.revoked_at is not None:
            return
        if verify_credential(verifier, stored.salt, stored.verifier_hash):
            await auth_repository.revoke(db, stored, utcnow())

    async def purge_expired_tokens(self, db: AsyncSession) -> int:
        """만료/폐기 토큰 정리 (Delete expired and revoked credentials)."""
        removed: int = await auth_repository.purge_expired(db, utcnow())
        if removed:
            logger.info("Purged %d refresh tokens", removed)
        return removed

    async def get_me(
        self,
        db: AsyncSession,
        user: User,
    ) -> UserMeResponse:
        """현재 사용자 프로필을 반환합니다 (Current user profile with company name)."""
        result = await db.execute(
            select(User)
            .options(selectinload(User.company))
            .where(User.id == user.id)
            .execution_options(populate_existing=True)
        )
        loaded: User = result.scalar_one()
        return UserMeResponse(
            id=str(loaded.id),
            email=loaded.email,
            name=loaded.name,
            user_type=loaded.user_type,
            company_id=str(loaded.company_id) if loaded.company_id else None,
            company_name=loaded.company.name if loaded.company is not None else None,
            role=loaded.role,
            hourly_rate=loaded.hourly_rate,
            is_active=loaded.is_active,
            is_privileged=loaded.is_privileged,
        )


# 싱글턴 인스턴스 — Singleton instance
auth_service: AuthService = AuthService()
