"""인증 레포지토리 — 리프레시 토큰 저장소 및 이메일 기반 사용자 조회.

Auth Repository — Refresh credential persistence and user lookup by email.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Select, delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.token import RefreshToken
from app.models.user import User


class AuthRepository:
    """인증 관련 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling authentication-related database queries.
    """

    async def get_user_by_email(
        self,
        db: AsyncSession,
        email: str,
    ) -> User | None:
        """이메일(대소문자 무시)로 사용자를 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            email: 조회할 이메일 (Email to look up, compared lowercase)

        Returns:
            User | None: 조회된 사용자 또는 None (Found user or None)
        """
        result = await db.execute(select(User).where(User.email == email.strip().lower()))
        return result.scalar_one_or_none()

    async def create_refresh_token(
        self,
        db: AsyncSession,
        user_id: UUID,
        selector: str,
        salt: str,
        verifier_hash: str,
        remember_me: bool,
        expires_at: datetime,
    ) -> RefreshToken:
        """새 리프레시 토큰 레코드를 저장합니다.

        Persist a refresh credential. Only the selector, the salt and the
        verifier hash are stored.
        """
        db_token: RefreshToken = RefreshToken(
            user_id=user_id,
            selector=selector,
            salt=salt,
            verifier_hash=verifier_hash,
            remember_me=remember_me,
            expires_at=expires_at,
        )
        db.add(db_token)
        await db.flush()
        await db.refresh(db_token)
        return db_token

    async def get_by_selector(
        self,
        db: AsyncSession,
        selector: str,
    ) -> RefreshToken | None:
        """선택자로 토큰 레코드를 조회합니다 (Look up a credential by selector)."""
        query: Select = select(RefreshToken).where(RefreshToken.selector == selector)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def revoke(
        self,
        db: AsyncSession,
        token: RefreshToken,
        revoked_at: datetime,
    ) -> None:
        """토큰을 폐기 상태로 표시합니다 (Mark a credential revoked)."""
        token.revoked_at = revoked_at
        await db.flush()

    async def revoke_user_tokens(
        self,
        db: AsyncSession,
        user_id: UUID,
        revoked_at: datetime,
    ) -> int:
        """사용자의 활성 토큰을 모두 폐기합니다.

        Revoke every live credential of a user (logout from all devices,
        deactivation, suspected token reuse).

        Returns:
            int: 폐기된 토큰 수 (Number of credentials revoked)
        """
        stmt = (
            update(RefreshToken)
            .where(RefreshToken.user_id == user_id, RefreshToken.revoked_at.is_(None))
            .values(revoked_at=revoked_at)
        )
        result = await db.execute(stmt)
        await db.flush()
        return result.rowcount or 0

    async def purge_expired(
        self,
        db: AsyncSession,
        now: datetime,
    ) -> int:
        """만료되었거나 폐기된 토큰을 삭제합니다.

        Delete expired and revoked credentials.

        Returns:
            int: 삭제된 레코드 수 (Number of rows deleted)
        """
        stmt = delete(RefreshToken).where(
            or_(RefreshToken.expires_at < now, RefreshToken.revoked_at.is_not(None))
        ).execution_options(synchronize_session=False)
        result = await db.execute(stmt)
        await db.flush()
        return result.rowcount or 0


# 싱글턴 인스턴스 — Singleton instance
auth_repository: AuthRepository = AuthRepository()
