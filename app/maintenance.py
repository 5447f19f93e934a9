"""정기 유지보수 스크립트 — 만료/폐기된 리프레시 토큰 정리.

Maintenance script — Deletes refresh credentials that have expired or been
revoked. Meant to run periodically (cron, scheduled job).

Usage:
    python -m app.maintenance
"""

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.database import async_session, engine
from app.services.auth_service import auth_service


async def purge_refresh_tokens(
    session_factory: async_sessionmaker[AsyncSession] = async_session,
) -> int:
    """만료/폐기 토큰을 삭제하고 삭제 건수를 반환합니다."""
    async with session_factory() as db:
        removed: int = await auth_service.purge_expired_tokens(db)
        await db.commit()
    return removed


async def main() -> None:
    removed: int = await purge_refresh_tokens()
    print(f"Purged {removed} refresh tokens")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
