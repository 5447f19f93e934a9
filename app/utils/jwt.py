"""JWT 액세스 토큰 생성 및 검증 유틸리티 모듈.

Signed access token helpers. Refresh credentials are opaque and live in
``app.utils.refresh_token``; only short-lived access tokens are JWTs.

JWT Payload Structure:
    {
        "sub": "user_uuid",          # 사용자 ID (User identifier)
        "user_type": "employee",     # 사용자 유형 (individual | business_owner | employee)
        "company_id": "uuid",        # 소속 회사 ID, 회사 소속일 때만 (Only for company members)
        "iss": "shiftmate",          # 발급자 (Issuer)
        "aud": "shiftmate-api",      # 대상 (Audience)
        "iat": 1234567800,
        "exp": 1234567890,           # 만료 시간 UNIX timestamp (Expiration)
        "type": "access"             # 토큰 유형 (Token type discriminator)
    }
"""

from datetime import datetime, timedelta, timezone
from typing import Any
import jwt

from app.config import settings


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """JWT 액세스 토큰을 생성합니다.

    Generate a signed access token. Expires after
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES (15 min) unless ``expires_delta`` is given.

    Args:
        data: 페이로드 데이터, 최소 "sub" 포함 (Payload, must include "sub")
        expires_delta: 만료 시간 재정의 (Optional TTL override, used by tests)

    Returns:
        str: 인코딩된 JWT 문자열 (Encoded JWT token string)
    """
    to_encode: dict[str, Any] = data.copy()
    now: datetime = datetime.now(timezone.utc)
    expire: datetime = now + (expires_delta or timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({
        "iat": now,
        "exp": expire,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "type": "access",
    })
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """JWT 토큰을 디코딩하고 서명, 만료, 발급자, 대상을 검증합니다.

    Decode and verify a JWT (signature, expiry, issuer and audience).

    Raises:
        jwt.ExpiredSignatureError: 토큰 만료 시 (When token has expired)
        jwt.InvalidTokenError: 유효하지 않은 토큰 (When token is invalid)
    """
    return jwt.decode(
        token,
        settings.JWT_SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM],
        issuer=settings.JWT_ISSUER,
        audience=settings.JWT_AUDIENCE,
    )
