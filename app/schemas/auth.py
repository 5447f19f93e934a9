"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
Covers signup, login, token issuance/refresh and current user info.
"""

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    """개인 사용자 회원가입 요청 스키마.

    Individual account signup. Business accounts register through
    ``POST /admin/companies`` and employees join through invitations.

    Attributes:
        email: 로그인 이메일 (Login email, unique)
        password: 비밀번호 (Plain text, bcrypt-hashed on the server)
        name: 표시 이름 (Display name)
    """

    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(..., min_length=8, max_length=128)
    name: str = Field(..., min_length=1, max_length=255)


class LoginRequest(BaseModel):
    """로그인 요청 스키마.

    Attributes:
        email: 로그인 이메일 (Login email)
        password: 비밀번호 (Plain text password)
        remember_me: 로그인 유지 (30-day refresh credential instead of 24 hours)
    """

    email: str
    password: str
    remember_me: bool = False


class TokenResponse(BaseModel):
    """토큰 발급 응답 스키마.

    Returned after login, signup, invitation acceptance or refresh.

    Attributes:
        access_token: JWT 액세스 토큰 (Short-lived signed access token)
        refresh_token: 불투명 리프레시 토큰 (Opaque ``selector.verifier`` credential)
        token_type: 토큰 유형 (Always "bearer")
        expires_in: 액세스 토큰 유효 시간(초) (Access token lifetime in seconds)
    """

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int


class RefreshRequest(BaseModel):
    """토큰 갱신 및 로그아웃 요청 스키마.

    Exchanges (or revokes) an opaque refresh credential.
    """

    refresh_token: str


class UserMeResponse(BaseModel):
    """현재 사용자 정보 응답 스키마 (GET /me)."""

    id: str
    email: str
    name: str
    user_type: str  # individual | business_owner | employee
    company_id: str | None
    company_name: str | None
    role: str | None  # manager | supervisor | employee
    hourly_rate: int | None
    is_active: bool
    is_privileged: bool  # 회사 관리 권한 (Owner or manager)
