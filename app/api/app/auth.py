"""앱 인증 라우터 — 회원가입, 로그인, 토큰 갱신, 로그아웃, 내 정보.

App Auth Router — Signup, login, refresh rotation, logout and profile.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user
from app.database import get_db
from app.models.user import User
from app.schemas.auth import (
    LoginRequest,
    RefreshRequest,
    SignupRequest,
    TokenResponse,
    UserMeResponse,
)
from app.services.auth_service import auth_service

router: APIRouter = APIRouter()


@router.post("/signup", response_model=TokenResponse, status_code=201)
async def signup(
    data: SignupRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """개인 사용자 회원가입 — 가입 즉시 로그인 토큰 발급.

    Individual signup. Returns a token pair for the new account.
    """
    result: TokenResponse = await auth_service.signup(db, data)
    await db.commit()
    return result


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """이메일/비밀번호 로그인.

    ``remember_me`` extends the refresh credential from 24 hours to 30 days.
    """
    result: TokenResponse = await auth_service.login(db, data)
    await db.commit()
    return result


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    data: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """토큰 갱신 — 제시된 리프레시 자격 증명을 폐기하고 새 쌍 발급."""
    result: TokenResponse = await auth_service.refresh(db, data)
    await db.commit()
    return result


@router.post("/logout", status_code=204)
async def logout(
    data: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """로그아웃 — 리프레시 자격 증명 폐기."""
    await auth_service.logout(db, data)
    await db.commit()


@router.get("/me", response_model=UserMeResponse)
async def get_me(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserMeResponse:
    return await auth_service.get_me(db, current_user)
