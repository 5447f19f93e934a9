"""ShiftMate API 클라이언트 — 요청마다 명시적 인증 컨텍스트 전달.

Async HTTP client for the ShiftMate API.

Tokens are never kept in module state. Each call takes an ``AuthContext``
that holds the caller's access and refresh credentials. When a request comes
back 401 and the context still has a refresh credential, the context moves to
``ACCESS_EXPIRED`` and the client rotates the credential once and retries; if
that fails the context is cleared (anonymous) and the 401 response is
returned to the caller.

Usage:
    async with ShiftMateClient("https://api.example.com") as api:
        ctx = AuthContext()
        await api.login(ctx, "me@example.com", "secret123", remember_me=True)
        shifts = (await api.request(ctx, "GET", "/api/v1/app/shifts")).json()
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx

logger: logging.Logger = logging.getLogger(__name__)

APP_PREFIX: str = "/api/v1/app"


class AuthState(str, Enum):
    """인증 상태 (Anonymous → Authenticated ⇄ AccessExpired → Anonymous)."""

    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"
    ACCESS_EXPIRED = "access_expired"


@dataclass
class AuthContext:
    """호출자 인증 상태 (Credentials owned by one caller).

    A context holding only a refresh credential is ``ACCESS_EXPIRED``: the
    next request goes out unauthenticated and triggers one rotation.
    """

    access_token: str | None = None
    refresh_token: str | None = None

    @property
    def state(self) -> AuthState:
        if self.access_token:
            return AuthState.AUTHENTICATED
        if self.refresh_token:
            return AuthState.ACCESS_EXPIRED
        return AuthState.ANONYMOUS

    def update(self, tokens: dict[str, Any]) -> None:
        self.access_token = tokens["access_token"]
        self.refresh_token = tokens["refresh_token"]

    def expire_access(self) -> None:
        """서버가 401을 반환 — 액세스 토큰 폐기, 리프레시 자격 증명 유지."""
        self.access_token = None

    def clear(self) -> None:
        self.access_token = None
        self.refresh_token = None


class ShiftMateClient:
    """ShiftMate HTTP API 비동기 클라이언트."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client: httpx.AsyncClient = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "ShiftMateClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    # ── 인증 (Auth) ──────────────────────────────────────────

    async def login(
        self,
        ctx: AuthContext,
        email: str,
        password: str,
        remember_me: bool = False,
    ) -> httpx.Response:
        """로그인 후 컨텍스트에 토큰 저장. 실패 시 응답을 그대로 반환."""
        response: httpx.Response = await self._client.post(
            f"{APP_PREFIX}/auth/login",
            json={"email": email, "password": password, "remember_me": remember_me},
        )
        if response.status_code == 200:
            ctx.update(response.json())
        return response

    async def refresh(self, ctx: AuthContext) -> bool:
        """리프레시 자격 증명 회전. 실패하면 컨텍스트를 비웁니다."""
        if not ctx.refresh_token:
            ctx.clear()
            return False
        try:
            response: httpx.Response = await self._client.post(
                f"{APP_PREFIX}/auth/refresh",
                json={"refresh_token": ctx.refresh_token},
            )
        except httpx.HTTPError as exc:
            logger.warning("Token refresh request failed: %s", exc)
            ctx.clear()
            return False
        if response.status_code != 200:
            ctx.clear()
            return False
        ctx.update(response.json())
        return True

    async def logout(self, ctx: AuthContext) -> None:
        if ctx.refresh_token:
            await self._client.post(
                f"{APP_PREFIX}/auth/logout",
                json={"refresh_token": ctx.refresh_token},
            )
        ctx.clear()

    # ── 요청 (Requests) ──────────────────────────────────────

    async def request(
        self,
        ctx: AuthContext,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """인증 요청 — 401이면 한 번만 토큰 갱신 후 재시도."""
        response: httpx.Response = await self._send(ctx, method, path, **kwargs)
        if response.status_code != 401 or not ctx.refresh_token:
            return response
        ctx.expire_access()
        if not await self.refresh(ctx):
            return response
        return await self._send(ctx, method, path, **kwargs)

    async def _send(self, ctx: AuthContext, method: str, path: str, **kwargs: Any) -> httpx.Response:
        headers: dict[str, str] = dict(kwargs.pop("headers", None) or {})
        if ctx.access_token:
            headers["Authorization"] = f"Bearer {ctx.access_token}"
        return await self._client.request(method, path, headers=headers, **kwargs)
