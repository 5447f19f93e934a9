"""API 클라이언트 테스트 — 명시적 인증 컨텍스트와 1회 토큰 갱신."""

import json

import httpx

from app.client import AuthContext, AuthState, ShiftMateClient


def _tokens(n: int) -> dict:
    return {"access_token": f"access-{n}", "refresh_token": f"sel{n}.ver{n}", "token_type": "bearer", "expires_in": 900}


class FakeServer:
    """access-2만 유효, sel1.ver1만 갱신 가능한 가짜 서버."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls.append((request.method, request.url.path))
        path = request.url.path
        if path.endswith("/auth/login"):
            body = json.loads(request.content)
            if body["password"] == "right-password":
                return httpx.Response(200, json=_tokens(1))
            return httpx.Response(401, json={"detail": "Invalid email or password"})
        if path.endswith("/auth/refresh"):
            body = json.loads(request.content)
            if body["refresh_token"] == "sel1.ver1":
                return httpx.Response(200, json=_tokens(2))
            return httpx.Response(401, json={"detail": "Invalid refresh token"})
        if path.endswith("/auth/logout"):
            return httpx.Response(204)
        if request.headers.get("Authorization") == "Bearer access-2":
            return httpx.Response(200, json=[])
        return httpx.Response(401, json={"detail": "Invalid or expired token"})


def _client(server: FakeServer) -> ShiftMateClient:
    return ShiftMateClient("http://test", transport=httpx.MockTransport(server))


class TestAuthContext:
    async def test_login_populates_context(self):
        server = FakeServer()
        ctx = AuthContext()
        assert ctx.state is AuthState.ANONYMOUS
        async with _client(server) as api:
            res = await api.login(ctx, "me@test.com", "right-password")
        assert res.status_code == 200
        assert ctx.state is AuthState.AUTHENTICATED
        assert ctx.access_token == "access-1"

    async def test_failed_login_leaves_context_anonymous(self):
        ctx = AuthContext()
        async with _client(FakeServer()) as api:
            res = await api.login(ctx, "me@test.com", "wrong")
        assert res.status_code == 401
        assert ctx.state is AuthState.ANONYMOUS

    async def test_expired_access_refreshes_once_and_retries(self):
        """401 → 갱신 → 재시도 성공."""
        server = FakeServer()
        ctx = AuthContext(access_token="access-1", refresh_token="sel1.ver1")
        async with _client(server) as api:
            res = await api.request(ctx, "GET", "/api/v1/app/shifts")
        assert res.status_code == 200
        assert ctx.access_token == "access-2"
        assert ctx.refresh_token == "sel2.ver2"
        assert [p for _, p in server.calls] == [
            "/api/v1/app/shifts",
            "/api/v1/app/auth/refresh",
            "/api/v1/app/shifts",
        ]

    async def test_refresh_happens_in_access_expired_state(self):
        """401 수신 시 ACCESS_EXPIRED 상태에서 갱신, 성공하면 다시 AUTHENTICATED."""
        server = FakeServer()
        ctx = AuthContext(access_token="access-1", refresh_token="sel1.ver1")
        seen: list[AuthState] = []

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/auth/refresh"):
                seen.append(ctx.state)
            return server(request)

        async with ShiftMateClient("http://test", transport=httpx.MockTransport(handler)) as api:
            await api.request(ctx, "GET", "/api/v1/app/shifts")
        assert seen == [AuthState.ACCESS_EXPIRED]
        assert ctx.state is AuthState.AUTHENTICATED

    async def test_refresh_only_context_is_access_expired(self):
        server = FakeServer()
        ctx = AuthContext(refresh_token="sel1.ver1")
        assert ctx.state is AuthState.ACCESS_EXPIRED
        async with _client(server) as api:
            res = await api.request(ctx, "GET", "/api/v1/app/shifts")
        assert res.status_code == 200
        assert ctx.access_token == "access-2"

    async def test_failed_refresh_clears_context(self):
        server = FakeServer()
        ctx = AuthContext(access_token="stale", refresh_token="revoked.token")
        async with _client(server) as api:
            res = await api.request(ctx, "GET", "/api/v1/app/shifts")
        assert res.status_code == 401
        assert ctx.state is AuthState.ANONYMOUS
        assert len(server.calls) == 2

    async def test_contexts_are_independent(self):
        server = FakeServer()
        alice = AuthContext(access_token="access-2", refresh_token="a.b")
        bob = AuthContext()
        async with _client(server) as api:
            assert (await api.request(alice, "GET", "/api/v1/app/shifts")).status_code == 200
            assert (await api.request(bob, "GET", "/api/v1/app/shifts")).status_code == 401
        assert bob.state is AuthState.ANONYMOUS
        assert alice.access_token == "access-2"

    async def test_logout_clears_context(self):
        server = FakeServer()
        ctx = AuthContext(access_token="access-2", refresh_token="sel2.ver2")
        async with _client(server) as api:
            await api.logout(ctx)
        assert ctx.state is AuthState.ANONYMOUS
        assert server.calls == [("POST", "/api/v1/app/auth/logout")]
