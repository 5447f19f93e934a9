"""API 요청 로깅 미들웨어.

Request logging middleware. Every API call produces one structured event:
method, path, status, duration, masked request body, error detail and the
authenticated user id when one was resolved. Events go to Axiom when a token
and dataset are configured, otherwise to the ``app.access`` logger.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings

logger: logging.Logger = logging.getLogger(__name__)
access_logger: logging.Logger = logging.getLogger("app.access")

# 마스킹 대상 키 — Keys whose values never leave the process
_SENSITIVE_KEYS = re.compile(
    r"(password|secret|token|authorization|api_key|credential|verifier)",
    re.IGNORECASE,
)

_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드 마스킹 — Recursively replace sensitive values with ``***``."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(str(k)) else mask_sensitive(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:20]]
    if isinstance(data, str) and len(data) > 2000:
        return data[:2000] + "...(truncated)"
    return data


def _error_detail(body: bytes) -> str:
    try:
        payload: Any = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return body.decode("utf-8", errors="replace")[:500]
    detail: Any = payload.get("detail", payload) if isinstance(payload, dict) else payload
    text: str = detail if isinstance(detail, str) else json.dumps(detail, default=str)
    return text[:500]


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """요청별 구조화 로그 이벤트를 Axiom 또는 로컬 로거로 전송."""

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET
        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        started: float = time.perf_counter()
        event: dict[str, Any] = {"method": request.method, "path": request.url.path}
        if request.query_params:
            event["query_params"] = mask_sensitive(dict(request.query_params))

        if request.method in ("POST", "PUT", "PATCH"):
            body: bytes = await request.body()
            if body:
                try:
                    event["request_body"] = mask_sensitive(json.loads(body))
                except (json.JSONDecodeError, UnicodeDecodeError):
                    event["request_body"] = "(non-json body)"

        status_code: int = 500
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            if status_code >= 400:
                # 에러 응답 본문은 한 번 소비되므로 다시 감싸서 반환
                chunks: list[bytes] = []
                async for chunk in response.body_iterator:
                    chunks.append(chunk if isinstance(chunk, bytes) else chunk.encode("utf-8"))
                content: bytes = b"".join(chunks)
                event["error"] = _error_detail(content)
                response = Response(
                    content=content,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event["status_code"] = status_code
            event["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
            user_id: Any = getattr(request.state, "user_id", None)
            if user_id is not None:
                event["user_id"] = str(user_id)
            self._emit(event)

        return response

    def _emit(self, event: dict[str, Any]) -> None:
        if self._client is None:
            access_logger.info(
                "%s %s %s %.2fms",
                event["method"],
                event["path"],
                event["status_code"],
                event["duration_ms"],
                extra={"event": event},
            )
            return
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception as exc:  # noqa: BLE001
            logger.warning("Axiom ingest failed: %s", exc)
