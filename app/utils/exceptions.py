"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Pre-configured HTTPException subclasses so services can raise domain errors
without choosing status codes at each call site.

Usage:
    from app.utils.exceptions import NotFoundError, ConfigurationMissingError
    raise NotFoundError("Shift not found")
    raise ConfigurationMissingError("No rate tiers configured", company_id=cid, day_type="sunday")
"""

from typing import Any

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    Raised when a requested resource (user, shift, rate tier, etc.) does not exist.
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 중복 리소스 생성 시도 시 사용.

    Raised when a resource would violate a uniqueness rule
    (e.g. duplicate email, a holiday already registered for a date).
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 권한 부족 시 사용.

    Raised when the authenticated user lacks permission, including employees
    trying to edit shifts a manager rostered for them.
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    Raised when credentials are missing, invalid, expired or revoked.
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    Raised when request data fails business validation beyond Pydantic
    (e.g. a broken rate tier ladder, an invalid state transition).
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidDurationError(BadRequestError):
    """400 — 근무 시간이 음수이거나 유한하지 않을 때.

    Raised when worked hours are negative, NaN or infinite.
    """

    def __init__(self, detail: str = "Worked hours must be a finite, non-negative number") -> None:
        super().__init__(detail=detail)


class InvalidDateRangeError(BadRequestError):
    """400 — 종료일이 시작일보다 앞설 때.

    Raised when a date range ends before it starts.
    """

    def __init__(self, detail: str = "End date must not be before start date") -> None:
        super().__init__(detail=detail)


class ConfigurationMissingError(HTTPException):
    """422 — 적용할 요율 설정이 없을 때 사용.

    Raised when no rate tiers (or employee rate) apply to a calculation.
    The ``detail`` payload is a dict with ``code="configuration_missing"`` so
    clients can tell it apart from a legitimate zero-hour result.

    Args:
        message: 사람이 읽는 오류 메시지 (Human readable message)
        **context: 회사 ID, 요일 유형 등 추가 정보 (company_id, day_type, ...)
    """

    def __init__(self, message: str = "Rate configuration missing", **context: Any) -> None:
        self.message: str = message
        self.context: dict[str, Any] = {k: str(v) for k, v in context.items() if v is not None}
        super().__init__(
            status_code=422,
            detail={"code": "configuration_missing", "message": message, **self.context},
        )
