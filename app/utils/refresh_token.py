"""불투명 리프레시 토큰 유틸리티.

Opaque refresh credential helpers.

A credential handed to the client looks like ``<selector>.<verifier>``. The
selector is a public lookup key; the verifier never touches the database.
Only a per-token random salt and ``sha256(salt + verifier)`` are stored, and
presented verifiers are checked with a constant-time comparison.
"""

import hashlib
import hmac
import secrets
from dataclasses import dataclass


@dataclass(frozen=True)
class IssuedCredential:
    """발급된 리프레시 자격 증명 (A freshly issued refresh credential).

    Attributes:
        token: 클라이언트에 전달할 원문 (Raw value returned to the client once)
        selector: DB 조회 키 (Public lookup key)
        salt: 토큰별 솔트 hex (Per-token salt)
        verifier_hash: 솔트 해시 hex (Salted verifier hash)
    """

    token: str
    selector: str
    salt: str
    verifier_hash: str


def hash_verifier(salt: str, verifier: str) -> str:
    """솔트와 검증자로 SHA-256 해시를 계산합니다."""
    return hashlib.sha256(f"{salt}{verifier}".encode("utf-8")).hexdigest()


def issue_credential() -> IssuedCredential:
    """새 리프레시 자격 증명을 생성합니다."""
    selector: str = secrets.token_urlsafe(12)
    verifier: str = secrets.token_urlsafe(48)
    salt: str = secrets.token_hex(16)
    return IssuedCredential(
        token=f"{selector}.{verifier}",
        selector=selector,
        salt=salt,
        verifier_hash=hash_verifier(salt, verifier),
    )


def split_credential(token: str) -> tuple[str, str] | None:
    """원문 토큰을 (selector, verifier)로 분리합니다. 형식 오류 시 None."""
    selector, sep, verifier = token.partition(".")
    if not sep or not selector or not verifier or "." in verifier:
        return None
    return selector, verifier


def verify_credential(verifier: str, salt: str, stored_hash: str) -> bool:
    """검증자를 상수 시간 비교로 확인합니다 (Constant-time verifier check)."""
    return hmac.compare_digest(hash_verifier(salt, verifier), stored_hash)
