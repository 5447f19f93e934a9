"""비밀번호 해싱 및 검증 유틸리티 모듈.

Password hashing helpers built on bcrypt.
"""

import bcrypt


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Args:
        password: 평문 비밀번호 (Plain text password)

    Returns:
        str: bcrypt 해시 문자열 (Salted bcrypt hash)
    """
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


# 존재하지 않는 계정 로그인 시에도 동일한 bcrypt 비용을 지불하기 위한 해시
# Hash checked when the email is unknown so both paths pay the bcrypt cost
_UNKNOWN_USER_HASH: str = hash_password("shiftmate-unknown-user")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """평문 비밀번호와 bcrypt 해시를 비교 검증합니다.

    A ``None`` hash (unknown user or an invited account without a password
    yet) is checked against a throwaway hash and always fails.
    """
    if hashed_password is None:
        bcrypt.checkpw(plain_password.encode("utf-8"), _UNKNOWN_USER_HASH.encode("utf-8"))
        return False
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
