"""
공통 인증 모듈
JWT access/refresh token의 발급과 검증 로직을 제공합니다.
"""
import logging
import secrets
from datetime import datetime, timedelta
from typing import Tuple

import jwt

logger = logging.getLogger(__name__)

TOKEN_TYPE_ACCESS = "access"
TOKEN_TYPE_REFRESH = "refresh"


class AuthError(Exception):
    """인증 관련 에러"""
    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message
        logger.debug("AuthError: %s %s", code, message)


def encode_token(
    subject_type: str,
    subject_id: int,
    token_type: str,
    issued_at: datetime,
    ttl: timedelta,
    secret_key: str,
    algorithm: str = "HS256",
    extra_claims: dict | None = None,
) -> str:
    """
    로그인된 사용자 정보를 담은 JWT를 생성합니다.

    Args:
        subject_type: 사용자 타입 (customer)
        subject_id: 사용자 ID
        token_type: access 또는 refresh
        issued_at: 발급 시각
        ttl: 유효 기간
        secret_key: 서명 키
        algorithm: 서명 알고리즘
        extra_claims: 추가로 넣을 claim

    Returns:
        서명된 JWT 문자열
    """
    expires_at = issued_at + ttl
    payload = {
        "sub_type": subject_type,
        "sub_id": subject_id,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
        # 같은 초에 발급된 토큰도 서로 구분되도록
        "jti": secrets.token_hex(8),
        "type": token_type,
    }
    if extra_claims:
        payload.update(extra_claims)

    return jwt.encode(payload, secret_key, algorithm=algorithm)


def verify_token(
    token: str,
    secret_key: str,
    algorithm: str = "HS256",
    token_type: str = TOKEN_TYPE_ACCESS,
) -> Tuple[str, int]:
    """
    JWT를 검증하고 subject_type과 subject_id를 반환합니다.
    DB 조회 없이 토큰 자체에서 정보를 추출합니다.

    Raises:
        AuthError: 토큰이 유효하지 않거나 기대한 종류(access/refresh)가 아닌 경우
    """
    if not token:
        raise AuthError("ERR-IVD-PARAM", f"{token_type} token이 필요합니다.")

    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except jwt.ExpiredSignatureError as e:
        raise AuthError("ERR-IVD-PARAM", f"{token_type} token이 만료되었습니다.") from e
    except jwt.InvalidTokenError as e:
        raise AuthError("ERR-IVD-PARAM", f"{token_type} token이 유효하지 않습니다.") from e

    if payload.get("type") != token_type:
        raise AuthError("ERR-IVD-PARAM", f"{token_type} token이 아닙니다.")

    subject_type = payload.get("sub_type")
    subject_id = payload.get("sub_id")
    if not subject_type or not subject_id:
        raise AuthError("ERR-IVD-PARAM", f"{token_type} token에 필수 정보가 없습니다.")

    return (subject_type, int(subject_id))
