"""
공통 라이브러리
고객 서비스에서 사용하는 인증, 로깅, 시간대 기능을 제공합니다.
"""

from libs.common.auth import (
    TOKEN_TYPE_ACCESS,
    TOKEN_TYPE_REFRESH,
    AuthError,
    encode_token,
    verify_token,
)
from libs.common.logger import configure_logging, mask_phone
from libs.common.timezone import KST_TIMEZONE, ensure_kst, now_kst, to_naive_kst

__all__ = [
    "AuthError",
    "encode_token",
    "verify_token",
    "TOKEN_TYPE_ACCESS",
    "TOKEN_TYPE_REFRESH",
    "configure_logging",
    "mask_phone",
    "KST_TIMEZONE",
    "now_kst",
    "ensure_kst",
    "to_naive_kst",
]
