"""
한국표준시(KST) 관련 유틸리티
가입 일시, 토큰 발급 시각 등 고객 서비스의 모든 시간 값은 KST 기준입니다.
"""
from datetime import datetime, timedelta, timezone

# 한국표준시 (KST = UTC+9)
KST_TIMEZONE = timezone(timedelta(hours=9))


def now_kst() -> datetime:
    """현재 시각을 KST 시간대로 반환합니다."""
    return datetime.now(KST_TIMEZONE)


def ensure_kst(dt: datetime | None) -> datetime | None:
    """
    DB에서 읽은 datetime을 KST 시간대로 맞춥니다.

    MySQL/SQLite의 DATETIME 컬럼은 시간대 정보를 보존하지 않으므로
    naive 값은 저장 시점의 KST로 간주합니다.

    Args:
        dt: datetime 객체 또는 None

    Returns:
        KST 시간대의 datetime 객체 또는 None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=KST_TIMEZONE)
    return dt.astimezone(KST_TIMEZONE)


def to_naive_kst(dt: datetime) -> datetime:
    """DATETIME 컬럼에 저장하기 위해 KST 기준 naive datetime으로 변환합니다."""
    return ensure_kst(dt).replace(tzinfo=None)
