"""
공통 로깅 설정
각 모듈은 logging.getLogger(__name__)으로 로거를 만들고,
서비스 진입점(main.py)에서 configure_logging()을 한 번 호출합니다.
"""
import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def configure_logging(level: str | int = logging.INFO) -> None:
    """루트 로거에 StreamHandler를 한 번만 등록합니다."""
    global _configured

    root = logging.getLogger()
    root.setLevel(level)
    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    _configured = True


def mask_phone(phone: str | None) -> str:
    """로그에 남길 전화번호를 가립니다. (01012345678 -> 010****5678)"""
    if not phone:
        return ""
    if len(phone) <= 7:
        return "*" * len(phone)
    return f"{phone[:3]}{'*' * (len(phone) - 7)}{phone[-4:]}"
