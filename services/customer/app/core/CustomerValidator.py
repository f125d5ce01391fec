import re
import string
from dataclasses import dataclass

NICKNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 20
SPECIAL_CHARACTERS = string.punctuation

PASSWORD_POLICY_MESSAGE = (
    "Password must contain at least one letter, one digit and one special character "
    f"({PASSWORD_MIN_LENGTH}-{PASSWORD_MAX_LENGTH} characters)"
)

_PHONE_PATTERN = re.compile(r"^01[0-9]{8,9}$")
_ALLOWED_PASSWORD_CHARACTERS = set(string.ascii_letters + string.digits + SPECIAL_CHARACTERS)


class ValidationError(Exception):
    """가입 요청 본문이 형식 규칙을 만족하지 않는 경우"""

    code = "ERR-IVD-VALUE"

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


@dataclass
class RegistrationRequest:
    nickname: str | None
    phone: str | None
    password: str | None
    phone_verified: bool | None


def normalize_phone(raw_phone: str | None) -> str:
    """전화번호에서 ASCII 숫자만 추출합니다. (010-1234-5678 -> 01012345678)

    전각 숫자 등 유니코드 숫자는 제거되므로 같은 번호가 다른 키로 저장되지 않습니다.
    """
    return re.sub(r"[^0-9]", "", raw_phone or "")


def is_valid_password(password: str) -> bool:
    """영문자, 숫자, 특수문자를 각각 하나 이상 포함하는 8~20자의 ASCII 문자열인지 확인"""
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        return False
    if any(ch not in _ALLOWED_PASSWORD_CHARACTERS for ch in password):
        return False
    has_letter = any(ch in string.ascii_letters for ch in password)
    has_digit = any(ch in string.digits for ch in password)
    has_special = any(ch in SPECIAL_CHARACTERS for ch in password)
    return has_letter and has_digit and has_special


def validate_registration(request: RegistrationRequest) -> ValidationError | None:
    """
    가입 요청의 형식을 검사합니다.

    비즈니스 규칙(전화번호 중복, 휴대폰 인증 여부)보다 먼저 실행되며,
    부수효과가 없습니다. 첫 번째로 위반한 규칙을 ValidationError로 돌려주고,
    모두 통과하면 None을 반환합니다.
    """
    nickname = request.nickname
    if nickname is None or not nickname.strip():
        return ValidationError("nickname", "nickname cannot be null")
    if len(nickname.strip()) > NICKNAME_MAX_LENGTH:
        return ValidationError(
            "nickname", f"nickname must be at most {NICKNAME_MAX_LENGTH} characters"
        )

    if request.phone is None or not request.phone.strip():
        return ValidationError("phone", "phone cannot be null")
    if not _PHONE_PATTERN.match(normalize_phone(request.phone)):
        return ValidationError("phone", "phone number format is invalid")

    if request.password is None:
        return ValidationError("password", "password cannot be null")
    if not is_valid_password(request.password):
        return ValidationError("password", PASSWORD_POLICY_MESSAGE)

    return None
