import logging
from dataclasses import dataclass

from libs.common import mask_phone

from services.customer.app.core.CustomerValidator import (
    RegistrationRequest,
    normalize_phone,
    validate_registration,
)
from services.customer.app.core.LoginService import (
    AuthenticationError,
    CustomerRepositoryPort,
    PhoneConflictError,
)
from services.customer.app.core.PasswordEncoder import PasswordEncoder
from services.customer.app.db.connection import settings

logger = logging.getLogger(__name__)


class DuplicateIdentityError(Exception):
    code = "ERR-DUP-VALUE"

    def __init__(self, message: str = "phone number already exists"):
        super().__init__(message)
        self.message = message


class UnverifiedPhoneError(Exception):
    code = "ERR-MISSING-PHONE-AUTH"

    def __init__(self, message: str = "phone number must be authenticated"):
        super().__init__(message)
        self.message = message


@dataclass
class CustomerProfile:
    """외부에 공개해도 되는 고객 정보 (비밀번호 해시 제외)"""

    nickname: str
    phone: str


class CustomerService:
    def __init__(
        self,
        customer_repository: CustomerRepositoryPort,
        password_encoder: PasswordEncoder | None = None,
    ):
        self.customer_repository = customer_repository
        self.password_encoder = password_encoder or PasswordEncoder(settings.BCRYPT_ROUNDS)

    async def register(self, request: RegistrationRequest) -> CustomerProfile:
        """
        고객 가입을 처리합니다.

        1. 요청 형식 검증 (닉네임, 전화번호, 비밀번호 정책)
        2. 전화번호 중복 체크 (저장 전에 수행)
        3. 휴대폰 인증 여부 확인
        4. 비밀번호 해시 후 저장

        Raises:
            ValidationError: 요청 형식이 올바르지 않은 경우
            DuplicateIdentityError: 이미 등록된 전화번호인 경우
            UnverifiedPhoneError: 휴대폰 인증을 거치지 않은 경우
        """
        error = validate_registration(request)
        if error is not None:
            logger.warning("sign-up rejected: %s", error.message)
            raise error

        phone = normalize_phone(request.phone)

        if await self.customer_repository.phone_exists(phone):
            logger.warning("sign-up rejected: duplicated phone %s", mask_phone(phone))
            raise DuplicateIdentityError()

        # None(미전달)도 인증되지 않은 것으로 취급
        if request.phone_verified is not True:
            logger.warning("sign-up rejected: phone %s not authenticated", mask_phone(phone))
            raise UnverifiedPhoneError()

        password_hash = self.password_encoder.hash(request.password)

        try:
            customer = await self.customer_repository.save_customer(
                nickname=request.nickname.strip(),
                phone=phone,
                password_hash=password_hash,
                phone_authenticated=True,
            )
        except PhoneConflictError as exc:
            # 중복 체크와 저장 사이에 같은 번호로 가입된 경우
            logger.warning("sign-up rejected: concurrent sign-up for %s", mask_phone(phone))
            raise DuplicateIdentityError() from exc

        logger.info("customer %s signed up", customer.customerId)
        return CustomerProfile(nickname=customer.nickname, phone=customer.phone)

    async def get_customer(self, customer_id: int) -> CustomerProfile:
        customer = await self.customer_repository.find_customer_by_id(customer_id)
        if customer is None:
            raise AuthenticationError("등록되지 않은 고객입니다.")
        return CustomerProfile(nickname=customer.nickname, phone=customer.phone)
