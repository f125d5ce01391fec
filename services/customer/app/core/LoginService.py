import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol

from libs.common import (
    TOKEN_TYPE_ACCESS,
    TOKEN_TYPE_REFRESH,
    AuthError,
    encode_token,
    mask_phone,
    now_kst,
    verify_token,
)
from libs.schemas import Customer

from services.customer.app.core.CustomerValidator import normalize_phone
from services.customer.app.core.PasswordEncoder import PasswordEncoder
from services.customer.app.db.connection import settings

logger = logging.getLogger(__name__)


class PhoneConflictError(ValueError):
    """저장소의 전화번호 유일성 제약을 위반한 경우 (동시 가입 등)"""


class CustomerRepositoryPort(Protocol):
    async def phone_exists(self, phone: str) -> bool: ...

    async def find_customer_by_phone(self, phone: str) -> Customer | None: ...

    async def find_customer_by_id(self, customer_id: int) -> Customer | None: ...

    async def save_customer(
        self,
        nickname: str,
        phone: str,
        password_hash: str,
        phone_authenticated: bool,
    ) -> Customer: ...


@dataclass
class Credentials:
    phone: str | None
    password: str | None


@dataclass
class TokenPair:
    access_token: str
    refresh_token: str
    refresh_expires_at: datetime


class AuthenticationError(Exception):
    code = "ERR-IVD-PARAM"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code


class TokenIssuerPort(Protocol):
    def issue(self, customer: Customer) -> TokenPair: ...

    def verify(self, token: str, token_type: str) -> tuple[str, int]: ...


class JwtTokenIssuer(TokenIssuerPort):
    SUBJECT_CUSTOMER = "customer"

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        access_token_ttl: timedelta = timedelta(minutes=30),
        refresh_token_ttl: timedelta = timedelta(days=7),
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_ttl = access_token_ttl
        self.refresh_token_ttl = refresh_token_ttl

    @classmethod
    def from_settings(cls) -> "JwtTokenIssuer":
        return cls(
            secret_key=settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
            access_token_ttl=timedelta(minutes=settings.ACCESS_TOKEN_TTL_MINUTES),
            refresh_token_ttl=timedelta(days=settings.REFRESH_TOKEN_TTL_DAYS),
        )

    def issue(self, customer: Customer) -> TokenPair:
        now = now_kst()
        extra_claims = {"phone": customer.phone}
        access_token = encode_token(
            self.SUBJECT_CUSTOMER,
            customer.customerId,
            TOKEN_TYPE_ACCESS,
            now,
            self.access_token_ttl,
            self.secret_key,
            self.algorithm,
            extra_claims,
        )
        refresh_token = encode_token(
            self.SUBJECT_CUSTOMER,
            customer.customerId,
            TOKEN_TYPE_REFRESH,
            now,
            self.refresh_token_ttl,
            self.secret_key,
            self.algorithm,
            extra_claims,
        )
        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            refresh_expires_at=now + self.refresh_token_ttl,
        )

    def verify(self, token: str, token_type: str) -> tuple[str, int]:
        return verify_token(token, self.secret_key, self.algorithm, token_type)


class LoginService:
    SUBJECT_CUSTOMER = JwtTokenIssuer.SUBJECT_CUSTOMER
    INVALID_CREDENTIALS_MESSAGE = "phone number or password is incorrect"

    def __init__(
        self,
        customer_repository: CustomerRepositoryPort,
        password_encoder: PasswordEncoder | None = None,
        token_issuer: TokenIssuerPort | None = None,
    ):
        self.customer_repository = customer_repository
        self.password_encoder = password_encoder or PasswordEncoder(settings.BCRYPT_ROUNDS)
        self.token_issuer = token_issuer or JwtTokenIssuer.from_settings()

    async def login(self, credentials: Credentials) -> TokenPair:
        """
        전화번호와 비밀번호로 로그인하고 토큰을 발급합니다.

        등록되지 않은 전화번호와 비밀번호 불일치는 같은 메시지로 실패시켜
        가입 여부가 드러나지 않도록 합니다.

        Raises:
            AuthenticationError: 고객이 없거나 비밀번호가 일치하지 않는 경우
        """
        phone = normalize_phone(credentials.phone)
        if not phone or not credentials.password:
            raise AuthenticationError(self.INVALID_CREDENTIALS_MESSAGE)

        customer = await self.customer_repository.find_customer_by_phone(phone)
        if customer is None:
            logger.warning("login rejected: unknown phone %s", mask_phone(phone))
            raise AuthenticationError(self.INVALID_CREDENTIALS_MESSAGE)

        if not self.password_encoder.verify(credentials.password, customer.passwordHash):
            logger.warning("login rejected: password mismatch for %s", mask_phone(phone))
            raise AuthenticationError(self.INVALID_CREDENTIALS_MESSAGE)

        logger.info("customer %s logged in", customer.customerId)
        return self.token_issuer.issue(customer)

    async def refresh(self, refresh_token: str | None) -> TokenPair:
        """
        Refresh token을 검증하고 새 토큰 쌍을 발급합니다.

        Raises:
            AuthenticationError: 토큰이 유효하지 않거나 고객을 찾을 수 없는 경우
        """
        customer_id = self._verify(refresh_token, TOKEN_TYPE_REFRESH)

        customer = await self.customer_repository.find_customer_by_id(customer_id)
        if customer is None:
            raise AuthenticationError("등록되지 않은 고객입니다.")

        return self.token_issuer.issue(customer)

    async def verify_access_token(self, access_token: str | None) -> tuple[str, int]:
        """
        Access token을 검증하고 (subject_type, customer_id)를 반환합니다.

        Raises:
            AuthenticationError: 토큰이 유효하지 않은 경우
        """
        customer_id = self._verify(access_token, TOKEN_TYPE_ACCESS)
        return (self.SUBJECT_CUSTOMER, customer_id)

    def _verify(self, token: str | None, token_type: str) -> int:
        try:
            subject_type, subject_id = self.token_issuer.verify(token or "", token_type)
        except AuthError as exc:
            raise AuthenticationError(exc.message, exc.code) from exc

        if subject_type != self.SUBJECT_CUSTOMER:
            raise AuthenticationError(f"{token_type} token 대상이 일치하지 않습니다.")
        return subject_id
