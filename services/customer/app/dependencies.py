from functools import lru_cache

from services.customer.app.core.CustomerService import CustomerService
from services.customer.app.core.LoginService import JwtTokenIssuer, LoginService
from services.customer.app.core.PasswordEncoder import PasswordEncoder
from services.customer.app.db.connection import settings
from services.customer.app.db.repositories.customers import SQLAlchemyCustomerRepository


@lru_cache
def _customer_repository() -> SQLAlchemyCustomerRepository:
    return SQLAlchemyCustomerRepository()


@lru_cache
def _password_encoder() -> PasswordEncoder:
    return PasswordEncoder(rounds=settings.BCRYPT_ROUNDS)


@lru_cache
def _token_issuer() -> JwtTokenIssuer:
    return JwtTokenIssuer.from_settings()


@lru_cache
def get_customer_service() -> CustomerService:
    return CustomerService(
        customer_repository=_customer_repository(),
        password_encoder=_password_encoder(),
    )


@lru_cache
def get_login_service() -> LoginService:
    return LoginService(
        customer_repository=_customer_repository(),
        password_encoder=_password_encoder(),
        token_issuer=_token_issuer(),
    )
