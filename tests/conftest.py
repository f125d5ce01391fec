"""Pytest configuration and fixtures."""
import os

import pytest

# 앱 import 전에 테스트 환경 변수 설정
os.environ["CUSTOMER_DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-customer-service-0123456789"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "true"


@pytest.fixture
def customer_repository():
    from customer_factory import InMemoryCustomerRepository

    return InMemoryCustomerRepository()


@pytest.fixture
def password_encoder():
    from services.customer.app.core.PasswordEncoder import PasswordEncoder

    # 테스트 속도를 위해 최소 cost 사용
    return PasswordEncoder(rounds=4)


@pytest.fixture
def token_issuer():
    from services.customer.app.core.LoginService import JwtTokenIssuer

    return JwtTokenIssuer(secret_key=os.environ["JWT_SECRET_KEY"])


@pytest.fixture
def customer_service(customer_repository, password_encoder):
    from services.customer.app.core.CustomerService import CustomerService

    return CustomerService(
        customer_repository=customer_repository,
        password_encoder=password_encoder,
    )


@pytest.fixture
def login_service(customer_repository, password_encoder, token_issuer):
    from services.customer.app.core.LoginService import LoginService

    return LoginService(
        customer_repository=customer_repository,
        password_encoder=password_encoder,
        token_issuer=token_issuer,
    )


@pytest.fixture
def client(customer_service, login_service):
    """In-memory 저장소로 연결된 TestClient"""
    from fastapi.testclient import TestClient

    from services.customer.app.dependencies import get_customer_service, get_login_service
    from services.customer.app.main import app

    app.dependency_overrides[get_customer_service] = lambda: customer_service
    app.dependency_overrides[get_login_service] = lambda: login_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
