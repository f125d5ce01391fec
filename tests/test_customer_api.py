"""Integration tests for /customer endpoints."""
from datetime import timedelta
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from customer_factory import NICKNAME, PASSWORD, PHONE, sign_up_payload, sign_up_payload_without_nickname
from libs.common import now_kst
from services.customer.app.core.LoginService import LoginService, TokenPair
from services.customer.app.dependencies import get_login_service
from services.customer.app.main import app


def _login(client, phone=PHONE, password=PASSWORD):
    return client.post("/customer/login", json={"phone": phone, "password": password})


def test_root_endpoint(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "running"


def test_create_customer(client):
    response = client.post("/customer/customers", json=sign_up_payload())

    assert response.status_code == 201
    data = response.json()
    assert data["nickname"] == NICKNAME
    assert data["phone"] == PHONE
    assert set(data) == {"nickname", "phone"}


def test_create_customer_without_nickname(client):
    response = client.post("/customer/customers", json=sign_up_payload_without_nickname())

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["code"] == "ERR-IVD-VALUE"
    assert "nickname cannot be null" in detail["message"]


@pytest.mark.parametrize(
    "password",
    ["short1", "thisaverylongpassword123", "123456789", "alphabets", "!!!!!!!!"],
)
def test_fail_when_password_breaks_policy(client, password):
    response = client.post("/customer/customers", json=sign_up_payload(password=password))

    assert response.status_code == 400
    assert "Password must contain" in response.json()["detail"]["message"]


def test_fail_when_phone_already_exists(client):
    assert client.post("/customer/customers", json=sign_up_payload()).status_code == 201

    response = client.post("/customer/customers", json=sign_up_payload(nickname="다른닉네임"))

    assert response.status_code == 400
    assert response.json()["detail"] == {
        "code": "ERR-DUP-VALUE",
        "message": "phone number already exists",
    }


@pytest.mark.parametrize("phone_verified", [None, False])
def test_fail_when_phone_not_authenticated(client, phone_verified):
    response = client.post("/customer/customers", json=sign_up_payload(phoneVerified=phone_verified))

    assert response.status_code == 400
    assert response.json()["detail"]["message"] == "phone number must be authenticated"


def test_malformed_body_is_bad_request(client):
    response = client.post("/customer/customers", json=sign_up_payload(phoneVerified="maybe"))

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["code"] == "ERR-IVD-VALUE"
    assert "phoneVerified" in detail["message"]


def test_success_customer_login_with_stubbed_service():
    expected = TokenPair(
        access_token="testAccessToken",
        refresh_token="testRefreshToken",
        refresh_expires_at=now_kst() + timedelta(days=7),
    )
    login_service = Mock(spec=LoginService)
    login_service.login = AsyncMock(return_value=expected)

    app.dependency_overrides[get_login_service] = lambda: login_service
    try:
        response = TestClient(app).post(
            "/customer/login",
            json={"phone": "01012345678", "password": "encryptedPassword"},
        )
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert response.json() == {
        "accessToken": "testAccessToken",
        "refreshToken": "testRefreshToken",
    }
    credentials = login_service.login.await_args.args[0]
    assert credentials.phone == "01012345678"


def test_sign_up_then_login(client):
    client.post("/customer/customers", json=sign_up_payload())

    response = _login(client)

    assert response.status_code == 200
    data = response.json()
    assert data["accessToken"]
    assert data["refreshToken"]
    assert "X-REFRESH-TOKEN" in response.headers.get("set-cookie", "")


def test_login_with_wrong_password(client):
    client.post("/customer/customers", json=sign_up_payload())

    response = _login(client, password="wrong1234!")

    assert response.status_code == 401
    assert response.json()["detail"]["code"] == "ERR-IVD-PARAM"

    set_cookie = response.headers.get("set-cookie", "")
    assert "X-REFRESH-TOKEN=" in set_cookie
    assert "Max-Age=0" in set_cookie
    assert response.headers["clear-cookie"] == "X-REFRESH-TOKEN"


def test_get_my_customer(client):
    client.post("/customer/customers", json=sign_up_payload())
    access_token = _login(client).json()["accessToken"]

    response = client.get(
        "/customer/customers/me",
        headers={"Authorization": f"Bearer {access_token}"},
    )

    assert response.status_code == 200
    assert response.json() == {"nickname": NICKNAME, "phone": PHONE}


@pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer not-a-jwt"}])
def test_get_my_customer_requires_access_token(client, headers):
    response = client.get("/customer/customers/me", headers=headers)

    assert response.status_code == 401
    detail = response.json()["detail"]
    assert detail["code"] == "ERR-IVD-PARAM"
    assert detail["message"]


def test_refresh_token_with_body(client):
    client.post("/customer/customers", json=sign_up_payload())
    refresh_token = _login(client).json()["refreshToken"]

    response = client.post("/customer/token/refresh", json={"refreshToken": refresh_token})

    assert response.status_code == 200
    assert response.json()["accessToken"]


def test_refresh_token_with_cookie(client):
    client.post("/customer/customers", json=sign_up_payload())
    _login(client)

    response = client.post("/customer/token/refresh")

    assert response.status_code == 200
    assert response.json()["refreshToken"]


def test_refresh_rejects_invalid_token(client):
    response = client.post("/customer/token/refresh", json={"refreshToken": "not-a-jwt"})

    assert response.status_code == 401
    detail = response.json()["detail"]
    assert detail["code"] == "ERR-IVD-PARAM"
    assert detail["message"]


def test_fail_when_full_width_digits_repeat_existing_phone(client):
    client.post("/customer/customers", json=sign_up_payload())

    response = client.post(
        "/customer/customers",
        json=sign_up_payload(phone="010１２３４５６７８"),
    )

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "ERR-IVD-VALUE"
