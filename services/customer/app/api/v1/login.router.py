from datetime import datetime

from fastapi import APIRouter, Body, Cookie, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse

from libs.common import ensure_kst, now_kst

from services.customer.app.core.LoginService import (
    AuthenticationError,
    Credentials,
    LoginService,
    TokenPair,
)
from services.customer.app.dependencies import get_login_service
from services.customer.app.db.connection import settings
from services.customer.app.schemas.request import CustomerLoginSchema, TokenRefreshSchema
from services.customer.app.schemas.response import TokenResponse

router = APIRouter(tags=["Authentication"])

REFRESH_COOKIE = "X-REFRESH-TOKEN"


def _set_refresh_cookie(response: Response, refresh_token: str, expires_at: datetime) -> None:
    max_age = max(int((ensure_kst(expires_at) - now_kst()).total_seconds()), 0)
    if max_age <= 0:
        return

    response.set_cookie(
        key=REFRESH_COOKIE,
        value=refresh_token,
        httponly=True,
        secure=settings.cookie_secure,  # 환경 변수에 따라 자동 설정
        samesite="lax",
        max_age=max_age,
    )


def _clear_refresh_cookie(response: Response) -> None:
    response.delete_cookie(
        key=REFRESH_COOKIE,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    response.headers["clear-cookie"] = REFRESH_COOKIE


def _token_response(response: Response, tokens: TokenPair) -> TokenResponse:
    _set_refresh_cookie(response, tokens.refresh_token, tokens.refresh_expires_at)
    return TokenResponse(accessToken=tokens.access_token, refreshToken=tokens.refresh_token)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        200: {
            "description": "로그인 성공",
            "content": {
                "application/json": {
                    "example": {
                        "accessToken": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "refreshToken": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."
                    }
                }
            }
        },
        401: {
            "description": "로그인 실패",
            "content": {
                "application/json": {
                    "example": {
                        "detail": {
                            "code": "ERR-IVD-PARAM",
                            "message": "phone number or password is incorrect",
                        }
                    }
                }
            }
        }
    }
)
async def login_customer(
    payload: CustomerLoginSchema,
    response: Response,
    login_service: LoginService = Depends(get_login_service),
):
    """
    고객 로그인 (전화번호 + 비밀번호)

    **응답 형식:**
    - `accessToken`: JWT 액세스 토큰
    - `refreshToken`: JWT 리프레시 토큰 (X-REFRESH-TOKEN 쿠키에도 설정)
    """
    try:
        tokens = await login_service.login(
            Credentials(phone=payload.phone, password=payload.password)
        )
    except AuthenticationError as exc:
        # HTTPException으로는 쿠키 삭제가 전달되지 않으므로 응답을 직접 구성
        error_response = JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": {"code": exc.code, "message": exc.message}},
        )
        _clear_refresh_cookie(error_response)
        return error_response

    return _token_response(response, tokens)


@router.post("/token/refresh", response_model=TokenResponse)
async def refresh_customer_token(
    response: Response,
    payload: TokenRefreshSchema | None = Body(default=None),
    refresh_cookie: str | None = Cookie(default=None, alias=REFRESH_COOKIE),
    login_service: LoginService = Depends(get_login_service),
):
    """
    Refresh token으로 토큰 쌍을 재발급합니다.

    본문의 `refreshToken`이 없으면 X-REFRESH-TOKEN 쿠키를 사용합니다.
    """
    refresh_token = (payload.refreshToken if payload else None) or refresh_cookie

    try:
        tokens = await login_service.refresh(refresh_token)
    except AuthenticationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": exc.code, "message": exc.message},
        ) from exc

    return _token_response(response, tokens)
