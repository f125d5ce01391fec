from fastapi import APIRouter, Depends, HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from services.customer.app.core.CustomerService import (
    CustomerService,
    DuplicateIdentityError,
    UnverifiedPhoneError,
)
from services.customer.app.core.CustomerValidator import RegistrationRequest, ValidationError
from services.customer.app.core.LoginService import AuthenticationError, LoginService
from services.customer.app.dependencies import get_customer_service, get_login_service
from services.customer.app.schemas.request import CustomerSignUpSchema
from services.customer.app.schemas.response import CustomerResponse

router = APIRouter(tags=["Customer"])

# Swagger UI에서 Bearer token을 입력할 수 있도록 HTTPBearer 설정
security = HTTPBearer(description="Access Token (Bearer)", auto_error=False)


@router.post(
    "/customers",
    response_model=CustomerResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {
            "description": "가입 성공",
            "content": {
                "application/json": {
                    "example": {"nickname": "빵순이", "phone": "01012345678"}
                }
            }
        },
        400: {
            "description": "가입 실패",
            "content": {
                "application/json": {
                    "example": {
                        "detail": {
                            "code": "ERR-DUP-VALUE",
                            "message": "phone number already exists",
                        }
                    }
                }
            }
        }
    }
)
async def create_customer(
    payload: CustomerSignUpSchema,
    customer_service: CustomerService = Depends(get_customer_service),
):
    """
    고객 가입

    **주의사항:**
    - 휴대폰 인증(phoneVerified=true)을 마친 요청만 가입됩니다.
    - 이미 등록된 전화번호면 400 Bad Request를 반환합니다.
    """
    try:
        customer = await customer_service.register(
            RegistrationRequest(
                nickname=payload.nickname,
                phone=payload.phone,
                password=payload.password,
                phone_verified=payload.phoneVerified,
            )
        )
    except (ValidationError, DuplicateIdentityError, UnverifiedPhoneError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": exc.code, "message": exc.message},
        ) from exc

    return CustomerResponse(nickname=customer.nickname, phone=customer.phone)


@router.get("/customers/me", response_model=CustomerResponse)
async def get_my_customer(
    credentials: HTTPAuthorizationCredentials | None = Security(security),
    login_service: LoginService = Depends(get_login_service),
    customer_service: CustomerService = Depends(get_customer_service),
):
    """
    현재 로그인되어있는 고객 정보를 조회합니다.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": AuthenticationError.code, "message": "access token이 필요합니다."},
        )

    try:
        _, customer_id = await login_service.verify_access_token(credentials.credentials)
        customer = await customer_service.get_customer(customer_id)
    except AuthenticationError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": exc.code, "message": exc.message},
        ) from exc

    return CustomerResponse(nickname=customer.nickname, phone=customer.phone)
