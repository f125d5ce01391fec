from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Customer(BaseModel):
    """
    고객(Customer) 엔티티 정의.
    전화번호가 고객을 식별하며, 비밀번호는 해시 값으로만 보관합니다.
    """

    customerId: int = Field(..., description="고객 고유 식별자")
    nickname: str = Field(..., description="고객 닉네임")
    phone: str = Field(..., description="전화번호 (숫자만)")
    passwordHash: str = Field(..., description="bcrypt 비밀번호 해시", repr=False)
    phoneAuthenticated: bool = Field(..., description="휴대폰 인증 여부")
    createdAt: datetime = Field(..., description="가입 일시")

    model_config = ConfigDict(from_attributes=True)
