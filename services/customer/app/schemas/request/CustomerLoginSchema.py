from pydantic import BaseModel, Field


class CustomerLoginSchema(BaseModel):
    """
    고객 로그인 요청 본문.
    """

    phone: str | None = Field(default=None, description="전화번호", examples=["01012345678"])
    password: str | None = Field(default=None, description="비밀번호")
