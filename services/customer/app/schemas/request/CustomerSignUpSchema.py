from pydantic import BaseModel, Field


class CustomerSignUpSchema(BaseModel):
    """
    고객 가입 요청 본문.
    필드 값 규칙은 CustomerValidator에서 검사하므로 여기서는 타입만 정의합니다.
    """

    nickname: str | None = Field(default=None, description="닉네임", examples=["빵순이"])
    phone: str | None = Field(default=None, description="전화번호", examples=["01012345678"])
    password: str | None = Field(
        default=None,
        description="비밀번호 (영문자, 숫자, 특수문자 포함 8~20자)",
        examples=["password1!"],
    )
    phoneVerified: bool | None = Field(default=None, description="휴대폰 인증 완료 여부")
