from pydantic import BaseModel, Field, ConfigDict


class CustomerResponse(BaseModel):
    """
    고객 정보 응답.
    가입 성공(HTTP 201)과 내 정보 조회에 사용하며, 비밀번호 관련 필드는 포함하지 않습니다.
    """

    nickname: str = Field(..., description="닉네임", examples=["빵순이"])
    phone: str = Field(..., description="전화번호", examples=["01012345678"])

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "nickname": "빵순이",
                "phone": "01012345678"
            }
        }
    )
