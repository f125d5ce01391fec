from pydantic import BaseModel, Field, ConfigDict


class TokenResponse(BaseModel):
    """
    로그인 / 토큰 재발급 성공 응답.
    """

    accessToken: str = Field(..., description="액세스 토큰", examples=["eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."])
    refreshToken: str = Field(..., description="리프레시 토큰", examples=["eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."])

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "accessToken": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "refreshToken": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."
            }
        }
    )
