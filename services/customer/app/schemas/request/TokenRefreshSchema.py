from pydantic import BaseModel, Field


class TokenRefreshSchema(BaseModel):
    refreshToken: str | None = Field(
        default=None,
        description="Refresh token (없으면 X-REFRESH-TOKEN 쿠키 사용)",
    )
