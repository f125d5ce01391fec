import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from libs.common import configure_logging

from services.customer.app.api.v1.router import router
from services.customer.app.core.CustomerValidator import ValidationError
from services.customer.app.db.connection import settings

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.AUTO_CREATE_TABLES:
        from services.customer.app.db.session import engine
        from services.customer.app.db.tables import create_tables

        create_tables(engine)
        logger.info("customers table ready")
    yield


app = FastAPI(
    title="Customer Service (고객 서비스)",
    description="Bbang Customer Sign-up / Login Server",
    lifespan=lifespan,
)

app.include_router(router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """본문 파싱/타입 오류도 400과 동일한 에러 형식으로 응답"""
    errors = exc.errors()
    if errors:
        field = ".".join(str(loc) for loc in errors[0].get("loc", ()) if loc != "body")
        message = f"{field}: {errors[0].get('msg', '')}" if field else errors[0].get("msg", "")
    else:
        message = "request body is invalid"

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": {"code": ValidationError.code, "message": message}},
    )


# 서비스가 살아있는지 확인하는 헬스 체크 엔드포인트
@app.get("/")
def read_root():
    return {"service": "Customer Service", "status": "running"}
