from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from devconnector.config import settings
from devconnector.context import AppContext
from devconnector.database import create_motor_client, init_mongo, close_mongo
from devconnector.routers import auth, profile
from devconnector.utils.exceptions import AppException, create_error_response, field_error
from devconnector.utils.logger import app_logger

# 앱 시작 시 MongoDB 연결과 실행 컨텍스트를 만들고 종료 시 정리
@asynccontextmanager
async def lifespan(app: FastAPI):
    client = create_motor_client(settings)
    # MongoDB: 비니(Beanie) 초기화
    await init_mongo(client[settings.MONGO_DB_NAME])
    app.state.context = AppContext(settings=settings)
    app_logger.info(f"MongoDB 연결 완료: db={settings.MONGO_DB_NAME}")
    yield
    await close_mongo(client)

# FastAPI 앱 생성
app = FastAPI(
    title="DevConnector Profile API",
    lifespan=lifespan
)

@app.get("/")
async def root():
    """API 루트 경로"""
    return {
        "message": "DevConnector Profile API",
        "version": "1.0.0",
        "docs": "/docs"
    }

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 라우터 등록
app.include_router(auth.router)
app.include_router(profile.router)

# 에러 응답을 하나의 형식({msg, code, errors?})으로 통일
@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.status_code, exc.detail, exc.error_code, exc.errors),
        headers=exc.headers,
    )

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.status_code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        loc = error.get("loc", ())
        location = str(loc[0]) if loc else "body"
        # JSON 파싱 오류는 loc 끝이 문자 위치(int)이므로 필드명이 아님
        if len(loc) > 1 and isinstance(loc[-1], str):
            param = loc[-1]
        else:
            param = "body"
        errors.append(field_error(param, error.get("msg", "Invalid value"), location))
    return JSONResponse(
        status_code=400,
        content=create_error_response(400, "Validation failed", "VALIDATION_ERROR", errors),
    )
