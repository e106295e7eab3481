from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from starlette.concurrency import run_in_threadpool
from beanie import PydanticObjectId

from devconnector.context import AppContext, get_context
from devconnector.core.security import verify_password, create_access_token
from devconnector.schemas.auth import TokenResponse, UserResponse
from devconnector.utils.dependencies import get_current_user_id
from devconnector.utils.exceptions import (
    InternalServerException,
    NotFoundException,
    UnauthorizedException,
)
from devconnector.utils.logger import auth_logger

router = APIRouter(prefix="/api/auth", tags=["auth"])


# 이메일 로그인
@router.post(
    "/token",
    summary="이메일 로그인",
    operation_id="login",
    description="username(이메일)과 password를 받아 액세스 토큰을 발급합니다.",
    response_model=TokenResponse,
)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    ctx: AppContext = Depends(get_context)
) -> TokenResponse:
    try:
        user = await ctx.users.get_by_email(form_data.username)
    except Exception as e:
        auth_logger.exception(f"로그인 사용자 조회 중 오류: {str(e)}")
        raise InternalServerException()

    # bcrypt 검증은 스레드풀에서
    if not user or not await run_in_threadpool(verify_password, form_data.password, user.password):
        auth_logger.warning(f"로그인 실패: {form_data.username}")
        raise UnauthorizedException("Invalid credentials")

    access_token = create_access_token({"sub": str(user.id)})
    return TokenResponse(access_token=access_token, token_type="bearer")


# 토큰 소유자 정보 조회
@router.get(
    "/",
    summary="내 계정 조회",
    operation_id="get_auth_user",
    description="토큰 소유자의 계정 정보를 반환합니다 (비밀번호 제외).",
    response_model=UserResponse,
)
async def get_auth_user(
    user_id: PydanticObjectId = Depends(get_current_user_id),
    ctx: AppContext = Depends(get_context)
):
    try:
        user = await ctx.users.get(user_id)
    except Exception as e:
        auth_logger.exception(f"계정 조회 중 오류: {str(e)}")
        raise InternalServerException()

    if user is None:
        raise NotFoundException("User not found")
    return UserResponse(id=user.id, name=user.name, email=user.email, avatar=user.avatar, date=user.date)
