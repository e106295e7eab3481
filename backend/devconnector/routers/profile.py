from fastapi import APIRouter, Depends
from typing import List
from beanie import PydanticObjectId
from devconnector.context import AppContext, get_context
from devconnector.schemas.profile import (
    ProfileCreate,
    ExperienceCreate,
    EducationCreate,
    ProfileResponse,
    MessageResponse,
    PROFILE_RULES,
    EXPERIENCE_RULES,
    EDUCATION_RULES,
)
from devconnector.services import profile_service
from devconnector.utils.dependencies import get_current_user_id
from devconnector.utils.exceptions import AppException, InternalServerException
from devconnector.utils.logger import profile_logger
from devconnector.utils.validation import validate_body

router = APIRouter(prefix="/api/profile", tags=["Profile"])

# 마운트 경로 자체(/api/profile)도 307 리다이렉트 없이 "/" 와 같은 핸들러로 처리

# 내 프로필 조회
@router.get("/me",
            response_model=ProfileResponse,
            operation_id="get_my_profile",
            summary="내 프로필 조회", description="""
현재 로그인된 사용자의 프로필을 조회합니다.

- 인증이 필요합니다 (Bearer Token).
- 프로필이 없으면 400 을 반환합니다.
""")
async def get_my_profile(
    user_id: PydanticObjectId = Depends(get_current_user_id),
    ctx: AppContext = Depends(get_context)
):
    try:
        return await profile_service.get_my_profile(ctx, user_id)
    except AppException:
        raise
    except Exception as e:
        profile_logger.exception(f"내 프로필 조회 중 오류: {str(e)}")
        raise InternalServerException()

@router.get("", response_model=List[ProfileResponse], include_in_schema=False)
@router.get("/",
            response_model=List[ProfileResponse],
            operation_id="list_profiles",
            summary="전체 프로필 목록",
            description="모든 프로필을 소유자 이름/아바타와 함께 반환합니다. 정렬 순서는 보장하지 않습니다.")
async def list_profiles(ctx: AppContext = Depends(get_context)):
    try:
        return await profile_service.list_profiles(ctx)
    except AppException:
        raise
    except Exception as e:
        profile_logger.exception(f"프로필 목록 조회 중 오류: {str(e)}")
        raise InternalServerException()

@router.get("/user/{user_id}",
            response_model=ProfileResponse,
            operation_id="get_profile_by_user_id",
            summary="사용자 ID 로 프로필 조회",
            description="형식이 잘못된 ID 도 'Profile not found' (400) 로 응답합니다.")
async def get_profile_by_user_id(user_id: str, ctx: AppContext = Depends(get_context)):
    try:
        return await profile_service.get_profile_by_user_id(ctx, user_id)
    except AppException:
        raise
    except Exception as e:
        profile_logger.exception(f"사용자 프로필 조회 중 오류: {str(e)}")
        raise InternalServerException()

@router.post("", response_model=ProfileResponse, include_in_schema=False)
@router.post("/",
             response_model=ProfileResponse,
             operation_id="upsert_profile",
             summary="프로필 생성/수정", description="""
프로필이 없으면 생성하고 있으면 보낸 필드만 수정합니다.

- `status`, `skills` 는 필수입니다.
- `skills`: 쉼표로 구분된 문자열 (예: `"python, fastapi"`)
- 보내지 않은 필드는 기존 값을 유지합니다.
""")
async def upsert_profile(
    user_id: PydanticObjectId = Depends(get_current_user_id),
    payload: ProfileCreate = Depends(validate_body(ProfileCreate, PROFILE_RULES)),
    ctx: AppContext = Depends(get_context)
):
    try:
        return await profile_service.upsert_profile(ctx, user_id, payload)
    except AppException:
        raise
    except Exception as e:
        profile_logger.exception(f"프로필 저장 중 오류: {str(e)}")
        raise InternalServerException()

@router.delete("", response_model=MessageResponse, include_in_schema=False)
@router.delete("/",
               response_model=MessageResponse,
               operation_id="delete_account",
               summary="계정 삭제",
               description="게시글, 프로필, 사용자 계정을 순서대로 삭제합니다.")
async def delete_account(
    user_id: PydanticObjectId = Depends(get_current_user_id),
    ctx: AppContext = Depends(get_context)
):
    try:
        await profile_service.delete_account(ctx, user_id)
        return MessageResponse(msg="User deleted")
    except AppException:
        raise
    except Exception as e:
        profile_logger.exception(f"계정 삭제 중 오류: {str(e)}")
        raise InternalServerException()

@router.put("/experience",
            response_model=ProfileResponse,
            operation_id="add_experience",
            summary="경력 추가", description="""
프로필 경력 목록 맨 앞에 새 경력을 추가합니다.

- `title`, `company`, `from` 은 필수입니다.
""")
async def add_experience(
    user_id: PydanticObjectId = Depends(get_current_user_id),
    payload: ExperienceCreate = Depends(validate_body(ExperienceCreate, EXPERIENCE_RULES)),
    ctx: AppContext = Depends(get_context)
):
    try:
        return await profile_service.add_experience(ctx, user_id, payload)
    except AppException:
        raise
    except Exception as e:
        profile_logger.exception(f"경력 추가 중 오류: {str(e)}")
        raise InternalServerException()

@router.delete("/experience/{exp_id}",
               response_model=ProfileResponse,
               operation_id="delete_experience",
               summary="경력 삭제",
               description="ID 가 일치하는 경력을 삭제합니다. 일치하는 항목이 없으면 프로필을 그대로 반환합니다.")
async def delete_experience(
    exp_id: str,
    user_id: PydanticObjectId = Depends(get_current_user_id),
    ctx: AppContext = Depends(get_context)
):
    try:
        return await profile_service.remove_experience(ctx, user_id, exp_id)
    except AppException:
        raise
    except Exception as e:
        profile_logger.exception(f"경력 삭제 중 오류: {str(e)}")
        raise InternalServerException()

@router.put("/education",
            response_model=ProfileResponse,
            operation_id="add_education",
            summary="학력 추가", description="""
프로필 학력 목록 맨 앞에 새 학력을 추가합니다.

- `school`, `degree`, `fieldofstudy`, `from` 은 필수입니다.
""")
async def add_education(
    user_id: PydanticObjectId = Depends(get_current_user_id),
    payload: EducationCreate = Depends(validate_body(EducationCreate, EDUCATION_RULES)),
    ctx: AppContext = Depends(get_context)
):
    try:
        return await profile_service.add_education(ctx, user_id, payload)
    except AppException:
        raise
    except Exception as e:
        profile_logger.exception(f"학력 추가 중 오류: {str(e)}")
        raise InternalServerException()

@router.delete("/education/{edu_id}",
               response_model=ProfileResponse,
               operation_id="delete_education",
               summary="학력 삭제",
               description="ID 가 일치하는 학력을 삭제합니다. 일치하는 항목이 없으면 프로필을 그대로 반환합니다.")
async def delete_education(
    edu_id: str,
    user_id: PydanticObjectId = Depends(get_current_user_id),
    ctx: AppContext = Depends(get_context)
):
    try:
        return await profile_service.remove_education(ctx, user_id, edu_id)
    except AppException:
        raise
    except Exception as e:
        profile_logger.exception(f"학력 삭제 중 오류: {str(e)}")
        raise InternalServerException()
