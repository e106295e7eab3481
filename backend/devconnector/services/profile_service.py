"""
프로필 서비스

- 보낸 필드만 반영하는 패치(업서트) 문서 생성
- 경력/학력 임베디드 목록 관리 (맨 앞 삽입, ID 로 제거)
- 프로필 소유자 이름/아바타 populate
- 계정 삭제 시 게시글 -> 프로필 -> 사용자 순서의 연쇄 삭제
"""

from typing import Any, Dict, List, Optional, Union

from beanie import PydanticObjectId
from bson import ObjectId

from devconnector.context import AppContext
from devconnector.models.profile import Education, Experience, Profile, SOCIAL_FIELDS
from devconnector.models.user import User
from devconnector.schemas.profile import (
    EducationCreate,
    ExperienceCreate,
    ProfileCreate,
    ProfileResponse,
    UserSummary,
)
from devconnector.utils.exceptions import NotFoundException, ProfileNotFoundException
from devconnector.utils.logger import profile_logger
from devconnector.utils.validation import parse_date

NO_PROFILE_MESSAGE = "There is no profile for this user"

PROFILE_FIELDS = ("company", "image", "website", "location", "bio", "status", "githubusername")

Entry = Union[Experience, Education]


def parse_skills(skills: str) -> List[str]:
    """쉼표로 구분된 기술 문자열을 앞뒤 공백을 제거한 목록으로 변환 (빈 항목은 그대로 둠)"""
    return [skill.strip() for skill in skills.split(",")]


def build_profile_fields(data: ProfileCreate, owner_name: str) -> Dict[str, Any]:
    """
    업서트용 $set 문서를 만든다.
    값이 없는(falsy) 필드는 null 로 덮어쓰지 않고 아예 빼며,
    소셜 링크는 social 전체가 아니라 "social.<필드>" 단위로 패치한다.
    """
    fields: Dict[str, Any] = {"name": owner_name}

    for key in PROFILE_FIELDS:
        value = getattr(data, key)
        if value:
            fields[key] = value

    if data.skills:
        fields["skills"] = parse_skills(data.skills)

    for key in SOCIAL_FIELDS:
        value = getattr(data, key)
        if value:
            fields[f"social.{key}"] = value

    return fields


def find_entry_index(entries: List[Entry], entry_id: str) -> int:
    """entry_id 와 일치하는 항목의 위치, 없으면 -1"""
    for index, entry in enumerate(entries):
        if str(entry.id) == entry_id:
            return index
    return -1


def build_experience(data: ExperienceCreate) -> Experience:
    return Experience(
        title=data.title,
        company=data.company,
        location=data.location,
        from_date=parse_date(data.from_date),
        to_date=parse_date(data.to_date),
        current=bool(data.current),
        description=data.description,
    )


def build_education(data: EducationCreate) -> Education:
    return Education(
        school=data.school,
        degree=data.degree,
        fieldofstudy=data.fieldofstudy,
        from_date=parse_date(data.from_date),
        to_date=parse_date(data.to_date),
        current=bool(data.current),
        description=data.description,
    )


def build_profile_response(profile: Profile, owner: Optional[User]) -> ProfileResponse:
    summary = None
    if owner is not None:
        summary = UserSummary(id=owner.id, name=owner.name, avatar=owner.avatar)
    return ProfileResponse(
        id=profile.id,
        user=summary,
        **profile.model_dump(exclude={"id", "user", "revision_id"}),
    )


async def populate_profiles(ctx: AppContext, profiles: List[Profile]) -> List[ProfileResponse]:
    """프로필 목록에 소유자 이름/아바타를 한 번의 조회로 붙인다."""
    owners = await ctx.users.get_many(profile.user for profile in profiles)
    return [build_profile_response(profile, owners.get(profile.user)) for profile in profiles]


async def populate_profile(ctx: AppContext, profile: Profile) -> ProfileResponse:
    return (await populate_profiles(ctx, [profile]))[0]


async def _require_profile(ctx: AppContext, user_id: PydanticObjectId) -> Profile:
    profile = await ctx.profiles.find_by_owner(user_id)
    if profile is None:
        raise ProfileNotFoundException(NO_PROFILE_MESSAGE)
    return profile


async def get_my_profile(ctx: AppContext, user_id: PydanticObjectId) -> ProfileResponse:
    profile = await _require_profile(ctx, user_id)
    return await populate_profile(ctx, profile)


async def list_profiles(ctx: AppContext) -> List[ProfileResponse]:
    profiles = await ctx.profiles.find_all()
    return await populate_profiles(ctx, profiles)


async def get_profile_by_user_id(ctx: AppContext, user_id: str) -> ProfileResponse:
    # 형식이 잘못된 ID 도 "없음" 으로 처리
    if not ObjectId.is_valid(user_id):
        raise ProfileNotFoundException()

    profile = await ctx.profiles.find_by_owner(PydanticObjectId(user_id))
    if profile is None:
        raise ProfileNotFoundException()
    return await populate_profile(ctx, profile)


async def upsert_profile(ctx: AppContext, user_id: PydanticObjectId, data: ProfileCreate) -> ProfileResponse:
    # 사용자 이름은 매번 새로 읽어서 프로필에 복사
    owner = await ctx.users.get(user_id)
    if owner is None:
        raise NotFoundException("User not found")

    fields = build_profile_fields(data, owner.name)
    profile = await ctx.profiles.upsert_by_owner(user_id, fields)
    profile_logger.info(f"프로필 업서트: user={user_id} fields={sorted(fields)}")
    return build_profile_response(profile, owner)


async def _add_entry(ctx: AppContext, user_id: PydanticObjectId, collection: str, entry: Entry) -> ProfileResponse:
    profile = await ctx.profiles.push_entry(user_id, collection, entry)
    if profile is None:
        raise ProfileNotFoundException(NO_PROFILE_MESSAGE)
    profile_logger.info(f"{collection} 추가: user={user_id} id={entry.id}")
    return await populate_profile(ctx, profile)


async def _remove_entry(ctx: AppContext, user_id: PydanticObjectId, collection: str, entry_id: str) -> ProfileResponse:
    profile = await _require_profile(ctx, user_id)
    index = find_entry_index(getattr(profile, collection), entry_id)
    # 일치하는 항목이 없으면 아무것도 지우지 않는다
    if index < 0:
        profile_logger.info(f"{collection} 삭제 대상 없음: user={user_id} id={entry_id}")
        return await populate_profile(ctx, profile)

    target_id = getattr(profile, collection)[index].id
    profile = await ctx.profiles.pull_entry(user_id, collection, target_id)
    if profile is None:
        raise ProfileNotFoundException(NO_PROFILE_MESSAGE)
    profile_logger.info(f"{collection} 삭제: user={user_id} id={entry_id}")
    return await populate_profile(ctx, profile)


async def add_experience(ctx: AppContext, user_id: PydanticObjectId, data: ExperienceCreate) -> ProfileResponse:
    return await _add_entry(ctx, user_id, "experience", build_experience(data))


async def remove_experience(ctx: AppContext, user_id: PydanticObjectId, exp_id: str) -> ProfileResponse:
    return await _remove_entry(ctx, user_id, "experience", exp_id)


async def add_education(ctx: AppContext, user_id: PydanticObjectId, data: EducationCreate) -> ProfileResponse:
    return await _add_entry(ctx, user_id, "education", build_education(data))


async def remove_education(ctx: AppContext, user_id: PydanticObjectId, edu_id: str) -> ProfileResponse:
    return await _remove_entry(ctx, user_id, "education", edu_id)


async def delete_account(ctx: AppContext, user_id: PydanticObjectId) -> None:
    """
    게시글 -> 프로필 -> 사용자 순서로 삭제한다.
    중간 단계에서 실패하면 이미 끝난 단계는 되돌리지 않으므로 단계별로 로그를 남긴다.
    """
    deleted_posts = await ctx.posts.delete_by_owner(user_id)
    profile_logger.info(f"계정 삭제 1/3 게시글 {deleted_posts}개 삭제: user={user_id}")

    await ctx.profiles.delete_by_owner(user_id)
    profile_logger.info(f"계정 삭제 2/3 프로필 삭제: user={user_id}")

    await ctx.users.delete(user_id)
    profile_logger.info(f"계정 삭제 3/3 사용자 삭제: user={user_id}")
