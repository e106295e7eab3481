"""
프로필 Repository
profiles 컬렉션의 조회/업서트/저장/삭제 연산
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from beanie import PydanticObjectId
from pydantic import BaseModel
from pymongo import ReturnDocument

from devconnector.models.profile import Profile


class ProfileRepository:
    """
    프로필 데이터 접근 객체
    사용자당 프로필 1개는 user 필드의 unique 인덱스로 보장
    """

    async def find_by_owner(self, user_id: PydanticObjectId) -> Optional[Profile]:
        return await Profile.find_one(Profile.user == user_id)

    async def find_all(self) -> List[Profile]:
        return await Profile.find_all().to_list()

    async def upsert_by_owner(self, user_id: PydanticObjectId, fields: Dict[str, Any]) -> Profile:
        """
        소유자 기준 조건부 업서트 (없으면 생성, 있으면 패치)

        find-then-write 를 나누지 않고 find_one_and_update(upsert=True)
        한 번으로 처리하므로 같은 사용자의 동시 최초 요청도 프로필을 하나만 만든다.

        Args:
            user_id: 소유 사용자 ID
            fields: $set 할 필드 (중첩 필드는 "social.youtube" 같은 점 표기)

        Returns:
            업서트 이후의 Profile
        """
        update: Dict[str, Any] = {
            "$setOnInsert": {
                "experience": [],
                "education": [],
                "date": datetime.utcnow(),
            }
        }
        if fields:
            update["$set"] = fields

        raw = await Profile.get_motor_collection().find_one_and_update(
            {"user": user_id},
            update,
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return Profile.model_validate(raw)

    async def push_entry(self, user_id: PydanticObjectId, collection: str, entry: BaseModel) -> Optional[Profile]:
        """
        경력/학력 목록 맨 앞에 항목 하나를 원자적으로 추가 ($push + $position 0)

        Returns:
            추가 이후의 Profile, 프로필이 없으면 None
        """
        raw = await Profile.get_motor_collection().find_one_and_update(
            {"user": user_id},
            {"$push": {collection: {"$each": [entry.model_dump(by_alias=True)], "$position": 0}}},
            return_document=ReturnDocument.AFTER,
        )
        return Profile.model_validate(raw) if raw else None

    async def pull_entry(self, user_id: PydanticObjectId, collection: str, entry_id: PydanticObjectId) -> Optional[Profile]:
        """id 가 일치하는 항목만 원자적으로 제거 ($pull), 프로필이 없으면 None"""
        raw = await Profile.get_motor_collection().find_one_and_update(
            {"user": user_id},
            {"$pull": {collection: {"id": entry_id}}},
            return_document=ReturnDocument.AFTER,
        )
        return Profile.model_validate(raw) if raw else None

    async def delete_by_owner(self, user_id: PydanticObjectId) -> bool:
        result = await Profile.find_one(Profile.user == user_id).delete()
        return bool(result and result.deleted_count)
