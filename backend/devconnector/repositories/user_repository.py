"""
사용자 Repository
프로필 서비스가 소비하는 사용자 조회/삭제 연산
"""

from typing import Dict, Iterable, Optional

from beanie import PydanticObjectId
from beanie.operators import In

from devconnector.models.user import User


class UserRepository:
    """users 컬렉션 데이터 접근 객체"""

    async def get(self, user_id: PydanticObjectId) -> Optional[User]:
        return await User.get(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        return await User.find_one(User.email == email)

    async def get_many(self, user_ids: Iterable[PydanticObjectId]) -> Dict[PydanticObjectId, User]:
        """
        여러 사용자를 한 번의 $in 쿼리로 조회

        Returns:
            사용자 ID -> User 매핑 (존재하지 않는 ID 는 빠짐)
        """
        ids = list(set(user_ids))
        if not ids:
            return {}
        users = await User.find(In(User.id, ids)).to_list()
        return {user.id: user for user in users}

    async def create(self, user: User) -> User:
        await user.insert()
        return user

    async def delete(self, user_id: PydanticObjectId) -> bool:
        result = await User.find_one(User.id == user_id).delete()
        return bool(result and result.deleted_count)
