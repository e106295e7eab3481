from beanie import PydanticObjectId

from devconnector.models.post import Post


class PostRepository:
    """posts 컬렉션 데이터 접근 객체 (계정 삭제 시 일괄 삭제용)"""

    async def delete_by_owner(self, user_id: PydanticObjectId) -> int:
        result = await Post.find(Post.user == user_id).delete()
        return result.deleted_count if result else 0
