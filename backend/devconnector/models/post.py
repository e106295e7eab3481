from datetime import datetime
from typing import Optional
from beanie import Document, PydanticObjectId
from pydantic import Field
from pymongo import ASCENDING, IndexModel


class Post(Document):
    # 작성자만 참조하며 프로필 서비스에서는 계정 삭제 시 일괄 삭제에만 사용
    user: PydanticObjectId
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "posts"
        indexes = [IndexModel([("user", ASCENDING)])]
