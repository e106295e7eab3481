from datetime import datetime
from typing import Optional
from beanie import Document
from pydantic import Field
from pymongo import ASCENDING, IndexModel


class User(Document):
    name: str = Field(..., description="표시 이름")
    email: str = Field(..., description="로그인 이메일")
    password: str = Field(..., description="bcrypt 해시")
    avatar: Optional[str] = Field(None, description="아바타 이미지 URL")
    date: datetime = Field(default_factory=datetime.utcnow, description="가입 시각")

    class Settings:
        name = "users"
        indexes = [IndexModel([("email", ASCENDING)], unique=True)]
