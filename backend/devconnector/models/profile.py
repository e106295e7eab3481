from datetime import datetime
from typing import List, Optional
from beanie import Document, PydanticObjectId
from pydantic import BaseModel, ConfigDict, Field
from pymongo import ASCENDING, IndexModel

SOCIAL_FIELDS = ("youtube", "facebook", "twitter", "instagram", "linkedin")


class Social(BaseModel):
    youtube: Optional[str] = None
    facebook: Optional[str] = None
    twitter: Optional[str] = None
    instagram: Optional[str] = None
    linkedin: Optional[str] = None


class Experience(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: PydanticObjectId = Field(default_factory=PydanticObjectId)
    title: str
    company: str
    location: Optional[str] = None
    from_date: datetime = Field(..., alias="from")
    to_date: Optional[datetime] = Field(None, alias="to")
    current: bool = False
    description: Optional[str] = None


class Education(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: PydanticObjectId = Field(default_factory=PydanticObjectId)
    school: str
    degree: str
    fieldofstudy: str
    from_date: datetime = Field(..., alias="from")
    to_date: Optional[datetime] = Field(None, alias="to")
    current: bool = False
    description: Optional[str] = None


class Profile(Document):
    user: PydanticObjectId = Field(..., description="소유 사용자 ID (사용자당 1개)")
    name: Optional[str] = Field(None, description="사용자 이름 (비정규화 사본)")
    company: Optional[str] = None
    image: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[str] = None
    githubusername: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    social: Social = Field(default_factory=Social)
    # 최신 항목이 맨 앞
    experience: List[Experience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    date: datetime = Field(default_factory=datetime.utcnow, description="프로필 생성 시각")

    class Settings:
        name = "profiles"
        indexes = [IndexModel([("user", ASCENDING)], unique=True)]
