from pydantic import BaseModel, ConfigDict, Field
from beanie import PydanticObjectId
from datetime import datetime
from typing import Optional, List
from devconnector.models.profile import Social, Experience, Education
from devconnector.utils.validation import not_empty, is_date

# 프로필 생성/수정 요청 (모든 필드 선택, 보낸 필드만 반영)
class ProfileCreate(BaseModel):
    company: Optional[str] = None
    image: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[str] = None
    githubusername: Optional[str] = None
    skills: Optional[str] = Field(None, description="쉼표로 구분된 기술 목록 (예: 'python, fastapi')")
    youtube: Optional[str] = None
    facebook: Optional[str] = None
    twitter: Optional[str] = None
    instagram: Optional[str] = None
    linkedin: Optional[str] = None

class ExperienceCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    from_date: Optional[str] = Field(None, alias="from")
    to_date: Optional[str] = Field(None, alias="to")
    current: Optional[bool] = False
    description: Optional[str] = None

class EducationCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    school: Optional[str] = None
    degree: Optional[str] = None
    fieldofstudy: Optional[str] = None
    from_date: Optional[str] = Field(None, alias="from")
    to_date: Optional[str] = Field(None, alias="to")
    current: Optional[bool] = False
    description: Optional[str] = None

# 필드 검사 규칙
PROFILE_RULES = [
    not_empty("status", "Status is required"),
    not_empty("skills", "Skills is required"),
]

EXPERIENCE_RULES = [
    not_empty("title", "Title is required"),
    not_empty("company", "Company is required"),
    not_empty("from", "From date is required"),
    is_date("from", "From date must be a valid date"),
    is_date("to", "To date must be a valid date"),
]

EDUCATION_RULES = [
    not_empty("school", "School is required"),
    not_empty("degree", "Degree is required"),
    not_empty("fieldofstudy", "Field of study is required"),
    not_empty("from", "From date is required"),
    is_date("from", "From date must be a valid date"),
    is_date("to", "To date must be a valid date"),
]

# 프로필 소유자 요약 (populate 결과)
class UserSummary(BaseModel):
    id: PydanticObjectId
    name: str
    avatar: Optional[str] = None

# 프로필 응답용
class ProfileResponse(BaseModel):
    id: PydanticObjectId
    user: Optional[UserSummary] = None
    name: Optional[str] = None
    company: Optional[str] = None
    image: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[str] = None
    githubusername: Optional[str] = None
    skills: List[str] = []
    social: Social = Social()
    experience: List[Experience] = []
    education: List[Education] = []
    date: datetime

class MessageResponse(BaseModel):
    msg: str
