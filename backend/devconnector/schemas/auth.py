from pydantic import BaseModel
from beanie import PydanticObjectId
from datetime import datetime
from typing import Optional

# 토큰 응답 모델
class TokenResponse(BaseModel):
    access_token: str
    token_type: str

# 사용자 응답용 (비밀번호 해시 제외)
class UserResponse(BaseModel):
    id: PydanticObjectId
    name: str
    email: str
    avatar: Optional[str] = None
    date: datetime
