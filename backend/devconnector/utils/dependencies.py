from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from beanie import PydanticObjectId
from devconnector.core.security import decode_access_token
from devconnector.utils.exceptions import UnauthorizedException
from devconnector.utils.logger import auth_logger

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token", auto_error=False)

# JWT 토큰에서 현재 사용자 ID 가져오기 (사용자 문서는 다시 읽지 않음)
def get_current_user_id(token: str = Depends(oauth2_scheme)) -> PydanticObjectId:
    if not token:
        auth_logger.warning("인증 토큰 없음")
        raise UnauthorizedException("No token, authorization denied")

    user_id = decode_access_token(token)
    if user_id is None:
        auth_logger.warning("유효하지 않은 토큰")
        raise UnauthorizedException()
    return user_id
