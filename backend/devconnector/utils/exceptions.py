from fastapi import HTTPException, status
from typing import Any, Dict, List, Optional

SERVER_ERROR_MESSAGE = "Server Error"

class AppException(HTTPException):
    """애플리케이션 전용 예외 클래스"""
    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Dict[str, str]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code
        self.errors = errors

def create_error_response(
    status_code: int,
    message: str,
    error_code: Optional[str] = None,
    errors: Optional[List[Dict[str, Any]]] = None
) -> Dict[str, Any]:
    """일관된 에러 응답 포맷 생성"""
    response: Dict[str, Any] = {
        "msg": message,
        "code": error_code or f"ERR_{status_code}"
    }

    if errors is not None:
        response["errors"] = errors

    return response

def field_error(param: str, message: str, location: str = "body") -> Dict[str, Any]:
    return {"msg": message, "param": param, "location": location}

# 자주 사용되는 에러들
class NotFoundException(AppException):
    # 기존 클라이언트 호환을 위해 404 대신 400을 사용
    def __init__(self, message: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=message,
            error_code="NOT_FOUND"
        )

class ProfileNotFoundException(NotFoundException):
    def __init__(self, message: str = "Profile not found"):
        super().__init__(message)

class FieldValidationException(AppException):
    def __init__(self, errors: List[Dict[str, Any]], message: str = "Validation failed"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=message,
            error_code="VALIDATION_ERROR",
            errors=errors
        )

class UnauthorizedException(AppException):
    def __init__(self, message: str = "Token is not valid"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=message,
            error_code="UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"}
        )

class InternalServerException(AppException):
    def __init__(self, message: str = SERVER_ERROR_MESSAGE):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=message,
            error_code="INTERNAL_ERROR"
        )
