from datetime import datetime
from typing import Any, Callable, List, NamedTuple, Optional, Type, TypeVar

from pydantic import BaseModel

from devconnector.utils.exceptions import FieldValidationException, field_error

ModelT = TypeVar("ModelT", bound=BaseModel)


class FieldRule(NamedTuple):
    """요청 본문 필드 하나에 대한 검사 규칙"""
    field: str
    message: str
    check: Callable[[Any], bool]


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """ISO-8601 문자열을 datetime 으로 변환 (예: '2021-03-01' -> datetime)"""
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None


def _is_not_empty(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def _is_date_or_empty(value: Any) -> bool:
    if not _is_not_empty(value):
        return True
    return parse_date(value) is not None


def not_empty(field: str, message: str) -> FieldRule:
    return FieldRule(field, message, _is_not_empty)


def is_date(field: str, message: str) -> FieldRule:
    # 값이 비어 있으면 통과 (필수 여부는 not_empty 로 따로 검사)
    return FieldRule(field, message, _is_date_or_empty)


def collect_errors(data: dict, rules: List[FieldRule]) -> List[dict]:
    return [
        field_error(rule.field, rule.message)
        for rule in rules
        if not rule.check(data.get(rule.field))
    ]


def validate_body(model: Type[ModelT], rules: List[FieldRule]) -> Callable[..., ModelT]:
    """
    요청 본문을 model 로 파싱한 뒤 rules 를 검사하는 FastAPI 의존성을 만든다.
    하나라도 실패하면 핸들러 실행 전에 FieldValidationException(400) 을 던진다.
    """
    def dependency(payload: model):
        errors = collect_errors(payload.model_dump(by_alias=True), rules)
        if errors:
            raise FieldValidationException(errors)
        return payload

    return dependency
