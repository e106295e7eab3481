from dataclasses import dataclass, field

from fastapi import Request

from devconnector.config import Settings, settings as default_settings
from devconnector.repositories import PostRepository, ProfileRepository, UserRepository


@dataclass
class AppContext:
    """요청 핸들러에 주입되는 실행 컨텍스트 (설정 + 저장소)"""
    settings: Settings = field(default_factory=lambda: default_settings)
    users: UserRepository = field(default_factory=UserRepository)
    posts: PostRepository = field(default_factory=PostRepository)
    profiles: ProfileRepository = field(default_factory=ProfileRepository)


# lifespan 에서 app.state.context 에 생성해 둔 컨텍스트를 꺼내는 의존성
def get_context(request: Request) -> AppContext:
    return request.app.state.context
